import os
from checkpoint import create_app

app = create_app(os.getenv('FLASK_ENV', 'production'))
