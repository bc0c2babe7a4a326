from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate, upgrade
from flask_session import Session
from cachelib import FileSystemCache
from dotenv import load_dotenv
import os

# Setup logging first
from checkpoint.utils.logging_config import setup_logging, get_logger
from checkpoint.utils.error_handler import init_error_handlers

load_dotenv()

# Initialize extensions
db = SQLAlchemy()
limiter = Limiter(key_func=get_remote_address)
migrate = Migrate()
session = Session()

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'migrations')

logger = get_logger(__name__)


def create_app(config_name='default', config_overrides=None):
    app = Flask(__name__)

    # Load configuration
    if config_name == 'development':
        from config.development import DevelopmentConfig
        app.config.from_object(DevelopmentConfig)
    elif config_name == 'production':
        from config.production import ProductionConfig
        app.config.from_object(ProductionConfig)
    elif config_name == 'testing':
        from config.testing import TestingConfig
        app.config.from_object(TestingConfig)
    else:
        from config.base import Config
        app.config.from_object(Config)

    if config_overrides:
        app.config.update(config_overrides)

    # Setup logging based on config
    setup_logging(app.config['LOG_LEVEL'], app.config['LOG_DIR'], app.config['LOG_TO_FILE'])

    # Server-side sessions default to files under SESSION_CACHE_DIR
    if app.config.get('SESSION_CACHELIB') is None:
        app.config['SESSION_CACHELIB'] = FileSystemCache(app.config['SESSION_CACHE_DIR'], threshold=500)

    # Initialize extensions with app
    db.init_app(app)
    limiter.init_app(app)
    session.init_app(app)
    migrate.init_app(app, db, directory=MIGRATIONS_DIR)

    # Initialize error handlers and response headers
    from checkpoint.utils.security_middleware import init_security_headers
    init_error_handlers(app)
    init_security_headers(app)

    # Register blueprints
    from checkpoint.controllers.admin import admin_bp
    from checkpoint.controllers.guard import guard_bp
    from checkpoint.controllers.reports import reports_bp
    from checkpoint.controllers.main import main_bp

    app.register_blueprint(admin_bp)
    app.register_blueprint(guard_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(main_bp)

    from checkpoint.cli import security_cli
    app.cli.add_command(security_cli)

    init_services(app)

    # Create or migrate tables
    with app.app_context():
        if app.config['AUTO_MIGRATE']:
            upgrade(directory=MIGRATIONS_DIR)
        else:
            db.create_all()

    logger.info(f"Checkpoint application created with '{config_name}' configuration")
    return app


def init_services(app):
    """Build the QR lifecycle services and login guards for this app."""
    from checkpoint.services.code_registry import CodeRegistry
    from checkpoint.services.entry_service import EntryService
    from checkpoint.services.scan_resolver import ScanResolver
    from checkpoint.services.security import AccessGuard
    from checkpoint.utils.qr_generator import QRGenerator

    config = app.config
    qr_generator = QRGenerator(
        config['QR_CODE_DIR'],
        width=config['QR_IMAGE_WIDTH'],
        margin=config['QR_IMAGE_MARGIN']
    )
    os.makedirs(config['QR_CODE_DIR'], exist_ok=True)

    guard_options = {
        'max_attempts': config['LOGIN_MAX_ATTEMPTS'],
        'window_seconds': config['LOGIN_WINDOW_SECONDS'],
        'max_field_length': config['LOGIN_FIELD_MAX_LENGTH']
    }

    app.extensions['checkpoint'] = {
        'qr_generator': qr_generator,
        'registry': CodeRegistry(
            qr_generator,
            url_prefix=config['QR_CODE_URL_PREFIX'],
            max_retries=config['QR_ID_MAX_RETRIES'],
            batch_sizes=config['QR_BATCH_SIZES']
        ),
        'resolver': ScanResolver(),
        'entries': EntryService(),
        'guards': {
            'admin': AccessGuard('admin', config['ADMIN_USERNAME'], config['ADMIN_PASSWORD_HASH'],
                                 **guard_options),
            'reports': AccessGuard('reports', config['REPORTS_USERID'], config['REPORTS_PASSWORD_HASH'],
                                   **guard_options)
        }
    }
