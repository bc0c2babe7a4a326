import pytest

from checkpoint import create_app, db
from checkpoint.utils.security import hash_password

ADMIN_PASSWORD = 'gate-admin-pass'
REPORTS_PASSWORD = 'Reports@2026'

# bcrypt is slow; hash once per test session
ADMIN_PASSWORD_HASH = hash_password(ADMIN_PASSWORD)
REPORTS_PASSWORD_HASH = hash_password(REPORTS_PASSWORD)


@pytest.fixture()
def qr_dir(tmp_path):
    return tmp_path / 'qr_codes'


@pytest.fixture()
def app(qr_dir):
    app = create_app('testing', {
        'QR_CODE_DIR': str(qr_dir),
        'ADMIN_USERNAME': 'admin',
        'ADMIN_PASSWORD_HASH': ADMIN_PASSWORD_HASH,
        'REPORTS_USERID': 'reports',
        'REPORTS_PASSWORD_HASH': REPORTS_PASSWORD_HASH,
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_client(app):
    client = app.test_client()
    resp = client.post('/api/admin/login', json={'username': 'admin', 'password': ADMIN_PASSWORD})
    assert resp.status_code == 200
    return client


@pytest.fixture()
def reports_client(app):
    client = app.test_client()
    resp = client.post('/api/reports/login', json={'userid': 'reports', 'password': REPORTS_PASSWORD})
    assert resp.status_code == 200
    return client


@pytest.fixture()
def services(app_ctx):
    return app_ctx.extensions['checkpoint']


class FakeClock:
    """Manually advanced clock returning epoch seconds."""

    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()
