import pytest

from conftest import ADMIN_PASSWORD, REPORTS_PASSWORD

VEHICLE = {
    'vehicleNumber': 'KA01AB1234',
    'driverName': 'Ravi Kumar',
    'mobileNumber': '9845012345',
    'vehicleType': 'Truck',
    'purpose': 'Delivery'
}


def generate(admin_client, count=10):
    resp = admin_client.post('/api/admin/generate-qr-codes', json={'count': count})
    assert resp.status_code == 200
    return resp.get_json()


# ==================== AUTHENTICATION ====================

def test_admin_login_check_auth_and_logout(client):
    assert client.get('/api/admin/check-auth').get_json() == {'authenticated': False}

    resp = client.post('/api/admin/login', json={'username': 'admin', 'password': ADMIN_PASSWORD})
    assert resp.status_code == 200
    assert resp.get_json() == {'success': True, 'message': 'Login successful'}
    assert client.get('/api/admin/check-auth').get_json() == {'authenticated': True, 'username': 'admin'}

    assert client.post('/api/admin/logout').get_json()['success'] is True
    assert client.get('/api/admin/check-auth').get_json() == {'authenticated': False}


def test_admin_login_rejects_bad_credentials(client):
    resp = client.post('/api/admin/login', json={'username': 'admin', 'password': 'nope'})
    assert resp.status_code == 401
    assert resp.get_json() == {'error': 'Invalid username or password'}


@pytest.mark.parametrize('body', [
    {},
    {'username': 'admin'},
    {'username': 'admin', 'password': ''},
])
def test_admin_login_requires_both_fields(client, body):
    resp = client.post('/api/admin/login', json=body)
    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Username and password required'}


def test_admin_login_rejects_oversized_fields(client):
    resp = client.post('/api/admin/login', json={'username': 'a' * 101, 'password': 'x'})
    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Invalid input length'}


def test_admin_login_is_rate_limited_per_client(client):
    for _ in range(5):
        resp = client.post('/api/admin/login', json={'username': 'admin', 'password': 'nope'})
        assert resp.status_code == 401

    resp = client.post('/api/admin/login', json={'username': 'admin', 'password': ADMIN_PASSWORD})
    assert resp.status_code == 429
    assert resp.get_json() == {'error': 'Too many login attempts. Please try again in 15 minute(s).'}

    # Another address is unaffected
    resp = client.post('/api/admin/login', json={'username': 'admin', 'password': ADMIN_PASSWORD},
                       environ_base={'REMOTE_ADDR': '192.0.2.10'})
    assert resp.status_code == 200


def test_reports_lockout_is_independent_of_admin(client):
    for _ in range(5):
        client.post('/api/admin/login', json={'username': 'admin', 'password': 'nope'})

    resp = client.post('/api/reports/login', json={'userid': 'reports', 'password': REPORTS_PASSWORD})
    assert resp.status_code == 200


def test_reports_login_check_auth_and_logout(client):
    resp = client.post('/api/reports/login', json={'userid': 'reports', 'password': 'wrong'})
    assert resp.status_code == 401
    assert resp.get_json() == {'error': 'Invalid user ID or password'}

    resp = client.post('/api/reports/login', json={'userid': 'reports'})
    assert resp.get_json() == {'error': 'User ID and password required'}

    client.post('/api/reports/login', json={'userid': 'reports', 'password': REPORTS_PASSWORD})
    assert client.get('/api/reports/check-auth').get_json() == {'authenticated': True, 'userid': 'reports'}

    client.post('/api/reports/logout')
    assert client.get('/api/reports/check-auth').get_json() == {'authenticated': False}


def test_sessions_are_separate_per_domain(admin_client):
    assert admin_client.get('/api/reports/check-auth').get_json() == {'authenticated': False}
    assert admin_client.get('/api/reports/entries').status_code == 401


def test_reports_logout_keeps_admin_session(admin_client):
    admin_client.post('/api/reports/login', json={'userid': 'reports', 'password': REPORTS_PASSWORD})
    admin_client.post('/api/reports/logout')

    assert admin_client.get('/api/admin/check-auth').get_json()['authenticated'] is True


def test_session_cookie_flags(client):
    resp = client.post('/api/admin/login', json={'username': 'admin', 'password': ADMIN_PASSWORD})
    cookie = resp.headers['Set-Cookie']
    assert 'HttpOnly' in cookie
    assert 'SameSite=Strict' in cookie


@pytest.mark.parametrize('method, path', [
    ('post', '/api/admin/generate-qr-codes'),
    ('get', '/api/admin/qr-codes'),
    ('delete', '/api/admin/qr-codes/AB12C'),
    ('delete', '/api/admin/qr-codes'),
])
def test_admin_endpoints_require_login(client, method, path):
    resp = getattr(client, method)(path, json={})
    assert resp.status_code == 401
    assert resp.get_json() == {'error': 'Unauthorized - Please login'}


# ==================== QR CODE ADMINISTRATION ====================

def test_generate_and_list_qr_codes(admin_client, qr_dir):
    data = generate(admin_client)

    assert data['success'] is True
    assert data['count'] == 10
    assert 'errors' not in data
    ids = {item['id'] for item in data['qrCodes']}
    assert len(ids) == 10

    listed = admin_client.get('/api/admin/qr-codes').get_json()
    assert {row['id'] for row in listed} == ids
    assert all(row['batch_id'] == data['batchId'] for row in listed)
    assert all(row['status'] is None for row in listed)

    by_batch = admin_client.get(f"/api/admin/qr-codes?batchId={data['batchId']}").get_json()
    assert len(by_batch) == 10
    assert admin_client.get('/api/admin/qr-codes?batchId=nothing').get_json() == []


@pytest.mark.parametrize('count', [5, '10', None, 1000, 10.5])
def test_generate_rejects_unsupported_count(admin_client, count):
    resp = admin_client.post('/api/admin/generate-qr-codes', json={'count': count})
    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Count must be 10, 50, or 100'}


def test_generate_accepts_integral_float_count(admin_client):
    data = generate(admin_client, count=10.0)
    assert data['count'] == 10


def test_delete_single_qr_code(admin_client, client, qr_dir):
    qr_id = generate(admin_client)['qrCodes'][0]['id']

    resp = admin_client.delete(f'/api/admin/qr-codes/{qr_id}')
    assert resp.get_json() == {'success': True, 'message': 'QR code deleted successfully'}
    assert not (qr_dir / f'{qr_id}.png').exists()
    assert client.get(f'/api/guard/scan/{qr_id}').status_code == 404

    assert admin_client.delete(f'/api/admin/qr-codes/{qr_id}').status_code == 404
    assert admin_client.delete('/api/admin/qr-codes/AB-1').status_code == 400


def test_delete_many_qr_codes(admin_client):
    ids = [item['id'] for item in generate(admin_client)['qrCodes']]

    resp = admin_client.delete('/api/admin/qr-codes', json={'qrIds': ids[:3] + ['bad!']})
    data = resp.get_json()

    assert resp.status_code == 200
    assert data['deletedCount'] == 3
    assert data['message'] == 'Deleted 3 QR code(s) successfully'
    assert data['errors'] == [{'qrId': 'bad!', 'error': 'Invalid QR code ID format'}]
    assert len(admin_client.get('/api/admin/qr-codes').get_json()) == 7


@pytest.mark.parametrize('body, message', [
    ({}, 'QR code IDs array required'),
    ({'qrIds': []}, 'QR code IDs array required'),
    ({'qrIds': ['?', '']}, 'No valid QR code IDs provided'),
])
def test_delete_many_rejects_bad_payload(admin_client, body, message):
    resp = admin_client.delete('/api/admin/qr-codes', json=body)
    assert resp.status_code == 400
    assert resp.get_json() == {'error': message}


def test_qr_code_image_is_served(admin_client, client):
    item = generate(admin_client)['qrCodes'][0]

    resp = client.get(item['imageUrl'])
    assert resp.status_code == 200
    assert resp.mimetype == 'image/png'
    assert resp.data.startswith(b'\x89PNG')


@pytest.mark.parametrize('path', ['/qr_codes/ZZZZZ.png', '/qr_codes/AB12C.txt', '/qr_codes/..%2Fsecret.png'])
def test_missing_or_unsafe_images_are_404(client, path):
    assert client.get(path).status_code == 404


# ==================== GUARD ====================

def test_scan_validates_identifier(client):
    resp = client.get('/api/guard/scan/AB1')
    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Invalid QR code ID format'}

    resp = client.get('/api/guard/scan/ZZZZZ')
    assert resp.status_code == 404
    assert resp.get_json() == {'error': 'QR code not found'}


def test_register_vehicle_validation(admin_client, client):
    qr_id = generate(admin_client)['qrCodes'][0]['id']

    resp = client.post('/api/guard/register-vehicle', json=dict(VEHICLE, qrCodeId=qr_id, mobileNumber='call me'))
    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Invalid mobile number format'}

    resp = client.post('/api/guard/register-vehicle', json=dict(VEHICLE, qrCodeId=qr_id, status='waved'))
    assert resp.status_code == 400

    resp = client.post('/api/guard/register-vehicle', json=VEHICLE)
    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Invalid QR code ID format'}

    resp = client.post('/api/guard/register-vehicle', json=dict(VEHICLE, qrCodeId='ZZZZZ'))
    assert resp.status_code == 404

    assert client.get(f'/api/guard/scan/{qr_id}').get_json()['registered'] is False


def test_update_status_validation(admin_client, client):
    qr_id = generate(admin_client)['qrCodes'][0]['id']

    resp = client.put(f'/api/guard/update-status/{qr_id}', json={'status': 'allowed'})
    assert resp.status_code == 404
    assert resp.get_json() == {'error': 'Vehicle entry not found'}

    client.post('/api/guard/register-vehicle', json=dict(VEHICLE, qrCodeId=qr_id))
    resp = client.put(f'/api/guard/update-status/{qr_id}', json={'status': 'pending'})
    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Status must be "allowed" or "denied"'}


def test_checkpoint_flow(admin_client, client, reports_client):
    qr_id = generate(admin_client)['qrCodes'][0]['id']

    scan = client.get(f'/api/guard/scan/{qr_id.lower()}').get_json()
    assert scan == {
        'qrCodeId': qr_id,
        'registered': False,
        'message': 'Unregistered - Please enter vehicle details'
    }

    resp = client.post('/api/guard/register-vehicle', json=dict(VEHICLE, qrCodeId=qr_id))
    registered = resp.get_json()
    assert registered['success'] is True
    assert registered['message'] == 'Vehicle registered successfully'

    scan = client.get(f'/api/guard/scan/{qr_id}').get_json()
    assert scan['registered'] is True
    assert scan['vehicle']['id'] == registered['entryId']
    assert scan['vehicle']['vehicleNumber'] == 'KA01AB1234'
    assert scan['vehicle']['status'] == 'allowed'

    resp = client.put(f'/api/guard/update-status/{qr_id}', json={'status': 'denied'})
    assert resp.get_json() == {'success': True, 'message': 'Status updated to denied'}
    assert client.get(f'/api/guard/scan/{qr_id}').get_json()['vehicle']['status'] == 'denied'

    guard_rows = client.get('/api/guard/entries').get_json()
    assert [row['qr_code_id'] for row in guard_rows] == [qr_id]
    assert guard_rows[0]['status'] == 'denied'

    listed = {row['id']: row for row in admin_client.get('/api/admin/qr-codes').get_json()}
    assert listed[qr_id]['vehicle_number'] == 'KA01AB1234'
    assert listed[qr_id]['status'] == 'denied'

    report = reports_client.get('/api/reports/entries?status=denied').get_json()
    assert [row['qr_code_id'] for row in report] == [qr_id]
    assert reports_client.get('/api/reports/entries?status=allowed').get_json() == []


def test_reports_entries_search(admin_client, client, reports_client):
    first, second = [item['id'] for item in generate(admin_client)['qrCodes'][:2]]
    client.post('/api/guard/register-vehicle', json=dict(VEHICLE, qrCodeId=first))
    client.post('/api/guard/register-vehicle',
                json=dict(VEHICLE, qrCodeId=second, vehicleNumber='MH12CD0001', driverName='Anita'))

    rows = reports_client.get('/api/reports/entries?q=ANITA').get_json()
    assert [row['qr_code_id'] for row in rows] == [second]
    assert len(reports_client.get('/api/reports/entries').get_json()) == 2
    assert reports_client.get('/api/reports/entries?status=lost').status_code == 400


# ==================== RESPONSES ====================

def test_security_headers_are_set(client):
    resp = client.get('/api/admin/check-auth')
    assert resp.headers['X-Content-Type-Options'] == 'nosniff'
    assert resp.headers['X-Frame-Options'] == 'DENY'
    assert 'Content-Security-Policy' in resp.headers


def test_unknown_api_endpoint(client):
    resp = client.get('/api/nothing-here')
    assert resp.status_code == 404
    assert resp.get_json() == {'error': 'API endpoint not found'}


def test_wrong_method(client):
    assert client.get('/api/guard/register-vehicle').status_code == 405


def test_oversized_body_is_rejected_as_json(app, client):
    app.config['MAX_CONTENT_LENGTH'] = 64

    resp = client.post('/api/admin/login', json={'username': 'admin', 'password': 'x' * 200})

    assert resp.status_code == 413
    assert resp.is_json
    assert list(resp.get_json()) == ['error']
