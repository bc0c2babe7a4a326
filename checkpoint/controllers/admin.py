from flask import Blueprint, request, jsonify, session
from checkpoint import limiter
from checkpoint.utils.helpers import get_client_ip, get_guard, get_json_body, get_service
from checkpoint.utils.logging_config import log_security_event
from checkpoint.utils.security_middleware import (
    admin_required, is_authenticated, login_session, session_user
)

admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')


# ==================== AUTHENTICATION ====================

@admin_bp.route('/login', methods=['POST'])
def login():
    data = get_json_body(request)
    username = data.get('username')

    get_guard('admin').authenticate(username, data.get('password'), get_client_ip(request))
    login_session('admin', username)

    return jsonify({
        'success': True,
        'message': 'Login successful'
    })


@admin_bp.route('/check-auth', methods=['GET'])
def check_auth():
    if is_authenticated('admin'):
        return jsonify({
            'authenticated': True,
            'username': session_user('admin')
        })
    return jsonify({'authenticated': False})


@admin_bp.route('/logout', methods=['POST'])
def logout():
    # Ends the whole session, including any reports login
    session.clear()
    return jsonify({
        'success': True,
        'message': 'Logged out successfully'
    })


# ==================== QR CODES (PROTECTED) ====================

@admin_bp.route('/generate-qr-codes', methods=['POST'])
@admin_required
@limiter.limit("10 per minute")
def generate_qr_codes():
    count = get_json_body(request).get('count')

    batch_id, qr_codes, errors = get_service('registry').generate_batch(count)
    log_security_event(
        'QR_CODES_GENERATED', ip_address=request.remote_addr,
        details=f'{len(qr_codes)} code(s) in batch {batch_id}'
    )

    response = {
        'success': True,
        'count': len(qr_codes),
        'batchId': batch_id,
        'qrCodes': qr_codes
    }
    if errors:
        response['errors'] = errors
    return jsonify(response)


@admin_bp.route('/qr-codes', methods=['GET'])
@admin_required
def list_qr_codes():
    batch_id = request.args.get('batchId', '').strip() or None
    return jsonify(get_service('registry').list_all(batch_id=batch_id))


@admin_bp.route('/qr-codes/<qr_id>', methods=['DELETE'])
@admin_required
def delete_qr_code(qr_id):
    get_service('registry').delete_one(qr_id)
    log_security_event('QR_CODE_DELETED', ip_address=request.remote_addr, details=qr_id)

    return jsonify({
        'success': True,
        'message': 'QR code deleted successfully'
    })


@admin_bp.route('/qr-codes', methods=['DELETE'])
@admin_required
def delete_qr_codes():
    qr_ids = get_json_body(request).get('qrIds')

    deleted_count, errors = get_service('registry').delete_many(qr_ids)
    log_security_event(
        'QR_CODES_DELETED', ip_address=request.remote_addr,
        details=f'{deleted_count} code(s) deleted'
    )

    response = {
        'success': True,
        'message': f'Deleted {deleted_count} QR code(s) successfully',
        'deletedCount': deleted_count
    }
    if errors:
        response['errors'] = errors
    return jsonify(response)
