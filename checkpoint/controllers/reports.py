from flask import Blueprint, request, jsonify
from checkpoint.utils.helpers import get_client_ip, get_guard, get_json_body, get_service
from checkpoint.utils.security_middleware import (
    is_authenticated, login_session, logout_session, reports_required, session_user
)

reports_bp = Blueprint('reports', __name__, url_prefix='/api/reports')


@reports_bp.route('/login', methods=['POST'])
def login():
    data = get_json_body(request)
    userid = data.get('userid')

    get_guard('reports').authenticate(userid, data.get('password'), get_client_ip(request))
    login_session('reports', userid)

    return jsonify({
        'success': True,
        'message': 'Login successful'
    })


@reports_bp.route('/check-auth', methods=['GET'])
def check_auth():
    if is_authenticated('reports'):
        return jsonify({
            'authenticated': True,
            'userid': session_user('reports')
        })
    return jsonify({'authenticated': False})


@reports_bp.route('/logout', methods=['POST'])
def logout():
    logout_session('reports')
    return jsonify({
        'success': True,
        'message': 'Logged out successfully'
    })


@reports_bp.route('/entries', methods=['GET'])
@reports_required
def entries():
    """Vehicle entries for reporting, optionally filtered by ?status= and ?q="""
    status = request.args.get('status', '').strip() or None
    search = request.args.get('q', '').strip() or None
    return jsonify(get_service('entries').list_entries(status=status, search=search))
