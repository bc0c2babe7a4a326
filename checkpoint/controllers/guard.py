from flask import Blueprint, request, jsonify
from checkpoint import limiter
from checkpoint.utils.helpers import get_json_body, get_service

guard_bp = Blueprint('guard', __name__, url_prefix='/api/guard')
guard_limit = limiter.shared_limit("120 per minute", scope="guard")


@guard_bp.route('/scan/<qr_id>', methods=['GET'])
@guard_limit
def scan(qr_id):
    result = get_service('resolver').resolve(qr_id)
    return jsonify(result.to_dict())


@guard_bp.route('/register-vehicle', methods=['POST'])
@guard_limit
def register_vehicle():
    data = get_json_body(request)

    attributes = {
        'vehicle_number': data.get('vehicleNumber'),
        'driver_name': data.get('driverName'),
        'mobile_number': data.get('mobileNumber'),
        'vehicle_type': data.get('vehicleType'),
        'purpose': data.get('purpose')
    }
    entry_id = get_service('entries').register(data.get('qrCodeId'), attributes, status=data.get('status'))

    return jsonify({
        'success': True,
        'message': 'Vehicle registered successfully',
        'entryId': entry_id
    })


@guard_bp.route('/update-status/<qr_id>', methods=['PUT'])
@guard_limit
def update_status(qr_id):
    status = get_json_body(request).get('status')
    get_service('entries').update_status(qr_id, status)

    return jsonify({
        'success': True,
        'message': f'Status updated to {status}'
    })


@guard_bp.route('/entries', methods=['GET'])
@guard_limit
def entries():
    return jsonify(get_service('entries').list_entries())
