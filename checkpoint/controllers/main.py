import os
from flask import Blueprint, abort, current_app, send_from_directory

from checkpoint.utils.error_handler import InvalidIdentifier
from checkpoint.utils.security import qr_image_path

main_bp = Blueprint('main', __name__)


@main_bp.route('/qr_codes/<filename>')
def qr_code_image(filename):
    """Serve a rendered QR code image"""
    qr_id, ext = os.path.splitext(filename)
    if ext.lower() != '.png':
        abort(404)

    try:
        path = qr_image_path(current_app.config['QR_CODE_DIR'], qr_id)
    except InvalidIdentifier:
        abort(404)

    if not os.path.exists(path):
        abort(404)
    return send_from_directory(os.path.dirname(path), os.path.basename(path), mimetype='image/png')
