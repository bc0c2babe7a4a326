from datetime import datetime, timezone
from flask import current_app


def utcnow():
    """Naive UTC timestamp, matching how DateTime columns are stored"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    return value.isoformat() if value else None


def get_client_ip(request):
    """Client address used to key login attempt tracking"""
    return request.remote_addr or 'unknown'


def get_service(name):
    """Look up one of the app's QR lifecycle services"""
    return current_app.extensions['checkpoint'][name]


def get_guard(domain):
    return get_service('guards')[domain]


def get_json_body(request):
    """Request JSON object, or an empty dict for missing or non-object bodies"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
