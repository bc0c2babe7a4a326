"""Security middleware for the checkpoint application."""

from functools import wraps
from flask import session

from checkpoint.utils.error_handler import AuthenticationError

SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'DENY',
    'X-XSS-Protection': '1; mode=block',
    'Referrer-Policy': 'strict-origin-when-cross-origin',
    'Content-Security-Policy': (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net https://cdnjs.cloudflare.com; "
        "style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data:;"
    )
}

# Session keys per auth domain: (authenticated flag, stored user id)
SESSION_KEYS = {
    'admin': ('admin_authenticated', 'admin_username'),
    'reports': ('reports_authenticated', 'reports_userid')
}


def init_security_headers(app):
    """Add the standard security headers to every response."""

    @app.after_request
    def set_security_headers(response):
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response


def is_authenticated(domain):
    flag, _ = SESSION_KEYS[domain]
    return bool(session.get(flag))


def login_session(domain, user_id):
    flag, user_key = SESSION_KEYS[domain]
    session.permanent = True
    session[flag] = True
    session[user_key] = user_id


def logout_session(domain):
    flag, user_key = SESSION_KEYS[domain]
    session.pop(flag, None)
    session.pop(user_key, None)


def session_user(domain):
    _, user_key = SESSION_KEYS[domain]
    return session.get(user_key)


def domain_required(domain):
    """Decorator to require a logged-in session for the given auth domain."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not is_authenticated(domain):
                raise AuthenticationError()
            return f(*args, **kwargs)
        return decorated_function
    return decorator


admin_required = domain_required('admin')
reports_required = domain_required('reports')
