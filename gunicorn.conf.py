"""Gunicorn configuration file for the checkpoint application."""

# Application
wsgi_app = "wsgi:app"

# Server socket
bind = "0.0.0.0:3000"
backlog = 2048

# Worker processes
workers = 1  # Login attempt tracking is in-process; keep a single worker
threads = 4  # Concurrent requests within the worker
worker_class = "gthread"
max_requests = 0  # Restarting the worker would drop login attempt state
timeout = 120  # Request timeout in seconds
keepalive = 5  # Number of seconds to keep connections alive

# Security
limit_request_line = 4094  # Maximum size of HTTP request line
limit_request_fields = 100  # Maximum number of HTTP headers
limit_request_field_size = 8190  # Maximum size of HTTP headers

# Logging
accesslog = "-"  # stdout
errorlog = "-"  # stderr
loglevel = "info"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = "checkpoint"

# Server mechanics
preload_app = False
daemon = False
pidfile = "/tmp/checkpoint.pid"
user = None
group = None
tmp_upload_dir = None

# SSL (if needed)
# keyfile = "/path/to/keyfile"
# certfile = "/path/to/certfile"


def post_worker_init(worker):
    """Start the login attempt sweeper inside the worker that serves requests."""
    from checkpoint.utils.login_sweeper import LoginAttemptSweeper

    app = worker.wsgi
    sweeper = LoginAttemptSweeper(
        app.extensions['checkpoint']['guards'].values(),
        app.config['LOGIN_SWEEP_INTERVAL_SECONDS']
    )
    sweeper.start()
