"""Base configuration for the checkpoint application."""

import os
from datetime import timedelta


class Config:
    """Base configuration class."""
    
    # Security
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    
    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///checkpoint.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'connect_args': {
            'timeout': 20,  # SQLite busy timeout, seconds
        }
    }
    AUTO_MIGRATE = os.environ.get('AUTO_MIGRATE', 'True').lower() == 'true'
    
    # Session management
    SESSION_TYPE = 'cachelib'
    SESSION_CACHELIB = None  # FileSystemCache in SESSION_CACHE_DIR, built by create_app
    SESSION_CACHE_DIR = os.environ.get('SESSION_DIR', 'flask_session')
    SESSION_PERMANENT = True
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_COOKIE_SECURE = os.environ.get('SESSION_SECURE', 'False').lower() == 'true'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Strict'
    
    # Request bodies
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024  # 10MB
    
    # QR codes
    QR_CODE_DIR = os.environ.get('QR_CODE_DIR') or os.path.join(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'public', 'qr_codes'
    )
    QR_CODE_URL_PREFIX = '/qr_codes'
    QR_BATCH_SIZES = (10, 50, 100)
    QR_ID_MAX_RETRIES = 100
    QR_IMAGE_WIDTH = 300
    QR_IMAGE_MARGIN = 2
    
    # Credentials (hashes come from `flask security hash-password`)
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD_HASH = os.environ.get('ADMIN_PASSWORD_HASH')
    REPORTS_USERID = os.environ.get('REPORTS_USERID', 'admin')
    REPORTS_PASSWORD_HASH = os.environ.get('REPORTS_PASSWORD_HASH')
    
    # Login attempt limiting
    LOGIN_MAX_ATTEMPTS = int(os.environ.get('LOGIN_MAX_ATTEMPTS', 5))
    LOGIN_WINDOW_SECONDS = int(os.environ.get('LOGIN_WINDOW_SECONDS', 15 * 60))
    LOGIN_SWEEP_INTERVAL_SECONDS = int(os.environ.get('LOGIN_SWEEP_INTERVAL_SECONDS', 60))
    LOGIN_FIELD_MAX_LENGTH = 100
    
    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR', 'logs')
    LOG_TO_FILE = True
    
    # Rate limiting
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_HEADERS_ENABLED = True
