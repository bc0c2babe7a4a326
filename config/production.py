"""Production configuration for the checkpoint application."""

from .base import Config
import os


class ProductionConfig(Config):
    """Production configuration."""
    
    # Debug mode
    DEBUG = False
    TESTING = False
    
    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///checkpoint.db'
    
    # Security
    SECRET_KEY = os.environ.get('SECRET_KEY')
    SESSION_COOKIE_SECURE = os.environ.get('SESSION_SECURE', 'True').lower() == 'true'
    
    # Logging
    LOG_LEVEL = 'WARNING'
    
    # Rate limiting
    RATELIMIT_ENABLED = True
    
    # Performance
    SEND_FILE_MAX_AGE_DEFAULT = 31536000  # 1 year for static files
