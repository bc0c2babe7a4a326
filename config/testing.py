"""Testing configuration for the checkpoint application."""

from cachelib import SimpleCache

from .base import Config


class TestingConfig(Config):
    """Testing configuration."""
    
    # Debug mode
    DEBUG = True
    TESTING = True
    
    # Database
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    AUTO_MIGRATE = False
    
    # Security
    SECRET_KEY = 'test-secret-key'
    
    # Session management
    SESSION_CACHELIB = SimpleCache()
    
    # Logging
    LOG_LEVEL = 'DEBUG'
    LOG_TO_FILE = False
    
    # Rate limiting
    RATELIMIT_ENABLED = False
