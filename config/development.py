"""Development configuration for the checkpoint application."""

from .base import Config
import os


class DevelopmentConfig(Config):
    """Development configuration."""
    
    # Debug mode
    DEBUG = True
    TESTING = False
    
    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get('DEV_DATABASE_URL') or 'sqlite:///checkpoint_dev.db'
    
    # Security
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-for-development'
    SESSION_COOKIE_SECURE = False  # Allow HTTP in development
    
    # Logging
    LOG_LEVEL = 'DEBUG'
    
    # Rate limiting
    RATELIMIT_ENABLED = False
