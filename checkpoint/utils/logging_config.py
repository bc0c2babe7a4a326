"""Logging configuration for the checkpoint application."""

import logging
import logging.config
import os
from pythonjsonlogger import jsonlogger


def setup_logging(log_level='INFO', log_dir='logs', to_file=True):
    """Set up logging configuration for the application."""

    # Define log format
    log_format = '%(asctime)s %(name)s %(levelname)s %(message)s'

    handlers = {
        'default': {
            'level': log_level,
            'formatter': 'standard',
            'class': 'logging.StreamHandler',
            'stream': 'ext://sys.stdout'
        },
        'security_stream': {
            'level': 'INFO',
            'formatter': 'json',
            'class': 'logging.StreamHandler',
            'stream': 'ext://sys.stdout'
        }
    }
    root_handlers = ['default']
    security_handlers = ['security_stream']
    error_handlers = ['default']

    if to_file:
        # Create logs directory if it doesn't exist
        os.makedirs(log_dir, exist_ok=True)
        handlers.update({
            'file': {
                'level': log_level,
                'formatter': 'detailed',
                'class': 'logging.handlers.RotatingFileHandler',
                'filename': os.path.join(log_dir, 'app.log'),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5
            },
            'security_file': {
                'level': 'INFO',
                'formatter': 'json',
                'class': 'logging.handlers.RotatingFileHandler',
                'filename': os.path.join(log_dir, 'security.log'),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5
            },
            'error_file': {
                'level': 'ERROR',
                'formatter': 'detailed',
                'class': 'logging.handlers.RotatingFileHandler',
                'filename': os.path.join(log_dir, 'error.log'),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5
            }
        })
        root_handlers.append('file')
        security_handlers = ['security_file']
        error_handlers = ['error_file', 'default']

    # Configure logging
    logging_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            },
            'detailed': {
                'format': '%(asctime)s [%(levelname)s] %(name)s %(funcName)s %(lineno)d: %(message)s'
            },
            'json': {
                '()': jsonlogger.JsonFormatter,
                'format': log_format
            }
        },
        'handlers': handlers,
        'loggers': {
            '': {  # root logger
                'handlers': root_handlers,
                'level': log_level,
                'propagate': False
            },
            'checkpoint.security': {
                'handlers': security_handlers,
                'level': 'INFO',
                'propagate': False
            },
            'checkpoint.errors': {
                'handlers': error_handlers,
                'level': 'WARNING',
                'propagate': False
            }
        }
    }

    logging.config.dictConfig(logging_config)

    # Set specific log levels for third-party libraries
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('apscheduler').setLevel(logging.WARNING)


def get_logger(name):
    """Get a logger instance with the specified name."""
    return logging.getLogger(name)


def log_security_event(event_type, ip_address=None, details=None, **extra):
    """Log a security-related event."""
    logger = get_logger('checkpoint.security')
    logger.info(
        "Security event",
        extra={
            'event_type': event_type,
            'ip_address': ip_address,
            'details': details,
            **extra
        }
    )
