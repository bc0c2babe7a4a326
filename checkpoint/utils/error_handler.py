"""Error handling and custom exception classes for the checkpoint application."""

from flask import jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from checkpoint.utils.logging_config import get_logger, log_security_event


# Custom exception classes
class CheckpointException(Exception):
    """Base exception class for the checkpoint application."""
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {'error': self.message}


class ValidationError(CheckpointException):
    """Raised when user-supplied input fails validation."""
    status_code = 400
    default_message = 'Invalid input'


class InvalidIdentifier(ValidationError):
    """Raised for a malformed or path-unsafe QR code ID."""
    default_message = 'Invalid QR code ID format'


class InvalidStatus(ValidationError):
    """Raised when a status is outside the permitted set."""
    default_message = 'Invalid status'


class AuthenticationError(CheckpointException):
    """Raised when authentication fails."""
    status_code = 401
    default_message = 'Unauthorized - Please login'


class NotFoundError(CheckpointException):
    """Raised when a QR code or vehicle entry does not exist."""
    status_code = 404
    default_message = 'Not found'


class DuplicateKeyError(CheckpointException):
    """Raised when an insert collides with an existing key."""
    status_code = 409
    default_message = 'Duplicate ID detected'


class RateLimitedError(CheckpointException):
    """Raised when a client has exhausted its login attempts."""
    status_code = 429

    def __init__(self, retry_after_minutes):
        self.retry_after_minutes = retry_after_minutes
        super().__init__(
            f'Too many login attempts. Please try again in {retry_after_minutes} minute(s).'
        )


class DatabaseError(CheckpointException):
    """Raised when storage or rendering operations fail."""
    status_code = 500


# Logger for error handling
logger = get_logger('checkpoint.errors')


def init_error_handlers(app):
    """Initialize error handlers for the Flask application."""

    @app.errorhandler(CheckpointException)
    def handle_checkpoint_exception(error):
        if error.status_code >= 500:
            logger.error(f"{type(error).__name__}: {request.url} - {error.message}", exc_info=True)
        elif isinstance(error, (AuthenticationError, RateLimitedError)):
            logger.warning(f"{type(error).__name__}: {request.url} from {request.remote_addr}")
        else:
            logger.info(f"{type(error).__name__}: {request.url} - {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        from checkpoint import db
        db.session.rollback()
        logger.error(f"Database error: {request.url} - {str(error)}", exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500

    @app.errorhandler(400)
    def bad_request(error):
        logger.info(f"Bad request: {request.url} - {str(error)}")
        return jsonify({
            'error': str(error.description) if hasattr(error, 'description') else 'Invalid request'
        }), 400

    @app.errorhandler(404)
    def not_found(error):
        logger.info(f"Not found: {request.url}")
        if request.path.startswith('/api/'):
            return jsonify({'error': 'API endpoint not found'}), 404
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'The method is not allowed for this endpoint'}), 405

    @app.errorhandler(429)
    def rate_limit_exceeded(error):
        logger.warning(f"Rate limit exceeded: {request.url} from {request.remote_addr}")
        log_security_event('REQUEST_RATE_LIMITED', ip_address=request.remote_addr, details=request.path)
        return jsonify({'error': 'Too many requests. Please try again later.'}), 429

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal server error: {request.url} - {str(error)}", exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500

    @app.errorhandler(Exception)
    def handle_exception(error):
        # HTTP errors without a dedicated handler, e.g. 413 from MAX_CONTENT_LENGTH
        if isinstance(error, HTTPException):
            return jsonify({'error': error.description}), error.code

        logger.error(f"Unhandled exception: {str(error)}", exc_info=True)
        log_security_event(
            'UNHANDLED_EXCEPTION',
            ip_address=request.remote_addr,
            details=f"{type(error).__name__}: {str(error)}"
        )
        return jsonify({'error': 'Internal server error'}), 500
