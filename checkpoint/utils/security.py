"""Security utilities for the checkpoint application."""

import os
import re
from passlib.context import CryptContext

from checkpoint.utils.error_handler import InvalidIdentifier, ValidationError


# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=12
)

QR_CODE_ID_PATTERN = re.compile(r'^[0-9A-Z]{5}$')
_NON_ALPHANUMERIC = re.compile(r'[^0-9A-Za-z]')
# Alphanumerics, whitespace, hyphens and common punctuation
_FREE_TEXT_PATTERN = re.compile(r'^[a-zA-Z0-9\s\-.,!?()]+$')
_MOBILE_PATTERN = re.compile(r'^[0-9\s\-+()]+$')
MOBILE_NUMBER_MAX_LENGTH = 20


def hash_password(password):
    """Hash a password for storage."""
    return pwd_context.hash(password)


def verify_password(password, hashed):
    """Verify a stored password against plain text."""
    if not hashed:
        return False
    try:
        return pwd_context.verify(password, hashed)
    except (ValueError, TypeError):
        # Malformed hash in configuration
        return False


def is_valid_qr_code_id(qr_id):
    """Check that a QR code ID is exactly 5 characters of [0-9A-Z]."""
    if not qr_id or not isinstance(qr_id, str):
        return False
    return QR_CODE_ID_PATTERN.match(qr_id) is not None


def sanitize_qr_code_id(qr_id):
    """Strip path and punctuation characters from a QR code ID and uppercase it."""
    if not qr_id or not isinstance(qr_id, str):
        return None
    return _NON_ALPHANUMERIC.sub('', qr_id)[:10].upper()


def normalize_qr_code_id(qr_id):
    """Sanitize and validate a QR code ID, raising InvalidIdentifier if unusable."""
    sanitized = sanitize_qr_code_id(qr_id)
    if not is_valid_qr_code_id(sanitized):
        raise InvalidIdentifier()
    return sanitized


def qr_image_path(qr_code_dir, qr_id):
    """Return the image path for a QR code, refusing anything outside qr_code_dir."""
    qr_id = normalize_qr_code_id(qr_id)
    base_dir = os.path.realpath(qr_code_dir)
    path = os.path.realpath(os.path.join(base_dir, f'{qr_id}.png'))
    if os.path.commonpath([base_dir, path]) != base_dir:
        raise InvalidIdentifier('Invalid file path')
    return path


def validate_input(value, max_length=255):
    """Validate free text against the allow-list pattern and a maximum length."""
    if not value or not isinstance(value, str):
        return False
    if len(value) > max_length:
        return False
    return _FREE_TEXT_PATTERN.match(value.strip()) is not None


def validate_mobile_number(mobile):
    """Validate a mobile number; empty values are allowed since the field is optional."""
    if not mobile:
        return True
    if not isinstance(mobile, str):
        return False
    if len(mobile) > MOBILE_NUMBER_MAX_LENGTH:
        return False
    return _MOBILE_PATTERN.match(mobile.strip()) is not None


def clean_text_field(value, max_length, label):
    """Validate an optional free-text field and return its stored form."""
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ValidationError(f'Invalid {label} format or length exceeded')
    if value.strip() and not validate_input(value, max_length):
        raise ValidationError(f'Invalid {label} format or length exceeded')
    return value.strip()[:max_length]


def clean_mobile_number(value):
    """Validate an optional mobile number and return its stored form (None when absent)."""
    if value is None:
        return None
    if not isinstance(value, str) or (value.strip() and not validate_mobile_number(value)):
        raise ValidationError('Invalid mobile number format')
    return value.strip()[:MOBILE_NUMBER_MAX_LENGTH] or None
