"""Rate-limited credential checks for the admin and reports domains."""

import math
import threading
import time
from dataclasses import dataclass

from checkpoint.utils.error_handler import AuthenticationError, RateLimitedError, ValidationError
from checkpoint.utils.logging_config import get_logger, log_security_event
from checkpoint.utils.security import verify_password

logger = get_logger(__name__)


@dataclass
class LoginAttempt:
    count: int = 0
    last_attempt: float = 0.0


class LoginAttemptStore:
    """In-memory map of client key to failed login attempts."""

    def __init__(self):
        self._attempts = {}
        # Shared by request threads and the sweep job
        self._lock = threading.Lock()

    def get(self, key):
        with self._lock:
            attempt = self._attempts.get(key)
            return LoginAttempt(attempt.count, attempt.last_attempt) if attempt else LoginAttempt()

    def reserve(self, key, now, max_attempts, window_seconds):
        """
        Count an attempt for key unless it is locked out.

        Returns (attempt, locked) where attempt is a copy of the stored
        record. The lockout check and the increment happen under one lock.
        A lockout older than window_seconds starts a fresh count.
        """
        with self._lock:
            attempt = self._attempts.setdefault(key, LoginAttempt())
            if attempt.count >= max_attempts:
                if now - attempt.last_attempt < window_seconds:
                    return LoginAttempt(attempt.count, attempt.last_attempt), True
                attempt.count = 0
            attempt.count += 1
            attempt.last_attempt = now
            return LoginAttempt(attempt.count, attempt.last_attempt), False

    def clear(self, key):
        with self._lock:
            self._attempts.pop(key, None)

    def sweep(self, now, window_seconds):
        """Drop entries whose last attempt is older than the window; return how many."""
        with self._lock:
            stale = [key for key, attempt in self._attempts.items()
                     if now - attempt.last_attempt > window_seconds]
            for key in stale:
                del self._attempts[key]
        return len(stale)

    def __len__(self):
        with self._lock:
            return len(self._attempts)


class AccessGuard:
    """
    Credential check for one auth domain, with per-client attempt limiting.

    After max_attempts failures from one client key, further attempts are
    refused until window_seconds have passed since the last failure. A
    successful login clears the client's counter.
    """

    def __init__(self, domain, user_id, password_hash, store=None, clock=time.time,
                 max_attempts=5, window_seconds=15 * 60, max_field_length=100):
        self.domain = domain
        self.user_id = user_id
        self.password_hash = password_hash
        self.store = store if store is not None else LoginAttemptStore()
        self.clock = clock
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.max_field_length = max_field_length

        if not password_hash:
            logger.warning(f"No password hash configured for {domain} login; all logins will be rejected")

    def authenticate(self, user_id, password, client_key):
        """
        Check credentials for client_key.

        Raises ValidationError for missing or oversized credentials (before
        the limiter is consulted), RateLimitedError while the client is
        locked out and AuthenticationError on a mismatch.
        """
        if not user_id or not password or not isinstance(user_id, str) or not isinstance(password, str):
            raise ValidationError(f'{self._user_label()[0]} and password required')
        if len(user_id) > self.max_field_length or len(password) > self.max_field_length:
            raise ValidationError('Invalid input length')

        now = self.clock()
        # The attempt is counted before the slow password check runs
        attempt, locked = self.store.reserve(client_key, now, self.max_attempts, self.window_seconds)

        if locked:
            remaining = math.ceil((self.window_seconds - (now - attempt.last_attempt)) / 60)
            log_security_event(
                'LOGIN_RATE_LIMITED', ip_address=client_key, domain=self.domain,
                details=f'{attempt.count} failed attempts'
            )
            raise RateLimitedError(remaining)

        user_matches = user_id == self.user_id
        password_matches = verify_password(password, self.password_hash)

        if user_matches and password_matches:
            self.store.clear(client_key)
            log_security_event('LOGIN_SUCCESS', ip_address=client_key, domain=self.domain)
            return True

        log_security_event(
            'FAILED_LOGIN', ip_address=client_key, domain=self.domain,
            details=f'attempt {attempt.count} of {self.max_attempts}'
        )
        raise AuthenticationError(f'Invalid {self._user_label()[1]} or password')

    def sweep(self):
        removed = self.store.sweep(self.clock(), self.window_seconds)
        if removed:
            logger.debug(f"Swept {removed} stale {self.domain} login attempt record(s)")
        return removed

    def _user_label(self):
        if self.domain == 'admin':
            return 'Username', 'username'
        return 'User ID', 'user ID'
