"""
Login attempt tracking

Counts failed logins per email, slows down repeated failures and locks the
email out after too many. State lives in process memory; a restart clears it.
"""
import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

from apps.shared.errors import TooManyAttemptsError

logger = logging.getLogger(__name__)

# Lock after this many failures
MAX_FAILED_ATTEMPTS = 10

# Lockout duration in seconds (5 minutes)
LOCKOUT_SECONDS = 5 * 60

# Forget a record after this much inactivity (15 minutes)
RESET_AFTER_SECONDS = 15 * 60

# Failure count -> seconds to wait before checking credentials, highest first
LOGIN_DELAYS = ((5, 30.0), (3, 5.0))


@dataclass
class AttemptRecord:
    count: int
    last_attempt: float
    locked_until: Optional[float] = None


class LoginAttemptTracker:
    """Per-email failed login counter with temporary lockout."""

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._attempts: dict[str, AttemptRecord] = {}

    def check(self, email: str) -> None:
        """
        Raise if the email is currently locked out.

        Raises:
            TooManyAttemptsError: While the lockout is active
        """
        key = email.lower()
        now = self._clock()
        with self._lock:
            record = self._attempts.get(key)
            if record is None:
                return

            if record.locked_until and now < record.locked_until:
                remaining = int(record.locked_until - now) + 1
                raise TooManyAttemptsError(
                    f"Too many failed attempts. Account locked for {remaining} seconds."
                )

            if now - record.last_attempt > RESET_AFTER_SECONDS or (
                record.locked_until and now >= record.locked_until
            ):
                del self._attempts[key]

    def get_delay(self, email: str) -> float:
        """Seconds to slow the next attempt down by, growing with the failure count."""
        with self._lock:
            record = self._attempts.get(email.lower())
            if record is None:
                return 0.0
            for failures, seconds in LOGIN_DELAYS:
                if record.count >= failures:
                    return seconds
            return 0.0

    def record_failure(self, email: str) -> int:
        """Register a failed attempt and return the current failure count."""
        key = email.lower()
        now = self._clock()
        with self._lock:
            record = self._attempts.get(key) or AttemptRecord(count=0, last_attempt=now)
            record.count += 1
            record.last_attempt = now
            if record.count >= MAX_FAILED_ATTEMPTS:
                record.locked_until = now + LOCKOUT_SECONDS
                logger.warning(f"Login locked for {key} after {record.count} failed attempts")
            self._attempts[key] = record
            return record.count

    def record_success(self, email: str) -> None:
        with self._lock:
            self._attempts.pop(email.lower(), None)

    def reset(self) -> None:
        with self._lock:
            self._attempts.clear()


# Shared tracker used by the login mutation
login_attempts = LoginAttemptTracker()
