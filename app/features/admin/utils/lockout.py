"""
Per-account login lockout.

State lives on the Admin row (``login_attempts``, ``lock_until``); the
functions here only compute transitions so they can be tested without a
database:

    Unlocked(n) --failure--> Unlocked(n + 1)
    Unlocked(n) --failure, n + 1 >= max--> Locked(now + duration)
    Locked(t), t <= now --failure--> Unlocked(1)
    any --success--> Unlocked(0)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from app.platform.config import settings


@dataclass(frozen=True)
class LockoutPolicy:
    max_attempts: int = 5
    lock_duration: timedelta = timedelta(hours=2)

    @classmethod
    def from_settings(cls) -> "LockoutPolicy":
        return cls(
            max_attempts=settings.MAX_LOGIN_ATTEMPTS,
            lock_duration=timedelta(minutes=settings.LOCK_DURATION_MINUTES),
        )


@dataclass(frozen=True)
class FailureTransition:
    """How to persist a failed attempt.

    ``restart`` means the stored counter is overwritten with 1 (stale lock
    forgiven); otherwise it is incremented in the store.
    """

    restart: bool
    lock_until: Optional[datetime]
    locks_now: bool = False


def is_locked(lock_until: Optional[datetime], now: datetime) -> bool:
    return lock_until is not None and lock_until > now


def has_stale_lock(lock_until: Optional[datetime], now: datetime) -> bool:
    return lock_until is not None and lock_until <= now


def next_failure(
    attempts: int,
    lock_until: Optional[datetime],
    now: datetime,
    policy: Optional[LockoutPolicy] = None,
) -> FailureTransition:
    policy = policy or LockoutPolicy.from_settings()

    if has_stale_lock(lock_until, now):
        return FailureTransition(restart=True, lock_until=None)

    if attempts + 1 >= policy.max_attempts and not is_locked(lock_until, now):
        return FailureTransition(restart=False, lock_until=now + policy.lock_duration, locks_now=True)

    return FailureTransition(restart=False, lock_until=lock_until)


def needs_reset(attempts: int, lock_until: Optional[datetime]) -> bool:
    return attempts > 0 or lock_until is not None
