"""Authentication gate state."""

from dataclasses import dataclass
from enum import Enum

MAX_FAILED_ATTEMPTS = 3


class AuthStatus(str, Enum):
    """States of the biometric gate"""
    LOCKED = "locked"
    UNLOCKED = "unlocked"
    BLOCKED_OUT = "blocked_out"


class FailureReason(str, Enum):
    """Why the most recent authentication attempt did not unlock the gate"""
    NONE = "none"
    AUTH_FAILED = "auth_failed"
    BIOMETRICS_UNAVAILABLE = "biometrics_unavailable"


@dataclass(frozen=True)
class AuthState:
    """Snapshot of the gate handed to callers"""
    status: AuthStatus
    failed_attempts: int
    max_attempts: int
    locked_out: bool
    last_failure_reason: FailureReason = FailureReason.NONE

    @property
    def unlocked(self) -> bool:
        return self.status == AuthStatus.UNLOCKED
