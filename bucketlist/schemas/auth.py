from typing import Optional

from pydantic import BaseModel

from bucketlist.models.auth import AuthState, AuthStatus, FailureReason


class UnlockRequest(BaseModel):
    assertion: Optional[str] = None  # signed by the device after its biometric check


class AuthStateRead(BaseModel):
    status: AuthStatus
    unlocked: bool
    failed_attempts: int
    max_attempts: int
    locked_out: bool
    last_failure_reason: FailureReason

    @classmethod
    def from_state(cls, state: AuthState) -> "AuthStateRead":
        return cls(
            status=state.status,
            unlocked=state.unlocked,
            failed_attempts=state.failed_attempts,
            max_attempts=state.max_attempts,
            locked_out=state.locked_out,
            last_failure_reason=state.last_failure_reason,
        )
