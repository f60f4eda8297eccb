"""
Auth Gate - biometric unlock with a bounded number of attempts.

The gate starts ``locked`` (or ``blocked_out`` when the lockout flag was saved
by an earlier run). Failed checks are counted; reaching the limit blocks the
gate for good and writes the flag before returning. A device without usable
biometrics is reported separately and never counted.
"""

import asyncio
import logging
from typing import Optional

from bucketlist.core.exceptions import (
    AuthenticationInProgressError,
    GateLockedError,
    LockedOutError,
)
from bucketlist.core.preferences import PreferencesStore
from bucketlist.models.auth import AuthState, AuthStatus, FailureReason, MAX_FAILED_ATTEMPTS
from bucketlist.services.biometrics import BiometricCapability

logger = logging.getLogger(__name__)

DEFAULT_LOCKOUT_KEY = "isBlocked"
DEFAULT_REASON = "Please authenticate yourself to unlock your places."


class AuthGate:
    """State machine in front of the saved places."""

    def __init__(
        self,
        biometrics: BiometricCapability,
        preferences: PreferencesStore,
        max_attempts: int = MAX_FAILED_ATTEMPTS,
        lockout_key: str = DEFAULT_LOCKOUT_KEY,
        reason: str = DEFAULT_REASON,
    ):
        self.biometrics = biometrics
        self.preferences = preferences
        self.max_attempts = max_attempts
        self.lockout_key = lockout_key
        self.reason = reason

        self._lock = asyncio.Lock()
        self._failed_attempts = 0
        self._last_failure_reason = FailureReason.NONE
        self._locked_out = preferences.get_bool(lockout_key)
        self._status = AuthStatus.BLOCKED_OUT if self._locked_out else AuthStatus.LOCKED

        if self._locked_out:
            logger.warning("Authentication gate starts blocked out")

    @property
    def status(self) -> AuthStatus:
        return self._status

    @property
    def state(self) -> AuthState:
        return AuthState(
            status=self._status,
            failed_attempts=self._failed_attempts,
            max_attempts=self.max_attempts,
            locked_out=self._locked_out,
            last_failure_reason=self._last_failure_reason,
        )

    @property
    def in_progress(self) -> bool:
        return self._lock.locked()

    async def authenticate(self, biometrics: Optional[BiometricCapability] = None) -> AuthState:
        """
        Run one biometric check and move the gate accordingly.

        Only meaningful while ``locked``; from ``unlocked`` or ``blocked_out``
        the call changes nothing and returns the current state.

        Args:
            biometrics: Capability for this attempt, defaults to the injected one

        Returns:
            State after the attempt

        Raises:
            AuthenticationInProgressError: If another attempt is still pending
        """
        if self._lock.locked():
            raise AuthenticationInProgressError()

        async with self._lock:
            if self._status != AuthStatus.LOCKED:
                logger.info(f"Ignoring authenticate() while {self._status.value}")
                return self.state

            capability = biometrics or self.biometrics
            if not capability.can_authenticate():
                self._last_failure_reason = FailureReason.BIOMETRICS_UNAVAILABLE
                logger.warning("Biometric authentication unavailable on this device")
                return self.state

            success = await capability.evaluate(self.reason)
            if success:
                self._unlock()
            else:
                self._record_failure()
            return self.state

    def require_unlocked(self) -> None:
        """
        Check that bookmark content may be read.

        Raises:
            LockedOutError: If the gate is blocked out
            GateLockedError: If the gate has not been unlocked yet
        """
        if self._status == AuthStatus.BLOCKED_OUT:
            raise LockedOutError(self._failed_attempts, self.max_attempts)
        if self._status != AuthStatus.UNLOCKED:
            raise GateLockedError(details={"failed_attempts": self._failed_attempts})

    def _unlock(self) -> None:
        self._status = AuthStatus.UNLOCKED
        self._failed_attempts = 0
        self._last_failure_reason = FailureReason.NONE
        logger.info("Authentication succeeded, places unlocked")

    def _record_failure(self) -> None:
        self._failed_attempts += 1
        self._last_failure_reason = FailureReason.AUTH_FAILED
        logger.warning(
            f"Authentication failed ({self._failed_attempts}/{self.max_attempts})",
            extra={"failed_attempts": self._failed_attempts}
        )

        if self._failed_attempts >= self.max_attempts:
            self._locked_out = True
            self._status = AuthStatus.BLOCKED_OUT
            if not self.preferences.set_bool(self.lockout_key, True):
                logger.error("Lockout flag could not be saved; it holds for this process only")
            logger.error("Maximum authentication attempts reached, access blocked")
