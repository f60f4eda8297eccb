"""
Biometric capabilities the authentication gate can call.

The gate only knows the ``BiometricCapability`` protocol. Concrete devices do
the actual fingerprint or face check; what reaches this process is either
nothing (``UnavailableBiometrics``) or a signed assertion from the device
(``DeviceAssertionBiometrics``).
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol, runtime_checkable

import jwt

logger = logging.getLogger(__name__)

ASSERTION_CLAIM = "bio"
ASSERTION_VERIFIED = "verified"


@runtime_checkable
class BiometricCapability(Protocol):
    def can_authenticate(self) -> bool:
        ...

    async def evaluate(self, reason: str) -> bool:
        ...


class UnavailableBiometrics:
    """Capability for hosts with no biometric hardware or enrolment."""

    def can_authenticate(self) -> bool:
        return False

    async def evaluate(self, reason: str) -> bool:
        return False


class DeviceAssertionBiometrics:
    """
    Verifies a JWT the device signed after a successful local biometric check.

    The capability is unavailable when no shared secret is configured or the
    device did not send an assertion.
    """

    def __init__(self, assertion: Optional[str], secret: Optional[str], algorithm: str = "HS256"):
        self.assertion = assertion
        self.secret = secret
        self.algorithm = algorithm

    def can_authenticate(self) -> bool:
        return bool(self.secret) and bool(self.assertion)

    async def evaluate(self, reason: str) -> bool:
        try:
            claims = jwt.decode(self.assertion, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            logger.info(f"Rejected device assertion: {e}")
            return False
        return claims.get(ASSERTION_CLAIM) == ASSERTION_VERIFIED


def issue_device_assertion(
    secret: str,
    device_id: str = "device",
    expires_seconds: int = 60,
    verified: bool = True,
    algorithm: str = "HS256",
) -> str:
    """Mint the assertion a device sends after its local biometric check."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": device_id,
        ASSERTION_CLAIM: ASSERTION_VERIFIED if verified else "rejected",
        "iat": now,
        "exp": now + timedelta(seconds=expires_seconds),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)
