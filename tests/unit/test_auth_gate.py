"""
Unit tests for the authentication gate state machine
"""
import asyncio

import pytest

from bucketlist.core.exceptions import (
    AuthenticationInProgressError,
    GateLockedError,
    LockedOutError,
)
from bucketlist.core.preferences import PreferencesStore
from bucketlist.models.auth import AuthStatus, FailureReason
from bucketlist.services.auth_gate import AuthGate


def test_initial_state_is_locked(gate):
    state = gate.state
    assert state.status == AuthStatus.LOCKED
    assert state.failed_attempts == 0
    assert state.max_attempts == 3
    assert state.locked_out is False
    assert state.last_failure_reason == FailureReason.NONE


@pytest.mark.asyncio
async def test_success_unlocks(gate, biometrics):
    biometrics.outcomes = [True]
    state = await gate.authenticate()
    assert state.status == AuthStatus.UNLOCKED
    assert state.unlocked
    gate.require_unlocked()


@pytest.mark.asyncio
async def test_failures_then_success_resets_count(gate, biometrics):
    biometrics.outcomes = [False, False, True]

    state = await gate.authenticate()
    assert state.status == AuthStatus.LOCKED
    assert state.failed_attempts == 1
    assert state.last_failure_reason == FailureReason.AUTH_FAILED

    state = await gate.authenticate()
    assert state.failed_attempts == 2

    state = await gate.authenticate()
    assert state.status == AuthStatus.UNLOCKED
    assert state.failed_attempts == 0
    assert state.last_failure_reason == FailureReason.NONE


@pytest.mark.asyncio
async def test_three_failures_block_out_and_persist(gate, biometrics, preferences_path):
    biometrics.outcomes = [False, False, False]

    for _ in range(3):
        state = await gate.authenticate()

    assert state.status == AuthStatus.BLOCKED_OUT
    assert state.locked_out is True
    assert state.failed_attempts == 3
    assert PreferencesStore(preferences_path).get_bool("isBlocked") is True

    # a fourth call is a no-op and never reaches the biometric capability
    calls = biometrics.calls
    state = await gate.authenticate()
    assert state.status == AuthStatus.BLOCKED_OUT
    assert biometrics.calls == calls

    with pytest.raises(LockedOutError):
        gate.require_unlocked()


@pytest.mark.asyncio
async def test_lockout_survives_restart(gate, biometrics, preferences_path, fake_biometrics):
    biometrics.outcomes = [False, False, False]
    for _ in range(3):
        await gate.authenticate()

    restarted = AuthGate(fake_biometrics([True]), PreferencesStore(preferences_path))
    assert restarted.status == AuthStatus.BLOCKED_OUT
    assert restarted.state.failed_attempts == 0

    state = await restarted.authenticate()
    assert state.status == AuthStatus.BLOCKED_OUT


@pytest.mark.asyncio
async def test_unlocked_and_failed_attempts_reset_on_restart(gate, biometrics, preferences_path, fake_biometrics):
    biometrics.outcomes = [False, True]
    await gate.authenticate()
    await gate.authenticate()
    assert gate.status == AuthStatus.UNLOCKED

    restarted = AuthGate(fake_biometrics(), PreferencesStore(preferences_path))
    assert restarted.status == AuthStatus.LOCKED
    assert restarted.state.failed_attempts == 0


@pytest.mark.asyncio
async def test_unavailable_biometrics_never_counts(preferences, fake_biometrics):
    capability = fake_biometrics(available=False)
    gate = AuthGate(capability, preferences)

    for _ in range(10):
        state = await gate.authenticate()

    assert state.status == AuthStatus.LOCKED
    assert state.failed_attempts == 0
    assert state.locked_out is False
    assert state.last_failure_reason == FailureReason.BIOMETRICS_UNAVAILABLE
    assert capability.calls == 0
    assert preferences.get_bool("isBlocked") is False


@pytest.mark.asyncio
async def test_unavailable_between_failures_does_not_reset(gate, biometrics, fake_biometrics):
    biometrics.outcomes = [False, False]
    await gate.authenticate()
    state = await gate.authenticate(fake_biometrics(available=False))
    assert state.failed_attempts == 1
    assert state.last_failure_reason == FailureReason.BIOMETRICS_UNAVAILABLE
    state = await gate.authenticate()
    assert state.failed_attempts == 2


@pytest.mark.asyncio
async def test_authenticate_while_unlocked_is_noop(gate, biometrics):
    biometrics.outcomes = [True, False]
    await gate.authenticate()
    state = await gate.authenticate()
    assert state.status == AuthStatus.UNLOCKED
    assert biometrics.calls == 1


@pytest.mark.asyncio
async def test_concurrent_authenticate_is_rejected(gate, biometrics):
    biometrics.outcomes = [False]
    biometrics.release = asyncio.Event()

    pending = asyncio.create_task(gate.authenticate())
    await asyncio.sleep(0)
    assert gate.in_progress

    with pytest.raises(AuthenticationInProgressError):
        await gate.authenticate()

    biometrics.release.set()
    state = await pending
    assert state.failed_attempts == 1
    assert biometrics.calls == 1


def test_require_unlocked_while_locked(gate):
    with pytest.raises(GateLockedError):
        gate.require_unlocked()


@pytest.mark.asyncio
async def test_lockout_flag_write_failure_still_blocks(gate, biometrics, monkeypatch):
    monkeypatch.setattr(gate.preferences, "set_bool", lambda key, value: False)
    biometrics.outcomes = [False, False, False]
    for _ in range(3):
        state = await gate.authenticate()
    assert state.status == AuthStatus.BLOCKED_OUT


def test_custom_max_attempts(preferences, fake_biometrics):
    gate = AuthGate(fake_biometrics(), preferences, max_attempts=5)
    assert gate.state.max_attempts == 5
