"""
conftest.py - Shared pytest fixtures for vault tests

Provides common fixtures used across unit, conformance and functional tests:
- Admin configs and vaults (empty, funded, interest-bearing)
- A recording transfer sink for inspecting value that left the vault
"""

import pytest

from timevault import Vault, AdminConfig, RecordingTransferSink

from tests.helpers import T0, DAY, ADMIN


@pytest.fixture
def sink():
    """In-memory transfer sink."""
    return RecordingTransferSink()


@pytest.fixture
def config():
    """Admin config with a one-day minimum lock and interest disabled."""
    return AdminConfig(ADMIN, minimum_lock_period=DAY, interest_rate_bps=0)


@pytest.fixture
def vault(config, sink):
    """Empty vault at T0."""
    return Vault(config, initial_time=T0, transfer_sink=sink, verbose=False)


@pytest.fixture
def funded_vault(vault):
    """Vault where alice has 100 locked for 30 days and bob 500 for 10 days."""
    vault.deposit("alice", 100, 30 * DAY)
    vault.deposit("bob", 500, 10 * DAY)
    return vault


@pytest.fixture
def interest_vault(sink):
    """Vault at 3,650,000 bps, the lowest rate whose daily rate is non-zero."""
    config = AdminConfig(ADMIN, minimum_lock_period=DAY, interest_rate_bps=3_650_000)
    return Vault(config, initial_time=T0, transfer_sink=sink, verbose=False)
