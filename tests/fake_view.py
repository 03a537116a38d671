"""
fake_view.py - Test Helper for VaultView

Provides a minimal VaultView implementation for testing the compute_* functions
without requiring a full Vault instance.
"""

from __future__ import annotations
from typing import Dict, Optional

from timevault import SavingsAccount, EMPTY_ACCOUNT, SECONDS_PER_DAY


class FakeVaultView:
    """
    Minimal, immutable VaultView.

    Example:
        view = FakeVaultView(
            accounts={'alice': SavingsAccount(100, t0 + 30 * DAY, t0)},
            time=t0,
        )
        pending = compute_withdrawal(view, 'alice')
    """

    def __init__(
        self,
        accounts: Optional[Dict[str, SavingsAccount]] = None,
        time: int = 1_000_000,
        minimum_lock_period: int = SECONDS_PER_DAY,
        interest_rate_bps: int = 0,
        administrator: str = "admin",
        total_locked_funds: Optional[int] = None,
    ):
        self._accounts = dict(accounts or {})
        self._time = time
        self._minimum_lock_period = minimum_lock_period
        self._interest_rate_bps = interest_rate_bps
        self._administrator = administrator
        if total_locked_funds is None:
            total_locked_funds = sum(a.balance for a in self._accounts.values())
        self._total_locked_funds = total_locked_funds

    @property
    def current_time(self) -> int:
        return self._time

    @property
    def total_locked_funds(self) -> int:
        return self._total_locked_funds

    @property
    def minimum_lock_period(self) -> int:
        return self._minimum_lock_period

    @property
    def interest_rate_bps(self) -> int:
        return self._interest_rate_bps

    @property
    def administrator(self) -> str:
        return self._administrator

    def get_account(self, identity: str) -> SavingsAccount:
        return self._accounts.get(identity, EMPTY_ACCOUNT)
