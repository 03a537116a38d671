"""
helpers.py - Shared constants and invariant checks for vault tests
"""

from timevault import Vault, SavingsAccount, RecordingTransferSink, SECONDS_PER_DAY


T0 = 1_700_000_000
DAY = SECONDS_PER_DAY
ADMIN = "admin"


def assert_locked_funds_conserved(vault: Vault) -> None:
    """Sum of balances equals total_locked_funds."""
    result = vault.verify_locked_funds()
    assert result['valid'], f"locked funds drifted by {result['discrepancy']}"


def assert_account_shape(account: SavingsAccount) -> None:
    """An account is either fully empty or fully active, never partial."""
    empty = (account.balance == 0, account.unlock_timestamp == 0, account.deposit_date == 0)
    assert all(empty) or not any(empty), f"partial account state: {account!r}"
    if account.balance > 0:
        assert account.unlock_timestamp >= account.deposit_date


def assert_invariants(vault: Vault) -> None:
    """Check every per-account and global invariant."""
    assert_locked_funds_conserved(vault)
    for account in vault.snapshot().accounts.values():
        assert_account_shape(account)


class RefundFailingSink(RecordingTransferSink):
    """Sink whose refund raises for chosen recipients."""

    def __init__(self, *broken: str):
        super().__init__()
        self.broken = set(broken)

    def refund(self, transfer) -> None:
        if transfer.recipient in self.broken:
            raise ConnectionError("refund channel down")
        super().refund(transfer)
