"""
accounts.py - Keyed storage of savings accounts

AccountStore holds one SavingsAccount per participant identity. It is pure data
access: it applies no policy and never validates business rules beyond the
invariants SavingsAccount enforces on construction.

Accounts are never deleted. An identity that has never been seen reads as
EMPTY_ACCOUNT, and a released account is written back as EMPTY_ACCOUNT.
"""

from __future__ import annotations
from typing import Dict, Iterator, Optional, Tuple

from .core import SavingsAccount, EMPTY_ACCOUNT, AccountMap, require_identity


class AccountStore:
    """
    In-memory mapping of identity -> SavingsAccount.

    Not thread-safe on its own; Vault serializes all access.
    """

    def __init__(self, accounts: Optional[AccountMap] = None):
        self._accounts: Dict[str, SavingsAccount] = dict(accounts or {})

    def get(self, identity: str) -> SavingsAccount:
        """Return the account for identity, or EMPTY_ACCOUNT if never written."""
        return self._accounts.get(identity, EMPTY_ACCOUNT)

    def put(self, identity: str, account: SavingsAccount) -> None:
        """Store account under identity, replacing any previous value."""
        require_identity("identity", identity)
        if not isinstance(account, SavingsAccount):
            raise TypeError(f"expected SavingsAccount, got {type(account).__name__}")
        self._accounts[identity] = account

    def reset(self, identity: str) -> None:
        """Return an identity's account to the all-zero state in place."""
        self.put(identity, EMPTY_ACCOUNT)

    def active(self) -> AccountMap:
        """Accounts with a non-zero balance."""
        return {
            identity: account
            for identity, account in sorted(self._accounts.items())
            if account.is_active
        }

    def total_balance(self) -> int:
        """Sum of balances across all accounts."""
        return sum(account.balance for account in self._accounts.values())

    def __contains__(self, identity: str) -> bool:
        return identity in self._accounts

    def __iter__(self) -> Iterator[Tuple[str, SavingsAccount]]:
        return iter(sorted(self._accounts.items()))

    def __len__(self) -> int:
        return len(self._accounts)
