"""
vault.py - Stateful Time-Locked Savings Vault

The Vault class is the central state manager for the savings system.
It is the only class that mutates state, ensuring controlled and auditable changes.

Key responsibilities:
    - Implements the VaultView protocol for read-only access by pure functions
    - Serializes every operation behind a single re-entrant lock
    - Executes operations atomically: transfers first, then commit, or nothing
    - Maintains accounts, the locked-funds total and the event log
    - Tracks logical time (advance_time)
"""

from __future__ import annotations
from threading import RLock
from typing import Any, Dict, List, Optional, Tuple

from .core import (
    # Types
    SavingsAccount, AccountInfo, PendingOperation, VaultSnapshot,
    VaultEvent, TransferSink, AccountMap,
    # Constants
    DEFAULT_START_TIME,
    # Exceptions
    VaultError,
    # Helpers
    require_unsigned,
)
from .accounts import AccountStore
from .admin import AdminConfig
from .interest import calculate_payout
from .operations import (
    compute_deposit, compute_withdrawal,
    compute_lock_extension, compute_emergency_withdrawal,
)
from .transfers import RecordingTransferSink, execute_transfers


class Vault:
    """
    Time-locked savings vault with interest and early-exit penalties.

    Implements the VaultView protocol, so it can be passed to the compute_*
    functions in operations.py, which only read from it.

    Design Principles:
        - One writer at a time: every public method holds the vault lock.
        - Compute, transfer, commit: an operation is fully validated into a
          PendingOperation, its transfers are sent, and only then is state
          written. A failure at any step leaves the vault untouched.
        - Always logs: every committed operation appends its events.

    Example:
        config = AdminConfig("treasury")
        vault = Vault(config)
        vault.deposit("alice", 100, lock_duration=30 * SECONDS_PER_DAY)
        vault.advance_time(vault.current_time + 30 * SECONDS_PER_DAY)
        payout = vault.withdraw("alice")
    """

    def __init__(
        self,
        config: AdminConfig,
        initial_time: int = DEFAULT_START_TIME,
        transfer_sink: Optional[TransferSink] = None,
        verbose: bool = True,
    ):
        """
        Create a vault.

        Args:
            config: Administrator policy (owner, minimum lock period, rate)
            initial_time: Starting logical time in seconds
            transfer_sink: Transfer primitive (default: RecordingTransferSink)
            verbose: Print a line for every committed or rejected operation
        """
        if not isinstance(config, AdminConfig):
            raise TypeError(f"config must be an AdminConfig, got {type(config).__name__}")
        self.config = config
        self.transfer_sink: TransferSink = transfer_sink or RecordingTransferSink()
        self.verbose = verbose
        self._store = AccountStore()
        self._total_locked_funds = 0
        self._events: List[VaultEvent] = []
        self._current_time = require_unsigned("initial_time", initial_time)
        self._lock = RLock()

    # ========================================================================
    # VaultView PROTOCOL IMPLEMENTATION (read-only)
    # ========================================================================

    @property
    def current_time(self) -> int:
        """Current logical time of the vault."""
        return self._current_time

    @property
    def total_locked_funds(self) -> int:
        return self._total_locked_funds

    @property
    def minimum_lock_period(self) -> int:
        return self.config.minimum_lock_period

    @property
    def interest_rate_bps(self) -> int:
        return self.config.interest_rate_bps

    @property
    def administrator(self) -> str:
        return self.config.owner

    def get_account(self, identity: str) -> SavingsAccount:
        """Return identity's account; never fails for unknown identities."""
        with self._lock:
            return self._store.get(identity)

    # ========================================================================
    # QUERIES
    # ========================================================================

    def get_account_info(self, identity: str) -> AccountInfo:
        """
        Summarize identity's account as of now.

        time_remaining is max(0, unlock_timestamp - now); an unknown or reset
        account returns all zeros.
        """
        with self._lock:
            account = self._store.get(identity)
            remaining = max(0, account.unlock_timestamp - self._current_time)
            return AccountInfo(
                balance=account.balance,
                unlock_timestamp=account.unlock_timestamp,
                time_remaining=remaining,
                savings_goal=account.savings_goal,
                savings_purpose=account.savings_purpose,
            )

    def is_withdrawal_available(self, identity: str) -> bool:
        """True when identity holds funds and the unlock time has passed."""
        with self._lock:
            account = self._store.get(identity)
            return account.is_active and self._current_time >= account.unlock_timestamp

    def preview_payout(self, identity: str) -> int:
        """
        What withdraw() would pay identity right now, ignoring the lock.

        Returns 0 for an empty account.
        """
        with self._lock:
            account = self._store.get(identity)
            if not account.is_active:
                return 0
            return calculate_payout(
                account.balance, account.deposit_date,
                self._current_time, self.config.interest_rate_bps,
            )

    def list_accounts(self) -> AccountMap:
        """All accounts currently holding funds, keyed by identity."""
        with self._lock:
            return self._store.active()

    @property
    def events(self) -> Tuple[VaultEvent, ...]:
        """The append-only event log."""
        with self._lock:
            return tuple(self._events)

    def events_for(self, identity: str) -> Tuple[VaultEvent, ...]:
        """Events naming identity (administrator events carry no identity)."""
        with self._lock:
            return tuple(e for e in self._events if getattr(e, 'identity', None) == identity)

    def verify_locked_funds(self) -> Dict[str, Any]:
        """
        Check that total_locked_funds equals the sum of all balances.

        Returns:
            Dict with keys:
            - 'valid': bool - True if the totals agree
            - 'total_locked_funds': int - the maintained counter
            - 'sum_of_balances': int - recomputed from the accounts
            - 'discrepancy': int - counter minus recomputed sum
            - 'active_accounts': int - number of accounts holding funds

        Example:
            result = vault.verify_locked_funds()
            assert result['valid'], f"Locked funds drifted by {result['discrepancy']}"
        """
        with self._lock:
            recomputed = self._store.total_balance()
            return {
                'valid': recomputed == self._total_locked_funds,
                'total_locked_funds': self._total_locked_funds,
                'sum_of_balances': recomputed,
                'discrepancy': self._total_locked_funds - recomputed,
                'active_accounts': len(self._store.active()),
            }

    def snapshot(self) -> VaultSnapshot:
        """Immutable copy of all durable state, for audits and comparisons."""
        with self._lock:
            return VaultSnapshot(
                current_time=self._current_time,
                accounts=dict(self._store),
                total_locked_funds=self._total_locked_funds,
                minimum_lock_period=self.config.minimum_lock_period,
                interest_rate_bps=self.config.interest_rate_bps,
                administrator=self.config.owner,
                event_count=len(self._events),
            )

    # ========================================================================
    # TIME MANAGEMENT
    # ========================================================================

    def advance_time(self, new_time: int) -> None:
        """
        Advance the vault's logical clock. Time never moves backward.

        Raises:
            ValueError: If new_time is before the current time
        """
        require_unsigned("new_time", new_time)
        with self._lock:
            if new_time < self._current_time:
                raise ValueError(
                    f"Cannot move time backwards: {new_time} < {self._current_time}"
                )
            self._current_time = new_time

    # ========================================================================
    # PARTICIPANT OPERATIONS (Mutating)
    # ========================================================================

    def deposit(
        self,
        caller: str,
        value: int,
        lock_duration: int,
        savings_goal: int = 0,
        savings_purpose: str = "",
    ) -> None:
        """
        Lock value for caller for at least lock_duration seconds.

        Raises:
            InvalidAmount: if value is zero
            LockPeriodTooShort: if lock_duration is below the minimum
        """
        with self._lock:
            pending = self._compute(
                compute_deposit, caller, value, lock_duration, savings_goal, savings_purpose
            )
            self._execute(pending)

    def withdraw(self, caller: str) -> int:
        """
        Release caller's unlocked funds plus interest.

        Returns:
            The payout sent to caller

        Raises:
            NoFunds: if caller has nothing locked
            FundsStillLocked: if the unlock time has not passed
            TransferFailed: if the payout could not be sent
        """
        with self._lock:
            pending = self._compute(compute_withdrawal, caller)
            return self._execute(pending)

    def extend_lock_period(self, caller: str, additional_period: int) -> None:
        """
        Move caller's unlock time later by additional_period seconds.

        Raises:
            InvalidDuration: if additional_period is zero
            NoFunds: if caller has nothing locked
        """
        with self._lock:
            pending = self._compute(compute_lock_extension, caller, additional_period)
            self._execute(pending)

    def emergency_withdraw(self, caller: str, penalty_percent: int) -> int:
        """
        Release caller's funds early, paying penalty_percent to the administrator.

        Returns:
            The net payout sent to caller

        Raises:
            InvalidPenalty: if penalty_percent is outside [1, 100]
            NoFunds: if caller has nothing locked
            TransferFailed: if either leg could not be sent
        """
        with self._lock:
            pending = self._compute(compute_emergency_withdrawal, caller, penalty_percent)
            return self._execute(pending)

    # ========================================================================
    # ADMINISTRATOR OPERATIONS (Mutating)
    # ========================================================================

    def set_interest_rate(self, caller: str, new_rate: int) -> None:
        """
        Change the annual interest rate used by future withdrawals.

        Raises:
            Unauthorized: if caller is not the administrator
        """
        with self._lock:
            try:
                event = self.config.set_interest_rate(caller, new_rate, self._current_time)
            except VaultError as e:
                self._reject("set_interest_rate", caller, e)
                raise
            self._record(event)

    def set_minimum_lock_period(self, caller: str, new_period: int) -> None:
        """
        Change the minimum lock duration for future deposits.

        Raises:
            Unauthorized: if caller is not the administrator
            InvalidDuration: if new_period is zero
        """
        with self._lock:
            try:
                event = self.config.set_minimum_lock_period(caller, new_period, self._current_time)
            except VaultError as e:
                self._reject("set_minimum_lock_period", caller, e)
                raise
            self._record(event)

    # ========================================================================
    # EXECUTION
    # ========================================================================

    def _compute(self, compute_fn, caller: str, *args) -> PendingOperation:
        """Run a compute_* function against this vault, logging rejections."""
        try:
            return compute_fn(self, caller, *args)
        except VaultError as e:
            self._reject(compute_fn.__name__.replace("compute_", ""), caller, e)
            raise

    def _execute(self, pending: PendingOperation) -> int:
        """
        Apply a PendingOperation atomically.

        Transfers go out first. If any fails, the completed ones are refunded
        and TransferFailed propagates with no state written. Otherwise the
        account changes, locked-funds delta and events are committed together.

        Returns:
            pending.payout
        """
        for change in pending.account_changes:
            current = self._store.get(change.identity)
            if current != change.old_state:
                raise VaultError(
                    f"stale account state for {change.identity}: "
                    f"expected {change.old_state!r}, found {current!r}"
                )

        new_total = self._total_locked_funds + pending.locked_funds_delta
        if new_total < 0:
            raise VaultError(f"locked funds would go negative: {new_total}")

        try:
            execute_transfers(self.transfer_sink, pending.transfers)
        except VaultError as e:
            self._reject(pending.operation.value, pending.caller, e)
            raise

        for change in pending.account_changes:
            if change.new_state.is_active:
                self._store.put(change.identity, change.new_state)
            else:
                self._store.reset(change.identity)
        self._total_locked_funds = new_total
        for event in pending.events:
            self._record(event)

        return pending.payout

    def _record(self, event: VaultEvent) -> None:
        self._events.append(event)
        if self.verbose:
            print(f"✓ {event}")

    def _reject(self, operation: str, caller: str, error: VaultError) -> None:
        if self.verbose:
            print(f"✗ REJECTED: {operation} by {caller}: {type(error).__name__}: {error}")
