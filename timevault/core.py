"""
Core types and constants for the time-locked savings vault.

This module provides the foundational data structures and protocols for the vault:
1. Constants: time units, basis-point denominators, policy defaults
2. Exceptions: VaultError and the domain-specific error kinds
3. Immutable data structures: SavingsAccount, AccountInfo, Transfer, events,
   PendingOperation, VaultSnapshot
4. Protocols: VaultView for read-only access, TransferSink for moving value out

Nothing in this module mutates vault state. The Vault class in vault.py is the
only place where state changes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Protocol, Tuple, Union, runtime_checkable


# ============================================================================
# CONSTANTS
# ============================================================================

SECONDS_PER_DAY = 86400
DAYS_PER_YEAR = 365

# Rates are quoted in basis points: 10000 bps == 100%.
BASIS_POINTS_DENOMINATOR = 10000

# Emergency withdrawal penalty bounds (inclusive, in percent).
MIN_PENALTY_PERCENT = 1
MAX_PENALTY_PERCENT = 100

DEFAULT_MINIMUM_LOCK_PERIOD = SECONDS_PER_DAY
DEFAULT_INTEREST_RATE_BPS = 500

# Logical start time for a new vault: 2025-01-01T00:00:00Z.
DEFAULT_START_TIME = 1_735_689_600


# ============================================================================
# EXCEPTIONS
# ============================================================================

class VaultError(Exception):
    """Base exception for all vault errors."""
    pass


class InvalidAmount(VaultError):
    """Raised when a deposit carries no value."""
    pass


class LockPeriodTooShort(VaultError):
    """Raised when a requested lock duration is below the configured minimum."""
    pass


class FundsStillLocked(VaultError):
    """Raised when a withdrawal is attempted before the unlock timestamp."""
    pass


class NoFunds(VaultError):
    """Raised when an operation needs an active account and the caller has none."""
    pass


class InvalidPenalty(VaultError):
    """Raised when an emergency withdrawal penalty is outside [1, 100] percent."""
    pass


class InvalidDuration(VaultError):
    """Raised when a lock extension or minimum lock period is zero."""
    pass


class Unauthorized(VaultError):
    """Raised when a non-administrator calls an administrator-only operation."""
    pass


class TransferFailed(VaultError):
    """
    Raised when the transfer primitive fails to move value out of the vault.

    unrefunded lists transfers that were sent but whose compensating refund
    also failed; they need manual reconciliation.
    """

    def __init__(self, message: str, unrefunded: Tuple["Transfer", ...] = ()):
        super().__init__(message)
        self.unrefunded = tuple(unrefunded)


# ============================================================================
# VALIDATION HELPERS
# ============================================================================

def require_unsigned(name: str, value: int) -> int:
    """
    Check that value is a non-negative int and return it.

    Bools are rejected even though they subclass int.

    Raises:
        TypeError: if value is not an int
        ValueError: if value is negative
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


def require_identity(name: str, identity: str) -> str:
    """Check that an identity is a non-blank string and return it."""
    if not isinstance(identity, str) or not identity.strip():
        raise ValueError(f"{name} cannot be empty")
    return identity


# ============================================================================
# ACCOUNT STATE
# ============================================================================

@dataclass(frozen=True, slots=True)
class SavingsAccount:
    """
    One participant's locked position.

    An account is either fully empty (every field zero) or fully active. The
    unlock timestamp and deposit date are only meaningful while balance > 0.

    Attributes:
        balance: Amount currently held.
        unlock_timestamp: Absolute time after which withdrawal is permitted.
        deposit_date: Absolute time the current (possibly merged) position
            started accruing interest.
        savings_goal: Optional target amount (0 = unset).
        savings_purpose: Free-text label stored alongside a non-zero goal.
    """
    balance: int = 0
    unlock_timestamp: int = 0
    deposit_date: int = 0
    savings_goal: int = 0
    savings_purpose: str = ""

    def __post_init__(self):
        require_unsigned("balance", self.balance)
        require_unsigned("unlock_timestamp", self.unlock_timestamp)
        require_unsigned("deposit_date", self.deposit_date)
        require_unsigned("savings_goal", self.savings_goal)
        if self.balance == 0:
            if self.unlock_timestamp != 0 or self.deposit_date != 0:
                raise ValueError(
                    "empty account must have zero unlock_timestamp and deposit_date"
                )
        else:
            if self.unlock_timestamp == 0 or self.deposit_date == 0:
                raise ValueError(
                    "active account must have non-zero unlock_timestamp and deposit_date"
                )
            if self.unlock_timestamp < self.deposit_date:
                raise ValueError(
                    f"unlock_timestamp {self.unlock_timestamp} precedes "
                    f"deposit_date {self.deposit_date}"
                )
        if self.savings_purpose and self.savings_goal == 0:
            raise ValueError("savings_purpose requires a non-zero savings_goal")

    @property
    def is_active(self) -> bool:
        return self.balance > 0

    def __repr__(self) -> str:
        if not self.is_active:
            return "SavingsAccount(empty)"
        return (f"SavingsAccount({self.balance} locked "
                f"{self.deposit_date}→{self.unlock_timestamp})")


EMPTY_ACCOUNT = SavingsAccount()


@dataclass(frozen=True, slots=True)
class AccountInfo:
    """Read-only view of an account returned by Vault.get_account_info()."""
    balance: int
    unlock_timestamp: int
    time_remaining: int
    savings_goal: int
    savings_purpose: str


@dataclass(frozen=True, slots=True)
class AccountChange:
    """
    Before/after record of one account inside a pending operation.

    The old state is checked against the store at commit time so that a
    pending operation built from a stale view is never applied.
    """
    identity: str
    old_state: SavingsAccount
    new_state: SavingsAccount


# ============================================================================
# TRANSFERS
# ============================================================================

@dataclass(frozen=True, slots=True)
class Transfer:
    """
    A single movement of value out of the vault to a recipient.

    Attributes:
        recipient: Identity receiving the value.
        amount: Positive amount to send.
        reason: Short tag describing why the value moves (e.g. "withdrawal").
    """
    recipient: str
    amount: int
    reason: str

    def __post_init__(self):
        require_identity("Transfer recipient", self.recipient)
        require_unsigned("Transfer amount", self.amount)
        if self.amount == 0:
            raise ValueError("Transfer amount must be positive")
        if not self.reason or not self.reason.strip():
            raise ValueError("Transfer reason cannot be empty")

    def __repr__(self) -> str:
        return f"Transfer({self.amount} → {self.recipient}, {self.reason})"


@runtime_checkable
class TransferSink(Protocol):
    """
    The external value-transfer primitive.

    send() moves value to the recipient and raises on failure. refund() undoes
    a previously successful send() and is used to compensate completed legs
    when a later leg of the same operation fails.
    """

    def send(self, transfer: Transfer) -> None:
        ...

    def refund(self, transfer: Transfer) -> None:
        ...


# ============================================================================
# EVENTS
# ============================================================================

@dataclass(frozen=True, slots=True)
class DepositEvent:
    """Emitted on deposit and, with amount 0, on lock extension."""
    identity: str
    amount: int
    unlock_timestamp: int
    timestamp: int


@dataclass(frozen=True, slots=True)
class WithdrawalEvent:
    """Emitted on withdrawal (full payout) and emergency withdrawal (net payout)."""
    identity: str
    amount: int
    timestamp: int


@dataclass(frozen=True, slots=True)
class InterestRateChanged:
    old_rate: int
    new_rate: int
    timestamp: int


@dataclass(frozen=True, slots=True)
class MinimumLockPeriodChanged:
    old_period: int
    new_period: int
    timestamp: int


@dataclass(frozen=True, slots=True)
class SavingsGoalSet:
    identity: str
    goal: int
    purpose: str
    timestamp: int


VaultEvent = Union[
    DepositEvent, WithdrawalEvent, InterestRateChanged,
    MinimumLockPeriodChanged, SavingsGoalSet,
]


# ============================================================================
# PENDING OPERATIONS
# ============================================================================

class OperationType(Enum):
    """Kind of participant operation a PendingOperation describes."""
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    EXTEND_LOCK = "extend_lock"
    EMERGENCY_WITHDRAW = "emergency_withdraw"


@dataclass(frozen=True, slots=True)
class PendingOperation:
    """
    A fully validated operation before it is applied - represents INTENT.

    Built by the compute_* functions in operations.py from a read-only view and
    handed to Vault, which executes the transfers and only then commits the
    account changes, the locked-funds delta and the events.

    Attributes:
        operation: Which participant operation this is
        caller: Identity that initiated the operation
        timestamp: The single "now" the operation was computed against
        account_changes: Account before/after records to commit
        locked_funds_delta: Signed change to total_locked_funds
        transfers: Value to move out of the vault, in order
        events: Events to append to the log on commit
        payout: Amount returned to the caller (0 for deposit / extension)
    """
    operation: OperationType
    caller: str
    timestamp: int
    account_changes: Tuple[AccountChange, ...]
    locked_funds_delta: int = 0
    transfers: Tuple[Transfer, ...] = ()
    events: Tuple[VaultEvent, ...] = ()
    payout: int = 0

    def __repr__(self) -> str:
        return (f"PendingOperation({self.operation.value} by {self.caller}, "
                f"{len(self.account_changes)} changes, {len(self.transfers)} transfers, "
                f"Δlocked={self.locked_funds_delta})")


@dataclass(frozen=True, slots=True)
class VaultSnapshot:
    """Immutable copy of every piece of durable vault state."""
    current_time: int
    accounts: Mapping[str, SavingsAccount]
    total_locked_funds: int
    minimum_lock_period: int
    interest_rate_bps: int
    administrator: str
    event_count: int = field(default=0)


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class VaultView(Protocol):
    """
    Read-only interface to vault state.

    The compute_* functions in operations.py accept a VaultView and never
    mutate it. Vault implements this protocol; tests use FakeVaultView.
    """

    @property
    def current_time(self) -> int:
        """Return the current logical time."""
        ...

    @property
    def total_locked_funds(self) -> int:
        ...

    @property
    def minimum_lock_period(self) -> int:
        ...

    @property
    def interest_rate_bps(self) -> int:
        ...

    @property
    def administrator(self) -> str:
        ...

    def get_account(self, identity: str) -> SavingsAccount:
        """Return the identity's account (EMPTY_ACCOUNT if never seen)."""
        ...


# Mapping from identity to account, used by snapshots and listings.
AccountMap = Dict[str, SavingsAccount]
