"""
timevault - Time-Locked Savings Vault

A single-ledger custody engine: participants lock value until an unlock time,
top up existing positions (the unlock time becomes a balance-weighted average),
extend locks, withdraw with interest once unlocked, or exit early for a penalty.

Usage:
    from timevault import Vault, AdminConfig, SECONDS_PER_DAY

    config = AdminConfig("treasury", interest_rate_bps=3_650_000)
    vault = Vault(config, verbose=False)

    vault.deposit("alice", 100, lock_duration=30 * SECONDS_PER_DAY)
    vault.deposit("alice", 100, lock_duration=60 * SECONDS_PER_DAY)  # unlock -> day 45

    vault.advance_time(vault.current_time + 45 * SECONDS_PER_DAY)
    payout = vault.withdraw("alice")

    assert vault.verify_locked_funds()['valid']
"""

# Core types
from .core import (
    SavingsAccount,
    AccountInfo,
    AccountChange,
    Transfer,
    TransferSink,
    PendingOperation,
    OperationType,
    VaultSnapshot,
    VaultView,
    DepositEvent,
    WithdrawalEvent,
    InterestRateChanged,
    MinimumLockPeriodChanged,
    SavingsGoalSet,
    VaultEvent,
    VaultError,
    InvalidAmount,
    LockPeriodTooShort,
    FundsStillLocked,
    NoFunds,
    InvalidPenalty,
    InvalidDuration,
    Unauthorized,
    TransferFailed,
    EMPTY_ACCOUNT,
    SECONDS_PER_DAY,
    DAYS_PER_YEAR,
    BASIS_POINTS_DENOMINATOR,
    MIN_PENALTY_PERCENT,
    MAX_PENALTY_PERCENT,
    DEFAULT_MINIMUM_LOCK_PERIOD,
    DEFAULT_INTEREST_RATE_BPS,
    DEFAULT_START_TIME,
)

# Storage and policy
from .accounts import AccountStore
from .admin import AdminConfig

# Pure calculations
from .lock_time import merge_unlock_time
from .interest import (
    calculate_elapsed_days,
    calculate_daily_rate_bps,
    calculate_interest,
    calculate_payout,
)

# Operations
from .operations import (
    compute_deposit,
    compute_withdrawal,
    compute_lock_extension,
    compute_emergency_withdrawal,
)

# Transfers
from .transfers import execute_transfers, RecordingTransferSink

# Vault
from .vault import Vault

__all__ = [
    # Core
    'SavingsAccount', 'AccountInfo', 'AccountChange', 'Transfer', 'TransferSink',
    'PendingOperation', 'OperationType', 'VaultSnapshot', 'VaultView',
    'DepositEvent', 'WithdrawalEvent', 'InterestRateChanged',
    'MinimumLockPeriodChanged', 'SavingsGoalSet', 'VaultEvent',
    'VaultError', 'InvalidAmount', 'LockPeriodTooShort', 'FundsStillLocked',
    'NoFunds', 'InvalidPenalty', 'InvalidDuration', 'Unauthorized', 'TransferFailed',
    'EMPTY_ACCOUNT', 'SECONDS_PER_DAY', 'DAYS_PER_YEAR', 'BASIS_POINTS_DENOMINATOR',
    'MIN_PENALTY_PERCENT', 'MAX_PENALTY_PERCENT',
    'DEFAULT_MINIMUM_LOCK_PERIOD', 'DEFAULT_INTEREST_RATE_BPS', 'DEFAULT_START_TIME',
    # Storage and policy
    'AccountStore', 'AdminConfig',
    # Calculations
    'merge_unlock_time',
    'calculate_elapsed_days', 'calculate_daily_rate_bps',
    'calculate_interest', 'calculate_payout',
    # Operations
    'compute_deposit', 'compute_withdrawal',
    'compute_lock_extension', 'compute_emergency_withdrawal',
    # Transfers
    'execute_transfers', 'RecordingTransferSink',
    # Vault
    'Vault',
]

__version__ = '1.0.0'
