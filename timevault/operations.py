"""
operations.py - Pure computation of participant operations

Each compute_* function takes a read-only VaultView, validates the request
against the current account and policy, and returns a PendingOperation that
describes the full effect of the call: account before/after, change to the
locked-funds total, transfers out of the vault and events. Nothing here touches
state; Vault applies the result only after every transfer has succeeded.

All functions read "now" once, from view.current_time.

Validation order per operation (first failure wins):
    deposit:            InvalidAmount, LockPeriodTooShort
    withdraw:           NoFunds, FundsStillLocked
    extend_lock_period: InvalidDuration, NoFunds
    emergency_withdraw: InvalidPenalty, NoFunds
"""

from __future__ import annotations
from typing import List

from .core import (
    VaultView, PendingOperation, OperationType, AccountChange,
    SavingsAccount, EMPTY_ACCOUNT, Transfer,
    DepositEvent, WithdrawalEvent, SavingsGoalSet, VaultEvent,
    MIN_PENALTY_PERCENT, MAX_PENALTY_PERCENT,
    InvalidAmount, LockPeriodTooShort, FundsStillLocked, NoFunds,
    InvalidPenalty, InvalidDuration,
    require_identity, require_unsigned,
)
from .lock_time import merge_unlock_time
from .interest import calculate_payout


def compute_deposit(
    view: VaultView,
    caller: str,
    value: int,
    lock_duration: int,
    savings_goal: int = 0,
    savings_purpose: str = "",
) -> PendingOperation:
    """
    Lock value for caller, merging with any active position.

    An empty account starts a new position: unlock = now + lock_duration and
    deposit_date = now. An active account keeps its deposit_date and gets the
    balance-weighted unlock time of the old position and the new deposit.

    A positive savings_goal replaces any previous goal and purpose; with a zero
    goal the purpose is ignored and the existing goal is left alone.

    Args:
        view: Read-only vault access
        caller: Depositing identity
        value: Amount deposited (> 0)
        lock_duration: Requested lock in seconds (>= minimum_lock_period)
        savings_goal: Optional target amount
        savings_purpose: Optional label, stored only with a positive goal

    Returns:
        PendingOperation with one account change, +value locked, and a
        DepositEvent (plus SavingsGoalSet when a goal is supplied)

    Raises:
        InvalidAmount: if value is zero
        LockPeriodTooShort: if lock_duration < view.minimum_lock_period
    """
    require_identity("caller", caller)
    require_unsigned("value", value)
    require_unsigned("lock_duration", lock_duration)
    require_unsigned("savings_goal", savings_goal)
    if not isinstance(savings_purpose, str):
        raise TypeError("savings_purpose must be a str")

    if value == 0:
        raise InvalidAmount("deposit value must be positive")
    if lock_duration < view.minimum_lock_period:
        raise LockPeriodTooShort(
            f"lock duration {lock_duration} < minimum {view.minimum_lock_period}"
        )

    now = view.current_time
    if now <= 0:
        raise ValueError("deposits require a positive current time")

    old = view.get_account(caller)
    requested_unlock = now + lock_duration

    if old.is_active:
        unlock = merge_unlock_time(old.balance, old.unlock_timestamp, value, requested_unlock)
        deposit_date = old.deposit_date
    else:
        unlock = requested_unlock
        deposit_date = now

    if savings_goal > 0:
        goal, purpose = savings_goal, savings_purpose
    else:
        goal, purpose = old.savings_goal, old.savings_purpose

    new = SavingsAccount(
        balance=old.balance + value,
        unlock_timestamp=unlock,
        deposit_date=deposit_date,
        savings_goal=goal,
        savings_purpose=purpose,
    )

    events: List[VaultEvent] = [
        DepositEvent(identity=caller, amount=value, unlock_timestamp=unlock, timestamp=now)
    ]
    if savings_goal > 0:
        events.append(SavingsGoalSet(
            identity=caller, goal=savings_goal, purpose=savings_purpose, timestamp=now
        ))

    return PendingOperation(
        operation=OperationType.DEPOSIT,
        caller=caller,
        timestamp=now,
        account_changes=(AccountChange(caller, old, new),),
        locked_funds_delta=value,
        events=tuple(events),
    )


def compute_withdrawal(view: VaultView, caller: str) -> PendingOperation:
    """
    Release caller's unlocked position with accrued interest.

    The payout is computed from the pre-reset balance. The locked-funds total
    drops by the principal only; interest is paid on top of it.

    Raises:
        NoFunds: if caller has no active account
        FundsStillLocked: if now < unlock_timestamp
    """
    require_identity("caller", caller)
    now = view.current_time
    old = view.get_account(caller)

    if not old.is_active:
        raise NoFunds(f"{caller} has no locked funds")
    if now < old.unlock_timestamp:
        raise FundsStillLocked(
            f"{caller} funds locked until {old.unlock_timestamp} (now {now})"
        )

    payout = calculate_payout(old.balance, old.deposit_date, now, view.interest_rate_bps)

    return PendingOperation(
        operation=OperationType.WITHDRAW,
        caller=caller,
        timestamp=now,
        account_changes=(AccountChange(caller, old, EMPTY_ACCOUNT),),
        locked_funds_delta=-old.balance,
        transfers=(Transfer(recipient=caller, amount=payout, reason="withdrawal"),),
        events=(WithdrawalEvent(identity=caller, amount=payout, timestamp=now),),
        payout=payout,
    )


def compute_lock_extension(
    view: VaultView, caller: str, additional_period: int
) -> PendingOperation:
    """
    Push caller's unlock timestamp later by additional_period.

    The extension is reported with a zero-amount DepositEvent carrying the new
    unlock timestamp.

    Raises:
        InvalidDuration: if additional_period is zero
        NoFunds: if caller has no active account
    """
    require_identity("caller", caller)
    require_unsigned("additional_period", additional_period)
    if additional_period == 0:
        raise InvalidDuration("additional period must be positive")

    now = view.current_time
    old = view.get_account(caller)
    if not old.is_active:
        raise NoFunds(f"{caller} has no locked funds")

    unlock = old.unlock_timestamp + additional_period
    new = SavingsAccount(
        balance=old.balance,
        unlock_timestamp=unlock,
        deposit_date=old.deposit_date,
        savings_goal=old.savings_goal,
        savings_purpose=old.savings_purpose,
    )

    return PendingOperation(
        operation=OperationType.EXTEND_LOCK,
        caller=caller,
        timestamp=now,
        account_changes=(AccountChange(caller, old, new),),
        events=(DepositEvent(identity=caller, amount=0, unlock_timestamp=unlock, timestamp=now),),
    )


def compute_emergency_withdrawal(
    view: VaultView, caller: str, penalty_percent: int
) -> PendingOperation:
    """
    Release caller's position early, forfeiting penalty_percent of it.

    penalty = balance * penalty_percent // 100 goes to the administrator and
    the rest goes to the caller. No interest is paid. A leg that rounds to zero
    is not sent. The WithdrawalEvent carries the caller's net payout only.

    Raises:
        InvalidPenalty: if penalty_percent is outside [1, 100]
        NoFunds: if caller has no active account
    """
    require_identity("caller", caller)
    require_unsigned("penalty_percent", penalty_percent)
    if not MIN_PENALTY_PERCENT <= penalty_percent <= MAX_PENALTY_PERCENT:
        raise InvalidPenalty(
            f"penalty {penalty_percent}% outside "
            f"[{MIN_PENALTY_PERCENT}, {MAX_PENALTY_PERCENT}]"
        )

    now = view.current_time
    old = view.get_account(caller)
    if not old.is_active:
        raise NoFunds(f"{caller} has no locked funds")

    penalty = old.balance * penalty_percent // 100
    payout = old.balance - penalty

    transfers: List[Transfer] = []
    if penalty > 0:
        transfers.append(Transfer(
            recipient=view.administrator, amount=penalty, reason="early_withdrawal_penalty"
        ))
    if payout > 0:
        transfers.append(Transfer(
            recipient=caller, amount=payout, reason="emergency_withdrawal"
        ))

    return PendingOperation(
        operation=OperationType.EMERGENCY_WITHDRAW,
        caller=caller,
        timestamp=now,
        account_changes=(AccountChange(caller, old, EMPTY_ACCOUNT),),
        locked_funds_delta=-old.balance,
        transfers=tuple(transfers),
        events=(WithdrawalEvent(identity=caller, amount=payout, timestamp=now),),
        payout=payout,
    )
