"""
interest.py - Interest accrual for locked balances

PURE CALCULATION FUNCTIONS - no vault access, every input explicit.

Key Formulas (all integer, floor division):
    elapsed_days   = (now - deposit_date) // SECONDS_PER_DAY
    daily_rate_bps = rate_bps // 10000 // 365
    interest       = balance * daily_rate_bps * elapsed_days // 100
    payout         = balance + interest

The daily rate is truncated to a whole number before it is applied, so any
annual rate below 3,650,000 bps yields a daily rate of zero and therefore no
interest. This is the established payout rule and is kept as-is: changing it
would change what existing depositors are paid.
"""

from __future__ import annotations

from .core import (
    SECONDS_PER_DAY, DAYS_PER_YEAR, BASIS_POINTS_DENOMINATOR,
    require_unsigned,
)


def calculate_elapsed_days(deposit_date: int, now: int) -> int:
    """
    Whole days between deposit_date and now.

    Raises:
        ValueError: if now is before deposit_date
    """
    require_unsigned("deposit_date", deposit_date)
    require_unsigned("now", now)
    if now < deposit_date:
        raise ValueError(f"now {now} precedes deposit_date {deposit_date}")
    return (now - deposit_date) // SECONDS_PER_DAY


def calculate_daily_rate_bps(interest_rate_bps: int) -> int:
    """Integer-truncated daily rate derived from an annual rate in basis points."""
    require_unsigned("interest_rate_bps", interest_rate_bps)
    return interest_rate_bps // BASIS_POINTS_DENOMINATOR // DAYS_PER_YEAR


def calculate_interest(
    balance: int,
    deposit_date: int,
    now: int,
    interest_rate_bps: int,
) -> int:
    """
    Interest accrued on balance since deposit_date.

    Returns 0 without further arithmetic when the rate is zero.

    Example:
        # 3,650,000 bps truncates to a daily rate of 1
        calculate_interest(1000, t0, t0 + 10 * SECONDS_PER_DAY, 3_650_000)  # -> 100
    """
    require_unsigned("balance", balance)
    if interest_rate_bps == 0:
        return 0
    elapsed_days = calculate_elapsed_days(deposit_date, now)
    daily_rate = calculate_daily_rate_bps(interest_rate_bps)
    return balance * daily_rate * elapsed_days // 100


def calculate_payout(
    balance: int,
    deposit_date: int,
    now: int,
    interest_rate_bps: int,
) -> int:
    """Principal plus accrued interest: what a normal withdrawal pays out."""
    return balance + calculate_interest(balance, deposit_date, now, interest_rate_bps)
