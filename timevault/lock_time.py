"""
lock_time.py - Unlock-time merging for repeat deposits

When a participant adds value to an active account, the blended unlock time is
the balance-weighted average of the existing position and the new deposit:

    merged = (balance_old * unlock_old + value_new * unlock_new)
             // (balance_old + value_new)

A small top-up barely moves the unlock time; a deposit that dwarfs the existing
balance pulls it close to the new deposit's own unlock time. Floor division
means the result is never later than the exact real-valued average, and it
always lies between the two unlock times.

PURE FUNCTION - all inputs explicit, no vault access.
"""

from __future__ import annotations

from .core import require_unsigned


def merge_unlock_time(
    balance_old: int,
    unlock_old: int,
    value_new: int,
    unlock_new: int,
) -> int:
    """
    Compute the balance-weighted unlock timestamp for a merged deposit.

    Args:
        balance_old: Balance already locked
        unlock_old: Unlock timestamp of the existing position
        value_new: Value being added
        unlock_new: Unlock timestamp the new value would have on its own

    Returns:
        Merged unlock timestamp, in [min(unlock_old, unlock_new), max(...)]

    Raises:
        ValueError: if any input is negative or both weights are zero

    Example:
        # 100 locked until day 30, 100 more requested until day 60
        merge_unlock_time(100, 30 * DAY, 100, 60 * DAY)  # -> 45 * DAY
    """
    require_unsigned("balance_old", balance_old)
    require_unsigned("unlock_old", unlock_old)
    require_unsigned("value_new", value_new)
    require_unsigned("unlock_new", unlock_new)

    total_weight = balance_old + value_new
    if total_weight == 0:
        raise ValueError("cannot merge two zero-weight positions")

    return (balance_old * unlock_old + value_new * unlock_new) // total_weight
