"""
admin.py - Administrator-controlled vault policy

AdminConfig holds the two system-wide policy values the vault consults:

    minimum_lock_period - smallest lock duration a deposit may request (seconds)
    interest_rate_bps   - annual rate used for withdrawal interest

Both may only be changed by the owner identity fixed at construction. Changes
apply to future operations only; existing accounts keep their unlock times and
deposit dates.

The config object is passed explicitly into Vault rather than read from a
module-level global, so two vaults never share policy by accident.
"""

from __future__ import annotations

from .core import (
    DEFAULT_MINIMUM_LOCK_PERIOD, DEFAULT_INTEREST_RATE_BPS,
    InterestRateChanged, MinimumLockPeriodChanged,
    InvalidDuration, Unauthorized,
    require_identity, require_unsigned,
)


class AdminConfig:
    """
    Owner-gated policy parameters.

    Example:
        config = AdminConfig("treasury", minimum_lock_period=7 * SECONDS_PER_DAY)
        config.set_interest_rate("treasury", 3_650_000, timestamp=now)
    """

    def __init__(
        self,
        owner: str,
        minimum_lock_period: int = DEFAULT_MINIMUM_LOCK_PERIOD,
        interest_rate_bps: int = DEFAULT_INTEREST_RATE_BPS,
    ):
        require_identity("owner", owner)
        require_unsigned("minimum_lock_period", minimum_lock_period)
        require_unsigned("interest_rate_bps", interest_rate_bps)
        if minimum_lock_period == 0:
            raise InvalidDuration("minimum_lock_period must be positive")
        self._owner = owner
        self._minimum_lock_period = minimum_lock_period
        self._interest_rate_bps = interest_rate_bps

    def __repr__(self) -> str:
        return (f"AdminConfig(owner={self._owner}, "
                f"minimum_lock_period={self._minimum_lock_period}, "
                f"interest_rate_bps={self._interest_rate_bps})")

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def minimum_lock_period(self) -> int:
        return self._minimum_lock_period

    @property
    def interest_rate_bps(self) -> int:
        return self._interest_rate_bps

    def _require_owner(self, caller: str) -> None:
        if caller != self._owner:
            raise Unauthorized(f"{caller} is not the administrator")

    def set_interest_rate(self, caller: str, new_rate: int, timestamp: int) -> InterestRateChanged:
        """
        Replace the annual interest rate. No upper bound is applied.

        Raises:
            Unauthorized: if caller is not the owner
        """
        self._require_owner(caller)
        require_unsigned("new_rate", new_rate)
        old_rate = self._interest_rate_bps
        self._interest_rate_bps = new_rate
        return InterestRateChanged(old_rate=old_rate, new_rate=new_rate, timestamp=timestamp)

    def set_minimum_lock_period(
        self, caller: str, new_period: int, timestamp: int
    ) -> MinimumLockPeriodChanged:
        """
        Replace the minimum lock period.

        Raises:
            Unauthorized: if caller is not the owner
            InvalidDuration: if new_period is zero
        """
        self._require_owner(caller)
        require_unsigned("new_period", new_period)
        if new_period == 0:
            raise InvalidDuration("minimum lock period must be positive")
        old_period = self._minimum_lock_period
        self._minimum_lock_period = new_period
        return MinimumLockPeriodChanged(
            old_period=old_period, new_period=new_period, timestamp=timestamp
        )
