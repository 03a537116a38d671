"""
test_lifecycle_scenarios.py - End-to-end savings scenarios

Each test walks a small population of savers through a realistic sequence of
deposits, top-ups, extensions, policy changes and exits, checking the
invariants after every step.
"""

import pytest

from timevault import (
    Vault, AdminConfig, EMPTY_ACCOUNT,
    DepositEvent, WithdrawalEvent, InterestRateChanged, MinimumLockPeriodChanged,
    FundsStillLocked, LockPeriodTooShort, TransferFailed,
)

from tests.helpers import T0, DAY, ADMIN, assert_invariants


def test_saver_tops_up_and_withdraws_at_merged_unlock(vault, sink):
    """Alice saves twice; the top-up drags her unlock date to the weighted average."""
    vault.deposit("alice", 100, 30 * DAY, savings_goal=500, savings_purpose="holiday")
    vault.deposit("alice", 100, 60 * DAY)
    assert_invariants(vault)

    info = vault.get_account_info("alice")
    assert info.unlock_timestamp == T0 + 45 * DAY
    assert info.savings_goal == 500
    assert info.savings_purpose == "holiday"

    vault.advance_time(T0 + 44 * DAY)
    with pytest.raises(FundsStillLocked):
        vault.withdraw("alice")

    vault.advance_time(T0 + 45 * DAY)
    assert vault.withdraw("alice") == 200
    assert sink.balance_of("alice") == 200
    assert vault.get_account("alice") == EMPTY_ACCOUNT
    assert vault.get_account_info("alice").savings_goal == 0
    assert_invariants(vault)


def test_mixed_population(vault, sink):
    """Several savers with different horizons; one bails out early."""
    vault.deposit("alice", 1_000, 90 * DAY)
    vault.deposit("bob", 400, 10 * DAY)
    vault.deposit("carol", 250, 20 * DAY)
    assert vault.total_locked_funds == 1_650

    vault.advance_time(T0 + 5 * DAY)
    assert vault.emergency_withdraw("carol", 20) == 200
    assert sink.balance_of(ADMIN) == 50

    vault.advance_time(T0 + 10 * DAY)
    assert vault.withdraw("bob") == 400

    vault.extend_lock_period("alice", 30 * DAY)
    assert vault.get_account_info("alice").time_remaining == 110 * DAY

    assert vault.total_locked_funds == 1_000
    assert list(vault.list_accounts()) == ["alice"]
    assert sink.total_sent == 650
    assert_invariants(vault)


def test_policy_changes_mid_life(sink):
    """Administrator raises the minimum lock and turns interest on."""
    config = AdminConfig(ADMIN, minimum_lock_period=DAY, interest_rate_bps=0)
    vault = Vault(config, initial_time=T0, transfer_sink=sink, verbose=False)

    vault.deposit("alice", 10_000, 10 * DAY)
    vault.set_minimum_lock_period(ADMIN, 30 * DAY)
    with pytest.raises(LockPeriodTooShort):
        vault.deposit("bob", 10, 10 * DAY)

    vault.set_interest_rate(ADMIN, 3_650_000)
    vault.advance_time(T0 + 12 * DAY)
    # 10_000 * 1 * 12 // 100
    assert vault.preview_payout("alice") == 11_200
    assert vault.withdraw("alice") == 11_200

    kinds = [type(e) for e in vault.events]
    assert kinds == [
        DepositEvent, MinimumLockPeriodChanged, InterestRateChanged, WithdrawalEvent,
    ]
    assert_invariants(vault)


def test_flaky_recipient_retries(vault, sink):
    """A payout that bounces can be retried once the recipient recovers."""
    vault.deposit("alice", 300, 2 * DAY)
    vault.advance_time(T0 + 2 * DAY)

    sink.fail_for("alice")
    for _ in range(3):
        with pytest.raises(TransferFailed):
            vault.withdraw("alice")
    assert vault.get_account("alice").balance == 300
    assert vault.events_for("alice") == (DepositEvent("alice", 300, T0 + 2 * DAY, T0),)

    sink.recover("alice")
    assert vault.withdraw("alice") == 300
    assert_invariants(vault)


def test_reuse_after_emergency_exit(vault, sink):
    vault.deposit("alice", 100, 30 * DAY)
    vault.emergency_withdraw("alice", 50)
    vault.advance_time(T0 + DAY)
    vault.deposit("alice", 80, 5 * DAY)
    account = vault.get_account("alice")
    assert account.deposit_date == T0 + DAY
    assert account.unlock_timestamp == T0 + 6 * DAY
    assert vault.total_locked_funds == 80
    assert sink.total_sent == 100
    assert_invariants(vault)


def test_year_of_monthly_deposits(interest_vault, sink):
    """Monthly top-ups keep the first deposit date; interest accrues from it."""
    vault = interest_vault
    for month in range(12):
        vault.advance_time(T0 + month * 30 * DAY)
        vault.deposit("alice", 1_000, 30 * DAY)
        assert_invariants(vault)

    account = vault.get_account("alice")
    assert account.balance == 12_000
    assert account.deposit_date == T0

    # merged unlock is the average of the requested dates, long past by now
    assert account.unlock_timestamp < vault.current_time
    days = (vault.current_time - T0) // DAY
    expected = 12_000 + 12_000 * days // 100
    assert vault.withdraw("alice") == expected
    assert sink.balance_of("alice") == expected
