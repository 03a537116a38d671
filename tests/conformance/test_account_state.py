"""
Account State Conformance Tests

INVARIANT: Every account is either entirely empty
    (balance, unlock_timestamp, deposit_date) = (0, 0, 0)
or entirely active
    balance > 0, unlock_timestamp > 0, deposit_date > 0

INVARIANT: For an active account,
    deposit_date <= unlock_timestamp and deposit_date <= now
"""

from hypothesis import given, settings, note

from timevault import EMPTY_ACCOUNT

from tests.helpers import assert_account_shape
from tests.conformance.strategies import actions, apply_action, make_vault


class TestAccountShape:

    @given(actions)
    @settings(max_examples=200, deadline=None)
    def test_every_account_is_empty_or_active(self, sequence):
        vault = make_vault()
        for act in sequence:
            note(f"action {act}")
            apply_action(vault, act)
            for account in vault.snapshot().accounts.values():
                assert_account_shape(account)

    @given(actions)
    @settings(max_examples=200, deadline=None)
    def test_deposit_date_not_in_future(self, sequence):
        vault = make_vault()
        for act in sequence:
            apply_action(vault, act)
            for account in vault.list_accounts().values():
                assert account.deposit_date <= vault.current_time
                assert account.deposit_date <= account.unlock_timestamp

    @given(actions)
    @settings(max_examples=100, deadline=None)
    def test_released_accounts_are_fully_cleared(self, sequence):
        vault = make_vault()
        for act in sequence:
            committed = apply_action(vault, act)
            if committed and act[0] in ("withdraw", "emergency"):
                assert vault.get_account(act[1]) == EMPTY_ACCOUNT
