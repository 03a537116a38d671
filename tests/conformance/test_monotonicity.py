"""
Unlock Time Conformance Tests

INVARIANT: A merged unlock time lies between the two unlock times it blends:
    min(u_old, u_new) <= merge(b, u_old, v, u_new) <= max(u_old, u_new)

INVARIANT: Extending a lock moves unlock_timestamp later by exactly the
requested period, and never touches balance or deposit_date.

INVARIANT: Logical time never moves backward.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from timevault import merge_unlock_time

from tests.helpers import T0, DAY
from tests.conformance.strategies import make_vault

amounts = st.integers(min_value=1, max_value=10**12)
timestamps = st.integers(min_value=1, max_value=10**10)


class TestMergeBounds:

    @given(amounts, timestamps, amounts, timestamps)
    @settings(max_examples=500)
    def test_merge_within_bounds(self, b, u_old, v, u_new):
        merged = merge_unlock_time(b, u_old, v, u_new)
        assert min(u_old, u_new) <= merged <= max(u_old, u_new)

    @given(amounts, timestamps, amounts)
    def test_equal_unlocks_unchanged(self, b, u, v):
        assert merge_unlock_time(b, u, v, u) == u

    @given(amounts, timestamps, amounts, timestamps)
    def test_merge_is_symmetric(self, b, u_old, v, u_new):
        assert merge_unlock_time(b, u_old, v, u_new) == merge_unlock_time(v, u_new, b, u_old)

    @given(amounts, st.integers(min_value=1, max_value=60 * DAY),
           amounts, st.integers(min_value=DAY, max_value=60 * DAY))
    @settings(max_examples=100, deadline=None)
    def test_vault_merge_within_bounds(self, first, first_lock, second, second_lock):
        vault = make_vault()
        vault.deposit("alice", first, max(first_lock, DAY))
        old = vault.get_account("alice")
        vault.deposit("alice", second, second_lock)
        new = vault.get_account("alice")
        requested = T0 + second_lock
        assert min(old.unlock_timestamp, requested) <= new.unlock_timestamp
        assert new.unlock_timestamp <= max(old.unlock_timestamp, requested)
        assert new.deposit_date == old.deposit_date


class TestExtension:

    @given(st.integers(min_value=DAY, max_value=60 * DAY),
           st.lists(st.integers(min_value=1, max_value=30 * DAY), min_size=1, max_size=10))
    @settings(max_examples=100, deadline=None)
    def test_extensions_add_exactly(self, lock, periods):
        vault = make_vault()
        vault.deposit("alice", 100, lock)
        before = vault.get_account("alice")
        for period in periods:
            vault.extend_lock_period("alice", period)
        after = vault.get_account("alice")
        assert after.unlock_timestamp == before.unlock_timestamp + sum(periods)
        assert after.balance == before.balance
        assert after.deposit_date == before.deposit_date


class TestTime:

    @given(st.lists(st.integers(min_value=0, max_value=10 * DAY), max_size=20))
    def test_time_never_decreases(self, steps):
        vault = make_vault()
        for step in steps:
            before = vault.current_time
            vault.advance_time(before + step)
            assert vault.current_time >= before

    @given(st.integers(min_value=1, max_value=T0))
    def test_backwards_always_rejected(self, delta):
        vault = make_vault()
        with pytest.raises(ValueError):
            vault.advance_time(T0 - delta)
        assert vault.current_time == T0
