"""
test_account_store.py - Unit tests for AccountStore

Tests:
- Unknown identities read as EMPTY_ACCOUNT
- put / reset replace in place, never delete
- active() / total_balance() / iteration
"""

import pytest

from timevault import AccountStore, SavingsAccount, EMPTY_ACCOUNT


@pytest.fixture
def store():
    s = AccountStore()
    s.put("bob", SavingsAccount(500, 3000, 1000))
    s.put("alice", SavingsAccount(100, 2000, 1000))
    return s


class TestAccountStore:

    def test_unknown_identity_is_empty(self):
        assert AccountStore().get("nobody") == EMPTY_ACCOUNT

    def test_get_does_not_create(self):
        store = AccountStore()
        store.get("nobody")
        assert "nobody" not in store
        assert len(store) == 0

    def test_put_and_get(self, store):
        assert store.get("alice").balance == 100

    def test_put_replaces(self, store):
        store.put("alice", SavingsAccount(150, 2000, 1000))
        assert store.get("alice").balance == 150
        assert len(store) == 2

    def test_reset_keeps_identity(self, store):
        store.reset("alice")
        assert store.get("alice") == EMPTY_ACCOUNT
        assert "alice" in store
        assert [identity for identity, _ in store] == ["alice", "bob"]

    def test_active_excludes_reset(self, store):
        store.reset("alice")
        assert list(store.active()) == ["bob"]

    def test_total_balance(self, store):
        assert store.total_balance() == 600
        store.reset("bob")
        assert store.total_balance() == 100

    def test_iteration_sorted(self, store):
        assert [identity for identity, _ in store] == ["alice", "bob"]

    def test_put_rejects_non_account(self, store):
        with pytest.raises(TypeError):
            store.put("alice", {"balance": 1})

    def test_put_rejects_empty_identity(self, store):
        with pytest.raises(ValueError):
            store.put("", SavingsAccount())

    def test_initial_accounts_copied(self):
        seed = {"alice": SavingsAccount(1, 2, 1)}
        store = AccountStore(seed)
        seed["bob"] = SavingsAccount(1, 2, 1)
        assert "bob" not in store
