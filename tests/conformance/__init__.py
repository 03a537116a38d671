"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the savings vault.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. test_conservation.py - Locked-funds total equals the sum of balances
2. test_account_state.py - Accounts are all-empty or all-active
3. test_monotonicity.py - Merged and extended unlock times stay in bounds
4. test_atomicity.py - Failed operations change nothing
5. test_determinism.py - Same inputs, same state and events

These tests use hypothesis for property-based testing.
"""
