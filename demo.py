#!/usr/bin/env python3
"""
demo.py - Interactive Tutorial: Learn the Savings Vault Step by Step

This is a pedagogical demonstration of how the time-locked savings vault works.
Each step builds on the previous one. Press Enter to advance.

WHAT YOU'LL LEARN:
  1-3:   Foundation      - The empty vault, first deposit, rejected requests
  4-6:   Locks           - Weighted unlock merging, extensions, withdrawal
  7-8:   Early Exit      - Emergency withdrawal, failed transfers and refunds
  9-10:  Administration  - Interest rates, minimum lock, the audit trail

Run:
    python demo.py           # Interactive mode (press Enter for each step)
    python demo.py --quick   # Run all steps without pausing
"""

from dataclasses import dataclass
import sys

from timevault import (
    # Vault and policy
    Vault, AdminConfig, RecordingTransferSink,
    # Constants
    SECONDS_PER_DAY, DEFAULT_START_TIME,
    # Errors
    VaultError, TransferFailed,
    # Pure calculations
    merge_unlock_time, calculate_daily_rate_bps,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

DAY = SECONDS_PER_DAY


@dataclass
class DemoConfig:
    """Configuration for the tutorial. Modify these to experiment."""
    start_time: int = DEFAULT_START_TIME
    administrator: str = "treasury"
    minimum_lock_days: int = 7

    # Alice's two deposits
    alice_first: int = 100
    alice_first_days: int = 30
    alice_second: int = 100
    alice_second_days: int = 60

    # Bob's early exit
    bob_deposit: int = 1_000
    bob_lock_days: int = 90
    bob_penalty_percent: int = 25

    # Lowest rate whose truncated daily rate is non-zero
    interest_rate_bps: int = 3_650_000


CONFIG = DemoConfig()

QUICK_MODE = "--quick" in sys.argv


def wait_for_enter():
    """Pause for user input unless in quick mode."""
    if not QUICK_MODE:
        input("\n[Press Enter to continue...]")


def step_header(number: int, title: str, objective: str):
    """Print a step header with learning objective."""
    print(f"\n{'='*70}")
    print(f"STEP {number}: {title}")
    print(f"{'='*70}")
    print(f"\nObjective: {objective}\n")


def section_header(text: str):
    """Print a section header within a step."""
    print(f"\n--- {text} ---\n")


def days(seconds: int) -> str:
    return f"day {(seconds - CONFIG.start_time) / DAY:g}"


# ============================================================================
# PHASE 1: FOUNDATION (Steps 1-3)
# ============================================================================

def step_01_empty_vault():
    """Create an empty vault and inspect its policy."""
    step_header(1, "The Empty Vault",
        "See that a vault starts with no accounts, a clock and a policy.")

    config = AdminConfig(
        CONFIG.administrator,
        minimum_lock_period=CONFIG.minimum_lock_days * DAY,
        interest_rate_bps=0,
    )
    sink = RecordingTransferSink()
    vault = Vault(config, initial_time=CONFIG.start_time, transfer_sink=sink)

    print(f"    Administrator:       {vault.administrator}")
    print(f"    Minimum lock:        {vault.minimum_lock_period // DAY} days")
    print(f"    Interest rate:       {vault.interest_rate_bps} bps")
    print(f"    Total locked funds:  {vault.total_locked_funds}")
    print(f"    Current time:        {vault.current_time}")
    return vault, sink


def step_02_first_deposit(vault: Vault):
    """Lock value for a fixed period."""
    step_header(2, "First Deposit",
        "Lock value until an unlock time and watch the totals move.")

    vault.deposit("alice", CONFIG.alice_first, CONFIG.alice_first_days * DAY,
                  savings_goal=500, savings_purpose="holiday")
    info = vault.get_account_info("alice")
    print(f"\n    alice balance:   {info.balance}")
    print(f"    unlocks at:      {days(info.unlock_timestamp)}")
    print(f"    time remaining:  {info.time_remaining // DAY} days")
    print(f"    goal:            {info.savings_goal} ({info.savings_purpose})")
    print(f"    total locked:    {vault.total_locked_funds}")
    return vault


def step_03_rejections(vault: Vault):
    """Invalid requests are rejected and change nothing."""
    step_header(3, "Rejected Requests",
        "Every rejection raises a VaultError and leaves state untouched.")

    before = vault.snapshot()
    attempts = [
        ("zero deposit", lambda: vault.deposit("bob", 0, 30 * DAY)),
        ("lock too short", lambda: vault.deposit("bob", 10, DAY)),
        ("withdraw while locked", lambda: vault.withdraw("alice")),
        ("withdraw with no funds", lambda: vault.withdraw("bob")),
        ("penalty out of range", lambda: vault.emergency_withdraw("alice", 0)),
    ]
    for label, attempt in attempts:
        section_header(label)
        try:
            attempt()
        except VaultError:
            pass

    print(f"\n    State unchanged: {vault.snapshot() == before}")
    return vault


# ============================================================================
# PHASE 2: LOCKS (Steps 4-6)
# ============================================================================

def step_04_merge(vault: Vault):
    """A top-up blends unlock times by balance."""
    step_header(4, "Weighted Unlock Merging",
        "Adding to an active account moves the unlock time to a weighted average.")

    old = vault.get_account("alice")
    requested = vault.current_time + CONFIG.alice_second_days * DAY
    expected = merge_unlock_time(old.balance, old.unlock_timestamp,
                                 CONFIG.alice_second, requested)
    print(f"""
    Existing:  {old.balance} until {days(old.unlock_timestamp)}
    New:       {CONFIG.alice_second} until {days(requested)}

    merged = (b1*u1 + v*u2) // (b1 + v) -> {days(expected)}
    """)

    vault.deposit("alice", CONFIG.alice_second, CONFIG.alice_second_days * DAY)
    account = vault.get_account("alice")
    print(f"\n    alice: {account.balance} until {days(account.unlock_timestamp)}")
    print(f"    deposit date kept at {days(account.deposit_date)}")
    return vault


def step_05_extend(vault: Vault):
    """Push an unlock time further out."""
    step_header(5, "Extending a Lock",
        "Extensions add directly to the unlock time and never shorten it.")

    vault.extend_lock_period("alice", 5 * DAY)
    info = vault.get_account_info("alice")
    print(f"\n    alice now unlocks at {days(info.unlock_timestamp)}")
    return vault


def step_06_withdraw(vault: Vault, sink: RecordingTransferSink):
    """Once unlocked, funds are released in full."""
    step_header(6, "Withdrawal",
        "After the unlock time the whole balance is paid out and the account resets.")

    unlock = vault.get_account("alice").unlock_timestamp
    vault.advance_time(unlock)
    print(f"    Clock advanced to {days(vault.current_time)}")
    print(f"    Withdrawal available: {vault.is_withdrawal_available('alice')}")

    payout = vault.withdraw("alice")
    print(f"\n    Paid out:         {payout}")
    print(f"    alice received:   {sink.balance_of('alice')}")
    print(f"    alice account:    {vault.get_account('alice')!r}")
    print(f"    total locked:     {vault.total_locked_funds}")
    return vault


# ============================================================================
# PHASE 3: EARLY EXIT (Steps 7-8)
# ============================================================================

def step_07_emergency(vault: Vault, sink: RecordingTransferSink):
    """Leave early by paying a penalty to the administrator."""
    step_header(7, "Emergency Withdrawal",
        "Exit before the unlock time; the penalty goes to the administrator.")

    vault.deposit("bob", CONFIG.bob_deposit, CONFIG.bob_lock_days * DAY)
    admin_before = sink.balance_of(CONFIG.administrator)
    payout = vault.emergency_withdraw("bob", CONFIG.bob_penalty_percent)

    print(f"\n    bob deposited:    {CONFIG.bob_deposit}")
    print(f"    penalty:          {CONFIG.bob_penalty_percent}%")
    print(f"    bob received:     {payout}")
    print(f"    admin received:   {sink.balance_of(CONFIG.administrator) - admin_before}")
    return vault


def step_08_failed_transfer(vault: Vault, sink: RecordingTransferSink):
    """A failed payout leg refunds the legs already sent."""
    step_header(8, "Atomic Transfers",
        "If any transfer fails, completed transfers are refunded and nothing commits.")

    vault.deposit("carol", 400, 30 * DAY)
    sink.fail_for("carol")
    before = vault.snapshot()
    try:
        vault.emergency_withdraw("carol", 10)
    except TransferFailed:
        pass
    print(f"\n    Refunded legs:    {sink.refunded[-1:]}")
    print(f"    State unchanged:  {vault.snapshot() == before}")

    sink.recover("carol")
    print(f"\n    Retry after recovery pays {vault.emergency_withdraw('carol', 10)}")
    return vault


# ============================================================================
# PHASE 4: ADMINISTRATION (Steps 9-10)
# ============================================================================

def step_09_interest(vault: Vault):
    """The administrator turns on interest."""
    step_header(9, "Interest",
        "Interest accrues per whole day at a truncated integer daily rate.")

    print(f"    daily rate at 500 bps:       {calculate_daily_rate_bps(500)}")
    print(f"    daily rate at {CONFIG.interest_rate_bps:,} bps: "
          f"{calculate_daily_rate_bps(CONFIG.interest_rate_bps)}\n")

    vault.set_interest_rate(CONFIG.administrator, CONFIG.interest_rate_bps)
    vault.deposit("dave", 1_000, 10 * DAY)
    vault.advance_time(vault.current_time + 10 * DAY)
    print(f"\n    Preview after 10 days: {vault.preview_payout('dave')}")
    print(f"    Withdrawn:             {vault.withdraw('dave')}")

    section_header("non-administrator")
    try:
        vault.set_interest_rate("dave", 0)
    except VaultError:
        pass
    return vault


def step_10_audit(vault: Vault):
    """Every committed operation lands in the event log."""
    step_header(10, "The Audit Trail",
        "The event log records every change; the locked total always reconciles.")

    for event in vault.events:
        print(f"    {event}")

    report = vault.verify_locked_funds()
    print(f"\n    Locked funds valid:  {report['valid']}")
    print(f"    Total locked:        {report['total_locked_funds']}")
    print(f"    Sum of balances:     {report['sum_of_balances']}")
    return vault


def main():
    """Run the complete tutorial."""
    print("=" * 70)
    print("       TIME-LOCKED SAVINGS VAULT - INTERACTIVE TUTORIAL")
    print("=" * 70)
    print("""
    Welcome! This tutorial walks through the savings vault.

    PHASES:
      1-3:   Foundation      - Empty vault, deposits, rejections
      4-6:   Locks           - Merging, extension, withdrawal
      7-8:   Early Exit      - Penalties, atomic transfers
      9-10:  Administration  - Interest, audit trail
    """)

    if QUICK_MODE:
        print("Running in QUICK mode (no pauses)")
    else:
        print("Running in INTERACTIVE mode (press Enter to advance)")

    wait_for_enter()

    vault, sink = step_01_empty_vault()
    wait_for_enter()

    vault = step_02_first_deposit(vault)
    wait_for_enter()

    vault = step_03_rejections(vault)
    wait_for_enter()

    vault = step_04_merge(vault)
    wait_for_enter()

    vault = step_05_extend(vault)
    wait_for_enter()

    vault = step_06_withdraw(vault, sink)
    wait_for_enter()

    vault = step_07_emergency(vault, sink)
    wait_for_enter()

    vault = step_08_failed_transfer(vault, sink)
    wait_for_enter()

    vault = step_09_interest(vault)
    wait_for_enter()

    step_10_audit(vault)

    print("\n" + "=" * 70)
    print("       TUTORIAL COMPLETE!")
    print("=" * 70)
    print("""
    You've learned:

      - Deposits lock value until an unlock time
      - Top-ups blend unlock times by balance
      - Withdrawals reset the account in full
      - Early exits pay a penalty to the administrator
      - Failed transfers are refunded and nothing commits

    Next steps:
      - See timevault/operations.py for the operation rules
      - Run tests: pytest tests/
    """)


if __name__ == "__main__":
    main()
