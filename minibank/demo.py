"""
Demo Walkthrough

Replays a month in the life of three accounts: deposits, a savings account
running into its withdrawal quota, a checking overdraft, a refused premium
withdrawal, a transfer, interest posting and the monthly counter reset.
Everything is written to an output sink so the walkthrough can be captured.
"""

from decimal import Decimal
from typing import Optional

from .exceptions import LedgerError
from .ledger import Ledger
from .reporting import OutputSink, generate_report


def run_demo(sink: OutputSink = print, ledger: Optional[Ledger] = None) -> Ledger:
    """
    Run the walkthrough

    Args:
        sink: Receives every output line
        ledger: Ledger to use; a fresh one is created if omitted

    Returns:
        The ledger in its final state
    """
    ledger = ledger if ledger is not None else Ledger()

    savings = ledger.create_savings("Abhishek", Decimal('1500.00'))
    checking = ledger.create_checking("Bibek", Decimal('200.00'))
    premium = ledger.create_premium("Utsav", Decimal('15000.00'))
    for account in (savings, checking, premium):
        sink(f"Created {account.variant.value} account {account.account_number} "
             f"for {account.holder_name}")

    sink("")
    sink("--- Initial report ---")
    generate_report(ledger, sink)

    # Every variant accepts deposits the same way
    for account in (savings, checking, premium):
        change = account.deposit(Decimal('200.00'))
        sink(f"Deposited {change.amount} to {account.variant.value} {account.account_number}")

    sink("")
    sink("--- After deposits ---")
    generate_report(ledger, sink)

    for amount in (Decimal('300.00'), Decimal('100.00'), Decimal('50.00')):
        change = savings.withdraw(amount)
        sink(f"Withdrew {change.amount} from savings {savings.account_number} "
             f"(withdrawals this month: {savings.withdrawals_this_period})")
    try:
        savings.withdraw(Decimal('10.00'))
    except LedgerError as e:
        sink(f"Expected savings withdrawal error: {e}")

    change = checking.withdraw(Decimal('500.00'))
    sink(f"Withdrew {change.amount} from checking {checking.account_number}")
    if change.fee_charged:
        sink(f"Overdraft! Applied fee {change.fee} to checking {checking.account_number}")

    try:
        premium.withdraw(Decimal('6000.00'))
    except LedgerError as e:
        sink(f"Expected premium withdrawal error: {e}")

    sink("")
    sink("--- After withdrawals ---")
    generate_report(ledger, sink)

    sink("")
    sink("Attempting transfer of $3000 from premium to checking:")
    result = ledger.transfer(premium.account_number, checking.account_number, Decimal('3000.00'))
    sink(result.reason if result else f"Transfer failed: {result.reason}")

    sink("")
    sink("--- After transfer ---")
    generate_report(ledger, sink)

    sink("")
    sink("Applying monthly interest:")
    for account_number, interest in ledger.apply_monthly_interest().items():
        sink(f"Applied interest {interest} to {account_number}")

    sink("")
    sink("--- Final report ---")
    generate_report(ledger, sink)

    ledger.reset_monthly_counters()
    sink("")
    sink("--- Reset monthly counters done ---")
    return ledger
