"""
Reporting Module

Formats account state for display. Reports read accounts after the fact and
write to an output sink; nothing in the account or ledger rules depends on
them.
"""

from typing import TYPE_CHECKING, Any, Callable, Dict

from .accounts import Account
from .config import get_config

if TYPE_CHECKING:
    from .ledger import Ledger


OutputSink = Callable[[str], Any]


def format_account_line(account: Account) -> str:
    """One report line for an account"""
    symbol = get_config().currency_symbol
    return (
        f"Account: {account.account_number} | Holder: {account.holder_name} | "
        f"Type: {account.variant.value} | Balance: {account.balance.to_string(symbol)}"
    )


def generate_report(ledger: 'Ledger', sink: OutputSink = print) -> int:
    """
    Emit a report of every account in the ledger

    Args:
        ledger: Ledger to report on
        sink: Callable receiving one formatted line at a time

    Returns:
        Number of lines emitted
    """
    accounts = ledger.accounts()
    lines = [f"--- Bank Accounts Report ({len(accounts)} accounts) ---"]
    lines.extend(format_account_line(account) for account in accounts)
    lines.append("--- End of Report ---")

    for line in lines:
        sink(line)
    return len(lines)


def account_summary(account: Account) -> Dict[str, Any]:
    """Plain dictionary view of an account for API responses"""
    summary = {
        "account_number": account.account_number,
        "holder_name": account.holder_name,
        "variant": account.variant.value,
        "balance": str(account.balance.amount),
        "interest_bearing": account.is_interest_bearing,
    }
    if account.withdrawal_limit is not None:
        summary["withdrawals_this_period"] = account.withdrawals_this_period
        summary["withdrawal_limit"] = account.withdrawal_limit
    return summary
