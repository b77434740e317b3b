"""
Ledger Module

The registry that owns every account. It is the only place accounts are
created and resolved by number, and it orchestrates transfers and the
monthly batch operations (interest posting and withdrawal-quota reset).
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from .accounts import Account, AccountVariant, BalanceChange, operation_amount
from .config import get_config
from .currency import Money, AmountLike
from .exceptions import (
    LedgerError, AccountNotFoundError, DuplicateAccountNumberError, InvalidAmountError,
    SameAccountTransferError
)
from .identifiers import AccountNumberGenerator, RandomAccountNumberGenerator
from .logging_config import get_logger, log_action
from .reporting import OutputSink, generate_report


@dataclass(frozen=True)
class TransferResult:
    """Outcome of a transfer between two accounts"""
    success: bool
    reason: str
    from_account_number: str
    to_account_number: str
    amount: Optional[Money] = None
    error: Optional[str] = None     # Error kind when the transfer failed

    def __bool__(self) -> bool:
        return self.success


class Ledger:
    """
    Owns the account collection and the operations spanning accounts
    """

    def __init__(self, number_generator: Optional[AccountNumberGenerator] = None):
        if number_generator is None:
            config = get_config()
            number_generator = RandomAccountNumberGenerator(
                prefix=config.account_number_prefix,
                max_attempts=config.account_number_max_attempts
            )
        self.number_generator = number_generator
        self._accounts: Dict[str, Account] = {}
        self.logger = get_logger("minibank.ledger")

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, account_number: str) -> bool:
        return account_number in self._accounts

    def accounts(self) -> List[Account]:
        """All registered accounts"""
        return list(self._accounts.values())

    def __iter__(self) -> Iterator[Account]:
        return iter(self.accounts())

    # Account creation

    def create_account(
        self,
        variant: AccountVariant,
        holder_name: str,
        initial_balance: AmountLike = 0
    ) -> Account:
        """
        Create and register a new account

        Args:
            variant: Account variant
            holder_name: Non-empty holder name
            initial_balance: Opening balance, checked against the variant's minimum

        Returns:
            Created Account object

        Raises:
            InvalidNameError: If holder name is empty
            InvalidInitialBalanceError: If the opening balance is below the minimum
        """
        account_number = self.number_generator.next_number(self.__contains__)
        if account_number in self._accounts:
            raise DuplicateAccountNumberError(
                f"Account number {account_number} is already registered", account_number
            )

        # Construction validates; nothing is registered if it raises
        account = Account(account_number, holder_name, variant, initial_balance)
        self._accounts[account_number] = account

        log_action(
            self.logger, "info", f"Created {variant.value} account",
            action="create_account", resource=f"account:{account_number}",
            extra={
                "holder_name": account.holder_name,
                "variant": variant.value,
                "initial_balance": account.balance.to_string()
            }
        )
        return account

    def create_savings(self, holder_name: str, initial_balance: AmountLike) -> Account:
        """Create a savings account (opening balance at least 500.00)"""
        return self.create_account(AccountVariant.SAVINGS, holder_name, initial_balance)

    def create_checking(self, holder_name: str, initial_balance: AmountLike = 0) -> Account:
        """Create a checking account (no opening minimum)"""
        return self.create_account(AccountVariant.CHECKING, holder_name, initial_balance)

    def create_premium(self, holder_name: str, initial_balance: AmountLike) -> Account:
        """Create a premium account (opening balance at least 10000.00)"""
        return self.create_account(AccountVariant.PREMIUM, holder_name, initial_balance)

    # Lookup

    def find_account(self, account_number: str) -> Optional[Account]:
        """Get account by number, or None if it is not registered"""
        return self._accounts.get(account_number)

    def get_account(self, account_number: str) -> Account:
        """Get account by number, raising AccountNotFoundError if missing"""
        account = self.find_account(account_number)
        if account is None:
            raise AccountNotFoundError(f"Account {account_number} not found", account_number)
        return account

    def deposit(self, account_number: str, amount: AmountLike) -> BalanceChange:
        """Deposit into the account with the given number"""
        return self.get_account(account_number).deposit(amount)

    def withdraw(self, account_number: str, amount: AmountLike) -> BalanceChange:
        """Withdraw from the account with the given number"""
        return self.get_account(account_number).withdraw(amount)

    def total_balance(self) -> Money:
        """Sum of all account balances"""
        total = Money.zero()
        for account in self._accounts.values():
            total = total + account.balance
        return total

    # Transfers

    def transfer(self, from_account_number: str, to_account_number: str,
                 amount: AmountLike) -> TransferResult:
        """
        Move money between two accounts

        The source is debited first and the destination credited only if the
        debit succeeded, so a failing withdrawal leaves both accounts untouched.
        Failures are reported in the result rather than raised.

        Args:
            from_account_number: Source account number
            to_account_number: Destination account number
            amount: Amount to move

        Returns:
            TransferResult, truthy on success
        """
        source = self.find_account(from_account_number)
        destination = self.find_account(to_account_number)

        if source is None:
            return self._reject(
                from_account_number, to_account_number,
                AccountNotFoundError(f"Source account {from_account_number} not found",
                                     from_account_number)
            )
        if destination is None:
            return self._reject(
                from_account_number, to_account_number,
                AccountNotFoundError(f"Destination account {to_account_number} not found",
                                     to_account_number)
            )

        try:
            money = operation_amount(amount, "Transfer")
        except InvalidAmountError as e:
            return self._reject(from_account_number, to_account_number, e)

        if source is destination:
            return self._reject(
                from_account_number, to_account_number,
                SameAccountTransferError("Cannot transfer to the same account", from_account_number),
                money
            )

        try:
            source.withdraw(money)
            # Deposit cannot fail for an amount that passed validation
            destination.deposit(money)
        except LedgerError as e:
            return self._reject(from_account_number, to_account_number, e, money)

        reason = f"Transferred {money} from {from_account_number} to {to_account_number}"
        log_action(
            self.logger, "info", reason,
            action="transfer", resource=f"account:{from_account_number}",
            extra={
                "from_account": from_account_number,
                "to_account": to_account_number,
                "amount": money.to_string()
            }
        )
        return TransferResult(
            success=True,
            reason=reason,
            from_account_number=from_account_number,
            to_account_number=to_account_number,
            amount=money
        )

    def _reject(self, from_account_number: str, to_account_number: str,
                error: LedgerError, amount: Optional[Money] = None) -> TransferResult:
        log_action(
            self.logger, "warning", f"Transfer failed: {error.message}",
            action="transfer", resource=f"account:{from_account_number}",
            extra={
                "from_account": from_account_number,
                "to_account": to_account_number,
                "error": error.kind
            }
        )
        return TransferResult(
            success=False,
            reason=error.message,
            from_account_number=from_account_number,
            to_account_number=to_account_number,
            amount=amount,
            error=error.kind
        )

    # Batch operations

    def apply_monthly_interest(self) -> Dict[str, Money]:
        """
        Post one period of interest to every interest-bearing account

        Returns:
            Interest credited, keyed by account number
        """
        credited: Dict[str, Money] = {}
        for account in self._accounts.values():
            if account.is_interest_bearing:
                change = account.apply_interest()
                credited[account.account_number] = change.amount

        log_action(
            self.logger, "info", "Applied monthly interest",
            action="apply_monthly_interest",
            extra={"accounts": len(credited)}
        )
        return credited

    def reset_monthly_counters(self) -> int:
        """Reset withdrawal quotas; returns how many accounts were reset"""
        reset = 0
        for account in self._accounts.values():
            if account.rules.has_withdrawal_limit:
                account.reset_period_counters()
                reset += 1

        log_action(
            self.logger, "info", "Reset monthly counters",
            action="reset_monthly_counters",
            extra={"accounts": reset}
        )
        return reset

    def generate_report(self, sink: OutputSink = print) -> int:
        """Emit the accounts report to an output sink"""
        return generate_report(self, sink)
