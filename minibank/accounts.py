"""
Account Module

A single Account type parameterized by its variant. Each variant is described
by a VariantRules record (opening minimum, withdrawal floor, withdrawal quota,
overdraft fee, optional interest rate) and every balance mutation goes through
deposit, withdraw or apply_interest so the rules cannot be bypassed.
"""

from decimal import Decimal
from dataclasses import dataclass, field
from typing import Dict, Optional
from enum import Enum

from .currency import Money, AmountLike, is_whole_cents, to_decimal
from .exceptions import (
    InvalidAmountError, InvalidInitialBalanceError, InvalidNameError,
    MinimumBalanceViolationError, WithdrawalLimitExceededError,
    UnsupportedOperationError
)
from .logging_config import get_logger, log_action


logger = get_logger("minibank.accounts")


class AccountVariant(Enum):
    """Account product variants"""
    SAVINGS = "savings"      # Interest bearing, floor and monthly withdrawal quota
    CHECKING = "checking"    # No floor, overdraft fee when going negative
    PREMIUM = "premium"      # Interest bearing, high floor


class BalanceChangeKind(Enum):
    """Kinds of balance mutation"""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    INTEREST = "interest"


@dataclass(frozen=True)
class VariantRules:
    """
    Business rules of one account variant.
    A rule left as None does not apply to the variant.
    """
    variant: AccountVariant
    minimum_opening_balance: Optional[Money] = None
    minimum_balance: Optional[Money] = None
    withdrawal_limit: Optional[int] = None
    overdraft_fee: Optional[Money] = None
    interest_rate: Optional[Decimal] = None

    @property
    def is_interest_bearing(self) -> bool:
        return self.interest_rate is not None

    @property
    def has_withdrawal_limit(self) -> bool:
        return self.withdrawal_limit is not None


SAVINGS_RULES = VariantRules(
    variant=AccountVariant.SAVINGS,
    minimum_opening_balance=Money(Decimal('500.00')),
    minimum_balance=Money(Decimal('500.00')),
    withdrawal_limit=3,
    interest_rate=Decimal('0.02')
)

CHECKING_RULES = VariantRules(
    variant=AccountVariant.CHECKING,
    overdraft_fee=Money(Decimal('35.00'))
)

PREMIUM_RULES = VariantRules(
    variant=AccountVariant.PREMIUM,
    minimum_opening_balance=Money(Decimal('10000.00')),
    minimum_balance=Money(Decimal('10000.00')),
    interest_rate=Decimal('0.05')
)

VARIANT_RULES: Dict[AccountVariant, VariantRules] = {
    AccountVariant.SAVINGS: SAVINGS_RULES,
    AccountVariant.CHECKING: CHECKING_RULES,
    AccountVariant.PREMIUM: PREMIUM_RULES,
}


@dataclass(frozen=True)
class BalanceChange:
    """Outcome of a successful balance mutation"""
    account_number: str
    kind: BalanceChangeKind
    amount: Money
    balance: Money                               # Balance after the mutation
    fee: Money = field(default_factory=Money.zero)  # Overdraft fee charged, if any

    @property
    def fee_charged(self) -> bool:
        return not self.fee.is_zero()


def _validate_name(name, account_number: Optional[str] = None) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidNameError("Holder name cannot be empty", account_number)
    return name


def operation_amount(amount: AmountLike, operation: str,
                     account_number: Optional[str] = None) -> Money:
    """
    Validate a deposit, withdrawal or transfer amount

    The amount is taken exactly as given: it must be numeric, strictly
    positive and expressed in whole cents.

    Raises:
        InvalidAmountError: If any of those checks fails
    """
    try:
        value = to_decimal(amount)
    except ValueError:
        raise InvalidAmountError(f"{operation} amount must be a number", account_number) from None
    if value <= 0:
        raise InvalidAmountError(f"{operation} amount must be positive", account_number)
    if not is_whole_cents(value):
        raise InvalidAmountError(
            f"{operation} amount cannot include fractions of a cent", account_number
        )
    return Money(value)


class Account:
    """
    Bank account owning its balance and enforcing its variant's rules
    """

    def __init__(
        self,
        account_number: str,
        holder_name: str,
        variant: AccountVariant,
        initial_balance: AmountLike = Decimal('0')
    ):
        self._rules = VARIANT_RULES[variant]
        self._account_number = account_number
        self._holder_name = _validate_name(holder_name, account_number)

        opening_value = to_decimal(initial_balance)
        if not is_whole_cents(opening_value):
            raise InvalidInitialBalanceError(
                "Initial balance cannot include fractions of a cent", account_number
            )
        opening = Money(opening_value)
        minimum = self._rules.minimum_opening_balance
        if minimum is not None and opening < minimum:
            raise InvalidInitialBalanceError(
                f"Initial balance for a {variant.value} account must be at least {minimum}",
                account_number
            )

        self._balance = opening
        self._withdrawals_this_period = 0

    def __repr__(self) -> str:
        return (f"Account(account_number={self._account_number!r}, "
                f"variant={self.variant.value}, balance={self._balance.amount})")

    @property
    def account_number(self) -> str:
        return self._account_number

    @property
    def holder_name(self) -> str:
        return self._holder_name

    @holder_name.setter
    def holder_name(self, name: str) -> None:
        self._holder_name = _validate_name(name, self._account_number)

    @property
    def balance(self) -> Money:
        return self._balance

    @property
    def variant(self) -> AccountVariant:
        return self._rules.variant

    @property
    def rules(self) -> VariantRules:
        return self._rules

    @property
    def is_interest_bearing(self) -> bool:
        return self._rules.is_interest_bearing

    @property
    def withdrawal_limit(self) -> Optional[int]:
        return self._rules.withdrawal_limit

    @property
    def withdrawals_this_period(self) -> int:
        return self._withdrawals_this_period

    def deposit(self, amount: AmountLike) -> BalanceChange:
        """
        Credit the account

        Raises:
            InvalidAmountError: If amount is not a strictly positive whole-cent number
        """
        money = operation_amount(amount, "Deposit", self._account_number)
        self._balance = self._balance + money
        return self._record(BalanceChangeKind.DEPOSIT, money)

    def withdraw(self, amount: AmountLike) -> BalanceChange:
        """
        Debit the account after checking the variant's rules.

        Checks run in order and the first failure wins: withdrawal quota, then
        balance floor. Accounts with an overdraft fee are charged it once when
        the withdrawal leaves the balance negative. On failure nothing changes.

        Args:
            amount: Amount to withdraw

        Returns:
            BalanceChange with the resulting balance and any fee charged

        Raises:
            InvalidAmountError: If amount is not a strictly positive whole-cent number
            WithdrawalLimitExceededError: If the period quota is used up
            MinimumBalanceViolationError: If the balance would go below the floor
        """
        money = operation_amount(amount, "Withdrawal", self._account_number)
        rules = self._rules

        if rules.has_withdrawal_limit and self._withdrawals_this_period >= rules.withdrawal_limit:
            raise WithdrawalLimitExceededError(
                f"Withdrawal limit reached for the month (limit: {rules.withdrawal_limit})",
                self._account_number
            )

        if rules.minimum_balance is not None and self._balance - money < rules.minimum_balance:
            raise MinimumBalanceViolationError(
                f"Cannot withdraw: {self.variant.value} account must maintain "
                f"minimum balance of {rules.minimum_balance}",
                self._account_number
            )

        new_balance = self._balance - money
        fee = Money.zero()
        if rules.overdraft_fee is not None and new_balance.is_negative():
            fee = rules.overdraft_fee
            new_balance = new_balance - fee

        self._balance = new_balance
        if rules.has_withdrawal_limit:
            self._withdrawals_this_period += 1

        return self._record(BalanceChangeKind.WITHDRAWAL, money, fee)

    def calculate_interest(self) -> Money:
        """Interest for one period on the current balance (not applied)"""
        if not self._rules.is_interest_bearing:
            raise UnsupportedOperationError(
                f"{self.variant.value} accounts do not earn interest", self._account_number
            )
        return self._balance * self._rules.interest_rate

    def apply_interest(self) -> BalanceChange:
        """Credit one period of interest; purely additive so no rule can fail"""
        interest = self.calculate_interest()
        self._balance = self._balance + interest
        return self._record(BalanceChangeKind.INTEREST, interest)

    def reset_period_counters(self) -> None:
        """Start a new billing period for the withdrawal quota"""
        if not self._rules.has_withdrawal_limit:
            raise UnsupportedOperationError(
                f"{self.variant.value} accounts have no withdrawal quota", self._account_number
            )
        self._withdrawals_this_period = 0

    def _record(self, kind: BalanceChangeKind, amount: Money,
                fee: Optional[Money] = None) -> BalanceChange:
        change = BalanceChange(
            account_number=self._account_number,
            kind=kind,
            amount=amount,
            balance=self._balance,
            fee=fee if fee is not None else Money.zero()
        )
        log_action(
            logger, "debug", f"{kind.value} on {self.variant.value} account",
            action=kind.value, resource=f"account:{self._account_number}",
            extra={
                "amount": amount.to_string(),
                "fee": change.fee.to_string(),
                "balance": self._balance.to_string()
            }
        )
        return change
