"""
Test suite for ledger module

Tests account registration and lookup, the transfer protocol and the monthly
batch operations. CRITICAL: a failed transfer must leave both balances as
they were.
"""

import pytest
from decimal import Decimal

from minibank.currency import Money
from minibank.accounts import AccountVariant
from minibank.identifiers import AccountNumberGenerator, SequentialAccountNumberGenerator
from minibank.ledger import Ledger, TransferResult
from minibank.exceptions import (
    AccountNotFoundError, DuplicateAccountNumberError, InvalidInitialBalanceError,
    InvalidNameError, MinimumBalanceViolationError
)


class FixedNumberGenerator(AccountNumberGenerator):
    """Generator that ignores collisions"""

    def next_number(self, is_taken):
        return "AC000001"


class TestAccountRegistry:
    """Test creation and lookup"""

    def setup_method(self):
        """Set up test fixtures"""
        self.ledger = Ledger(SequentialAccountNumberGenerator())

    def test_create_each_variant(self):
        """Test the three creation operations"""
        savings = self.ledger.create_savings("Abhishek", Decimal('1500.00'))
        checking = self.ledger.create_checking("Bibek", Decimal('200.00'))
        premium = self.ledger.create_premium("Utsav", Decimal('15000.00'))

        assert savings.variant == AccountVariant.SAVINGS
        assert checking.variant == AccountVariant.CHECKING
        assert premium.variant == AccountVariant.PREMIUM
        assert [a.account_number for a in (savings, checking, premium)] == [
            "AC100000", "AC100001", "AC100002"
        ]
        assert len(self.ledger) == 3

    def test_find_account(self):
        """Test lookup returns the registered instance"""
        account = self.ledger.create_checking("Bibek")
        assert self.ledger.find_account(account.account_number) is account
        assert account.account_number in self.ledger
        assert account.balance.is_zero()

    def test_find_missing_account_returns_none(self):
        """Test absence is a normal outcome"""
        assert self.ledger.find_account("AC999999") is None
        assert "AC999999" not in self.ledger

    def test_get_missing_account_raises(self):
        """Test get_account raises for unknown numbers"""
        with pytest.raises(AccountNotFoundError, match="AC999999"):
            self.ledger.get_account("AC999999")

    def test_failed_creation_registers_nothing(self):
        """Test invalid openings leave the registry empty"""
        with pytest.raises(InvalidInitialBalanceError):
            self.ledger.create_savings("Abhishek", Decimal('100.00'))
        with pytest.raises(InvalidInitialBalanceError):
            self.ledger.create_premium("Utsav", Decimal('9000.00'))
        with pytest.raises(InvalidNameError):
            self.ledger.create_checking("  ")

        assert len(self.ledger) == 0
        assert self.ledger.accounts() == []

    def test_duplicate_number_rejected(self):
        """Test a misbehaving generator cannot overwrite an account"""
        ledger = Ledger(FixedNumberGenerator())
        first = ledger.create_checking("Bibek", Decimal('10.00'))

        with pytest.raises(DuplicateAccountNumberError):
            ledger.create_checking("Someone Else")
        assert ledger.find_account("AC000001") is first
        assert len(ledger) == 1

    def test_default_generator(self):
        """Test the configured random generator is used by default"""
        ledger = Ledger()
        account = ledger.create_checking("Bibek")
        assert account.account_number.startswith("AC")
        assert len(account.account_number) == 8

    def test_deposit_and_withdraw_by_number(self):
        """Test lookup-by-number conveniences"""
        account = self.ledger.create_checking("Bibek", Decimal('100.00'))

        self.ledger.deposit(account.account_number, Decimal('50.00'))
        change = self.ledger.withdraw(account.account_number, Decimal('20.00'))

        assert change.balance == Money(Decimal('130.00'))
        with pytest.raises(AccountNotFoundError):
            self.ledger.deposit("AC999999", Decimal('1.00'))

    def test_errors_propagate_from_convenience_methods(self):
        """Test business errors are not swallowed"""
        account = self.ledger.create_premium("Utsav", Decimal('10000.00'))
        with pytest.raises(MinimumBalanceViolationError):
            self.ledger.withdraw(account.account_number, Decimal('0.01'))

    def test_total_balance(self):
        """Test sum over all accounts"""
        self.ledger.create_savings("A", Decimal('1000.00'))
        self.ledger.create_checking("B", Decimal('-50.00'))
        assert self.ledger.total_balance() == Money(Decimal('950.00'))


class TestTransfer:
    """Test the transfer protocol"""

    def setup_method(self):
        """Set up test fixtures"""
        self.ledger = Ledger(SequentialAccountNumberGenerator())
        self.savings = self.ledger.create_savings("Abhishek", Decimal('1500.00'))
        self.checking = self.ledger.create_checking("Bibek", Decimal('200.00'))
        self.premium = self.ledger.create_premium("Utsav", Decimal('15000.00'))

    def balances(self):
        return (self.savings.balance, self.checking.balance, self.premium.balance)

    def test_premium_to_overdrawn_checking(self):
        """Test transfer of 3000 from premium to checking at -335"""
        self.checking.withdraw(Decimal('500.00'))
        assert self.checking.balance == Money(Decimal('-335.00'))

        result = self.ledger.transfer(
            self.premium.account_number, self.checking.account_number, Decimal('3000.00')
        )

        assert isinstance(result, TransferResult)
        assert result
        assert result.success
        assert result.error is None
        assert result.amount == Money(Decimal('3000.00'))
        assert self.premium.balance == Money(Decimal('12000.00'))
        assert self.checking.balance == Money(Decimal('2665.00'))

    def test_missing_source(self):
        """Test unknown source account"""
        before = self.balances()
        result = self.ledger.transfer("AC999999", self.checking.account_number, Decimal('10'))

        assert not result
        assert result.error == "AccountNotFoundError"
        assert "Source account AC999999 not found" == result.reason
        assert self.balances() == before

    def test_missing_destination(self):
        """Test unknown destination leaves the source untouched"""
        before = self.balances()
        result = self.ledger.transfer(self.premium.account_number, "AC999999", Decimal('10'))

        assert not result.success
        assert result.error == "AccountNotFoundError"
        assert "Destination" in result.reason
        assert self.balances() == before

    @pytest.mark.parametrize("amount", [
        Decimal('0'), Decimal('-5.00'), "abc", "12abc5", Decimal('0.005'), Decimal('2999.999')
    ])
    def test_invalid_amount(self, amount):
        """Test non-positive, non-numeric or sub-cent amounts"""
        before = self.balances()
        result = self.ledger.transfer(
            self.premium.account_number, self.checking.account_number, amount
        )

        assert not result
        assert result.error == "InvalidAmountError"
        assert self.balances() == before

    def test_same_account(self):
        """Test transfer to itself is refused"""
        before = self.balances()
        result = self.ledger.transfer(
            self.checking.account_number, self.checking.account_number, Decimal('10.00')
        )

        assert not result
        assert result.error == "SameAccountTransferError"
        assert self.balances() == before

    def test_floor_violation_is_atomic(self):
        """Test failing withdraw leaves both balances unchanged"""
        before = self.balances()
        result = self.ledger.transfer(
            self.premium.account_number, self.savings.account_number, Decimal('6000.00')
        )

        assert not result
        assert result.error == "MinimumBalanceViolationError"
        assert "10,000.00" in result.reason
        assert self.balances() == before

    def test_savings_quota_applies_to_transfers(self):
        """Test transfers count as savings withdrawals"""
        for _ in range(3):
            assert self.ledger.transfer(
                self.savings.account_number, self.checking.account_number, Decimal('10.00')
            )
        assert self.savings.withdrawals_this_period == 3

        before = self.balances()
        result = self.ledger.transfer(
            self.savings.account_number, self.checking.account_number, Decimal('10.00')
        )
        assert result.error == "WithdrawalLimitExceededError"
        assert self.balances() == before

    def test_checking_source_may_overdraw(self):
        """Test overdraft fee applies on transfer out of checking"""
        result = self.ledger.transfer(
            self.checking.account_number, self.savings.account_number, Decimal('300.00')
        )

        assert result
        assert self.checking.balance == Money(Decimal('-135.00'))
        assert self.savings.balance == Money(Decimal('1800.00'))

    def test_string_amount_accepted(self):
        """Test amounts given as decimal strings"""
        result = self.ledger.transfer(
            self.premium.account_number, self.checking.account_number, "100.50"
        )
        assert result
        assert self.checking.balance == Money(Decimal('300.50'))


class TestBatchOperations:
    """Test monthly interest and counter reset"""

    def setup_method(self):
        """Set up test fixtures"""
        self.ledger = Ledger(SequentialAccountNumberGenerator())
        self.savings = self.ledger.create_savings("Abhishek", Decimal('1000.00'))
        self.checking = self.ledger.create_checking("Bibek", Decimal('500.00'))
        self.premium = self.ledger.create_premium("Utsav", Decimal('20000.00'))

    def test_apply_monthly_interest(self):
        """Test interest posts to interest-bearing accounts only"""
        credited = self.ledger.apply_monthly_interest()

        assert credited == {
            self.savings.account_number: Money(Decimal('20.00')),
            self.premium.account_number: Money(Decimal('1000.00')),
        }
        assert self.savings.balance == Money(Decimal('1020.00'))
        assert self.premium.balance == Money(Decimal('21000.00'))
        assert self.checking.balance == Money(Decimal('500.00'))

    def test_interest_on_empty_ledger(self):
        """Test batch over no accounts"""
        assert Ledger(SequentialAccountNumberGenerator()).apply_monthly_interest() == {}

    def test_reset_monthly_counters(self):
        """Test only quota accounts are reset"""
        second_savings = self.ledger.create_savings("Second", Decimal('2000.00'))
        for _ in range(3):
            self.savings.withdraw(Decimal('10.00'))
        second_savings.withdraw(Decimal('10.00'))

        assert self.ledger.reset_monthly_counters() == 2
        assert self.savings.withdrawals_this_period == 0
        assert second_savings.withdrawals_this_period == 0
        self.savings.withdraw(Decimal('10.00'))

    def test_generate_report_to_sink(self):
        """Test report delegates to the output sink"""
        lines = []
        count = self.ledger.generate_report(lines.append)

        assert count == len(lines) == 5
        assert lines[0] == "--- Bank Accounts Report (3 accounts) ---"
        assert lines[-1] == "--- End of Report ---"
