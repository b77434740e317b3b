"""
Ledger Exceptions

Domain-specific errors for account and ledger operations. Every error is a
ValueError so callers that only know the generic contract still catch them.
"""

from typing import Optional


class LedgerError(ValueError):
    """Base class for all business-rule violations"""

    def __init__(self, message: str, account_number: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.account_number = account_number

    @property
    def kind(self) -> str:
        """Error kind reported in transfer results and API responses"""
        return type(self).__name__


class InvalidAmountError(LedgerError):
    """Raised when a deposit or withdrawal amount is zero or negative"""


class InvalidInitialBalanceError(LedgerError):
    """Raised when an opening balance is below the variant's minimum"""


class InvalidNameError(LedgerError):
    """Raised when a holder name is empty or whitespace-only"""


class MinimumBalanceViolationError(LedgerError):
    """Raised when a withdrawal would take the balance below its floor"""


class WithdrawalLimitExceededError(LedgerError):
    """Raised when the savings withdrawal quota for the period is used up"""


class AccountNotFoundError(LedgerError):
    """Raised when an account number is not registered"""


class UnsupportedOperationError(LedgerError):
    """Raised when an account variant does not offer the requested capability"""


class DuplicateAccountNumberError(LedgerError):
    """Raised when an account number is already registered"""


class AccountNumberExhaustedError(LedgerError):
    """Raised when no free account number could be generated"""


class SameAccountTransferError(LedgerError):
    """Raised when a transfer names the same account on both sides"""
