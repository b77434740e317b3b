"""
Pydantic schemas for API requests and responses
"""

from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel, Field

from .accounts import AccountVariant, BalanceChange
from .currency import to_decimal


class AmountRequest(BaseModel):
    amount: str = Field(..., description="Decimal amount as string")

    def to_amount(self) -> Decimal:
        return to_decimal(self.amount)


class CreateAccountRequest(BaseModel):
    variant: str = Field(..., description="Account variant (savings, checking, premium)")
    holder_name: str
    initial_balance: str = Field("0", description="Decimal amount as string")

    def to_variant(self) -> AccountVariant:
        return AccountVariant(self.variant.lower())

    def to_amount(self) -> Decimal:
        return to_decimal(self.initial_balance)


class UpdateHolderRequest(BaseModel):
    holder_name: str


class TransferRequest(BaseModel):
    from_account_number: str
    to_account_number: str
    amount: str = Field(..., description="Decimal amount as string")


def balance_change_response(change: BalanceChange) -> Dict[str, Any]:
    return {
        "account_number": change.account_number,
        "kind": change.kind.value,
        "amount": str(change.amount.amount),
        "fee": str(change.fee.amount),
        "balance": str(change.balance.amount),
    }
