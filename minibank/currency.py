"""
Money Module

Two-decimal money value type used for every balance and operation amount.
NEVER uses float for monetary values: floats and ints are converted through
their string form before becoming Decimal.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext
from dataclasses import dataclass
from typing import Union
import re

# Set global decimal context for financial precision
getcontext().prec = 28

CENTS = Decimal('0.01')

CURRENCY_SYMBOLS = "$€£¥"

_NUMERIC_LITERAL = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')
_GROUPED_DIGITS = re.compile(r'^\d{1,3}(,\d{3})+(\.\d*)?$')

AmountLike = Union['Money', Decimal, int, float, str]


@dataclass(frozen=True)
class Money:
    """
    Immutable money amount rounded to two decimal places.
    Balances may be negative (checking overdraft); operation amounts are
    validated by the accounts, not here.
    """
    amount: Decimal

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', _to_decimal(self.amount))

        object.__setattr__(self, 'amount', self.amount.quantize(CENTS, rounding=ROUND_HALF_UP))

    @classmethod
    def zero(cls) -> 'Money':
        return cls(Decimal('0'))

    def __add__(self, other: 'Money') -> 'Money':
        return Money(self.amount + to_money(other).amount)

    def __sub__(self, other: 'Money') -> 'Money':
        return Money(self.amount - to_money(other).amount)

    def __mul__(self, multiplier: Decimal) -> 'Money':
        if not isinstance(multiplier, Decimal):
            multiplier = _to_decimal(multiplier)
        return Money(self.amount * multiplier)

    def __neg__(self) -> 'Money':
        return Money(-self.amount)

    def __abs__(self) -> 'Money':
        return Money(abs(self.amount))

    def __eq__(self, other) -> bool:
        try:
            return self.amount == to_money(other).amount
        except ValueError:
            return NotImplemented

    def __hash__(self) -> int:
        return hash(self.amount)

    def __lt__(self, other: 'Money') -> bool:
        return self.amount < to_money(other).amount

    def __le__(self, other: 'Money') -> bool:
        return self.amount <= to_money(other).amount

    def __gt__(self, other: 'Money') -> bool:
        return self.amount > to_money(other).amount

    def __ge__(self, other: 'Money') -> bool:
        return self.amount >= to_money(other).amount

    def is_zero(self) -> bool:
        """Check if amount is exactly zero"""
        return self.amount == Decimal('0')

    def is_positive(self) -> bool:
        """Check if amount is positive"""
        return self.amount > Decimal('0')

    def is_negative(self) -> bool:
        """Check if amount is negative"""
        return self.amount < Decimal('0')

    def to_string(self, symbol: str = "$") -> str:
        """Format for display, e.g. $1,050.00 or -$335.00"""
        sign = "-" if self.is_negative() else ""
        return f"{sign}{symbol}{abs(self.amount):,.2f}"

    def __str__(self) -> str:
        return self.to_string()


def _to_decimal(value) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert {value!r} to a money amount")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        # str() keeps 0.1 as 0.1 instead of its binary expansion
        result = Decimal(str(value))
    elif isinstance(value, str):
        result = decimal_from_string(value)
    else:
        raise ValueError(f"Cannot convert {value!r} to a money amount")

    if not result.is_finite():
        raise ValueError(f"Cannot convert {value!r} to a money amount")
    return result


def to_money(value: AmountLike) -> Money:
    """
    Coerce a caller-supplied amount into Money

    Args:
        value: Money, Decimal, int, float or numeric string

    Returns:
        Money rounded to cents

    Raises:
        ValueError: If the value is not numeric
    """
    if isinstance(value, Money):
        return value
    return Money(_to_decimal(value))


def to_decimal(value: AmountLike) -> Decimal:
    """Exact Decimal for a caller-supplied amount, without rounding to cents"""
    if isinstance(value, Money):
        return value.amount
    return _to_decimal(value)


def is_whole_cents(value: Decimal) -> bool:
    """Check that a value has no fractions of a cent (0.10 and 1E+3 do, 0.005 does not)"""
    if value.is_zero():
        return True
    return value.normalize().as_tuple().exponent >= CENTS.as_tuple().exponent


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    Accepts an optional sign, an optional leading currency symbol and
    comma thousands separators around a plain or exponent-form number,
    e.g. "-$1,234.50" or "1e3". Anything else is rejected.

    Args:
        value: String representation of number

    Returns:
        Decimal value

    Raises:
        ValueError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    clean_value = value.strip()
    sign = ""
    if clean_value.startswith(("+", "-")):
        sign, clean_value = clean_value[0], clean_value[1:]
    if clean_value and clean_value[0] in CURRENCY_SYMBOLS:
        clean_value = clean_value[1:]

    if "," in clean_value:
        if not _GROUPED_DIGITS.match(clean_value):
            raise ValueError(f"Cannot convert '{value}' to Decimal")
        clean_value = clean_value.replace(",", "")

    clean_value = sign + clean_value
    if not _NUMERIC_LITERAL.match(clean_value):
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    try:
        result = Decimal(clean_value)
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{value}' to Decimal") from None

    if not result.is_finite():
        raise ValueError(f"Cannot convert '{value}' to Decimal")
    return result
