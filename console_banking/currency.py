"""
Currency and Amount Handling Module

Monetary values are Decimal end to end. Money wraps a Decimal with its
currency for display; balances themselves are never rounded.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from dataclasses import dataclass
from enum import Enum
from typing import Union
import re

# High precision for interest arithmetic
getcontext().prec = 28

AmountLike = Union[Decimal, int, float, str]

# Optional sign, then digits with dot or comma separators
AMOUNT_PATTERN = re.compile(r'[+-]?[0-9.,]+')


class Currency(Enum):
    """ISO 4217 Currency Codes with precision and display symbol"""
    USD = ("USD", 2, "$")
    EUR = ("EUR", 2, "€")
    GBP = ("GBP", 2, "£")
    INR = ("INR", 2, "₹")
    JPY = ("JPY", 0, "¥")
    
    def __init__(self, code: str, precision: int, symbol: str):
        self.code = code
        self.precision = precision
        self.symbol = symbol
    
    @classmethod
    def from_code(cls, code: str) -> 'Currency':
        """Look up a currency by ISO code, case-insensitively"""
        try:
            return cls[code.strip().upper()]
        except KeyError:
            raise ValueError(f"Unsupported currency code: {code}") from None


def to_decimal(value: AmountLike) -> Decimal:
    """Convert a numeric value to Decimal without going through binary float"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Boolean is not a monetary amount")
    return Decimal(str(value))


@dataclass(frozen=True)
class Money:
    """
    Immutable money representation for display.
    The amount is rounded to the currency's precision on construction.
    """
    amount: Decimal
    currency: Currency
    
    def __post_init__(self):
        rounded = to_decimal(self.amount).quantize(
            Decimal('0.1') ** self.currency.precision,
            rounding=ROUND_HALF_UP
        )
        object.__setattr__(self, 'amount', rounded)
    
    def is_negative(self) -> bool:
        return self.amount < Decimal('0')
    
    def to_string(self) -> str:
        """Format for display, e.g. ``-$1,234.50``"""
        sign = "-" if self.is_negative() else ""
        magnitude = abs(self.amount)
        if self.currency.precision == 0:
            return f"{sign}{self.currency.symbol}{magnitude:,.0f}"
        return f"{sign}{self.currency.symbol}{magnitude:,.{self.currency.precision}f}"


def parse_amount(value: str) -> Decimal:
    """
    Parse user-entered text into a Decimal amount
    
    Accepts currency symbols, thousands separators and a comma decimal
    separator, e.g. ``"$1,250.50"`` or ``"12,5"``.
    
    Raises:
        ValueError: If the text is not a number
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")
    
    clean_value = re.sub(r'\s', '', value)
    for currency in Currency:
        clean_value = clean_value.replace(currency.symbol, '')
    
    if not AMOUNT_PATTERN.fullmatch(clean_value):
        raise ValueError(f"Cannot convert '{value}' to an amount")
    
    if ',' in clean_value and '.' in clean_value:
        # Both comma and dot - comma is the thousands separator
        clean_value = clean_value.replace(',', '')
    elif clean_value.count(',') == 1:
        whole, fraction = clean_value.split(',')
        if len(fraction) < 3:
            clean_value = f"{whole}.{fraction}"
        else:
            clean_value = whole + fraction
    elif ',' in clean_value:
        clean_value = clean_value.replace(',', '')
    
    try:
        result = Decimal(clean_value)
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{value}' to an amount") from None
    
    if not result.is_finite():
        raise ValueError(f"Cannot convert '{value}' to an amount")
    return result
