"""
Money Utilities - Safe Decimal operations for monetary values.

Prices are stored and summed unrounded; rounding to two decimals happens
only when a value is formatted for display.
"""
import re
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable, Union

# Display precision (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

# Everything except digits and the decimal point is dropped from price labels
_PRICE_NOISE = re.compile(r"[^0-9.]")
# Longest leading decimal number, the way JavaScript parseFloat reads "1.2.3" as 1.2
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")

Number = Union[str, int, float, Decimal]


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        # Floats go through str() so 19.99 stays 19.99
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def parse_decimal(value: Number) -> Decimal:
    """
    Strict variant of to_decimal for data read back from storage.

    Raises:
        ValueError: If the value is not a finite number (bools are rejected too)
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    try:
        result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValueError(f"Not a number: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def parse_price(value: Number) -> Decimal:
    """
    Parse a price that may arrive as a display label (e.g. "$1,299.99").

    Numbers pass through to_decimal. Strings are stripped of everything but
    digits and the decimal point, then the leading number is taken, so
    "1.2.3" parses as 1.2.

    Raises:
        ValueError: If nothing numeric is left after stripping
    """
    if not isinstance(value, str):
        return to_decimal(value)

    match = _LEADING_NUMBER.match(_PRICE_NOISE.sub("", value))
    if match is None:
        raise ValueError(f"Unparseable price: {value!r}")
    return Decimal(match.group())


def round_money(value: Number) -> Decimal:
    """Round monetary value to display precision."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def format_money(value: Number, currency: str = "USD") -> str:
    """
    Format monetary value as two-decimal fixed point with currency symbol.

    Args:
        value: Value to format
        currency: Currency code (USD, EUR, GBP)

    Returns:
        Formatted string, e.g. "$99.95"
    """
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    formatted = f"{round_money(value):.2f}"

    if currency in CURRENCY_SYMBOLS:
        return f"{symbol}{formatted}"
    return f"{formatted} {symbol}"


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def line_total(price: Number, quantity: int) -> Decimal:
    """Unrounded price × quantity for one cart line."""
    return multiply(price, quantity)


def sum_money(values: Iterable[Number]) -> Decimal:
    """Sum monetary values, starting from Decimal zero."""
    return sum((to_decimal(v) for v in values), Decimal("0"))
