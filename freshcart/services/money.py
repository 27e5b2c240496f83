"""
Money Utilities - Safe Decimal operations for monetary values.

Prices and totals stay Decimal end to end; rounding happens only when a
value is formatted for display.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal]

# Display precision (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

DEFAULT_CURRENCY = "INR"

CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


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
        # Go through str for floats to avoid binary artifacts (0.1 -> 0.1000000000000000055...)
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def parse_price(value: Union[Number, None]) -> Decimal:
    """
    Strictly parse a user-entered price.

    Unlike ``to_decimal`` this never defaults: blank, non-numeric, NaN and
    infinite input raise ValueError. Sign is not checked here.
    """
    if value is None or isinstance(value, bool):
        raise ValueError("price is required")

    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError("price is required")

    try:
        result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValueError(f"price is not a number: {value!r}") from e

    if not result.is_finite():
        raise ValueError(f"price is not a finite number: {value!r}")

    return result


def parse_stored_price(value: Union[Number, None]) -> Decimal:
    """Parse a price read back from a snapshot; must be a finite number >= 0."""
    price = parse_price(value)
    if price < 0:
        raise ValueError(f"price cannot be negative: {value!r}")
    return price


def round_money(value: Number) -> Decimal:
    """Round a monetary value to display precision."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def format_money(value: Number, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Format monetary value with currency symbol.

    Args:
        value: Value to format
        currency: Currency code (INR, USD, EUR, GBP)

    Returns:
        Formatted string, e.g. "₹80.00"
    """
    symbol = CURRENCY_SYMBOLS.get(currency)
    formatted = f"{round_money(value):,.2f}"
    if symbol is None:
        return f"{formatted} {currency}"
    return f"{symbol}{formatted}"


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for external APIs.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)
