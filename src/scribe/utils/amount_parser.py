"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

CENTS_PER_UNIT = Decimal(100)


def parse_amount(amount: str | int | Decimal) -> Decimal:
    """Parse an amount in major currency units into a Decimal.

    Handles various formats:
    - "123.45"
    - "€123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)
    - int and Decimal values (as decoded from JSON with Decimal floats)

    Args:
        amount: Amount string or number

    Returns:
        Decimal amount

    Raises:
        ValueError: If the amount cannot be parsed
    """
    if isinstance(amount, bool):
        raise ValueError(f"Could not parse amount '{amount}'")
    if isinstance(amount, (int, Decimal)):
        value = Decimal(amount)
        if not value.is_finite():
            raise ValueError(f"Could not parse amount '{amount}'")
        return value
    if not isinstance(amount, str) or not amount.strip():
        raise ValueError("Empty amount string")

    amount_str = amount.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and thousands separators
    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        value = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount}'")
    if not value.is_finite():
        raise ValueError(f"Could not parse amount '{amount}'")
    return -value if is_negative else value


def parse_amount_cents(amount: str | int | Decimal) -> int:
    """Parse an amount in major units into integer cents.

    Raises:
        ValueError: If the amount cannot be parsed or has fractional cents
    """
    cents = parse_amount(amount) * CENTS_PER_UNIT
    if cents != cents.to_integral_value():
        raise ValueError(f"Amount '{amount}' has fractional cents")
    return int(cents)


def format_cents(cents: int) -> str:
    """Format integer cents as a major-unit amount, e.g. 3774850 -> "37748.50"."""
    sign = "-" if cents < 0 else ""
    units, remainder = divmod(abs(cents), 100)
    return f"{sign}{units}.{remainder:02d}"
