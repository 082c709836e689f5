"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from ledgerbook.domain.errors import ValidationError

CENT = Decimal("0.01")


def parse_amount(amount) -> Decimal:
    """Parse a monetary value into a 2-place Decimal.

    Accepts Decimals, ints and strings such as "123.45", "-123.45" or
    "$1,234.56"; commas are thousands separators and "(123.45)" is negative.
    Floats are converted through their string form so 0.1 stays 0.1.

    Raises:
        ValidationError: If the value cannot be parsed
    """
    if isinstance(amount, bool):
        raise ValidationError(f"Could not parse amount {amount!r}")
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, (int, float)):
        value = Decimal(str(amount))
    else:
        value = _parse_amount_string(str(amount) if amount is not None else "")

    if not value.is_finite():
        raise ValidationError(f"Amount must be a finite number, got {amount!r}")
    return value.quantize(CENT)


def _parse_amount_string(amount_str: str) -> Decimal:
    if not amount_str.strip():
        raise ValidationError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥]", "", amount_str).replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValidationError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount
