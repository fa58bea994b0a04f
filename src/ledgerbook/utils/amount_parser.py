"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

_CURRENCY = re.compile(r"^(rp\.?|idr)\s*|[$€£¥]", re.IGNORECASE)


def parse_amount(value: "str | int | float | Decimal") -> Decimal:
    """Parse an amount into a Decimal.

    Handles:
    - numbers from spreadsheet cells (int, float, Decimal)
    - "1500000", "1,500,000.50"
    - "Rp 1,500,000" and "IDR 1500000"
    - "(2500)" as a negative amount

    Raises:
        ValueError: If the value is empty, not a number, or not finite
    """
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        amount = Decimal(str(value))
    else:
        text = str(value or "").strip()
        if not text:
            raise ValueError("Empty amount string")

        is_negative = text.startswith("(") and text.endswith(")")
        if is_negative:
            text = text[1:-1]
        text = _CURRENCY.sub("", text.strip()).replace(",", "").strip()

        try:
            amount = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"Could not parse amount '{value}'") from None
        if is_negative:
            amount = -amount

    if not amount.is_finite():
        raise ValueError(f"Amount '{value}' is not a finite number")
    return amount
