"""Pure functions for currency parsing and formatting.

Amounts are shown in the Brazilian convention: "." groups thousands and ","
separates cents (e.g., "1.234,56"). Parsing is lenient: anything that is not
a number becomes zero instead of raising.
"""

import re

from duet.domain.models import Money

CURRENCY_SYMBOL = "R$"


def format_currency(value: float | str) -> str:
    """Format an amount with two decimals in the fixed locale convention.

    Args:
        value: Amount as a number or numeric string.

    Returns:
        Formatted string (e.g., "1.234,56"). Non-numeric strings format as "0,00".
    """
    try:
        number = float(value or 0)
    except ValueError:
        number = 0.0
    grouped = f"{number:,.2f}"
    return grouped.replace(",", "_").replace(".", ",").replace("_", ".")


def parse_currency(text: str) -> Money:
    """Parse a display-formatted amount back to a number.

    Args:
        text: Amount such as "1.234,56", "R$ 10,00" or "-5,5".

    Returns:
        Parsed amount, or 0.0 if the text is empty or not a number.
    """
    if not text:
        return Money(0.0)
    cleaned = text.replace(CURRENCY_SYMBOL, "").strip().replace(" ", "")
    cleaned = cleaned.replace(".", "").replace(",", ".")
    try:
        return Money(float(cleaned))
    except ValueError:
        return Money(0.0)


def format_input_currency(raw: str) -> str:
    """Reformat keyboard input as cents (e.g., "123456" -> "1.234,56").

    Every non-digit is dropped and the remaining digits are read as cents.

    Returns:
        Formatted amount, or an empty string when no digits were typed.
    """
    digits = re.sub(r"\D", "", raw)
    if not digits:
        return ""
    return format_currency(int(digits) / 100)


def format_money_display(amount: float, include_sign: bool = False) -> str:
    """Format money amount for display.

    Args:
        amount: Amount in major units.
        include_sign: Whether to include + or - sign.

    Returns:
        Formatted string (e.g., "-R$ 123,45" or "R$ 123,45").
    """
    formatted = f"{CURRENCY_SYMBOL} {format_currency(abs(amount))}"

    if amount < 0:
        return f"-{formatted}"
    return f"+{formatted}" if include_sign else formatted
