"""
Shared formatting helpers for amounts shown to and typed by players.
"""

import re
from decimal import Decimal

from config import CURRENCY_SYMBOL, MAX_BALANCE

MINOR_UNITS = 100  # two-decimal currency convention

# Optional sign, digits, then up to two decimals after '.' or ','
AMOUNT_PATTERN = re.compile(r"^-?[0-9]+(?:[.,][0-9]{1,2})?$")


def format_amount(amount: int) -> str:
    """
    Format minor units with German grouping (e.g. 123456 -> '1.234,56').
    """
    sign = "-" if amount < 0 else ""
    whole, cents = divmod(abs(amount), MINOR_UNITS)
    grouped = f"{whole:,}".replace(",", ".")
    return f"{sign}{grouped},{cents:02d}"


def format_currency(amount: int, symbol: str = CURRENCY_SYMBOL) -> str:
    """Return the amount with the currency symbol (e.g. '$1.234,56')."""
    return f"{symbol}{format_amount(amount)}"


def parse_amount(raw: str) -> int:
    """
    Parse a typed amount into minor units.

    Accepts '12', '12.5', '12.50' and the comma decimal separator ('12,50').
    Exponents, digit separators and more than two decimals are rejected. The
    sign is kept so that callers can report negative amounts as invalid.

    Raises:
        ValueError: If the text is not a plain decimal or exceeds MAX_BALANCE
    """
    text = raw.strip()
    if not AMOUNT_PATTERN.match(text):
        raise ValueError(f"Not an amount: {raw!r}")
    minor = int(Decimal(text.replace(",", ".")) * MINOR_UNITS)
    if abs(minor) > MAX_BALANCE:
        raise ValueError(f"Amount too large: {raw!r}")
    return minor
