"""Conversions between raw integer token amounts and human decimal strings."""
from __future__ import annotations

import re

from .errors import MalformedAmount

_AMOUNT_RE = re.compile(r"^\d*(\.\d*)?$")


def format_units(value: int, decimals: int) -> str:
    """Format a raw integer amount as a decimal string.

    Examples:
        format_units(1500000, 6) → "1.5"
        format_units(10**18, 18) → "1"

    Notes:
        - Pure integer arithmetic, exact for arbitrarily large values.
        - Trailing zeros of the fraction are stripped.
    """
    divisor = 10**decimals
    integer_part, fractional_part = divmod(value, divisor)

    if fractional_part == 0:
        return str(integer_part)

    fractional = str(fractional_part).rjust(decimals, "0").rstrip("0")
    return f"{integer_part}.{fractional}"


def parse_units(value: str, decimals: int) -> int:
    """Parse a decimal string into a raw integer amount.

    The fraction is padded or truncated to exactly ``decimals`` digits.

    Raises:
        MalformedAmount: If ``value`` is not a non-negative decimal number.
    """
    text = str(value).strip()
    if not text or text == "." or not _AMOUNT_RE.match(text):
        raise MalformedAmount(value)

    integer_part, _, fractional_part = text.partition(".")
    fractional = fractional_part.ljust(decimals, "0")[:decimals]
    return int((integer_part or "0") + fractional)


def format_usd(value: float) -> str:
    """Format a USD amount as ``$12,345.67``."""
    return f"${value:,.2f}"


def parse_usd(text: str) -> float:
    """Inverse of :func:`format_usd`; unparsable text is 0.0."""
    try:
        return float(text.replace("$", "").replace(",", ""))
    except (AttributeError, ValueError):
        return 0.0
