"""Token amount conversion and display formatting.

Conversions between human-decimal strings and integer smallest-unit strings
use string arithmetic only, so amounts with 18 fractional digits survive
untouched. Excess fractional digits are truncated, never rounded up: a
converted spend amount can only be lower than what the user typed.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

_DECIMAL_RE = re.compile(r"^(\d*)(?:\.(\d*))?$", re.ASCII)
_INTEGER_RE = re.compile(r"^\d+$", re.ASCII)
_FIRST_NUMBER_RE = re.compile(r"(\d+)", re.ASCII)

DEFAULT_TIME_ESTIMATE_SECONDS = 600

Numeric = Union[str, int, float, Decimal]


def is_plain_decimal(amount: str) -> bool:
    """True for an unsigned plain decimal string ("100", "0.5", "1.").

    Exponents, signs and digit separators are rejected, matching what
    to_smallest_unit can convert.
    """
    if not isinstance(amount, str):
        return False
    match = _DECIMAL_RE.match(amount.strip())
    return bool(match and (match.group(1) or match.group(2)))


def to_smallest_unit(amount: str, decimals: int) -> str:
    """Convert a human-decimal amount to smallest units.

    Args:
        amount: Decimal string (e.g., "1.5")
        decimals: Token precision

    Returns:
        Integer string (e.g., "1500000" for 6 decimals), or "0" for
        malformed input
    """
    if not isinstance(amount, str) or decimals < 0:
        return "0"

    match = _DECIMAL_RE.match(amount.strip())
    if not match:
        return "0"

    whole, fraction = match.group(1), match.group(2) or ""
    if not whole and not fraction:
        return "0"

    padded_fraction = fraction[:decimals].ljust(decimals, "0")
    return (whole + padded_fraction).lstrip("0") or "0"


def from_smallest_unit(amount: Union[str, int], decimals: int) -> str:
    """Convert a smallest-unit integer amount to a human-decimal string.

    Trailing fractional zeros are dropped ("1500000", 6 -> "1.5").
    Malformed input yields "0".
    """
    text = str(amount).strip()
    if not _INTEGER_RE.match(text) or decimals < 0:
        return "0"

    digits = text.lstrip("0") or "0"
    if decimals == 0:
        return digits

    padded = digits.rjust(decimals + 1, "0")
    whole = padded[:-decimals]
    fraction = padded[-decimals:].rstrip("0")
    return f"{whole}.{fraction}" if fraction else whole


def parse_decimal(value: Optional[Numeric]) -> Optional[Decimal]:
    """Parse a provider-supplied number, returning None if unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def format_amount(value: Optional[Numeric]) -> str:
    """Format an amount for display.

    Large amounts get fewer decimals and thousands separators, tiny amounts
    get more decimals, and anything below one millionth is shown in
    scientific notation.
    """
    number = parse_decimal(value)
    if number is None:
        return "0"

    num = float(number)
    if num == 0:
        return "0"
    if num < 0.000001:
        return f"{num:.4e}"
    if num < 0.0001:
        return f"{num:.6f}"
    if num < 1000:
        return f"{num:.4f}"
    if num < 1_000_000:
        return f"{num:,.2f}".rstrip("0").rstrip(".")
    return f"{num:,.0f}"


def parse_time_estimate(forecast: Optional[str]) -> int:
    """Turn a free-text minutes forecast (e.g., "10-60") into seconds."""
    if not forecast:
        return DEFAULT_TIME_ESTIMATE_SECONDS
    match = _FIRST_NUMBER_RE.search(str(forecast))
    return int(match.group(1)) * 60 if match else DEFAULT_TIME_ESTIMATE_SECONDS
