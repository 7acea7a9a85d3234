# Price Dashboard - Formatters
"""
Display formatting for quote fields and chart labels.

Every formatter is total: missing, zero (where zero is meaningless) and
non-finite input renders as PLACEHOLDER instead of raising.

Numbers follow the en-IN conventions used by the dashboard:
- Indian digit grouping (12,34,567.89)
- Rupee symbol for currency values
- Lakh/crore abbreviations for large magnitudes
"""

import math
import logging
from datetime import datetime, timezone, tzinfo
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Any, Optional

logger = logging.getLogger(__name__)

PLACEHOLDER = "–"
CURRENCY_SYMBOL = "₹"

# Wide enough for any float at any requested precision
_DECIMAL_CONTEXT = Context(prec=400)

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Descending order, first match wins
MAGNITUDE_UNITS = (
    ("Tn", 1_000_000_000_000),
    ("Bn", 1_000_000_000),
    ("Cr", 10_000_000),
    ("L", 100_000),
)

VOLUME_UNITS = (
    ("M", 1_000_000),
    ("K", 1_000),
)


def _as_finite(value: Any) -> Optional[float]:
    """Return value as a finite float, or None if it is missing or invalid."""
    if value is None or isinstance(value, bool):
        return None
    try:
        num = float(value)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(num):
        return None
    return num


def is_present(value: Any) -> bool:
    """True for a finite, non-zero number."""
    return bool(_as_finite(value))


# ===========================================
# Number Primitives
# ===========================================

def to_fixed(value: float, digits: int = 2) -> str:
    """Format with a fixed number of decimals, rounding half away from zero.

    Rounding is applied to the exact binary value of the float, so
    to_fixed(1.005) is "1.00" while to_fixed(1.125) is "1.13".
    """
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP,
                                      context=_DECIMAL_CONTEXT)
    return f"{rounded:f}"


def format_coordinate(value: float) -> str:
    """Shortest decimal form of a coordinate; integral values drop '.0'."""
    num = float(value)
    if num.is_integer():
        return str(int(num))
    return repr(num)


def _group_indian(digits: str) -> str:
    """Group an unsigned integer string as 1,23,45,678."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    groups.append(tail)
    return ",".join(groups)


def group_number(value: float, min_fraction: int = 0, max_fraction: int = 3) -> str:
    """Indian-grouped number with between min and max fraction digits.

    Args:
        value: Number to format
        min_fraction: Minimum number of decimals kept
        max_fraction: Decimals the value is rounded to

    Returns:
        Grouped string such as "12,34,567.5"
    """
    fixed = to_fixed(abs(value), max_fraction)
    integer, _, fraction = fixed.partition(".")
    fraction = fraction.rstrip("0")
    if len(fraction) < min_fraction:
        fraction = fraction.ljust(min_fraction, "0")

    grouped = _group_indian(integer)
    if fraction:
        grouped = f"{grouped}.{fraction}"

    is_zero = not any(ch not in "0,." for ch in grouped)
    if value < 0 and not is_zero:
        return f"-{grouped}"
    return grouped


# ===========================================
# Quote Field Formatters
# ===========================================

def format_currency(value: Any) -> str:
    """Format a price in rupees with two decimals."""
    num = _as_finite(value)
    if num is None or num <= 0:
        return PLACEHOLDER
    return f"{CURRENCY_SYMBOL}{group_number(num, 2, 2)}"


def format_percent(value: Any) -> str:
    """Format a percentage with an explicit sign for non-negative values."""
    num = _as_finite(value)
    if num is None:
        return PLACEHOLDER
    if num == 0:
        num = 0.0
    sign = "+" if num >= 0 else ""
    return f"{sign}{to_fixed(num, 2)}%"


def format_change(value: Any) -> str:
    """Format an absolute price change with an explicit sign."""
    num = _as_finite(value)
    if num is None:
        return PLACEHOLDER
    if num == 0:
        num = 0.0
    sign = "+" if num >= 0 else ""
    return f"{sign}{to_fixed(num, 2)}"


def abbreviate_number(value: Any) -> str:
    """Abbreviate a large magnitude (market cap) to Tn/Bn/Cr/L."""
    num = _as_finite(value)
    if not num:
        return PLACEHOLDER
    for label, threshold in MAGNITUDE_UNITS:
        if num >= threshold:
            return f"{to_fixed(num / threshold, 2)} {label}"
    return group_number(num)


def format_volume(value: Any) -> str:
    """Abbreviate a traded volume to M/K."""
    num = _as_finite(value)
    if not num:
        return PLACEHOLDER
    for label, threshold in VOLUME_UNITS:
        if num >= threshold:
            return f"{to_fixed(num / threshold, 2)} {label}"
    return group_number(num)


def format_ratio(value: Any) -> str:
    """Format a valuation ratio such as P/E."""
    num = _as_finite(value)
    if not num:
        return PLACEHOLDER
    return to_fixed(num, 2)


def format_axis_price(value: float) -> str:
    """Price for a y-axis tick: grouped, exactly two decimals, no symbol."""
    return group_number(value, 2, 2)


# ===========================================
# Date Formatters
# ===========================================

def _to_datetime(epoch_seconds: float, tz: Optional[tzinfo]) -> datetime:
    return datetime.fromtimestamp(epoch_seconds, tz or timezone.utc)


def format_timestamp(value: Any, tz: Optional[tzinfo] = None) -> str:
    """Format epoch seconds as '15 Nov 2023, 03:43 am'.

    Args:
        value: Epoch seconds
        tz: Display time zone, UTC when omitted
    """
    num = _as_finite(value)
    if not num:
        return PLACEHOLDER
    try:
        dt = _to_datetime(num, tz)
    except (OverflowError, OSError, ValueError) as e:
        logger.debug(f"Timestamp {value!r} out of range: {e}")
        return PLACEHOLDER

    hour = dt.hour % 12 or 12
    meridiem = "am" if dt.hour < 12 else "pm"
    month = MONTH_ABBREVIATIONS[dt.month - 1]
    return f"{dt.day} {month} {dt.year}, {hour:02d}:{dt.minute:02d} {meridiem}"


def format_date_label(timestamp_ms: int, tz: Optional[tzinfo] = None) -> str:
    """Format epoch milliseconds as a short axis label, e.g. '15 Nov'."""
    num = _as_finite(timestamp_ms)
    if num is None:
        return PLACEHOLDER
    try:
        dt = _to_datetime(num / 1000, tz)
    except (OverflowError, OSError, ValueError) as e:
        logger.debug(f"Axis timestamp {timestamp_ms!r} out of range: {e}")
        return PLACEHOLDER
    return f"{dt.day} {MONTH_ABBREVIATIONS[dt.month - 1]}"
