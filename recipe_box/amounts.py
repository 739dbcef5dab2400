"""
Ingredient amount parsing and display formatting.

Amounts are stored as strings in the dataset ("2", "0.5", "1/3"). Scaling
turns them into floats, and the result is rendered back into something a
cook would write ("1 1/2" rather than "1.5").
"""

import logging
import re
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Common cooking fractions, checked in order: first match within tolerance wins.
COMMON_FRACTIONS: Tuple[Tuple[float, str], ...] = (
    (0.0625, "1/16"),
    (0.083, "1/12"),
    (0.1, "1/10"),
    (0.111, "1/9"),
    (0.125, "1/8"),
    (0.143, "1/7"),
    (0.167, "1/6"),
    (0.1875, "3/16"),
    (0.2, "1/5"),
    (0.222, "2/9"),
    (0.25, "1/4"),
    (0.286, "2/7"),
    (0.3, "3/10"),
    (0.3125, "5/16"),
    (0.333, "1/3"),
    (0.375, "3/8"),
    (0.4, "2/5"),
    (0.4167, "5/12"),
    (0.429, "3/7"),
    (0.4375, "7/16"),
    (0.444, "4/9"),
    (0.5, "1/2"),
    (0.5625, "9/16"),
    (0.556, "5/9"),
    (0.571, "4/7"),
    (0.5833, "7/12"),
    (0.6, "3/5"),
    (0.625, "5/8"),
    (0.6667, "2/3"),
    (0.6875, "11/16"),
    (0.7, "7/10"),
    (0.714, "5/7"),
    (0.75, "3/4"),
    (0.778, "7/9"),
    (0.8, "4/5"),
    (0.8125, "13/16"),
    (0.833, "5/6"),
    (0.857, "6/7"),
    (0.875, "7/8"),
    (0.889, "8/9"),
    (0.9, "9/10"),
    (0.9167, "11/12"),
    (0.9375, "15/16"),
)

FRACTION_TOLERANCE = 0.01

# Leading decimal, e.g. "2.5" in "2.5 cups"
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)")


def _leading_float(text: str) -> float:
    match = _LEADING_NUMBER.match(text)
    if not match:
        return 0.0
    return float(match.group(0))


def parse_amount(amount: str) -> float:
    """
    Parse an ingredient amount into a number.

    Handles plain decimals ("2", "0.5") and simple fractions ("1/3").
    Mixed numbers ("1 1/2") are not a dataset format and parse as 0.

    Args:
        amount: Amount string from a recipe

    Returns:
        Parsed value, or 0.0 when the string cannot be parsed
    """
    if "/" in amount:
        numerator, _, denominator = amount.partition("/")
        try:
            value = float(numerator) / float(denominator)
        except (ValueError, ZeroDivisionError):
            logger.debug(f"Unparseable fraction amount: {amount!r}")
            return 0.0
        return value

    return _leading_float(amount)


def match_fraction(value: float) -> Optional[str]:
    """Return the first tabulated fraction within tolerance of value, if any."""
    for decimal, fraction in COMMON_FRACTIONS:
        if abs(value - decimal) < FRACTION_TOLERANCE:
            return fraction
    return None


def format_decimal(value: float) -> str:
    """Round to two places and drop trailing zeros (2.50 -> "2.5", 3.00 -> "3")."""
    text = f"{value:.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_amount(value: float) -> str:
    """
    Render a numeric amount the way a recipe would print it.

    Examples:
        0.5    -> "1/2"
        1.5    -> "1 1/2"
        2.0    -> "2"
        1.23   -> "1.23"
    """
    fraction = match_fraction(value)
    if fraction:
        return fraction

    if value >= 1:
        whole = int(value)
        fraction = match_fraction(value - whole)
        if fraction:
            return f"{whole} {fraction}" if whole > 0 else fraction

    return format_decimal(value)


def scale_amount(amount: str, scale_factor: float) -> str:
    """Parse, multiply, and re-render an amount string."""
    return format_amount(parse_amount(amount) * scale_factor)
