"""Lenient numeric parsing for nutrient values.

Values arrive as free text from the user or as loosely typed JSON from the
analysis service ("12", "12.5g", "", None). Anything that does not start
with a number is treated as 0, matching how the mobile form behaves.
"""

import math
import re
from typing import Any, Optional

_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_leading_float(value: Any) -> Optional[float]:
    """
    Parse the leading numeric prefix of a value.

    Args:
        value: str, int, float or anything else

    Returns:
        Parsed float, or None when no number can be read

    Example:
        >>> parse_leading_float("12.5g")
        12.5
        >>> parse_leading_float("abc") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return float(value)

    if not isinstance(value, str):
        return None

    match = _LEADING_NUMBER.match(value.strip())
    if not match:
        return None
    return float(match.group(0))


def coerce_nutrient(value: Any) -> float:
    """
    Coerce a reported or typed value to a non-negative finite float.

    Empty, non-numeric, non-finite and negative values become 0.0.

    Example:
        >>> coerce_nutrient("50")
        50.0
        >>> coerce_nutrient("")
        0.0
    """
    parsed = parse_leading_float(value)
    if parsed is None or not math.isfinite(parsed) or parsed < 0:
        return 0.0
    return parsed


def coerce_optional_nutrient(value: Any) -> Optional[float]:
    """Like coerce_nutrient, but keeps "not provided" (None or blank) as None."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return coerce_nutrient(value)
