"""
Store identifier helpers.
"""

from typing import Any, Optional


def to_positive_int(value: Any) -> Optional[int]:
    """
    Coerce a store identifier to a positive integer.

    Accepts ints, integral floats and numeric strings. Returns None for
    anything else (None, booleans, blanks, zero, negatives, "abc").
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            number = float(value)
        except ValueError:
            return None
    elif isinstance(value, (int, float)):
        number = value
    else:
        return None

    if number != number or number in (float("inf"), float("-inf")):
        return None

    result = int(number)
    return result if result > 0 else None
