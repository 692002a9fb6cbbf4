"""
Numeric helpers shared by the scoring and simulation models
"""

import math


def round_half_away(value: float) -> int:
    """
    Round to the nearest integer, ties away from zero

    Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``),
    which would shift calibrated outputs at exact .5 boundaries.
    """
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp ``value`` into [lower, upper]"""
    return max(lower, min(upper, value))
