"""
Numeric helpers shared by scoring and analytics
"""
import math


def percent(part: int, whole: int) -> int:
    """
    Whole-number percentage of `part` over `whole`, rounded half up

    Returns 0 when `whole` is 0. Halves round up (12.5 -> 13).
    """
    if whole <= 0:
        return 0
    return int(math.floor(part / whole * 100 + 0.5))
