"""
Shared numeric helpers for the calculators.
"""

import math


def power(base: float, exponent: float) -> float:
    """
    Float exponentiation that returns math.inf on overflow instead of
    raising OverflowError.
    """
    try:
        return base ** exponent
    except OverflowError:
        return math.inf
