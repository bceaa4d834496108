"""Rounding helpers shared by every derived percentage and rate."""

import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from zero for non-negative values (2.5 -> 3).

    Python's built-in ``round`` uses banker's rounding, which would make
    percentages disagree with the numbers clients already display.
    """
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def percentage(count: int, total: int) -> int:
    """Integer share of ``count`` in ``total``; 0 when there is nothing to divide."""
    if total <= 0:
        return 0
    return int(round_half_up(count / total * 100))
