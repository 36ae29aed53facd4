import math


def round_half_up(value: float) -> int:
    """Round like JavaScript's Math.round (halves go up), not banker's rounding."""
    return math.floor(value + 0.5)
