import math


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round with halves going up (2.5 -> 3, -2.5 -> -2).

    Scores and values are published with this rule; Python's round()
    would send 2.5 to 2.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
