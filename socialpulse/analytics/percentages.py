"""Integer sentiment percentages that always sum to exactly 100."""
import math
from typing import Tuple


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percent_of(count: int, total: int) -> int:
    """Half-up rounded ``100 * count / total`` in integer arithmetic."""
    if total <= 0:
        return 0
    return (200 * count + total) // (2 * total)


def sentiment_percentages(positive: int, negative: int, total: int) -> Tuple[int, int, int]:
    """(positive%, negative%, neutral%) for sentiment counts out of ``total``.

    Positive and negative are rounded half-up and neutral is the remainder.
    When rounding pushes positive + negative past 100 the larger share gives
    up the excess, so the triple is non-negative and sums to 100.
    """
    if total <= 0:
        return 0, 0, 0

    positive_pct = percent_of(positive, total)
    negative_pct = percent_of(negative, total)

    excess = positive_pct + negative_pct - 100
    if excess > 0:
        if positive_pct >= negative_pct:
            positive_pct -= excess
        else:
            negative_pct -= excess

    return positive_pct, negative_pct, 100 - positive_pct - negative_pct
