from typing import List, Sequence
from flightproxy.types import FlightOption

PRICE_WEIGHT = 0.5
DURATION_WEIGHT = 0.5


def balanced_scores(options: Sequence[FlightOption]) -> List[float]:
    """
    Equal-weighted price/duration score per option, lower is better.

    Each dimension is shifted by its minimum and divided by max(1, spread),
    so a spread under one unit is not stretched to a full 0..1 scale.
    """
    if not options:
        return []
    prices = [o.price for o in options]
    durations = [o.total_duration_min for o in options]
    min_p, max_p = min(prices), max(prices)
    min_d, max_d = min(durations), max(durations)
    p_range = max(1, max_p - min_p)
    d_range = max(1, max_d - min_d)
    return [
        PRICE_WEIGHT * (o.price - min_p) / p_range
        + DURATION_WEIGHT * (o.total_duration_min - min_d) / d_range
        for o in options
    ]


def rank_options(options: Sequence[FlightOption], optimize: str) -> List[FlightOption]:
    # sorted() is stable, so ties keep upstream order
    if optimize == "shortest":
        return sorted(options, key=lambda x: x.total_duration_min)
    if optimize == "cheapest":
        return sorted(options, key=lambda x: x.price)

    scores = balanced_scores(options)
    order = sorted(range(len(options)), key=lambda i: scores[i])
    return [options[i] for i in order]
