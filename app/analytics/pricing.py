"""
Demand-based price multiplier.

This is a hand-tuned heuristic, not a model: a wider spread between the
busiest and quietest forecast periods raises the price, a busy peak raises it
further, a quiet trough lowers it, and the result is capped.
"""
from typing import Sequence

SPREAD_RATE = 0.01
HIGH_DEMAND_THRESHOLD = 15
HIGH_DEMAND_FACTOR = 1.2
LOW_DEMAND_THRESHOLD = 5
LOW_DEMAND_FACTOR = 0.9
MAX_MULTIPLIER = 2.0


def pricing_multiplier(series: Sequence[float]) -> float:
    if not series:
        raise ValueError("pricing needs at least one forecast value")

    highest, lowest = max(series), min(series)
    multiplier = 1 + (highest - lowest) * SPREAD_RATE
    if highest > HIGH_DEMAND_THRESHOLD:
        multiplier *= HIGH_DEMAND_FACTOR
    if lowest < LOW_DEMAND_THRESHOLD:
        multiplier *= LOW_DEMAND_FACTOR
    return min(multiplier, MAX_MULTIPLIER)
