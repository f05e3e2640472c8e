"""
Basic statistics for describing how consistent a group's runs are.
"""
import math
import statistics
from typing import List, Sequence

from rungroups.models.group import ConsistencyResult


def calculate_mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty sequence."""
    if not values:
        return 0.0
    return statistics.mean(values)


def calculate_median(values: Sequence[float]) -> float:
    """Median, 0 for an empty sequence."""
    if not values:
        return 0.0
    return statistics.median(values)


def calculate_standard_deviation(values: Sequence[float]) -> float:
    """Sample standard deviation (n-1), 0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return statistics.stdev(values)


def calculate_coefficient_of_variation(values: Sequence[float]) -> float:
    """Standard deviation relative to the mean; 0 when undefined."""
    if len(values) < 2:
        return 0.0

    mean = calculate_mean(values)
    if mean == 0:
        return 0.0

    return calculate_standard_deviation(values) / mean


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def calculate_consistency(values: List[float]) -> ConsistencyResult:
    """
    Score how consistent a set of values is, 0-100.

    The coefficient of variation is mapped through an exponential decay
    so small spreads still separate: CV 0 -> 100, CV 0.1 -> ~37.

    Args:
        values: Numeric values (durations, distances, ...) of a group's runs

    Returns:
        ConsistencyResult with the score and the measures behind it
    """
    if not values:
        return ConsistencyResult()

    if len(values) == 1:
        return ConsistencyResult(score=100, mean=values[0], median=values[0])

    cv = calculate_coefficient_of_variation(values)
    score = clamp(100 * math.exp(-10 * cv), 0, 100)

    return ConsistencyResult(
        score=int(round(score)),
        mean=calculate_mean(values),
        median=calculate_median(values),
        standard_deviation=calculate_standard_deviation(values),
        coefficient_of_variation=cv,
    )
