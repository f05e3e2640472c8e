"""
Group Aggregator - Accumulates workouts into keyed groups.
"""
from collections import Counter
from typing import Iterable

from rungroups.core.logging import get_logger
from rungroups.models.group import Group, Groups
from rungroups.models.quantity import (
    Quantity,
    average_quantity,
    format_pace,
    pace_from_distance_and_duration,
    sum_quantities,
)
from rungroups.models.workout import Workout
from rungroups.services.grouping.adapter import convert_length
from rungroups.services.grouping.statistics import calculate_consistency
from rungroups.services.grouping.strategies.base import GroupingStrategy

logger = get_logger(__name__)


def aggregate(
    samples: Iterable[Workout],
    strategy: GroupingStrategy,
    tolerance: float,
    group_size: float
) -> Groups:
    """
    Partition samples into groups keyed by bucket.

    Samples the strategy cannot bucket are left out entirely: they
    add nothing to membership, totals or percentages. The result is
    unranked and unordered.

    Args:
        samples: Workouts to group
        strategy: Bucketing strategy for the active dimension
        tolerance: Max distance from a bucket center to join it
        group_size: Bucket width

    Returns:
        Mapping of bucket key to finalized group
    """
    groups: Groups = {}
    skipped: Counter = Counter()
    excluded = 0

    for sample in samples:
        key = strategy.bucket(sample, tolerance, group_size)

        if key is None:
            excluded += 1
            nearest = strategy.nearest_key(sample, group_size)
            if nearest is not None:
                skipped[nearest] += 1
            continue

        group = groups.get(key)
        if group is None:
            group = groups[key] = _create_group(key, sample, strategy)

        _add_sample(group, sample)

    eligible = sum(len(group.runs) for group in groups.values())

    for key, group in groups.items():
        group.skipped = skipped.get(key, 0)
        _finalize_group(group, strategy, eligible)

    logger.debug(
        "Aggregated workouts",
        group_type=strategy.group_type.value,
        groups=len(groups),
        eligible=eligible,
        excluded=excluded,
    )

    return groups


def _create_group(key: str, sample: Workout, strategy: GroupingStrategy) -> Group:
    distance_unit = strategy.distance_unit(sample)
    elevation_unit = strategy.elevation_unit(sample)

    return Group(
        key=key,
        title=strategy.title(key, sample),
        unit=strategy.unit(key, sample),
        suffix=strategy.suffix(sample),
        group_type=strategy.group_type,
        seed=sample,
        total_distance=Quantity(0.0, distance_unit),
        average_distance=Quantity(0.0, distance_unit),
        average_pace=Quantity(0.0, f"min/{distance_unit}"),
        total_elevation=Quantity(0.0, elevation_unit),
        average_elevation=Quantity(0.0, elevation_unit),
    )


def _add_sample(group: Group, sample: Workout) -> None:
    group.runs.append(sample)

    if sample.total_distance is not None:
        group.total_distance = sum_quantities([group.total_distance, sample.total_distance])
    group.total_duration = sum_quantities([group.total_duration, sample.duration])
    if sample.total_elevation is not None:
        elevation = sample.total_elevation
        # Distance and pace groups can mix elevation units
        if elevation.unit != group.total_elevation.unit:
            elevation = convert_length(elevation, group.total_elevation.unit)
        group.total_elevation = sum_quantities([group.total_elevation, elevation])

    if sample.start_date > group.most_recent.start_date:
        group.most_recent = sample


def _finalize_group(group: Group, strategy: GroupingStrategy, eligible: int) -> None:
    """Derive averages, highlight/worst picks and stats from the totals."""
    count = len(group.runs)

    # Pace from totals so short runs don't skew the average
    group.average_pace = pace_from_distance_and_duration(group.total_distance, group.total_duration)
    group.pretty_pace = format_pace(group.average_pace)

    group.average_duration = average_quantity(group.total_duration, count)
    group.average_distance = average_quantity(group.total_distance, count)
    group.average_elevation = average_quantity(group.total_elevation, count)

    group.percentage_of_total_workouts = count / eligible * 100 if eligible else 0.0

    group.highlight = strategy.select_highlight(group.runs)
    group.worst = strategy.select_worst(group.runs)
    group.total_variation = strategy.variation(group)

    group.variant_distribution = [run.duration.value for run in group.runs]
    group.consistency = calculate_consistency(strategy.consistency_values(group.runs))

    group.stats = strategy.build_stats(group)
