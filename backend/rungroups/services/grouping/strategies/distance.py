"""
Distance Strategy - Groups workouts by total distance.

Runs of roughly the same length are compared on pace and time,
so the highlight is the fastest run and the worst the slowest.
"""
from typing import List, Optional

from rungroups.models.group import Group, GroupType, StatGroup, StatItem
from rungroups.models.quantity import Quantity, absolute_difference
from rungroups.models.workout import Workout
from rungroups.services.grouping.strategies.base import GroupingStrategy, pick_extreme


def _pace_value(run: Workout) -> Optional[float]:
    if run.average_pace is None or run.average_pace.value <= 0:
        return None
    return run.average_pace.value


class DistanceStrategy(GroupingStrategy):
    """Bucket on total distance, e.g. 1 mile buckets with 0.25 mile tolerance."""

    group_type = GroupType.DISTANCE

    def extract_value(self, sample: Workout) -> Optional[Quantity]:
        return sample.total_distance

    def unit(self, key: str, sample: Workout) -> str:
        return self.distance_unit(sample)

    def title(self, key: str, sample: Workout) -> str:
        return f"{key} {self.unit(key, sample)}"

    def select_highlight(self, runs: List[Workout]) -> Workout:
        return pick_extreme(runs, _pace_value, highest=False)

    def select_worst(self, runs: List[Workout]) -> Workout:
        return pick_extreme(runs, _pace_value, highest=True)

    def variation(self, group: Group) -> Quantity:
        # Time between the fastest and slowest effort
        return absolute_difference(group.worst.duration, group.highlight.duration, "s")

    def build_stats(self, group: Group) -> List[StatGroup]:
        name = group.pretty_name
        highlight, worst = group.highlight, group.worst

        stats = []
        if highlight.average_pace is not None:
            stats.append(StatGroup(
                title="Fastest",
                description=f"Your best performance for {name}",
                items=[
                    StatItem("pace", "Pace", highlight.average_pace, highlight),
                    StatItem("duration", "Time", highlight.duration, highlight),
                ],
            ))
        if worst.average_pace is not None:
            stats.append(StatGroup(
                title="Slowest",
                description=f"Your worst performance for {name}",
                items=[
                    StatItem("pace", "Pace", worst.average_pace, worst),
                    StatItem("duration", "Time", worst.duration, worst),
                ],
            ))

        stats.append(StatGroup(
            title="Cumulative",
            description=f"Cumulative stats for {name}",
            items=[
                StatItem("distance", "Cumulative Distance", group.total_distance),
                StatItem("duration", "Cumulative Duration", group.total_duration),
                StatItem("elevation", "Cumulative Elevation", group.total_elevation),
            ],
        ))
        return stats
