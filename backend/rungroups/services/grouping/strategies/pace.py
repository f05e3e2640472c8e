"""
Pace Strategy - Groups workouts by average pace.

Runs at the same pace are compared on how far they went: the
highlight is the longest run, the worst the shortest.
"""
from typing import List, Optional

from rungroups.models.group import Group, GroupType, StatGroup, StatItem
from rungroups.models.quantity import Quantity, absolute_difference
from rungroups.models.workout import Workout
from rungroups.services.grouping.strategies.base import (
    GroupingStrategy,
    pick_extreme,
    quantity_value,
)


class PaceStrategy(GroupingStrategy):
    """Bucket on average pace, e.g. whole-minute buckets with 30 s tolerance."""

    group_type = GroupType.PACE

    def extract_value(self, sample: Workout) -> Optional[Quantity]:
        return sample.average_pace

    def accepts(self, sample: Workout) -> bool:
        # Zero-distance workouts carry meaningless paces
        if sample.total_distance is None or sample.total_distance.value <= 0:
            return False
        return sample.average_pace is not None and sample.average_pace.value > 0

    def unit(self, key: str, sample: Workout) -> str:
        if sample.average_pace is not None:
            return sample.average_pace.unit
        return f"min/{self.distance_unit(sample)}"

    def title(self, key: str, sample: Workout) -> str:
        return f"{key} {self.unit(key, sample)}"

    def suffix(self, sample: Workout) -> str:
        return "'"

    def select_highlight(self, runs: List[Workout]) -> Workout:
        return pick_extreme(runs, quantity_value("total_distance"), highest=True)

    def select_worst(self, runs: List[Workout]) -> Workout:
        return pick_extreme(runs, quantity_value("total_distance"), highest=False)

    def variation(self, group: Group) -> Quantity:
        return absolute_difference(
            group.highlight.total_distance,
            group.worst.total_distance,
            group.total_distance.unit,
        )

    def consistency_values(self, runs: List[Workout]) -> List[float]:
        return [run.total_distance.value for run in runs if run.total_distance is not None]

    def build_stats(self, group: Group) -> List[StatGroup]:
        name = group.pretty_name
        highlight, worst = group.highlight, group.worst

        return [
            StatGroup(
                title="Longest",
                description=f"Your longest run at {name}",
                items=[
                    StatItem("distance", "Distance", highlight.total_distance, highlight),
                    StatItem("duration", "Time", highlight.duration, highlight),
                    StatItem("pace", "Pace", highlight.average_pace, highlight),
                ],
            ),
            StatGroup(
                title="Shortest",
                description=f"Your shortest run at {name}",
                items=[
                    StatItem("distance", "Distance", worst.total_distance, worst),
                    StatItem("duration", "Time", worst.duration, worst),
                    StatItem("pace", "Pace", worst.average_pace, worst),
                ],
            ),
            StatGroup(
                title="Cumulative",
                description=f"Cumulative stats for {name}",
                items=[
                    StatItem("distance", "Cumulative Distance", group.total_distance),
                    StatItem("duration", "Cumulative Duration", group.total_duration),
                ],
            ),
        ]
