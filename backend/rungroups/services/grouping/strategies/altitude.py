"""
Altitude Strategy - Groups workouts by elevation gain.
"""
from typing import List, Optional

from rungroups.models.group import Group, GroupType, StatGroup, StatItem
from rungroups.models.quantity import Quantity, absolute_difference, new_quantity
from rungroups.models.workout import Workout
from rungroups.services.grouping.strategies.base import (
    GroupingStrategy,
    pick_extreme,
    quantity_value,
)


class AltitudeStrategy(GroupingStrategy):
    """
    Bucket on total elevation gain, e.g. 100 m buckets with 50 m tolerance.

    Flat workouts (no recorded gain) are left out.
    """

    group_type = GroupType.ALTITUDE

    def extract_value(self, sample: Workout) -> Optional[Quantity]:
        return sample.total_elevation

    def accepts(self, sample: Workout) -> bool:
        return sample.total_elevation is not None and sample.total_elevation.value > 0

    def unit(self, key: str, sample: Workout) -> str:
        if sample.total_elevation is not None:
            return sample.total_elevation.unit
        return "m"

    def title(self, key: str, sample: Workout) -> str:
        return f"{key}{self.unit(key, sample)} elevation"

    def select_highlight(self, runs: List[Workout]) -> Workout:
        return pick_extreme(runs, quantity_value("total_elevation"), highest=True)

    def select_worst(self, runs: List[Workout]) -> Workout:
        return pick_extreme(runs, quantity_value("total_elevation"), highest=False)

    def variation(self, group: Group) -> Quantity:
        return absolute_difference(
            group.highlight.total_elevation,
            group.worst.total_elevation,
            group.total_elevation.unit,
        )

    def build_stats(self, group: Group) -> List[StatGroup]:
        highlight, worst = group.highlight, group.worst
        distance_unit = group.total_distance.unit

        if group.total_distance.value > 0:
            per_distance = group.total_elevation.value / group.total_distance.value
        else:
            per_distance = 0.0

        fastest = pick_extreme(
            group.runs,
            lambda run: run.average_pace.value if run.average_pace and run.average_pace.value > 0 else None,
            highest=False,
        )

        stats = [
            StatGroup(
                title="Elevation",
                items=[
                    StatItem("elevation", "Highest Elevation Gain", highlight.total_elevation, highlight),
                    StatItem("elevation", "Lowest Elevation Gain", worst.total_elevation, worst),
                    StatItem(
                        "elevation",
                        "Avg Elevation/Distance",
                        new_quantity(per_distance, f"{group.total_elevation.unit}/{distance_unit}"),
                    ),
                ],
            ),
        ]

        pace_items = []
        if fastest.average_pace is not None:
            pace_items.append(StatItem("pace", "Best Pace", fastest.average_pace, fastest))
        pace_items.append(StatItem("pace", "Average Pace", group.average_pace))

        stats.append(StatGroup(title="Pace", items=pace_items))
        stats.append(StatGroup(
            title="Overview",
            items=[StatItem("distance", "Total Distance", group.total_distance)],
        ))
        return stats
