"""
Dimension-specific bucketing strategies.

Each strategy turns a workout into a bucket key and knows how to
pick highlights and build stats for the groups it produces.
"""
from rungroups.services.grouping.strategies.base import GroupingStrategy
from rungroups.services.grouping.strategies.altitude import AltitudeStrategy
from rungroups.services.grouping.strategies.distance import DistanceStrategy
from rungroups.services.grouping.strategies.pace import PaceStrategy

__all__ = [
    "GroupingStrategy",
    "AltitudeStrategy",
    "DistanceStrategy",
    "PaceStrategy",
]
