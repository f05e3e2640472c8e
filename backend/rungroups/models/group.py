"""
Group model - a bucket of comparable workouts and its derived stats.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from rungroups.models.quantity import Quantity
from rungroups.models.workout import Workout


class GroupType(str, Enum):
    """Dimension workouts are bucketed along."""
    DISTANCE = "distance"
    PACE = "pace"
    ALTITUDE = "altitude"


@dataclass
class StatItem:
    """One highlighted figure, optionally pointing at the workout it came from."""
    type: str  # pace, distance, duration, elevation
    label: str
    value: Quantity
    workout: Optional[Workout] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "label": self.label,
            "value": self.value.to_dict(),
            "workoutId": self.workout.source_id if self.workout else None,
        }


@dataclass
class StatGroup:
    """A titled section of stats, e.g. "Fastest" or "Cumulative"."""
    title: str
    items: List[StatItem] = field(default_factory=list)
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass
class ConsistencyResult:
    """How tightly the runs of a group cluster; score is 0-100."""
    score: int = 0
    mean: float = 0.0
    median: float = 0.0
    standard_deviation: float = 0.0
    coefficient_of_variation: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "mean": self.mean,
            "median": self.median,
            "standardDeviation": self.standard_deviation,
            "coefficientOfVariation": self.coefficient_of_variation,
        }


@dataclass
class Group:
    """
    Workouts sharing one bucket key.

    Built up while samples are aggregated, then finalized with averages,
    highlight/worst picks and stats. Rank fields stay None until
    assign_rank_to_groups runs.
    """
    key: str
    title: str
    unit: str
    suffix: str
    group_type: GroupType

    # The first run seen; seeds highlight/worst/most_recent
    seed: Workout

    runs: List[Workout] = field(default_factory=list)
    skipped: int = 0

    rank: Optional[int] = None
    rank_label: Optional[str] = None

    percentage_of_total_workouts: float = 0.0

    # Running totals
    total_distance: Quantity = field(default_factory=lambda: Quantity(0.0, "mi"))
    total_duration: Quantity = field(default_factory=lambda: Quantity(0.0, "s"))
    total_elevation: Quantity = field(default_factory=lambda: Quantity(0.0, "m"))
    total_variation: Quantity = field(default_factory=lambda: Quantity(0.0, "s"))

    # Averages, filled on finalize
    average_pace: Quantity = field(default_factory=lambda: Quantity(0.0, "min/mi"))
    average_duration: Quantity = field(default_factory=lambda: Quantity(0.0, "s"))
    average_distance: Quantity = field(default_factory=lambda: Quantity(0.0, "mi"))
    average_elevation: Quantity = field(default_factory=lambda: Quantity(0.0, "m"))
    pretty_pace: str = ""

    highlight: Optional[Workout] = None
    worst: Optional[Workout] = None
    most_recent: Optional[Workout] = None

    variant_distribution: List[float] = field(default_factory=list)
    consistency: ConsistencyResult = field(default_factory=ConsistencyResult)
    stats: List[StatGroup] = field(default_factory=list)

    def __post_init__(self):
        if self.highlight is None:
            self.highlight = self.seed
        if self.worst is None:
            self.worst = self.seed
        if self.most_recent is None:
            self.most_recent = self.seed

    @property
    def pretty_name(self) -> str:
        return f"{self.key} {self.unit}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the presentation layer."""
        return {
            "key": self.key,
            "title": self.title,
            "unit": self.unit,
            "suffix": self.suffix,
            "type": self.group_type.value,
            "rank": self.rank,
            "rankLabel": self.rank_label,
            "count": len(self.runs),
            "skipped": self.skipped,
            "percentageOfTotalWorkouts": self.percentage_of_total_workouts,
            "totalDistance": self.total_distance.to_dict(),
            "totalDuration": self.total_duration.to_dict(),
            "totalElevation": self.total_elevation.to_dict(),
            "totalVariation": self.total_variation.to_dict(),
            "averagePace": self.average_pace.to_dict(),
            "averageDuration": self.average_duration.to_dict(),
            "averageDistance": self.average_distance.to_dict(),
            "averageElevation": self.average_elevation.to_dict(),
            "prettyPace": self.pretty_pace,
            "highlight": self.highlight.to_dict() if self.highlight else None,
            "worst": self.worst.to_dict() if self.worst else None,
            "mostRecent": self.most_recent.to_dict() if self.most_recent else None,
            "variantDistribution": self.variant_distribution,
            "consistency": self.consistency.to_dict(),
            "stats": [stat.to_dict() for stat in self.stats],
            "runs": [run.to_dict() for run in self.runs],
        }


# Bucket key -> group
Groups = Dict[str, Group]
