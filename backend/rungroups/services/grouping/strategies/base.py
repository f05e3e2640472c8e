"""
Base Strategy - Abstract interface for dimension-specific bucketing.
"""
import math
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from rungroups.core.config import settings
from rungroups.core.logging import get_logger
from rungroups.models.group import Group, GroupType, StatGroup
from rungroups.models.quantity import Quantity
from rungroups.models.workout import Workout

logger = get_logger(__name__)

# Absorbs float noise such as 3.35 - 3.0 == 0.3500000000000001
_TOLERANCE_EPSILON = 1e-9


class GroupingStrategy(ABC):
    """
    Abstract base class for bucketing workouts along one dimension.

    Subclasses decide:
    - Which quantity of a workout is bucketed (and which workouts qualify)
    - How a bucket is titled
    - Which direction is "better" when picking highlight and worst runs
    - Which stats describe a finished group
    """

    group_type: GroupType = GroupType.DISTANCE

    def __init__(
        self,
        default_tolerance: Optional[float] = None,
        default_group_size: Optional[float] = None
    ):
        tolerance, group_size = settings.get_grouping_defaults(self.group_type.value)
        self.default_tolerance = default_tolerance if default_tolerance is not None else tolerance
        self.default_group_size = default_group_size if default_group_size is not None else group_size

    # ========================================
    # Bucketing
    # ========================================

    @abstractmethod
    def extract_value(self, sample: Workout) -> Optional[Quantity]:
        """Return the quantity this dimension buckets on, or None."""
        pass

    def accepts(self, sample: Workout) -> bool:
        """Dimension-specific filter; rejected samples are never grouped."""
        return True

    def locate(self, sample: Workout, group_size: float) -> Optional[tuple[float, float]]:
        """
        Find the nearest bucket center for a sample.

        Returns:
            (value, center) or None if the sample has no usable quantity
        """
        quantity = self.extract_value(sample)
        if quantity is None or quantity.value is None or math.isnan(quantity.value):
            return None
        if not self.accepts(sample):
            return None

        # Halves round up
        center = math.floor(quantity.value / group_size + 0.5) * group_size
        return quantity.value, round(center, 6)

    def bucket(self, sample: Workout, tolerance: float, group_size: float) -> Optional[str]:
        """
        Map a sample to its bucket key.

        The value is rounded to the nearest multiple of group_size. It
        joins that bucket only when it lies within tolerance of the
        center; anything further out is left ungrouped.

        Returns:
            Bucket key (stringified center) or None if excluded
        """
        located = self.locate(sample, group_size)
        if located is None:
            return None

        value, center = located
        if abs(value - center) > tolerance + _TOLERANCE_EPSILON:
            logger.debug(
                "Sample outside tolerance, skipping",
                group_type=self.group_type.value,
                value=value,
                nearest=center,
                tolerance=tolerance,
            )
            return None

        return format_bucket_key(center)

    def nearest_key(self, sample: Workout, group_size: float) -> Optional[str]:
        """Key of the nearest bucket regardless of tolerance."""
        located = self.locate(sample, group_size)
        if located is None:
            return None
        return format_bucket_key(located[1])

    # ========================================
    # Formatting
    # ========================================

    @abstractmethod
    def unit(self, key: str, sample: Workout) -> str:
        pass

    @abstractmethod
    def title(self, key: str, sample: Workout) -> str:
        pass

    def suffix(self, sample: Workout) -> str:
        return self.unit("", sample)

    def distance_unit(self, sample: Workout) -> str:
        """Distance unit the group's totals are kept in."""
        if sample.total_distance is not None:
            return sample.total_distance.unit
        if sample.average_pace is not None and "/" in sample.average_pace.unit:
            return sample.average_pace.unit.split("/", 1)[1]
        return settings.DEFAULT_DISTANCE_UNIT

    def elevation_unit(self, sample: Workout) -> str:
        """Elevation unit the group's totals are kept in."""
        if sample.total_elevation is not None and sample.total_elevation.unit:
            return sample.total_elevation.unit
        return "m"

    # ========================================
    # Group finalization
    # ========================================

    @abstractmethod
    def select_highlight(self, runs: List[Workout]) -> Workout:
        """Best run of a group."""
        pass

    @abstractmethod
    def select_worst(self, runs: List[Workout]) -> Workout:
        """Worst run of a group."""
        pass

    @abstractmethod
    def variation(self, group: Group) -> Quantity:
        """Spread between the highlight and worst runs."""
        pass

    def consistency_values(self, runs: List[Workout]) -> List[float]:
        """Values the group's consistency score is measured on."""
        return [run.duration.value for run in runs]

    @abstractmethod
    def build_stats(self, group: Group) -> List[StatGroup]:
        pass


def format_bucket_key(center: float) -> str:
    """5.0 -> "5", 5.5 -> "5.5"."""
    if float(center).is_integer():
        return str(int(center))
    return f"{center:.6f}".rstrip("0").rstrip(".")


def pick_extreme(
    runs: List[Workout],
    metric: Callable[[Workout], Optional[float]],
    highest: bool
) -> Workout:
    """
    Single pass for the run with the highest (or lowest) metric.

    Ties go to the earliest recorded run, then to the first one listed.
    Runs without the metric are passed over; if none has it the first
    run is returned.
    """
    chosen: Optional[Workout] = None
    chosen_value: Optional[float] = None

    for run in runs:
        value = metric(run)
        if value is None:
            continue

        if chosen is None:
            chosen, chosen_value = run, value
            continue

        better = value > chosen_value if highest else value < chosen_value
        if better or (value == chosen_value and run.start_date < chosen.start_date):
            chosen, chosen_value = run, value

    return chosen if chosen is not None else runs[0]


def quantity_value(attribute: str) -> Callable[[Workout], Optional[float]]:
    """Metric reading a Quantity attribute of a workout."""
    def _metric(run: Workout) -> Optional[float]:
        quantity = getattr(run, attribute)
        return quantity.value if quantity is not None else None
    return _metric
