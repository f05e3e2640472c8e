"""
Grouping Engine - Dispatches workouts to a bucketing strategy.

Orchestrates:
- Strategy selection based on grouping dimension
- Tolerance / group size validation
- Aggregation, and optionally ranking and ordering
"""
import math
from typing import Any, Dict, List, Optional, Sequence, Union

from rungroups.core.exceptions import GroupingConfigError
from rungroups.core.logging import get_logger, log_timing
from rungroups.models.group import Groups, GroupType
from rungroups.models.workout import Workout
from rungroups.services.grouping.adapter import get_adapter
from rungroups.services.grouping.aggregator import aggregate
from rungroups.services.grouping.ranking import (
    assign_rank_to_groups,
    sort_groups_by_key_in_ascending,
)
from rungroups.services.grouping.strategies import (
    AltitudeStrategy,
    DistanceStrategy,
    GroupingStrategy,
    PaceStrategy,
)

logger = get_logger(__name__)


def validate_grouping_config(tolerance: Any, group_size: Any) -> None:
    """
    Reject tolerances and group sizes that would poison bucket keys.

    Raises:
        GroupingConfigError: If either value is not a finite number > 0
    """
    for field_name, value in (("tolerance", tolerance), ("group_size", group_size)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise GroupingConfigError(field_name, value)
        if math.isnan(value) or math.isinf(value) or value <= 0:
            raise GroupingConfigError(field_name, value)


class GroupingEngine:
    """
    Main grouping engine.

    Usage:
        engine = GroupingEngine()
        groups = engine.group(workouts, GroupType.DISTANCE, tolerance=0.25, group_size=1.0)
    """

    def __init__(self):
        # Initialize strategies
        self._strategies: Dict[GroupType, GroupingStrategy] = {
            GroupType.DISTANCE: DistanceStrategy(),
            GroupType.PACE: PaceStrategy(),
            GroupType.ALTITUDE: AltitudeStrategy(),
        }

        # Unknown dimensions group by distance
        self._default_strategy = self._strategies[GroupType.DISTANCE]

    def get_strategy(self, group_type: Union[GroupType, str, None]) -> GroupingStrategy:
        """Get strategy for a grouping dimension."""
        try:
            resolved = GroupType(group_type.lower() if isinstance(group_type, str) else group_type)
        except ValueError:
            logger.debug(
                "No strategy for group type, using distance",
                group_type=group_type
            )
            return self._default_strategy

        return self._strategies.get(resolved, self._default_strategy)

    def select_and_group(
        self,
        workouts: Sequence[Workout],
        group_type: Union[GroupType, str, None],
        tolerance: Optional[float] = None,
        group_size: Optional[float] = None
    ) -> Groups:
        """
        Group workouts along one dimension.

        The result is neither ranked nor ordered; compose
        assign_rank_to_groups / sort_groups_by_key_in_ascending as needed.

        Args:
            workouts: Workout samples
            group_type: distance, pace or altitude; anything else means distance
            tolerance: Snapping half-width, defaults to the strategy's setting
            group_size: Bucket width, defaults to the strategy's setting

        Returns:
            Unordered mapping of bucket key to group

        Raises:
            GroupingConfigError: If tolerance or group_size is not a finite number > 0
        """
        strategy = self.get_strategy(group_type)

        if tolerance is None:
            tolerance = strategy.default_tolerance
        if group_size is None:
            group_size = strategy.default_group_size

        validate_grouping_config(tolerance, group_size)

        if not workouts:
            logger.info("No workouts to group", group_type=strategy.group_type.value)
            return {}

        with log_timing(logger, "Grouped workouts", group_type=strategy.group_type.value):
            groups = aggregate(workouts, strategy, tolerance, group_size)

        if not groups:
            logger.info(
                "No workouts eligible for grouping",
                group_type=strategy.group_type.value,
                workouts=len(workouts),
            )

        return groups

    def group(
        self,
        workouts: Sequence[Workout],
        group_type: Union[GroupType, str, None],
        tolerance: Optional[float] = None,
        group_size: Optional[float] = None
    ) -> Groups:
        """
        Group, rank, then order by ascending bucket key.

        Returns:
            Presentation-ready mapping
        """
        groups = self.select_and_group(workouts, group_type, tolerance, group_size)
        assign_rank_to_groups(groups)
        return sort_groups_by_key_in_ascending(groups)

    def group_raw(
        self,
        raw_workouts: List[Dict[str, Any]],
        group_type: Union[GroupType, str, None],
        tolerance: Optional[float] = None,
        group_size: Optional[float] = None,
        source: str = "healthkit",
        distance_unit: Optional[str] = None
    ) -> Groups:
        """
        Normalize raw payloads, then group, rank and order them.

        Args:
            raw_workouts: Raw workout payloads
            source: Payload source name (healthkit, manual)
            distance_unit: Unit all distances are converted to
        """
        adapter = get_adapter(source, distance_unit)
        workouts = adapter.normalize_many(raw_workouts)
        return self.group(workouts, group_type, tolerance, group_size)

    def describe_defaults(self) -> Dict[str, Dict[str, float]]:
        """Default tolerance and group size per dimension."""
        return {
            group_type.value: {
                "tolerance": strategy.default_tolerance,
                "groupSize": strategy.default_group_size,
            }
            for group_type, strategy in self._strategies.items()
        }


_default_engine: Optional[GroupingEngine] = None


def get_engine() -> GroupingEngine:
    """Shared engine instance; strategies hold no per-call state."""
    global _default_engine
    if _default_engine is None:
        _default_engine = GroupingEngine()
    return _default_engine


def select_and_group(
    workouts: Sequence[Workout],
    group_type: Union[GroupType, str, None],
    tolerance: Optional[float] = None,
    group_size: Optional[float] = None
) -> Groups:
    """Module-level shortcut for GroupingEngine.select_and_group."""
    return get_engine().select_and_group(workouts, group_type, tolerance, group_size)
