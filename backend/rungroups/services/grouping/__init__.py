"""
Grouping module - Bucketing, aggregation and ranking of workouts.

This module provides:
- Payload adapters that normalize raw workouts
- Bucketing strategies for distance, pace and altitude
- The aggregator building groups with their stats
- Ranking and ordering passes over finished groups
- The engine dispatching between strategies
"""
from rungroups.services.grouping.adapter import (
    HealthKitAdapter,
    ManualAdapter,
    RawDataAdapter,
    get_adapter,
)
from rungroups.services.grouping.aggregator import aggregate
from rungroups.services.grouping.engine import (
    GroupingEngine,
    get_engine,
    select_and_group,
    validate_grouping_config,
)
from rungroups.services.grouping.ranking import (
    assign_rank_to_groups,
    sort_groups_by_key_in_ascending,
)

__all__ = [
    # Adapters
    "RawDataAdapter",
    "HealthKitAdapter",
    "ManualAdapter",
    "get_adapter",
    # Aggregation
    "aggregate",
    # Ranking
    "assign_rank_to_groups",
    "sort_groups_by_key_in_ascending",
    # Engine
    "GroupingEngine",
    "get_engine",
    "select_and_group",
    "validate_grouping_config",
]
