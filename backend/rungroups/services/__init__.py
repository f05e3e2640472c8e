"""
Services module - Application business logic layer.

Modules:
- grouping: Workout bucketing, aggregation and ranking engine
"""
# Main exports for convenience
from rungroups.services.grouping import GroupingEngine, select_and_group

__all__ = [
    "GroupingEngine",
    "select_and_group",
]
