from rungroups.models.quantity import Quantity
from rungroups.models.workout import Workout
from rungroups.models.group import (
    ConsistencyResult,
    Group,
    Groups,
    GroupType,
    StatGroup,
    StatItem,
)

__all__ = [
    "Quantity",
    "Workout",
    "ConsistencyResult",
    "Group",
    "Groups",
    "GroupType",
    "StatGroup",
    "StatItem",
]
