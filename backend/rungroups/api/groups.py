"""
Workout Groups API endpoints.
"""
from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from rungroups.core.exceptions import GroupingError
from rungroups.core.logging import get_logger
from rungroups.services.grouping import get_engine

logger = get_logger(__name__)
router = APIRouter()


# ========================================
# Request/Response Schemas
# ========================================

class GroupWorkoutsRequest(BaseModel):
    """Request to group a set of workouts."""
    groupType: str = Field("distance", description="distance, pace or altitude")
    tolerance: Optional[float] = Field(None, description="Snapping half-width; dimension default if omitted")
    groupSize: Optional[float] = Field(None, description="Bucket width; dimension default if omitted")
    distanceUnit: Optional[str] = Field(None, description="Unit distances are converted to (mi, km)")
    source: str = Field("healthkit", description="Payload format: healthkit or manual")
    workouts: list[dict[str, Any]] = Field(default_factory=list, description="Raw workout payloads")


class GroupWorkoutsResponse(BaseModel):
    """Grouped workouts, in ascending bucket order."""
    groupType: str
    totalWorkouts: int
    groupedWorkouts: int
    groups: list[dict[str, Any]]


class GroupingDefaultsResponse(BaseModel):
    """Default tolerance and group size per dimension."""
    defaults: dict[str, dict[str, float]]


# ========================================
# API Endpoints
# ========================================

@router.post("", response_model=GroupWorkoutsResponse)
def group_workouts(request: GroupWorkoutsRequest):
    """
    Group, rank and order workouts along one dimension.
    """
    engine = get_engine()
    strategy = engine.get_strategy(request.groupType)

    logger.info(
        "Grouping workouts",
        group_type=strategy.group_type.value,
        workouts=len(request.workouts),
    )

    try:
        groups = engine.group_raw(
            request.workouts,
            request.groupType,
            tolerance=request.tolerance,
            group_size=request.groupSize,
            source=request.source,
            distance_unit=request.distanceUnit,
        )
    except GroupingError as e:
        logger.warning("Rejected grouping request", error=str(e))
        raise HTTPException(status_code=422, detail=str(e))
    except ValueError as e:
        logger.warning("Invalid workout payload", error=str(e))
        raise HTTPException(status_code=422, detail=f"Invalid workout payload: {str(e)}")

    return GroupWorkoutsResponse(
        groupType=strategy.group_type.value,
        totalWorkouts=len(request.workouts),
        groupedWorkouts=sum(len(group.runs) for group in groups.values()),
        groups=[group.to_dict() for group in groups.values()],
    )


@router.get("/config", response_model=GroupingDefaultsResponse)
def get_grouping_defaults():
    """
    Get the default tolerance and group size of every dimension.
    """
    return GroupingDefaultsResponse(defaults=get_engine().describe_defaults())
