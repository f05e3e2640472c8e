from datetime import datetime, timedelta
from typing import Optional

import pytest

from rungroups.models import Quantity, Workout

BASE_DATE = datetime(2024, 1, 1, 7, 0)


def build_workout(
    distance: Optional[float] = 5.0,
    pace: Optional[float] = 8.0,
    duration_min: Optional[float] = None,
    elevation: Optional[float] = None,
    unit: str = "mi",
    elevation_unit: str = "m",
    days: int = 0,
    source_id: Optional[str] = None,
    with_pace: bool = True,
) -> Workout:
    """
    Build a workout; duration follows from distance and pace unless given.
    """
    if duration_min is None:
        duration_min = (distance or 1.0) * (pace or 8.0)

    total_distance = Quantity(distance, unit) if distance is not None else None

    average_pace = None
    if with_pace and total_distance is not None and distance > 0:
        average_pace = Quantity(duration_min / distance, f"min/{unit}")

    return Workout(
        start_date=BASE_DATE + timedelta(days=days),
        duration=Quantity(duration_min * 60, "s"),
        total_distance=total_distance,
        average_pace=average_pace,
        total_elevation=Quantity(elevation, elevation_unit) if elevation is not None else None,
        source_id=source_id,
    )


@pytest.fixture
def make_workout():
    return build_workout
