"""
Workout sample - the record the grouping engine reads.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from rungroups.models.quantity import Quantity, format_pace


@dataclass(eq=False)
class Workout:
    """
    A single workout with quantities already normalized upstream.

    Equality is identity: two runs with identical numbers are still
    two runs, and grouping must never merge or drop one of them.
    """
    start_date: datetime
    duration: Quantity  # seconds

    total_distance: Optional[Quantity] = None
    average_pace: Optional[Quantity] = None  # min/mi or min/km
    total_elevation: Optional[Quantity] = None  # elevation gain in metres
    humidity: Optional[Quantity] = None

    is_indoor: bool = False
    source_id: Optional[str] = None

    # Anything the source sent that the engine does not read
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def pretty_pace(self) -> str:
        if self.average_pace is None:
            return ""
        return format_pace(self.average_pace)

    @property
    def days_ago(self) -> str:
        return self.days_ago_label()

    def days_ago_label(self, now: Optional[datetime] = None) -> str:
        """Human label for how long ago the workout started."""
        if now is None:
            now = datetime.now(timezone.utc) if self.start_date.tzinfo else datetime.now()

        days = (now.date() - self.start_date.date()).days
        if days <= 0:
            return "Today"
        if days == 1:
            return "Yesterday"
        return f"{days} days ago"

    def to_dict(self) -> Dict[str, Any]:
        def _q(quantity: Optional[Quantity]) -> Optional[dict]:
            return quantity.to_dict() if quantity is not None else None

        return {
            "id": self.source_id,
            "startDate": self.start_date.isoformat(),
            "duration": _q(self.duration),
            "totalDistance": _q(self.total_distance),
            "averagePace": _q(self.average_pace),
            "totalElevation": _q(self.total_elevation),
            "humidity": _q(self.humidity),
            "isIndoor": self.is_indoor,
            "prettyPace": self.pretty_pace,
            "daysAgo": self.days_ago,
        }
