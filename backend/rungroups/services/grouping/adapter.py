"""
Workout Adapters - Normalize raw workout payloads into Workout samples.

Supported sources:
- HealthKit-style payloads (camelCase keys, {quantity, unit} objects)
- Manual input (flat numbers: distance, duration in minutes)

Distances are converted to the requested distance unit so every
sample handed to the engine shares one unit.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from rungroups.core.config import settings
from rungroups.core.logging import get_logger
from rungroups.models.quantity import Quantity, new_quantity, pace_from_distance_and_duration
from rungroups.models.workout import Workout

logger = get_logger(__name__)

# Metres per unit
_LENGTH_FACTORS = {
    "m": 1.0,
    "km": 1000.0,
    "mi": 1609.344,
    "ft": 0.3048,
}

_UNIT_ALIASES = {
    "mile": "mi",
    "miles": "mi",
    "kilometer": "km",
    "kilometers": "km",
    "meter": "m",
    "meters": "m",
    "feet": "ft",
}

# Seconds per unit
_DURATION_FACTORS = {
    "s": 1.0,
    "sec": 1.0,
    "min": 60.0,
    "h": 3600.0,
    "hr": 3600.0,
}


def convert_length(quantity: Quantity, unit: str) -> Quantity:
    """
    Convert a length to another unit.

    Raises:
        ValueError: If either unit is not a known length unit
    """
    source = _UNIT_ALIASES.get(quantity.unit, quantity.unit)
    target = _UNIT_ALIASES.get(unit, unit)

    if source == target:
        return new_quantity(quantity.value, target)
    if source not in _LENGTH_FACTORS or target not in _LENGTH_FACTORS:
        raise ValueError(f"Cannot convert {quantity.unit} to {unit}")

    metres = quantity.value * _LENGTH_FACTORS[source]
    return new_quantity(metres / _LENGTH_FACTORS[target], target)


class RawDataAdapter(ABC):
    """Abstract base class for workout payload adapters."""

    source_name: str = "unknown"

    def __init__(self, distance_unit: Optional[str] = None):
        self.distance_unit = distance_unit or settings.DEFAULT_DISTANCE_UNIT

    @abstractmethod
    def normalize(self, raw_data: Dict[str, Any]) -> Workout:
        """
        Normalize a raw payload.

        Args:
            raw_data: Raw workout payload

        Returns:
            Workout with distance in the adapter's distance unit

        Raises:
            ValueError: If the payload has no usable start date or duration
        """
        pass

    def normalize_many(self, raw_items: List[Dict[str, Any]]) -> List[Workout]:
        return [self.normalize(item) for item in raw_items]

    def _parse_start_date(self, raw_data: Dict[str, Any]) -> datetime:
        for field_name in ("startDate", "start_date", "date"):
            value = raw_data.get(field_name)
            if value is None:
                continue
            if isinstance(value, datetime):
                return value
            try:
                return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
            except ValueError:
                raise ValueError(f"Invalid start date: {value!r}")

        raise ValueError("Workout is missing a start date")

    def _derive_pace(
        self,
        distance: Optional[Quantity],
        duration: Quantity
    ) -> Optional[Quantity]:
        if distance is None or distance.value <= 0:
            return None
        return pace_from_distance_and_duration(distance, duration)


class HealthKitAdapter(RawDataAdapter):
    """
    Adapter for HealthKit-style workout payloads.

    Quantities arrive as {"quantity": 5.1, "unit": "mi"}; duration may
    be a quantity or a bare number of seconds.
    """

    source_name = "healthkit"

    def normalize(self, raw_data: Dict[str, Any]) -> Workout:
        """Normalize a HealthKit workout payload."""

        start_date = self._parse_start_date(raw_data)
        duration = self._extract_duration(raw_data)

        distance = self._extract_quantity(
            raw_data, "totalDistance", "distance", default_unit=self.distance_unit
        )
        if distance is not None:
            distance = convert_length(distance, self.distance_unit)

        elevation = self._extract_quantity(
            raw_data, "totalElevation", "totalElevationAscended", default_unit="m"
        )
        if elevation is not None:
            elevation = convert_length(elevation, "m")

        # A supplied pace is only kept when it is already per distance unit
        pace = self._extract_quantity(raw_data, "averagePace")
        if pace is None or pace.unit != f"min/{self.distance_unit}":
            pace = self._derive_pace(distance, duration)

        workout = Workout(
            start_date=start_date,
            duration=duration,
            total_distance=distance,
            average_pace=pace,
            total_elevation=elevation,
            humidity=self._extract_quantity(raw_data, "humidity"),
            is_indoor=bool(raw_data.get("isIndoor", False)),
            source_id=raw_data.get("uuid") or raw_data.get("id"),
        )

        logger.debug(
            "Normalized HealthKit workout",
            source_id=workout.source_id,
            has_distance=distance is not None,
            has_elevation=elevation is not None,
        )

        return workout

    def _extract_duration(self, raw_data: Dict[str, Any]) -> Quantity:
        duration = raw_data.get("duration")
        if duration is None:
            raise ValueError("Workout is missing a duration")

        if isinstance(duration, dict):
            value = float(duration.get("quantity", 0))
            factor = _DURATION_FACTORS.get(duration.get("unit", "s"))
            if factor is None:
                raise ValueError(f"Unknown duration unit: {duration.get('unit')}")
            return new_quantity(value * factor, "s")

        return new_quantity(float(duration), "s")

    def _extract_quantity(
        self,
        raw_data: Dict[str, Any],
        *field_names: str,
        default_unit: str = ""
    ) -> Optional[Quantity]:
        """First {quantity, unit} object among field_names; a missing unit means default_unit."""
        for field_name in field_names:
            value = raw_data.get(field_name)
            if not isinstance(value, dict) or value.get("quantity") is None:
                continue
            return new_quantity(float(value["quantity"]), value.get("unit") or default_unit)
        return None


class ManualAdapter(RawDataAdapter):
    """
    Adapter for manually entered workouts.

    Flat payload: distance (in the adapter's distance unit), duration
    in minutes, optional elevation in metres.
    """

    source_name = "manual"

    def normalize(self, raw_data: Dict[str, Any]) -> Workout:
        """Normalize manually entered data."""

        start_date = self._parse_start_date(raw_data)

        duration_min = raw_data.get("duration")
        if duration_min is None:
            raise ValueError("Workout is missing a duration")
        duration = new_quantity(float(duration_min) * 60, "s")

        distance = None
        if raw_data.get("distance") is not None:
            distance = new_quantity(float(raw_data["distance"]), self.distance_unit)

        elevation = None
        if raw_data.get("elevation") is not None:
            elevation = new_quantity(float(raw_data["elevation"]), "m")

        workout = Workout(
            start_date=start_date,
            duration=duration,
            total_distance=distance,
            average_pace=self._derive_pace(distance, duration),
            total_elevation=elevation,
            is_indoor=bool(raw_data.get("isIndoor", False)),
            source_id=raw_data.get("id"),
        )

        logger.debug("Normalized manual workout", source_id=workout.source_id)

        return workout


# Adapter registry
_ADAPTERS = {
    "healthkit": HealthKitAdapter,
    "manual": ManualAdapter,
}


def get_adapter(source: str, distance_unit: Optional[str] = None) -> RawDataAdapter:
    """
    Get the appropriate adapter for a payload source.

    Args:
        source: Source name (healthkit, manual)
        distance_unit: Unit distances are converted to

    Returns:
        Adapter instance
    """
    adapter_class = _ADAPTERS.get(source.lower())

    if not adapter_class:
        logger.warning(f"Unknown workout source: {source}, falling back to healthkit")
        adapter_class = HealthKitAdapter

    return adapter_class(distance_unit)
