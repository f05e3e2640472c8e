"""
Domain errors raised by the grouping engine.

All of them subclass ValueError so callers that already guard
against bad input with `except ValueError` keep working.
"""


class GroupingError(ValueError):
    """Base class for grouping engine errors."""


class GroupingConfigError(GroupingError):
    """Tolerance or group size is not a finite positive number."""

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be a finite number greater than 0, got {value!r}")


class InvalidQuantityError(GroupingError):
    """Quantity value is negative or not a number."""


class UnitMismatchError(GroupingError):
    """Quantities with different units were combined."""
