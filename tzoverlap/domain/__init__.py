"""
Domain layer - Value objects and errors for overlap calculations.

The calculators live in ``overlap_calculator`` and ``meeting_suggester`` and
are imported from there, since they depend on the adapters layer.
"""

from .exceptions import (
    CalculationFailedError,
    InvalidInputError,
    InvalidWorkingHoursError,
    InvalidZoneError,
    TzOverlapError,
    ValidationError,
)
from .models import (
    Location,
    MeetingQuality,
    MeetingSuggestion,
    NoOverlap,
    Overlap,
    OverlapResult,
    TimeRange,
    WorkingHourRange,
)

__all__ = [
    "CalculationFailedError",
    "InvalidInputError",
    "InvalidWorkingHoursError",
    "InvalidZoneError",
    "Location",
    "MeetingQuality",
    "MeetingSuggestion",
    "NoOverlap",
    "Overlap",
    "OverlapResult",
    "TimeRange",
    "TzOverlapError",
    "ValidationError",
    "WorkingHourRange",
]
