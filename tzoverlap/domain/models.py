"""
Domain models for working hours, overlap windows and meeting suggestions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from pendulum import DateTime


# Overlaps shorter than this are flagged as limited
LIMITED_OVERLAP_MINUTES = 60


@dataclass(frozen=True)
class Location:
    """
    A place identified by its IANA timezone.

    Only ``timezone`` is interpreted by the engine; name and country are
    carried through for display.
    """
    name: str
    timezone: str
    country: str = ""

    @classmethod
    def from_zone(cls, zone_id: str) -> "Location":
        """Build a location that is displayed by its zone identifier."""
        return cls(name=zone_id, timezone=zone_id)


@dataclass(frozen=True)
class WorkingHourRange:
    """
    Local working hours as whole hours of the day.

    If ``end <= start`` the range spans midnight and ends on the next day.
    """
    start: int = 9
    end: int = 18

    @classmethod
    def default(cls) -> "WorkingHourRange":
        return cls(start=9, end=18)

    def is_valid(self) -> bool:
        """Check both bounds are integer hours in [0, 23] and differ."""
        for hour in (self.start, self.end):
            if isinstance(hour, bool) or not isinstance(hour, int):
                return False
            if not 0 <= hour <= 23:
                return False
        return self.start != self.end

    @property
    def spans_midnight(self) -> bool:
        return self.end <= self.start

    def __str__(self) -> str:
        return f"{self.start:02d}:00 - {self.end:02d}:00"


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable time range with start and end datetime.

    Invariant: start must be before end.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def intersect(self, other: "TimeRange") -> "TimeRange | None":
        """
        Calculate the intersection of two time ranges.
        Returns None if there is no overlap.
        """
        start = max(self.start, other.start)
        end = min(self.end, other.end)

        if start >= end:
            return None

        return TimeRange(start=start, end=end)

    def __str__(self) -> str:
        return f"{self.start.format('DD.MM.YYYY HH:mm')} - {self.end.format('HH:mm')}"


@dataclass(frozen=True)
class NoOverlap:
    """The two working days never coincide."""

    has_overlap = False


@dataclass(frozen=True)
class Overlap:
    """
    The shared working window of two locations.

    ``absolute`` is in UTC, ``local_a`` and ``local_b`` are the same window
    rendered in each location's zone.
    """
    absolute: TimeRange
    local_a: TimeRange
    local_b: TimeRange

    has_overlap = True

    @property
    def duration_minutes(self) -> int:
        return self.absolute.duration_minutes()

    @property
    def is_limited(self) -> bool:
        """Less than an hour of shared working time."""
        return self.duration_minutes < LIMITED_OVERLAP_MINUTES


OverlapResult = Union[Overlap, NoOverlap]


class MeetingQuality(Enum):
    """How favourably a meeting time sits within both working days."""
    PERFECT = "Perfect Time"
    ACCEPTABLE = "Acceptable Time"
    NOT_RECOMMENDED = "Not Recommended"

    @property
    def label(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        """0 is best; a higher rank is worse."""
        return _QUALITY_ORDER.index(self)

    @property
    def slug(self) -> str:
        return self.value.lower().replace(" ", "-")


_QUALITY_ORDER = [
    MeetingQuality.PERFECT,
    MeetingQuality.ACCEPTABLE,
    MeetingQuality.NOT_RECOMMENDED,
]


@dataclass(frozen=True)
class MeetingSuggestion:
    """
    A candidate meeting start time.

    ``time_a`` and ``time_b`` are the same instant in each location's zone.
    """
    time_a: DateTime
    time_b: DateTime
    quality: MeetingQuality
    duration_minutes: int
