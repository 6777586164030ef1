"""
Core business logic for intersecting two locations' working hours.

Working hours are anchored at midnight of the requested date in each
location's own zone, moved onto the absolute timeline, intersected, and the
result is rendered back into both local times.
"""

from __future__ import annotations

import logging
from datetime import date as Date, datetime
from typing import Tuple, Union

import pendulum

from ..adapters.zone_converter import ZoneConverter
from .exceptions import (
    CalculationFailedError,
    InvalidInputError,
    InvalidWorkingHoursError,
    InvalidZoneError,
    ValidationError,
)
from .models import Location, NoOverlap, Overlap, OverlapResult, TimeRange, WorkingHourRange


logger = logging.getLogger(__name__)

LocationLike = Union[Location, str]


class OverlapCalculator:
    """
    Calculates the shared working window of two locations on a given date.

    Algorithm:
    1. Validate both zones, then both working-hour ranges
    2. Build each location's working day as civil start/end on the date
    3. Convert both ranges to absolute time
    4. Intersect them
    5. Render the intersection back into each location's zone
    """

    def __init__(self, converter: ZoneConverter | None = None):
        self.converter = converter or ZoneConverter()

    def calculate_overlap(
        self,
        location_a: LocationLike,
        location_b: LocationLike,
        hours_a: WorkingHourRange | None = None,
        hours_b: WorkingHourRange | None = None,
        date: Date | None = None,
    ) -> OverlapResult:
        """
        Calculate the overlapping working hours between two locations.

        Args:
            location_a: First location, or its zone identifier
            location_b: Second location, or its zone identifier
            hours_a: Working hours for location A (default: 9-18)
            hours_b: Working hours for location B (default: 9-18)
            date: Calendar date to calculate for (default: today)

        Returns:
            Overlap, or NoOverlap if the working days never coincide

        Raises:
            InvalidZoneError: If either zone is empty or unknown
            InvalidWorkingHoursError: If either range is malformed
            CalculationFailedError: If conversion fails unexpectedly
        """
        location_a = self._as_location(location_a)
        location_b = self._as_location(location_b)
        hours_a = hours_a if hours_a is not None else WorkingHourRange.default()
        hours_b = hours_b if hours_b is not None else WorkingHourRange.default()

        self._validate_zone(location_a, "location A")
        self._validate_zone(location_b, "location B")
        self._validate_hours(hours_a, "location A")
        self._validate_hours(hours_b, "location B")

        day = self._as_date(date)

        try:
            range_a = self.working_hours_to_absolute(hours_a, location_a.timezone, day)
            range_b = self.working_hours_to_absolute(hours_b, location_b.timezone, day)

            logger.debug("Absolute range for %s: %s", location_a.name, range_a)
            logger.debug("Absolute range for %s: %s", location_b.name, range_b)

            intersection = range_a.intersect(range_b)

            if intersection is None:
                return NoOverlap()

            local_a = TimeRange(
                start=self.converter.to_zone(intersection.start, location_a.timezone),
                end=self.converter.to_zone(intersection.end, location_a.timezone),
            )
            local_b = TimeRange(
                start=self.converter.to_zone(intersection.start, location_b.timezone),
                end=self.converter.to_zone(intersection.end, location_b.timezone),
            )

            return Overlap(absolute=intersection, local_a=local_a, local_b=local_b)

        except ValidationError:
            raise
        except Exception as exc:
            logger.exception("Overlap calculation failed for %s and %s", location_a.name, location_b.name)
            raise CalculationFailedError() from exc

    def working_hours_to_absolute(
        self,
        hours: WorkingHourRange,
        zone_id: str,
        day: Date,
    ) -> TimeRange:
        """
        Convert a location's working hours on ``day`` into an absolute range.

        Ranges that span midnight end on the following civil day.
        """
        start, end = self._civil_bounds(hours, day)

        return TimeRange(
            start=self.converter.to_absolute(start, zone_id),
            end=self.converter.to_absolute(end, zone_id),
        )

    @staticmethod
    def _civil_bounds(hours: WorkingHourRange, day: Date) -> Tuple[datetime, datetime]:
        midnight = pendulum.naive(day.year, day.month, day.day)

        start = midnight.add(hours=hours.start)
        end = midnight.add(hours=hours.end)

        if hours.spans_midnight:
            end = end.add(days=1)

        return start, end

    def _validate_zone(self, location: Location, which: str) -> None:
        if not location.timezone or not self.converter.is_valid_zone(location.timezone):
            raise InvalidZoneError(which, location.name)

    @staticmethod
    def _validate_hours(hours: WorkingHourRange, which: str) -> None:
        if not isinstance(hours, WorkingHourRange) or not hours.is_valid():
            raise InvalidWorkingHoursError(which)

    @staticmethod
    def _as_location(location: LocationLike) -> Location:
        if isinstance(location, Location):
            return location
        return Location(name=location or "", timezone=location or "")

    @staticmethod
    def _as_date(date: Date | None) -> Date:
        if date is None:
            return pendulum.today().date()
        if isinstance(date, datetime):
            return date.date()
        if not isinstance(date, Date):
            raise InvalidInputError(f"Invalid date: {date!r}")
        return date
