"""
Meeting suggestions derived from an overlap window.
"""

from datetime import datetime
from typing import List, Sequence

from ..adapters.zone_converter import ZoneConverter
from .models import (
    Location,
    MeetingQuality,
    MeetingSuggestion,
    OverlapResult,
    WorkingHourRange,
)


SUGGESTION_INTERVAL_MINUTES = 30
MAX_SUGGESTION_MINUTES = 60


class MeetingSuggester:
    """
    Generates candidate meeting times from an overlap window and rates them.

    Candidates start every 30 minutes from the beginning of the window. Each
    candidate is rated against both locations' working days and gets the
    worse of the two ratings.
    """

    def __init__(self, converter: ZoneConverter | None = None):
        self.converter = converter or ZoneConverter()

    def generate_suggestions(
        self,
        overlap: OverlapResult,
        location_a: Location,
        location_b: Location,
        hours_a: WorkingHourRange,
        hours_b: WorkingHourRange,
    ) -> List[MeetingSuggestion]:
        """
        Walk the overlap window in 30-minute steps.

        Args:
            overlap: Result of OverlapCalculator.calculate_overlap
            location_a: First location
            location_b: Second location
            hours_a: Working hours for location A
            hours_b: Working hours for location B

        Returns:
            One suggestion per step, empty if there is no overlap
        """
        if not overlap.has_overlap:
            return []

        suggestions: List[MeetingSuggestion] = []

        window_end = overlap.local_a.end
        current_a = overlap.local_a.start
        current_b = overlap.local_b.start

        while current_a < window_end:
            quality = self.combine_qualities(
                self.categorize(current_a, hours_a, location_a.timezone),
                self.categorize(current_b, hours_b, location_b.timezone),
            )

            remaining = int((window_end - current_a).total_seconds() // 60)

            suggestions.append(
                MeetingSuggestion(
                    time_a=current_a,
                    time_b=current_b,
                    quality=quality,
                    duration_minutes=min(remaining, MAX_SUGGESTION_MINUTES),
                )
            )

            current_a = current_a.add(minutes=SUGGESTION_INTERVAL_MINUTES)
            current_b = current_b.add(minutes=SUGGESTION_INTERVAL_MINUTES)

        return suggestions

    def categorize(
        self,
        instant: datetime,
        hours: WorkingHourRange,
        zone_id: str,
    ) -> MeetingQuality:
        """
        Rate a meeting time by its position within a working day.

        Uses the same-day hour-of-day position only: a working day that spans
        midnight never yields a positive rating.

        - Outside [start, end): NOT_RECOMMENDED
        - Middle third: PERFECT
        - First or last third: ACCEPTABLE
        """
        local = self.converter.to_zone(instant, zone_id)
        minute_of_day = local.hour * 60 + local.minute

        start = hours.start * 60
        end = hours.end * 60

        if minute_of_day < start or minute_of_day >= end:
            return MeetingQuality.NOT_RECOMMENDED

        position = (minute_of_day - start) / (end - start)

        if 1 / 3 <= position < 2 / 3:
            return MeetingQuality.PERFECT

        return MeetingQuality.ACCEPTABLE

    @staticmethod
    def combine_qualities(quality_a: MeetingQuality, quality_b: MeetingQuality) -> MeetingQuality:
        """Return the worse of two ratings."""
        return max(quality_a, quality_b, key=lambda quality: quality.rank)

    @staticmethod
    def format_suggestion(
        suggestion: MeetingSuggestion,
        location_a: Location,
        location_b: Location,
    ) -> str:
        """
        Format a suggestion for sharing.
        Format: HH:MM AM/PM CityA ↔ HH:MM AM/PM CityB
        """
        time_a = suggestion.time_a.format("hh:mm A", locale="en")
        time_b = suggestion.time_b.format("hh:mm A", locale="en")

        return f"{time_a} {location_a.name} ↔ {time_b} {location_b.name}"

    @staticmethod
    def find_largest(suggestions: Sequence[MeetingSuggestion]) -> MeetingSuggestion | None:
        """
        Find the suggestion with the longest duration.
        The earliest one wins a tie.
        """
        largest: MeetingSuggestion | None = None

        for suggestion in suggestions:
            if largest is None or suggestion.duration_minutes > largest.duration_minutes:
                largest = suggestion

        return largest
