"""
Tests for meeting suggestions.
"""

import re
from datetime import date

import pendulum
import pytest

from tzoverlap.domain.meeting_suggester import MeetingSuggester
from tzoverlap.domain.models import (
    Location,
    MeetingQuality,
    MeetingSuggestion,
    NoOverlap,
    WorkingHourRange,
)
from tzoverlap.domain.overlap_calculator import OverlapCalculator


NEW_YORK = Location(name="New York", timezone="America/New_York")
LONDON = Location(name="London", timezone="Europe/London")
LOS_ANGELES = Location(name="Los Angeles", timezone="America/Los_Angeles")
KATHMANDU = Location(name="Kathmandu", timezone="Asia/Kathmandu")
BANGALORE = Location(name="Bangalore", timezone="Asia/Kolkata")

NINE_TO_SIX = WorkingHourRange(9, 18)
SUMMER_DAY = date(2024, 6, 15)

FORMAT_PATTERN = re.compile(r"^\d{2}:\d{2} (AM|PM) .+ ↔ \d{2}:\d{2} (AM|PM) .+$")


@pytest.fixture
def suggester() -> MeetingSuggester:
    return MeetingSuggester()


def _suggestions(suggester, location_a, location_b, hours_a, hours_b, day=SUMMER_DAY):
    overlap = OverlapCalculator().calculate_overlap(location_a, location_b, hours_a, hours_b, day)
    return suggester.generate_suggestions(overlap, location_a, location_b, hours_a, hours_b)


def _suggestion(minutes: int, hour: int = 9) -> MeetingSuggestion:
    moment = pendulum.datetime(2024, 6, 15, hour, 0, tz="UTC")
    return MeetingSuggestion(
        time_a=moment,
        time_b=moment,
        quality=MeetingQuality.ACCEPTABLE,
        duration_minutes=minutes,
    )


class TestGenerateSuggestions:
    """Tests for MeetingSuggester.generate_suggestions."""

    def test_no_overlap_gives_no_suggestions(self, suggester):
        suggestions = suggester.generate_suggestions(
            NoOverlap(), NEW_YORK, LONDON, NINE_TO_SIX, NINE_TO_SIX
        )

        assert suggestions == []

    def test_thirty_minute_steps(self, suggester):
        suggestions = _suggestions(suggester, NEW_YORK, LONDON, NINE_TO_SIX, NINE_TO_SIX)

        assert len(suggestions) == 8
        assert [s.time_a.format("HH:mm") for s in suggestions[:3]] == ["09:00", "09:30", "10:00"]
        assert [s.time_b.format("HH:mm") for s in suggestions[:3]] == ["14:00", "14:30", "15:00"]
        for suggestion in suggestions:
            assert suggestion.time_a == suggestion.time_b

    def test_duration_capped_at_an_hour(self, suggester):
        suggestions = _suggestions(suggester, NEW_YORK, LONDON, NINE_TO_SIX, NINE_TO_SIX)

        assert [s.duration_minutes for s in suggestions] == [60] * 7 + [30]

    def test_quality_is_the_worse_side(self, suggester):
        """London is mid-afternoon but New York is still early morning."""
        suggestions = _suggestions(suggester, NEW_YORK, LONDON, NINE_TO_SIX, NINE_TO_SIX)

        assert all(s.quality is MeetingQuality.ACCEPTABLE for s in suggestions)

    def test_same_zone_midday_is_perfect(self, suggester):
        suggestions = _suggestions(
            suggester, NEW_YORK, Location(name="Brooklyn", timezone="America/New_York"),
            NINE_TO_SIX, NINE_TO_SIX,
        )
        by_time = {s.time_a.format("HH:mm"): s.quality for s in suggestions}

        assert by_time["09:00"] is MeetingQuality.ACCEPTABLE
        assert by_time["12:00"] is MeetingQuality.PERFECT
        assert by_time["14:30"] is MeetingQuality.PERFECT
        assert by_time["15:00"] is MeetingQuality.ACCEPTABLE
        assert by_time["17:30"] is MeetingQuality.ACCEPTABLE

    def test_short_overlap_still_suggests(self, suggester):
        """A 45-minute window yields a partial final step."""
        suggestions = _suggestions(
            suggester, KATHMANDU, BANGALORE, NINE_TO_SIX, WorkingHourRange(17, 23)
        )

        assert len(suggestions) >= 1
        assert [s.duration_minutes for s in suggestions] == [45, 15]
        assert all(s.duration_minutes <= 45 for s in suggestions)

    def test_midnight_spanning_side_is_not_recommended(self, suggester):
        """Categorization uses the same-day position only."""
        suggestions = _suggestions(
            suggester, LONDON, LOS_ANGELES, WorkingHourRange(22, 6), NINE_TO_SIX
        )

        assert len(suggestions) == 8
        assert suggestions[-1].time_a.format("YYYY-MM-DD HH:mm") == "2024-06-16 01:30"
        assert all(s.quality is MeetingQuality.NOT_RECOMMENDED for s in suggestions)


class TestCategorize:
    """Tests for MeetingSuggester.categorize."""

    @pytest.mark.parametrize("start,end", [(9, 18), (9, 12), (8, 20), (0, 23), (13, 16)])
    def test_midpoint_is_perfect(self, suggester, start, end):
        midpoint_minutes = (start * 60 + end * 60) // 2
        instant = pendulum.datetime(
            2024, 6, 15, midpoint_minutes // 60, midpoint_minutes % 60, tz="Europe/Paris"
        )

        quality = suggester.categorize(instant, WorkingHourRange(start, end), "Europe/Paris")

        assert quality is MeetingQuality.PERFECT

    @pytest.mark.parametrize("hour,minute", [(0, 0), (8, 59), (18, 0), (18, 1), (23, 59)])
    def test_outside_hours_is_not_recommended(self, suggester, hour, minute):
        instant = pendulum.datetime(2024, 6, 15, hour, minute, tz="Asia/Tokyo")

        assert suggester.categorize(instant, NINE_TO_SIX, "Asia/Tokyo") is MeetingQuality.NOT_RECOMMENDED

    @pytest.mark.parametrize(
        "hour,minute,expected",
        [
            (9, 0, MeetingQuality.ACCEPTABLE),
            (11, 59, MeetingQuality.ACCEPTABLE),
            (12, 0, MeetingQuality.PERFECT),
            (14, 59, MeetingQuality.PERFECT),
            (15, 0, MeetingQuality.ACCEPTABLE),
            (17, 59, MeetingQuality.ACCEPTABLE),
        ],
    )
    def test_thirds_of_the_day(self, suggester, hour, minute, expected):
        instant = pendulum.datetime(2024, 6, 15, hour, minute, tz="Asia/Tokyo")

        assert suggester.categorize(instant, NINE_TO_SIX, "Asia/Tokyo") is expected

    def test_instant_is_rendered_in_zone(self, suggester):
        """13:00 UTC is 09:00 in New York but 14:00 in London."""
        instant = pendulum.datetime(2024, 6, 15, 13, 0, tz="UTC")

        assert suggester.categorize(instant, NINE_TO_SIX, "America/New_York") is MeetingQuality.ACCEPTABLE
        assert suggester.categorize(instant, NINE_TO_SIX, "Europe/London") is MeetingQuality.PERFECT

    def test_every_quarter_hour_gets_a_quality(self, suggester):
        hours = WorkingHourRange(22, 6)
        instant = pendulum.datetime(2024, 6, 15, 0, 0, tz="UTC")

        for _ in range(96):
            assert suggester.categorize(instant, hours, "UTC") in MeetingQuality
            instant = instant.add(minutes=15)

    def test_combine_qualities(self, suggester):
        assert suggester.combine_qualities(
            MeetingQuality.PERFECT, MeetingQuality.PERFECT
        ) is MeetingQuality.PERFECT
        assert suggester.combine_qualities(
            MeetingQuality.PERFECT, MeetingQuality.ACCEPTABLE
        ) is MeetingQuality.ACCEPTABLE
        assert suggester.combine_qualities(
            MeetingQuality.NOT_RECOMMENDED, MeetingQuality.ACCEPTABLE
        ) is MeetingQuality.NOT_RECOMMENDED


class TestFormatSuggestion:
    """Tests for MeetingSuggester.format_suggestion."""

    def test_format(self, suggester):
        suggestions = _suggestions(suggester, NEW_YORK, LONDON, NINE_TO_SIX, NINE_TO_SIX)

        text = suggester.format_suggestion(suggestions[0], NEW_YORK, LONDON)

        assert text == "09:00 AM New York ↔ 02:00 PM London"

    def test_format_matches_pattern(self, suggester):
        suggestions = _suggestions(
            suggester, LONDON, LOS_ANGELES, WorkingHourRange(22, 6), NINE_TO_SIX
        )

        for suggestion in suggestions:
            assert FORMAT_PATTERN.match(suggester.format_suggestion(suggestion, LONDON, LOS_ANGELES))

    def test_format_after_midnight(self, suggester):
        suggestions = _suggestions(
            suggester, LONDON, LOS_ANGELES, WorkingHourRange(22, 6), NINE_TO_SIX
        )

        text = suggester.format_suggestion(suggestions[4], LONDON, LOS_ANGELES)

        assert text == "12:00 AM London ↔ 04:00 PM Los Angeles"


class TestFindLargest:
    """Tests for MeetingSuggester.find_largest."""

    def test_empty(self, suggester):
        assert suggester.find_largest([]) is None

    def test_picks_longest(self, suggester):
        suggestions = [_suggestion(30, 9), _suggestion(60, 10), _suggestion(45, 11)]

        assert suggester.find_largest(suggestions) is suggestions[1]

    def test_first_wins_tie(self, suggester):
        suggestions = [_suggestion(15, 9), _suggestion(60, 10), _suggestion(60, 11)]

        assert suggester.find_largest(suggestions) is suggestions[1]

    def test_never_exceeded(self, suggester):
        suggestions = _suggestions(suggester, KATHMANDU, BANGALORE, NINE_TO_SIX, WorkingHourRange(17, 23))

        largest = suggester.find_largest(suggestions)

        assert all(s.duration_minutes <= largest.duration_minutes for s in suggestions)
