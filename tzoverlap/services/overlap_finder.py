"""
Application services for finding shared working hours.

The service runs the domain-level ``OverlapCalculator`` and feeds its result
into the ``MeetingSuggester``. This keeps the CLI thin and lets both
collaborators be replaced in tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date as Date
from typing import List

from ..domain.meeting_suggester import MeetingSuggester
from ..domain.models import (
    Location,
    MeetingSuggestion,
    OverlapResult,
    WorkingHourRange,
)
from ..domain.overlap_calculator import OverlapCalculator


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverlapReport:
    """Everything a presenter needs for one pair of locations."""
    location_a: Location
    location_b: Location
    hours_a: WorkingHourRange
    hours_b: WorkingHourRange
    overlap: OverlapResult
    suggestions: List[MeetingSuggestion] = field(default_factory=list)

    @property
    def largest(self) -> MeetingSuggestion | None:
        return MeetingSuggester.find_largest(self.suggestions)


class OverlapFinderService:
    """
    Orchestrates overlap calculation and suggestion generation.
    """

    def __init__(
        self,
        overlap_calculator: OverlapCalculator | None = None,
        meeting_suggester: MeetingSuggester | None = None,
    ) -> None:
        self._overlap_calculator = overlap_calculator or OverlapCalculator()
        self._meeting_suggester = meeting_suggester or MeetingSuggester(
            converter=self._overlap_calculator.converter
        )

    def find_overlap(
        self,
        *,
        location_a: Location,
        location_b: Location,
        hours_a: WorkingHourRange | None = None,
        hours_b: WorkingHourRange | None = None,
        date: Date | None = None,
    ) -> OverlapReport:
        """
        Calculate the overlap and the meeting suggestions derived from it.

        Validation errors from the calculator propagate unchanged.
        """
        hours_a = hours_a if hours_a is not None else WorkingHourRange.default()
        hours_b = hours_b if hours_b is not None else WorkingHourRange.default()

        overlap = self._overlap_calculator.calculate_overlap(
            location_a,
            location_b,
            hours_a=hours_a,
            hours_b=hours_b,
            date=date,
        )

        suggestions = self._meeting_suggester.generate_suggestions(
            overlap,
            location_a,
            location_b,
            hours_a,
            hours_b,
        )

        logger.debug(
            "%s / %s: overlap=%s, %d suggestion(s)",
            location_a.name,
            location_b.name,
            overlap.has_overlap,
            len(suggestions),
        )

        return OverlapReport(
            location_a=location_a,
            location_b=location_b,
            hours_a=hours_a,
            hours_b=hours_b,
            overlap=overlap,
            suggestions=suggestions,
        )

    def format_suggestion(self, report: OverlapReport, suggestion: MeetingSuggestion) -> str:
        """Format one of the report's suggestions for sharing."""
        return self._meeting_suggester.format_suggestion(
            suggestion,
            report.location_a,
            report.location_b,
        )
