"""
Domain-specific exception hierarchy for the tzoverlap application.
"""


class TzOverlapError(Exception):
    """Base class for all application-level errors."""


class ValidationError(TzOverlapError):
    """Raised for caller-correctable input problems."""


class InvalidZoneError(ValidationError):
    """Raised when a timezone identifier is empty or unknown."""

    def __init__(self, which: str, name: str):
        self.which = which
        self.name = name
        super().__init__(
            f"Unable to determine timezone for {name or which}. Please try another location."
        )


class InvalidWorkingHoursError(ValidationError):
    """Raised when a working-hour range is malformed."""

    def __init__(self, which: str):
        self.which = which
        super().__init__(f"Invalid working hours for {which}")


class InvalidInputError(ValidationError):
    """Raised when a calendar date/time cannot be interpreted."""


class CalculationFailedError(TzOverlapError):
    """Raised when an overlap calculation fails for an unexpected reason."""

    def __init__(self):
        super().__init__(
            "Failed to calculate overlap. Please check your inputs and try again."
        )
