"""Calendar error types.

Storage failures are not represented here: the store recovers from them
locally (empty default on load, ``False`` on save) and never raises.
"""


class CalendarError(Exception):
    """Base class for calendar errors surfaced to callers."""


class MalformedStateError(CalendarError):
    """Raised when a client-submitted schedule cannot be parsed or fails validation.

    Attributes:
        details: Human-readable validation messages
    """

    def __init__(self, message: str, details: list[str] | None = None):
        self.details = details or []
        super().__init__(message)


class EmptyWeekError(CalendarError):
    """Raised when repeating a week that holds no data."""

    def __init__(self, week_key: str):
        self.week_key = week_key
        super().__init__(f"Week {week_key} has no data to copy")
