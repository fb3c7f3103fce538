"""ScheduleState - the root aggregate shared by every client.

The wire and file format uses the camelCase field names the browser client
sends: ``{"currentWeekIndex": 0, "weeks": {...}, "customPeople": [...]}``.
Missing fields default; unknown top-level fields are ignored so older or
newer files stay readable.
"""

import re
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.calendar.constants import BAND_IDS, DAYS, MAX_WEEK_INDEX
from app.calendar.grid import WeekGrid
from app.calendar.week_keys import WEEK_KEY_PREFIX, index_for_date

_WEEK_KEY_RE = re.compile(rf"^{WEEK_KEY_PREFIX}(\d{{4}}-\d{{2}}-\d{{2}})$")


def validate_week_key(key: str) -> str:
    match = _WEEK_KEY_RE.match(key)
    if not match:
        raise ValueError(f"Invalid week key '{key}', expected '{WEEK_KEY_PREFIX}YYYY-MM-DD'")
    try:
        week_start = date.fromisoformat(match.group(1))
    except ValueError as e:
        raise ValueError(f"Invalid week key '{key}': {e}") from e
    if index_for_date(week_start) is None:
        raise ValueError(f"Invalid week key '{key}': not a board Monday on or after the epoch")
    return key


class ScheduleState(BaseModel):
    """Full schedule: selected week, every stored week grid and the custom roster.

    Attributes:
        current_week_index: Week the board last had selected (>= 0)
        weeks: WeekKey -> WeekGrid
        custom_people: Names added beyond the default roster, in insertion order
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    current_week_index: int = Field(default=0, ge=0, le=MAX_WEEK_INDEX, strict=True, alias="currentWeekIndex")
    weeks: dict[str, WeekGrid] = Field(default_factory=dict)
    custom_people: list[str] = Field(default_factory=list, alias="customPeople")

    @field_validator("weeks")
    @classmethod
    def validate_weeks(cls, value: dict[str, WeekGrid]) -> dict[str, WeekGrid]:
        """Reject week keys, day names or band ids outside the declared universe."""
        errors: list[str] = []
        for week_key, grid in value.items():
            try:
                validate_week_key(week_key)
            except ValueError as e:
                errors.append(str(e))
            for day, bands in grid.items():
                if day not in DAYS:
                    errors.append(f"{week_key}: unknown day '{day}'")
                    continue
                errors.extend(f"{week_key}.{day}: unknown time band '{band}'" for band in bands if band not in BAND_IDS)
        if errors:
            raise ValueError("; ".join(errors))
        return value

    @classmethod
    def empty(cls) -> "ScheduleState":
        return cls()

    def to_payload(self) -> dict[str, Any]:
        """Serialize with the camelCase wire names."""
        return self.model_dump(by_alias=True)

    def week(self, week_key: str) -> WeekGrid | None:
        return self.weeks.get(week_key)
