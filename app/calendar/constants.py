"""Fixed vocabulary of the household board.

Days and time bands are the declared universe every grid accessor is total over.
"""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class TimeBand:
    """A time-of-day band shown as one row of the weekly grid."""

    id: str
    label: str


# Monday 13th Jan 2025; week index 0 starts here
EPOCH = date(2025, 1, 13)

# Last week whose seven days all fit before date.max
MAX_WEEK_INDEX = ((date.max - EPOCH).days - 6) // 7

DAYS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

TIME_BANDS: tuple[TimeBand, ...] = (
    TimeBand(id="morning", label="6-9am"),
    TimeBand(id="midday", label="9am-1pm"),
    TimeBand(id="afternoon", label="1-5pm"),
    TimeBand(id="evening", label="5-8pm"),
)

BAND_IDS: tuple[str, ...] = tuple(band.id for band in TIME_BANDS)

DEFAULT_PEOPLE: tuple[str, ...] = ("Mum", "Dad", "Megan", "EDS", "Lisa", "Granny")

DEFAULT_NUMBER_OF_WEEKS = 12

CALENDAR_TITLE = "Eva's Weekly Calendar"
