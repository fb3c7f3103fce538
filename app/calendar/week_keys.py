"""Week index <-> week key arithmetic.

Week boundaries are Monday-Sunday (ISO week). All arithmetic is on naive
`date` values, so a key never depends on the host timezone or DST.
"""

from datetime import date, timedelta

from app.calendar.constants import EPOCH, MAX_WEEK_INDEX

WEEK_KEY_PREFIX = "week_"


def start_date_for(index: int) -> date:
    """Return the Monday that starts week `index` (0 = epoch week)."""
    if not 0 <= index <= MAX_WEEK_INDEX:
        raise ValueError(f"Week index must be in 0..{MAX_WEEK_INDEX}, got {index}")
    return EPOCH + timedelta(days=index * 7)


def key_for_date(week_start: date) -> str:
    return f"{WEEK_KEY_PREFIX}{week_start.isoformat()}"


def key_for(index: int) -> str:
    """Return the canonical key, e.g. ``week_2025-01-13`` for index 0."""
    return key_for_date(start_date_for(index))


def index_for_date(week_start: date) -> int | None:
    """Inverse of start_date_for.

    Returns None when the date is not a Monday on or after the epoch, or
    starts a week past MAX_WEEK_INDEX.
    """
    delta = (week_start - EPOCH).days
    if delta < 0 or delta % 7 != 0 or delta // 7 > MAX_WEEK_INDEX:
        return None
    return delta // 7


def next_monday(today: date) -> date:
    """Return the Monday the weekly digests are about.

    Monday maps to itself; every other day maps to the following Monday.
    """
    return today + timedelta(days=(7 - today.weekday()) % 7)


def week_dates(week_start: date) -> list[date]:
    return [week_start + timedelta(days=offset) for offset in range(7)]


def week_end_for(week_start: date) -> date:
    return week_start + timedelta(days=6)


def format_short(d: date) -> str:
    """Format as ``13 Jan``."""
    return f"{d.day} {d.strftime('%b')}"


def format_long(d: date) -> str:
    """Format as ``13 January 2025``."""
    return f"{d.day} {d.strftime('%B')} {d.year}"
