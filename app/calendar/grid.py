"""WeekGrid - one week of day x time-band slots.

A grid is a plain mapping ``{day: {band_id: [person, ...]}}``. Absent days or
bands mean the same as empty lists. Every function here is total: unknown
days, bands or positions are never an error.

Mutating helpers return a new grid and leave their input untouched, so a
grid copied into several weeks never shares lists with its source.
"""

import copy

from app.calendar.constants import BAND_IDS, DAYS

WeekGrid = dict[str, dict[str, list[str]]]


def empty_week() -> WeekGrid:
    """Return a grid with every (day, band) slot set to an empty list."""
    return {day: {band: [] for band in BAND_IDS} for day in DAYS}


def clone_week(grid: WeekGrid | None) -> WeekGrid:
    """Deep copy a grid (value semantics)."""
    if not grid:
        return {}
    return copy.deepcopy(grid)


def get_slot(grid: WeekGrid | None, day: str, band: str) -> list[str]:
    """Return the people in a slot, or an empty list when the slot is absent."""
    if not grid:
        return []
    day_slots = grid.get(day)
    if not day_slots:
        return []
    return list(day_slots.get(band) or [])


def append_person(grid: WeekGrid | None, day: str, band: str, person: str) -> WeekGrid:
    """Return a copy of `grid` with `person` appended to the end of the slot."""
    updated = clone_week(grid)
    updated.setdefault(day, {}).setdefault(band, []).append(person)
    return updated


def remove_at(grid: WeekGrid | None, day: str, band: str, index: int) -> WeekGrid:
    """Return a copy of `grid` without the person at position `index` of the slot.

    Removal is positional, so duplicate names in one slot stay distinguishable.
    An absent slot or an out-of-range index yields an unchanged copy.
    """
    updated = clone_week(grid)
    people = updated.get(day, {}).get(band)
    if people is None or not 0 <= index < len(people):
        return updated
    del people[index]
    return updated


def normalize_week(grid: WeekGrid | None) -> WeekGrid:
    """Materialize all 7x4 declared slots, keeping any stored assignments.

    Entries outside the declared day/band universe are dropped.
    """
    return {day: {band: get_slot(grid, day, band) for band in BAND_IDS} for day in DAYS}


def is_empty(grid: WeekGrid | None) -> bool:
    if not grid:
        return True
    return not any(people for bands in grid.values() for people in bands.values())
