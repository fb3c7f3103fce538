"""Board operations - the edits a client makes before pushing the schedule back.

Every function takes a ScheduleState and returns a new one; inputs are never
mutated. Operations without an explicit week act on the selected week.
"""

from loguru import logger

from app.calendar.constants import DEFAULT_NUMBER_OF_WEEKS, DEFAULT_PEOPLE
from app.calendar.errors import EmptyWeekError
from app.calendar.grid import append_person, clone_week, empty_week, remove_at
from app.calendar.state import ScheduleState
from app.calendar.week_keys import key_for


def all_people(state: ScheduleState) -> list[str]:
    """Default roster followed by the custom roster."""
    return [*DEFAULT_PEOPLE, *state.custom_people]


def is_default_person(name: str) -> bool:
    return name in DEFAULT_PEOPLE


def ensure_weeks(state: ScheduleState, count: int = DEFAULT_NUMBER_OF_WEEKS) -> ScheduleState:
    """Materialize an empty grid for each of the first `count` weeks that has none."""
    updated = state.model_copy(deep=True)
    for index in range(count):
        updated.weeks.setdefault(key_for(index), empty_week())
    return updated


def select_week(state: ScheduleState, index: int, number_of_weeks: int = DEFAULT_NUMBER_OF_WEEKS) -> ScheduleState:
    if not 0 <= index < number_of_weeks:
        raise ValueError(f"Week index {index} outside 0..{number_of_weeks - 1}")
    return state.model_copy(update={"current_week_index": index}, deep=True)


def add_person(
    state: ScheduleState,
    day: str,
    band: str,
    person: str,
    week_index: int | None = None,
) -> ScheduleState:
    """Append `person` to a slot, growing the custom roster with unknown names.

    Raises:
        ValueError: if the name is blank
    """
    name = person.strip()
    if not name:
        raise ValueError("Person name must not be blank")

    index = state.current_week_index if week_index is None else week_index
    week_key = key_for(index)
    updated = state.model_copy(deep=True)
    updated.weeks[week_key] = append_person(updated.weeks.get(week_key) or empty_week(), day, band, name)
    if name not in updated.custom_people and not is_default_person(name):
        updated.custom_people.append(name)
    return updated


def remove_person(
    state: ScheduleState,
    day: str,
    band: str,
    position: int,
    week_index: int | None = None,
) -> ScheduleState:
    """Remove the person at `position` in a slot; invalid positions are a no-op."""
    index = state.current_week_index if week_index is None else week_index
    week_key = key_for(index)
    updated = state.model_copy(deep=True)
    if week_key in updated.weeks:
        updated.weeks[week_key] = remove_at(updated.weeks[week_key], day, band, position)
    return updated


def repeat_week(
    state: ScheduleState,
    num_weeks: int,
    number_of_weeks: int = DEFAULT_NUMBER_OF_WEEKS,
    source_index: int | None = None,
) -> tuple[ScheduleState, int]:
    """Copy one week's grid into the following `num_weeks` weeks.

    Targets past the board's last week are skipped. Each target receives its
    own deep copy.

    Returns:
        (new state, number of weeks written)

    Raises:
        EmptyWeekError: if the source week has never been stored
    """
    source = state.current_week_index if source_index is None else source_index
    source_key = key_for(source)
    source_grid = state.weeks.get(source_key)
    if source_grid is None:
        raise EmptyWeekError(source_key)

    updated = state.model_copy(deep=True)
    copied = 0
    for offset in range(1, num_weeks + 1):
        target = source + offset
        if target >= number_of_weeks:
            break
        updated.weeks[key_for(target)] = clone_week(source_grid)
        copied += 1

    logger.info(f"[BOARD] Repeated {source_key} into {copied} following week(s)")
    return updated, copied
