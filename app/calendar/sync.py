"""SyncGateway - fetch / replace contract between clients and the store.

Clients hold a full, possibly stale copy of the schedule and push the whole
document back after every edit. Nothing is merged.
"""

import json
from typing import Any

from loguru import logger
from pydantic import ValidationError

from app.calendar.errors import MalformedStateError
from app.calendar.state import ScheduleState
from app.calendar.store import CalendarStore


def parse_state(body: bytes | str | dict[str, Any]) -> ScheduleState:
    """Parse a client payload into a ScheduleState.

    Raises:
        MalformedStateError: body is not JSON, not an object, or fails validation
    """
    if isinstance(body, (bytes, str)):
        try:
            body = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
            raise MalformedStateError(f"Body is not valid JSON: {e}") from e
    if not isinstance(body, dict):
        raise MalformedStateError(f"Expected a JSON object, got {type(body).__name__}")
    try:
        return ScheduleState.model_validate(body)
    except ValidationError as e:
        details = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise MalformedStateError("Schedule failed validation", details=details) from e


class SyncGateway:
    """Request/response contract over a CalendarStore."""

    def __init__(self, store: CalendarStore):
        self.store = store

    def fetch(self) -> dict[str, Any]:
        """Return the current schedule in wire format.

        A never-written store returns the empty schedule, indistinguishable
        from one written empty.
        """
        return self.store.snapshot().to_payload()

    def push(self, body: bytes | str | dict[str, Any]) -> bool:
        """Replace the whole schedule with `body`.

        Parsing happens before the store is touched, so a malformed body
        leaves the previous state in place.

        Returns:
            Whether the durable save succeeded
        """
        state = parse_state(body)
        success = self.store.replace(state)
        if success:
            logger.info(f"[SYNC] Schedule replaced ({len(state.weeks)} week(s), {len(state.custom_people)} custom people)")
        else:
            logger.error("[SYNC] Schedule replaced in memory but durable save failed")
        return success
