"""CalendarStore - authoritative holder of the shared ScheduleState.

One instance per process owns the durable JSON file. Every client edit is a
whole-document `replace`: the last replace to land wins and silently
discards any concurrent edit from another client. There is no version check.

Storage failures never escape this class: a missing or corrupt file loads as
the empty schedule, and a failed write is reported as ``False``.
"""

import json
import os
import tempfile
import threading
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from app.calendar.state import ScheduleState


class CalendarStore:
    """In-process schedule state backed by a single JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._state = ScheduleState.empty()
        # Guards the in-memory swap and the file write together
        self._lock = threading.Lock()

    def load(self) -> ScheduleState:
        """Read the backing file into memory and return a copy of it.

        Returns:
            The persisted state, or the empty state when the file is missing,
            empty, not JSON, or not a valid schedule.
        """
        state = self._read()
        with self._lock:
            self._state = state
            return state.model_copy(deep=True)

    def _read(self) -> ScheduleState:
        if not self.path.exists():
            logger.info(f"[STORE] No calendar file at {self.path}, starting empty")
            return ScheduleState.empty()
        try:
            raw = self.path.read_text(encoding="utf-8").strip()
            if not raw:
                logger.warning(f"[STORE] Calendar file {self.path} is empty, starting empty")
                return ScheduleState.empty()
            state = ScheduleState.model_validate_json(raw)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"[STORE] Could not read {self.path}: {e}")
            return ScheduleState.empty()
        except ValidationError as e:
            logger.warning(f"[STORE] Calendar file {self.path} is corrupt, starting empty: {e.error_count()} error(s)")
            return ScheduleState.empty()
        logger.info(f"[STORE] Loaded calendar from {self.path} ({len(state.weeks)} week(s))")
        return state

    def save(self, state: ScheduleState) -> bool:
        """Write the full state to disk via temp file + rename.

        A reader never sees a half-written file: the temp file is only
        renamed over the target once it is fully written and synced.

        Returns:
            True if the file was written, False on any I/O failure
        """
        with self._lock:
            return self._write(state)

    def _write(self, state: ScheduleState) -> bool:
        tmp_path: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(state.to_payload(), ensure_ascii=False, indent=2)
            fd, tmp_path = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as e:
            logger.exception(f"[STORE] Failed to save calendar to {self.path}: {e}")
            return False
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    logger.warning(f"[STORE] Could not remove temp file {tmp_path}")
        logger.info(f"[STORE] Calendar saved to {self.path}")
        return True

    def replace(self, new_state: ScheduleState) -> bool:
        """Overwrite the whole schedule and persist it.

        The in-memory state is replaced even if the write fails, so the
        running service keeps serving the latest edit.

        Returns:
            Result of the durable save
        """
        with self._lock:
            self._state = new_state.model_copy(deep=True)
            return self._write(self._state)

    def snapshot(self) -> ScheduleState:
        """Return a deep copy of the current state; never a torn read."""
        with self._lock:
            return self._state.model_copy(deep=True)
