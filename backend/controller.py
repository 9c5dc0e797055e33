"""Application controller.

:class:`TrackerController` owns the :class:`~backend.app_state.AppState` and
wires the backend components around it.  It is the seam a UI talks to: it
asks the user for confirmation through ``confirm(message)``, reports problems
through ``notify(message)`` and turns every state change into a save.

Saves are asynchronous.  When an event loop is running a write is spawned
as a task and tracked until it finishes; ``await controller.flush()`` drains
both the coalesced flush and the in-flight writes and must be awaited before
shutdown.  Without a running loop the write runs to completion in place.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Callable

from kivy.clock import Clock

from core import BACKUP_DIR, SAVE_DEBOUNCE_SECONDS, WEIGHT_UNITS
from assets.sounds import SoundSystem
from backend import settings
from backend.app_state import AppState
from backend.bodyweight import BodyweightLog
from backend.catalog import ExerciseCatalog
from backend.db_io import backup_state, export_state_json, read_import_file
from backend.errors import (
    EmptySessionError,
    InvalidImportError,
    StoreUnavailableError,
)
from backend.history import HistoryLedger
from backend.models import BodyweightEntry, HistoryRecord, Program, WorkoutTemplate
from backend.rest_timer import RestTimer
from backend.save_scheduler import SaveCoalescer
from backend.store import LocalStore
from backend.templates import TemplateRepository
from backend.workout_clock import WorkoutClock
from backend.workout_session import SessionEngine

REPLACE_SESSION_PROMPT = (
    "You have a workout in progress. Start a new one and discard the current one?"
)
DISCARD_PROMPT = "Are you sure you want to cancel this workout? All progress will be discarded."
RESET_PROMPT = "Are you sure you want to wipe all data? This cannot be undone."


def _log_notice(message: str) -> None:
    logging.info("Notice: %s", message)


def _always_yes(message: str) -> bool:
    return True


class TrackerController:
    def __init__(
        self,
        store: LocalStore | None = None,
        notify: Callable[[str], None] | None = None,
        confirm: Callable[[str], bool] | None = None,
        clock=Clock,
        sounds=None,
        save_interval: float | None = None,
        backup_dir: Path = BACKUP_DIR,
    ) -> None:
        self.store = store or LocalStore()
        self.notify = notify or _log_notice
        self.confirm = confirm or _always_yes
        self.backup_dir = Path(backup_dir)
        self._tasks: set[asyncio.Task] = set()
        self._lock: asyncio.Lock | None = None
        self._lock_loop = None

        if save_interval is None:
            save_interval = float(
                settings.get_value("save_debounce_seconds", SAVE_DEBOUNCE_SECONDS)
            )
        self.sounds = sounds if sounds is not None else SoundSystem(clock=clock)
        self.rest_timer = RestTimer(clock=clock)
        self.rest_timer.bind(on_expire=self.sounds.on_rest_expired)
        self.workout_clock = WorkoutClock(clock=clock)
        self.saver = SaveCoalescer(self._write_snapshot, interval=save_interval, clock=clock)
        self._attach(AppState())

    def _attach(self, state: AppState) -> None:
        """Point every component at ``state``."""

        self.rest_timer.skip()
        self.workout_clock.stop()
        self.state = state
        self.catalog = ExerciseCatalog(state)
        self.templates = TemplateRepository(state, self.catalog)
        self.ledger = HistoryLedger(state)
        self.bodyweight = BodyweightLog(state)
        self.engine = SessionEngine(
            state,
            self.catalog,
            self.templates,
            self.ledger,
            self.rest_timer,
            self.saver,
            self.workout_clock,
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _snapshot(self) -> str:
        return json.dumps(self.state.to_dict())

    def _write_lock(self) -> asyncio.Lock:
        """Return the lock that keeps writes in submission order on this loop."""

        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def _persist(self, payload: str) -> bool:
        try:
            async with self._write_lock():
                await self.store.save(payload)
        except StoreUnavailableError:
            self.notify("Could not save your data.")
            return False
        return True

    def _write_snapshot(self) -> None:
        """Flush callback of the save coalescer."""

        coro = self._persist(self._snapshot())
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(coro)
            return
        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def load(self) -> AppState:
        """Read the stored document, falling back to defaults if unavailable."""

        try:
            document = await self.store.load()
        except StoreUnavailableError:
            self.notify("Could not load saved data. Starting with an empty log.")
            document = None
        self._attach(AppState.from_dict(document))
        self.catalog.seed_defaults()
        if self.engine.has_session:
            logging.info("Restored workout in progress: %s", self.state.active_session.name)
            self.engine.open_view()
        return self.state

    async def save(self) -> bool:
        """Write the current state now, superseding any coalesced flush."""

        self.saver.cancel()
        self.saver.pending = False
        return await self._persist(self._snapshot())

    async def flush(self) -> None:
        """Write any pending change and wait for all in-flight saves."""

        self.saver.flush_pending()
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def reset(self) -> bool:
        if not self.confirm(RESET_PROMPT):
            return False
        self.saver.cancel()
        self.saver.pending = False
        await self.flush()
        try:
            await self.store.clear()
        except StoreUnavailableError:
            self.notify("Could not reset your data.")
            return False
        logging.info("All data wiped")
        await self.load()
        return True

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------
    async def export_data(self, dest_dir: Path) -> Path | None:
        """Export the stored document to ``dest_dir``; return the file path."""

        await self.flush()
        try:
            document = await self.store.load()
        except StoreUnavailableError:
            self.notify("Could not read your data.")
            return None
        if not document:
            self.notify("No data to export.")
            return None
        try:
            return export_state_json(document, dest_dir)
        except OSError:
            self.notify("Export failed.")
            return None

    async def import_data(self, src_path: Path) -> bool:
        """Replace all data with the document in ``src_path``.

        The current document is backed up first; an unusable file leaves the
        stored data untouched.
        """

        try:
            document = read_import_file(src_path)
        except InvalidImportError as exc:
            self.notify(str(exc))
            return False
        except OSError:
            self.notify("Could not read the selected file.")
            return False

        await self.flush()
        backup_state(self.state.to_dict(), self.backup_dir)
        try:
            await self.store.save(document)
        except StoreUnavailableError:
            self.notify("Could not import data.")
            return False
        await self.load()
        self.notify("Database imported successfully!")
        return True

    def set_weight_unit(self, unit: str) -> None:
        if unit not in WEIGHT_UNITS:
            raise ValueError(f"Unknown weight unit '{unit}'")
        self.state.weight_unit = unit
        self.saver.save_now()

    # ------------------------------------------------------------------
    # Workout session
    # ------------------------------------------------------------------
    def _may_replace(self) -> bool:
        return not self.engine.has_session or self.confirm(REPLACE_SESSION_PROMPT)

    def start_program_workout(self, program_id: int, workout_index: int, week: int | None = None):
        if not self._may_replace():
            return None
        return self.engine.start_program_workout(program_id, workout_index, week, replace=True)

    def start_standalone_workout(self, workout_id: int):
        if not self._may_replace():
            return None
        return self.engine.start_standalone_workout(workout_id, replace=True)

    def start_freestyle(self, name: str = ""):
        if not self._may_replace():
            return None
        return self.engine.start_freestyle(name, replace=True)

    def resume_from_history(self, history_id: int):
        if not self._may_replace():
            return None
        return self.engine.resume_from_history(history_id, replace=True)

    def remove_exercise(self, exercise_index: int) -> bool:
        if not self.confirm("Remove this exercise?"):
            return False
        self.engine.remove_exercise(exercise_index)
        return True

    def discard_workout(self) -> bool:
        if not self.engine.has_session or not self.confirm(DISCARD_PROMPT):
            return False
        self.engine.discard()
        return True

    def finish_workout(self) -> HistoryRecord | None:
        try:
            record = self.engine.finish()
        except EmptySessionError as exc:
            self.notify(str(exc))
            return None
        self.rest_timer.skip()
        return record

    # ------------------------------------------------------------------
    # History and bodyweight
    # ------------------------------------------------------------------
    def delete_history_record(self, record_id: int) -> bool:
        if not self.confirm("Are you sure you want to delete this workout log?"):
            return False
        deleted = self.ledger.delete(record_id)
        self.saver.save_now()
        return deleted

    def log_bodyweight(self, value) -> BodyweightEntry | None:
        try:
            entry = self.bodyweight.log(value)
        except ValueError:
            return None
        self.saver.save_now()
        return entry

    def edit_bodyweight(self, entry_id: int, value) -> BodyweightEntry | None:
        try:
            entry = self.bodyweight.edit(entry_id, value)
        except ValueError:
            return None
        if entry is not None:
            self.saver.save_now()
        return entry

    def delete_bodyweight(self, entry_id: int) -> bool:
        if not self.confirm("Delete this weight log?"):
            return False
        deleted = self.bodyweight.delete(entry_id)
        self.saver.save_now()
        return deleted

    # ------------------------------------------------------------------
    # Catalog and templates
    # ------------------------------------------------------------------
    def add_exercise_definition(self, name: str, category: str, rest_seconds: int | None = None):
        exercise = self.catalog.add(name, category, rest_seconds)
        self.saver.save_now()
        return exercise

    def delete_exercise_definition(self, exercise_id: int) -> bool:
        if not self.confirm("Delete this exercise?"):
            return False
        deleted = self.catalog.delete(exercise_id)
        self.saver.save_now()
        return deleted

    def save_program(self, program: Program) -> Program:
        stored = self.templates.save_program(program)
        self.saver.save_now()
        return stored

    def delete_program(self, program_id: int) -> bool:
        if not self.confirm("Delete this program?"):
            return False
        deleted = self.templates.delete_program(program_id)
        self.saver.save_now()
        return deleted

    def save_standalone(self, workout: WorkoutTemplate) -> WorkoutTemplate:
        stored = self.templates.save_standalone(workout)
        self.saver.save_now()
        return stored

    def delete_standalone(self, workout_id: int) -> bool:
        if not self.confirm("Delete this standalone workout?"):
            return False
        deleted = self.templates.delete_standalone(workout_id)
        self.saver.save_now()
        return deleted

    def select_program(self, program_id: int) -> Program:
        program = self.templates.select_program(program_id)
        self.saver.save_now()
        return program

    def advance_week(self) -> bool:
        """Move to the next week, offering a reset after the final week."""

        changed = self.templates.advance_week()
        if not changed:
            program = self.templates.current_program()
            if program is None:
                return False
            prompt = (
                f"You have completed all {program.total_weeks} weeks! "
                "Mark program as done and reset to Week 1?"
            )
            if not self.confirm(prompt):
                return False
            changed = self.templates.advance_week(reset=True)
        self.saver.save_now()
        return changed

    def retreat_week(self) -> bool:
        changed = self.templates.retreat_week()
        if changed:
            self.saver.save_now()
        return changed
