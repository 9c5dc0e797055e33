"""The active-workout session engine.

At most one :class:`~backend.models.ActiveSession` exists at a time and it
lives on the shared :class:`~backend.app_state.AppState`.  Every mutation goes
through :class:`SessionEngine`, which persists after each change: field
edits are coalesced through the :class:`~backend.save_scheduler.SaveCoalescer`
while structural changes and completion toggles are written immediately.
"""

from __future__ import annotations

import logging
import time

from core import QUICK_WORKOUT_NAME, iso_now, new_id
from backend import (
    EDITABLE_SET_FIELDS,
    SOURCE_FREESTYLE,
    SOURCE_PROGRAM,
    SOURCE_STANDALONE,
)
from backend.app_state import AppState
from backend.catalog import ExerciseCatalog
from backend.errors import (
    EmptySessionError,
    NoActiveSessionError,
    SessionInProgressError,
    TemplateNotFoundError,
)
from backend.formatting import filter_numeric
from backend.history import HistoryLedger
from backend.models import (
    ActiveSession,
    ExerciseTemplateEntry,
    HistoryRecord,
    LoggedExercise,
    LoggedSet,
    SessionExercise,
    SessionSet,
)
from backend.rest_timer import RestTimer
from backend.save_scheduler import SaveCoalescer
from backend.templates import TemplateRepository, move_item
from backend.workout_clock import WorkoutClock


class SessionEngine:
    def __init__(
        self,
        state: AppState,
        catalog: ExerciseCatalog,
        templates: TemplateRepository,
        ledger: HistoryLedger,
        rest_timer: RestTimer,
        saver: SaveCoalescer,
        workout_clock: WorkoutClock,
    ) -> None:
        self.state = state
        self.catalog = catalog
        self.templates = templates
        self.ledger = ledger
        self.rest_timer = rest_timer
        self.saver = saver
        self.workout_clock = workout_clock

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def session(self) -> ActiveSession | None:
        return self.state.active_session

    @property
    def has_session(self) -> bool:
        return self.state.active_session is not None

    def _require_session(self) -> ActiveSession:
        if self.state.active_session is None:
            raise NoActiveSessionError("No workout in progress")
        return self.state.active_session

    def _exercise(self, exercise_index: int) -> SessionExercise:
        exercises = self._require_session().exercises
        if exercise_index < 0 or exercise_index >= len(exercises):
            raise IndexError("Invalid exercise index")
        return exercises[exercise_index]

    def _set(self, exercise_index: int, set_index: int) -> SessionSet:
        sets = self._exercise(exercise_index).sets
        if set_index < 0 or set_index >= len(sets):
            raise IndexError("Invalid set index")
        return sets[set_index]

    def _materialize(self, entries: list[ExerciseTemplateEntry]) -> list[SessionExercise]:
        """Copy template entries into fresh, empty logging exercises."""

        exercises = []
        for entry in entries:
            rest = (
                entry.rest_seconds
                if entry.rest_seconds is not None
                else self.catalog.rest_for(entry.exercise_id)
            )
            exercises.append(
                SessionExercise(
                    exercise_id=entry.exercise_id,
                    rest_seconds=rest,
                    sets=[SessionSet(target_reps=t.target_reps) for t in entry.sets],
                )
            )
        return exercises

    def _make_room(self, replace: bool) -> None:
        if self.state.active_session is None:
            return
        if not replace:
            raise SessionInProgressError(
                f"'{self.state.active_session.name}' is still in progress"
            )
        logging.info(
            "Discarding workout '%s' to start a new one", self.state.active_session.name
        )
        self.rest_timer.skip()
        self._clear()

    def _begin(self, session: ActiveSession) -> ActiveSession:
        self.state.active_session = session
        logging.info("Started workout '%s' (%s)", session.name, session.source_kind)
        self.saver.save_now()
        self.open_view()
        return session

    def _clear(self) -> None:
        self.state.active_session = None
        self.workout_clock.stop()

    # ------------------------------------------------------------------
    # Creating a session
    # ------------------------------------------------------------------

    def start_program_workout(
        self,
        program_id: int,
        workout_index: int,
        week: int | None = None,
        *,
        replace: bool = False,
    ) -> ActiveSession:
        """Start logging workout ``workout_index`` of program ``program_id``."""

        program = self.templates.get_program(program_id)
        if workout_index < 0 or workout_index >= len(program.workouts):
            raise TemplateNotFoundError(
                f"Program '{program.name}' has no workout {workout_index}"
            )
        template = program.workouts[workout_index]
        self._make_room(replace)
        return self._begin(
            ActiveSession(
                name=template.name,
                source_kind=SOURCE_PROGRAM,
                source_program_id=program.id,
                source_workout_index=workout_index,
                week=week or self.state.current_week or 1,
                exercises=self._materialize(template.exercises),
            )
        )

    def start_standalone_workout(self, workout_id: int, *, replace: bool = False) -> ActiveSession:
        template = self.templates.get_standalone(workout_id)
        self._make_room(replace)
        return self._begin(
            ActiveSession(
                name=template.name,
                source_kind=SOURCE_STANDALONE,
                source_standalone_id=template.id,
                exercises=self._materialize(template.exercises),
            )
        )

    def start_freestyle(self, name: str = "", *, replace: bool = False) -> ActiveSession:
        self._make_room(replace)
        return self._begin(
            ActiveSession(
                name=(name or "").strip() or QUICK_WORKOUT_NAME,
                source_kind=SOURCE_FREESTYLE,
            )
        )

    def resume_from_history(self, history_id: int, *, replace: bool = False) -> ActiveSession:
        """Reopen a finished workout for editing.

        Finishing the reopened session overwrites ``history_id`` instead of
        adding a new record.
        """

        record = self.ledger.get(history_id)
        if record is None:
            raise TemplateNotFoundError(f"History record {history_id} not found")
        self._make_room(replace)
        exercises = [
            SessionExercise(
                exercise_id=logged.exercise_id,
                rest_seconds=self.catalog.rest_for(logged.exercise_id),
                sets=[
                    SessionSet(weight=s.weight, reps=s.reps, completed=True)
                    for s in logged.sets
                ],
            )
            for logged in record.exercises
        ]
        return self._begin(
            ActiveSession(
                name=record.name,
                source_kind=SOURCE_PROGRAM if record.program_id is not None else SOURCE_FREESTYLE,
                source_program_id=record.program_id,
                source_workout_index=record.workout_index,
                week=record.week,
                notes=record.notes,
                exercises=exercises,
                resuming_history_id=record.id,
            )
        )

    # ------------------------------------------------------------------
    # Editing the session
    # ------------------------------------------------------------------

    def add_exercise(self, exercise_id: int) -> SessionExercise:
        """Append ``exercise_id`` with one empty set; duplicates are allowed."""

        session = self._require_session()
        exercise = SessionExercise(
            exercise_id=exercise_id,
            rest_seconds=self.catalog.rest_for(exercise_id),
            sets=[SessionSet()],
        )
        session.exercises.append(exercise)
        self.saver.save_now()
        return exercise

    def remove_exercise(self, exercise_index: int) -> SessionExercise:
        self._exercise(exercise_index)
        removed = self._require_session().exercises.pop(exercise_index)
        self.saver.save_now()
        return removed

    def move_exercise(self, from_index: int, to_index: int) -> None:
        move_item(self._require_session().exercises, from_index, to_index)
        self.saver.save_now()

    def add_set(self, exercise_index: int) -> SessionSet:
        """Append a set seeded with the previous set's weight and target reps."""

        exercise = self._exercise(exercise_index)
        previous = exercise.sets[-1] if exercise.sets else None
        new_set = SessionSet(
            weight=previous.weight if previous else "",
            target_reps=previous.target_reps if previous else "",
        )
        exercise.sets.append(new_set)
        self.saver.save_now()
        return new_set

    def update_set_field(self, exercise_index: int, set_index: int, field: str, value: str) -> None:
        if field not in EDITABLE_SET_FIELDS:
            raise ValueError(f"Unknown set field '{field}'")
        setattr(self._set(exercise_index, set_index), field, value)
        self.saver.request()

    def set_exercise_rest(self, exercise_index: int, value) -> int:
        """Change the rest used after sets of this exercise in this session."""

        exercise = self._exercise(exercise_index)
        exercise.rest_seconds = int(filter_numeric(str(value)) or 0)
        self.saver.request()
        return exercise.rest_seconds

    def set_notes(self, text: str) -> None:
        self._require_session().notes = text
        self.saver.request()

    def toggle_set_completion(self, exercise_index: int, set_index: int) -> bool:
        """Flip the completed flag; completing a set starts the rest timer."""

        exercise = self._exercise(exercise_index)
        logged = self._set(exercise_index, set_index)
        was_completed = logged.completed
        logged.completed = not was_completed
        self.saver.save_now()
        if not was_completed:
            self.rest_timer.start(
                exercise.rest_seconds, self.catalog.display_name(exercise.exercise_id)
            )
        return logged.completed

    # ------------------------------------------------------------------
    # Ending the session
    # ------------------------------------------------------------------

    def finish(self) -> HistoryRecord:
        """Commit the session to history and close it.

        Only completed sets, or sets with both weight and reps entered, are
        kept; exercises left without sets are dropped.  If nothing qualifies
        :class:`EmptySessionError` is raised and the session stays open.
        """

        session = self._require_session()
        logged = [
            LoggedExercise(
                exercise_id=ex.exercise_id,
                sets=[LoggedSet(weight=s.weight, reps=s.reps) for s in ex.sets if s.is_logged()],
            )
            for ex in session.exercises
        ]
        logged = [ex for ex in logged if ex.sets]
        if not logged:
            raise EmptySessionError("You haven't logged any sets!")

        editing = session.resuming_history_id
        if editing is not None and self.ledger.get(editing) is not None:
            record = self.ledger.overwrite(editing, exercises=logged, notes=session.notes)
        else:
            if editing is not None:
                logging.warning(
                    "History record %s vanished while being edited; saving a new record",
                    editing,
                )
            record = self.ledger.append(
                HistoryRecord(
                    id=new_id(self.ledger.ids()),
                    date=iso_now(),
                    program_id=session.source_program_id,
                    workout_index=session.source_workout_index,
                    week=session.week or 1,
                    name=session.name,
                    notes=session.notes,
                    exercises=logged,
                )
            )

        logging.info("Finished workout '%s' as record %s", session.name, record.id)
        self._clear()
        self.saver.save_now()
        return record

    def discard(self) -> None:
        """Throw the session away without touching history."""

        session = self._require_session()
        logging.info("Discarded workout '%s'", session.name)
        self._clear()
        self.rest_timer.skip()
        self.saver.save_now()

    # ------------------------------------------------------------------
    # Elapsed time and display helpers
    # ------------------------------------------------------------------

    def open_view(self) -> None:
        """Start the live elapsed-time display for the open session."""

        self.workout_clock.start(self._require_session().started_at)

    def close_view(self) -> None:
        """Stop refreshing the elapsed time; the workout clock keeps running."""

        self.workout_clock.stop()

    def elapsed_seconds(self) -> int:
        return max(0, int(time.time() - self._require_session().started_at))

    def exercise_name(self, exercise_index: int) -> str:
        return self.catalog.display_name(self._exercise(exercise_index).exercise_id)

    def last_performance(self, exercise_id: int) -> LoggedSet | None:
        return self.ledger.last_performance_for(exercise_id)
