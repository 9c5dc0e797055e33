"""History of finished workouts.

Records are append-only apart from the explicit edit (which overwrites a
record in place, keeping its id and date) and delete operations.  The
ledger also answers the "last time" and progress queries used by the
logging and progress views.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core import parse_iso
from backend.app_state import AppState
from backend.errors import TemplateNotFoundError
from backend.models import HistoryRecord, LoggedExercise, LoggedSet

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def weight_value(weight: str) -> float:
    """Return ``weight`` as a number; blank or unreadable weights count as 0."""

    try:
        return float(weight)
    except (TypeError, ValueError):
        return 0.0


def best_set(sets: list[LoggedSet]) -> LoggedSet | None:
    """Return the heaviest set; ties keep the first one encountered."""

    best: LoggedSet | None = None
    for logged in sets:
        if best is None or weight_value(logged.weight) > weight_value(best.weight):
            best = logged
    return best


def _record_date(record: HistoryRecord) -> datetime:
    return parse_iso(record.date) or _EPOCH


class HistoryLedger:
    def __init__(self, state: AppState) -> None:
        self.state = state

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def append(self, record: HistoryRecord) -> HistoryRecord:
        self.state.history.append(record)
        return record

    def overwrite(
        self,
        record_id: int,
        *,
        exercises: list[LoggedExercise],
        notes: str,
    ) -> HistoryRecord:
        """Replace the logged data of ``record_id`` keeping its id and date."""

        record = self.get(record_id)
        if record is None:
            raise TemplateNotFoundError(f"History record {record_id} not found")
        record.exercises = exercises
        record.notes = notes
        return record

    def delete(self, record_id: int) -> bool:
        before = len(self.state.history)
        self.state.history[:] = [r for r in self.state.history if r.id != record_id]
        return len(self.state.history) != before

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get(self, record_id: int) -> HistoryRecord | None:
        for record in self.state.history:
            if record.id == record_id:
                return record
        return None

    def ids(self) -> set[int]:
        return {r.id for r in self.state.history}

    def records(self) -> list[HistoryRecord]:
        """Return all records, most recent first."""

        return sorted(self.state.history, key=_record_date, reverse=True)

    def last_performance_for(self, exercise_id: int) -> LoggedSet | None:
        """Return the best set of the most recent workout containing ``exercise_id``."""

        for record in self.records():
            for logged in record.exercises:
                if logged.exercise_id == exercise_id:
                    return best_set(logged.sets)
        return None

    def last_completion_date_for(
        self,
        *,
        program_id: int | None = None,
        workout_index: int | None = None,
        name: str | None = None,
    ) -> datetime | None:
        """Return when a template was last done.

        Program workouts match on ``(program_id, workout_index)``; standalone
        and freestyle workouts match on ``name``.
        """

        for record in self.records():
            if program_id is not None:
                if record.program_id == program_id and record.workout_index == workout_index:
                    return parse_iso(record.date)
            elif record.name == name:
                return parse_iso(record.date)
        return None

    def logged_exercise_ids(self) -> list[int]:
        """Return the ids of every exercise that appears in history."""

        seen: list[int] = []
        for record in self.state.history:
            for logged in record.exercises:
                if logged.exercise_id not in seen:
                    seen.append(logged.exercise_id)
        return seen

    def strength_progress(self, exercise_id: int) -> list[dict]:
        """Return the best weight per workout for ``exercise_id``, oldest first."""

        points = []
        for record in sorted(self.state.history, key=_record_date):
            for logged in record.exercises:
                if logged.exercise_id != exercise_id or not logged.sets:
                    continue
                best = best_set(logged.sets)
                if weight_value(best.weight):
                    points.append(
                        {
                            "date": record.date,
                            "weight": weight_value(best.weight),
                            "reps": int(weight_value(best.reps)),
                        }
                    )
                break
        return points
