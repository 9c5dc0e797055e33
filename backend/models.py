"""Data structures stored in the application-state document.

Every class converts to and from the camelCase mapping used by the saved
document (and by exported backups).  ``from_dict`` is total: missing or
wrongly typed fields fall back to defaults instead of raising, so a partially
corrupt document still loads.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from core import DEFAULT_CATEGORY, DEFAULT_REST_DURATION, DEFAULT_WEEKS, QUICK_WORKOUT_NAME
from backend import SOURCE_FREESTYLE, SOURCE_KINDS

T = TypeVar("T")


# ----------------------------------------------------------------------
# Coercion helpers
# ----------------------------------------------------------------------

def _as_int(value: Any, default: int | None = None) -> int | None:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return default


def _as_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def load_records(items: Any, factory: Callable[[dict], T], what: str) -> list[T]:
    """Build ``factory`` objects from ``items`` skipping malformed entries."""

    if not isinstance(items, list):
        if items is not None:
            logging.warning("Ignoring %s: expected a list, got %s", what, type(items).__name__)
        return []
    records: list[T] = []
    for item in items:
        if not isinstance(item, dict):
            logging.warning("Skipping malformed %s entry: %r", what, item)
            continue
        records.append(factory(item))
    return records


# ----------------------------------------------------------------------
# Catalog and templates
# ----------------------------------------------------------------------

@dataclass
class ExerciseDefinition:
    id: int
    name: str
    category: str = DEFAULT_CATEGORY
    rest_seconds: int = DEFAULT_REST_DURATION

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "restTime": self.rest_seconds,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseDefinition":
        return cls(
            id=_as_int(data.get("id"), 0),
            name=_as_str(data.get("name")),
            category=_as_str(data.get("category")) or DEFAULT_CATEGORY,
            rest_seconds=_as_int(data.get("restTime")) or DEFAULT_REST_DURATION,
        )


@dataclass
class TargetSet:
    target_reps: str = ""

    def to_dict(self) -> dict:
        return {"reps": self.target_reps}

    @classmethod
    def from_dict(cls, data: dict) -> "TargetSet":
        return cls(target_reps=_as_str(data.get("reps")))


@dataclass
class ExerciseTemplateEntry:
    exercise_id: int
    rest_seconds: int | None = None
    sets: list[TargetSet] = field(default_factory=list)

    def to_dict(self) -> dict:
        data: dict = {
            "exerciseId": self.exercise_id,
            "sets": [s.to_dict() for s in self.sets],
        }
        if self.rest_seconds is not None:
            data["restTime"] = self.rest_seconds
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseTemplateEntry":
        return cls(
            exercise_id=_as_int(data.get("exerciseId"), 0),
            rest_seconds=_as_int(data.get("restTime")),
            sets=load_records(data.get("sets"), TargetSet.from_dict, "target set"),
        )


@dataclass
class WorkoutTemplate:
    name: str
    id: int | None = None
    day_label: str = ""
    exercises: list[ExerciseTemplateEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        data: dict = {
            "name": self.name,
            "dayLabel": self.day_label,
            "exercises": [e.to_dict() for e in self.exercises],
        }
        if self.id is not None:
            data["id"] = self.id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutTemplate":
        return cls(
            id=_as_int(data.get("id")),
            name=_as_str(data.get("name")),
            day_label=_as_str(data.get("dayLabel")),
            exercises=load_records(
                data.get("exercises"), ExerciseTemplateEntry.from_dict, "template exercise"
            ),
        )


@dataclass
class Program:
    name: str
    id: int | None = None
    total_weeks: int = DEFAULT_WEEKS
    workouts: list[WorkoutTemplate] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "weeks": self.total_weeks,
            "workouts": [w.to_dict() for w in self.workouts],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Program":
        weeks = _as_int(data.get("weeks"), DEFAULT_WEEKS)
        return cls(
            id=_as_int(data.get("id")),
            name=_as_str(data.get("name")),
            total_weeks=max(1, weeks),
            workouts=load_records(data.get("workouts"), WorkoutTemplate.from_dict, "program workout"),
        )


# ----------------------------------------------------------------------
# Active session
# ----------------------------------------------------------------------

@dataclass
class SessionSet:
    weight: str = ""
    target_reps: str = ""
    reps: str = ""
    completed: bool = False

    def is_logged(self) -> bool:
        """Return ``True`` if the set counts towards the finished workout."""

        return self.completed or bool(self.weight and self.reps)

    def to_dict(self) -> dict:
        return {
            "weight": self.weight,
            "targetReps": self.target_reps,
            "reps": self.reps,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionSet":
        return cls(
            weight=_as_str(data.get("weight")),
            target_reps=_as_str(data.get("targetReps")),
            reps=_as_str(data.get("reps")),
            completed=bool(data.get("completed", False)),
        )


@dataclass
class SessionExercise:
    exercise_id: int
    rest_seconds: int = DEFAULT_REST_DURATION
    sets: list[SessionSet] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "exerciseId": self.exercise_id,
            "restTime": self.rest_seconds,
            "sets": [s.to_dict() for s in self.sets],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionExercise":
        rest = _as_int(data.get("restTime"))
        return cls(
            exercise_id=_as_int(data.get("exerciseId"), 0),
            rest_seconds=DEFAULT_REST_DURATION if rest is None else rest,
            sets=load_records(data.get("sets"), SessionSet.from_dict, "session set"),
        )


@dataclass
class ActiveSession:
    """The single in-progress workout.

    ``started_at`` is stored in epoch seconds; the document keeps the
    millisecond ``startTime`` of the original backups.
    """

    name: str
    source_kind: str = SOURCE_FREESTYLE
    source_program_id: int | None = None
    source_workout_index: int | None = None
    week: int | None = None
    source_standalone_id: int | None = None
    started_at: float = field(default_factory=time.time)
    notes: str = ""
    exercises: list[SessionExercise] = field(default_factory=list)
    resuming_history_id: int | None = None

    def to_dict(self) -> dict:
        data: dict = {
            "type": self.source_kind,
            "name": self.name,
            "startTime": int(self.started_at * 1000),
            "notes": self.notes,
            "exercises": [e.to_dict() for e in self.exercises],
        }
        optional = {
            "programId": self.source_program_id,
            "workoutIndex": self.source_workout_index,
            "week": self.week,
            "standaloneWorkoutId": self.source_standalone_id,
            "historyId": self.resuming_history_id,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ActiveSession":
        kind = data.get("type")
        if kind not in SOURCE_KINDS:
            kind = SOURCE_FREESTYLE
        start_ms = _as_int(data.get("startTime"))
        return cls(
            name=_as_str(data.get("name")) or QUICK_WORKOUT_NAME,
            source_kind=kind,
            source_program_id=_as_int(data.get("programId")),
            source_workout_index=_as_int(data.get("workoutIndex")),
            week=_as_int(data.get("week")),
            source_standalone_id=_as_int(data.get("standaloneWorkoutId")),
            started_at=start_ms / 1000 if start_ms else time.time(),
            notes=_as_str(data.get("notes")),
            exercises=load_records(data.get("exercises"), SessionExercise.from_dict, "session exercise"),
            resuming_history_id=_as_int(data.get("historyId")),
        )


# ----------------------------------------------------------------------
# History
# ----------------------------------------------------------------------

@dataclass
class LoggedSet:
    weight: str = ""
    reps: str = ""

    def to_dict(self) -> dict:
        return {"weight": self.weight, "reps": self.reps}

    @classmethod
    def from_dict(cls, data: dict) -> "LoggedSet":
        return cls(weight=_as_str(data.get("weight")), reps=_as_str(data.get("reps")))


@dataclass
class LoggedExercise:
    exercise_id: int
    sets: list[LoggedSet] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"exerciseId": self.exercise_id, "sets": [s.to_dict() for s in self.sets]}

    @classmethod
    def from_dict(cls, data: dict) -> "LoggedExercise":
        return cls(
            exercise_id=_as_int(data.get("exerciseId"), 0),
            sets=load_records(data.get("sets"), LoggedSet.from_dict, "logged set"),
        )


@dataclass
class HistoryRecord:
    id: int
    date: str
    name: str
    program_id: int | None = None
    workout_index: int | None = None
    week: int | None = None
    notes: str = ""
    exercises: list[LoggedExercise] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "programId": self.program_id,
            "workoutIndex": self.workout_index,
            "week": self.week,
            "name": self.name,
            "exercises": [e.to_dict() for e in self.exercises],
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryRecord":
        return cls(
            id=_as_int(data.get("id"), 0),
            date=_as_str(data.get("date")),
            name=_as_str(data.get("name")),
            program_id=_as_int(data.get("programId")),
            workout_index=_as_int(data.get("workoutIndex")),
            week=_as_int(data.get("week")),
            notes=_as_str(data.get("notes")),
            exercises=load_records(data.get("exercises"), LoggedExercise.from_dict, "history exercise"),
        )


@dataclass
class BodyweightEntry:
    id: int
    date: str
    weight: float

    def to_dict(self) -> dict:
        return {"id": self.id, "date": self.date, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict) -> "BodyweightEntry":
        return cls(
            id=_as_int(data.get("id"), 0),
            date=_as_str(data.get("date")),
            weight=_as_float(data.get("weight")),
        )
