"""Explicit application-state object shared by the backend components.

The whole object is saved as one document.  :meth:`AppState.from_dict`
performs the schema check at load time: unknown keys are dropped, missing
keys take the defaults below and malformed nested records are skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from core import DEFAULT_WEIGHT_UNIT, WEIGHT_UNITS
from backend.models import (
    ActiveSession,
    BodyweightEntry,
    ExerciseDefinition,
    HistoryRecord,
    Program,
    WorkoutTemplate,
    _as_int,
    load_records,
)


@dataclass
class AppState:
    exercises: list[ExerciseDefinition] = field(default_factory=list)
    programs: list[Program] = field(default_factory=list)
    standalone_workouts: list[WorkoutTemplate] = field(default_factory=list)
    current_program_id: int | None = None
    current_week: int = 1
    history: list[HistoryRecord] = field(default_factory=list)
    bodyweight: list[BodyweightEntry] = field(default_factory=list)
    active_session: ActiveSession | None = None
    weight_unit: str = DEFAULT_WEIGHT_UNIT

    def to_dict(self) -> dict:
        """Return the JSON-serialisable document for the store."""

        return {
            "exercises": [e.to_dict() for e in self.exercises],
            "programs": [p.to_dict() for p in self.programs],
            "standaloneWorkouts": [w.to_dict() for w in self.standalone_workouts],
            "currentProgram": self.current_program_id,
            "currentWeek": self.current_week,
            "workoutHistory": [h.to_dict() for h in self.history],
            "bodyweightHistory": [b.to_dict() for b in self.bodyweight],
            "activeWorkout": (
                self.active_session.to_dict() if self.active_session else None
            ),
            "weightUnit": self.weight_unit,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "AppState":
        """Reconstruct state from a stored document, filling defaults."""

        if not isinstance(data, dict):
            if data is not None:
                logging.warning("Stored state is not a mapping; using defaults")
            return cls()

        active = data.get("activeWorkout")
        if active is not None and not isinstance(active, dict):
            logging.warning("Discarding malformed active workout: %r", active)
            active = None

        unit = data.get("weightUnit")
        if unit not in WEIGHT_UNITS:
            unit = DEFAULT_WEIGHT_UNIT

        return cls(
            exercises=load_records(data.get("exercises"), ExerciseDefinition.from_dict, "exercise"),
            programs=load_records(data.get("programs"), Program.from_dict, "program"),
            standalone_workouts=load_records(
                data.get("standaloneWorkouts"), WorkoutTemplate.from_dict, "standalone workout"
            ),
            current_program_id=_as_int(data.get("currentProgram")),
            current_week=max(1, _as_int(data.get("currentWeek"), 1)),
            history=load_records(data.get("workoutHistory"), HistoryRecord.from_dict, "history record"),
            bodyweight=load_records(data.get("bodyweightHistory"), BodyweightEntry.from_dict, "bodyweight"),
            active_session=ActiveSession.from_dict(active) if active else None,
            weight_unit=unit,
        )
