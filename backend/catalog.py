"""Exercise catalog helpers.

The catalog is the reference list of known exercises.  Sessions, templates
and history refer to exercises by id only, so deleting a definition never
breaks existing records; lookups for a missing id fall back to
:data:`core.UNKNOWN_EXERCISE_NAME` and :data:`core.DEFAULT_REST_DURATION`.
"""

from __future__ import annotations

import logging

from core import DEFAULT_CATEGORY, DEFAULT_REST_DURATION, UNKNOWN_EXERCISE_NAME, new_id
from backend.app_state import AppState
from backend.default_exercises import DEFAULT_EXERCISES
from backend.errors import TemplateValidationError
from backend.models import ExerciseDefinition


def normalize_category(category: str | None) -> str:
    """Return ``category`` in title case, ``"Other"`` when blank."""

    raw = (category or "").strip() or DEFAULT_CATEGORY
    return " ".join(word[:1].upper() + word[1:].lower() for word in raw.split(" "))


class ExerciseCatalog:
    def __init__(self, state: AppState) -> None:
        self.state = state

    @property
    def exercises(self) -> list[ExerciseDefinition]:
        return self.state.exercises

    def get(self, exercise_id: int) -> ExerciseDefinition | None:
        for exercise in self.state.exercises:
            if exercise.id == exercise_id:
                return exercise
        return None

    def display_name(self, exercise_id: int) -> str:
        exercise = self.get(exercise_id)
        return exercise.name if exercise and exercise.name else UNKNOWN_EXERCISE_NAME

    def rest_for(self, exercise_id: int) -> int:
        """Return the default rest for ``exercise_id`` in seconds."""

        exercise = self.get(exercise_id)
        if exercise and exercise.rest_seconds:
            return exercise.rest_seconds
        return DEFAULT_REST_DURATION

    def add(
        self,
        name: str,
        category: str = DEFAULT_CATEGORY,
        rest_seconds: int | None = None,
    ) -> ExerciseDefinition:
        """Create a user-defined exercise and return it."""

        name = (name or "").strip()
        if not name:
            raise TemplateValidationError("Name required")
        exercise = ExerciseDefinition(
            id=new_id({e.id for e in self.state.exercises}),
            name=name,
            category=category or DEFAULT_CATEGORY,
            rest_seconds=rest_seconds or DEFAULT_REST_DURATION,
        )
        self.state.exercises.append(exercise)
        return exercise

    def delete(self, exercise_id: int) -> bool:
        """Remove ``exercise_id`` from the catalog; history keeps its id."""

        before = len(self.state.exercises)
        self.state.exercises[:] = [e for e in self.state.exercises if e.id != exercise_id]
        return len(self.state.exercises) != before

    def search(self, text: str = "") -> list[ExerciseDefinition]:
        needle = (text or "").lower()
        return [e for e in self.state.exercises if needle in e.name.lower()]

    def grouped(self, text: str = "") -> list[tuple[str, list[ExerciseDefinition]]]:
        """Return ``(category, exercises)`` pairs sorted by category name."""

        groups: dict[str, list[ExerciseDefinition]] = {}
        for exercise in self.search(text):
            groups.setdefault(normalize_category(exercise.category), []).append(exercise)
        return sorted(groups.items())

    def seed_defaults(self) -> bool:
        """Fill an empty catalog with the built-in library."""

        if self.state.exercises:
            return False
        self.state.exercises.extend(
            ExerciseDefinition(id=i, name=n, category=c, rest_seconds=r)
            for i, n, c, r in sorted(DEFAULT_EXERCISES, key=lambda row: row[1])
        )
        logging.info("Seeded exercise catalog with %d exercises", len(self.state.exercises))
        return True
