"""Programs and standalone workout templates.

Templates are plain data; starting a workout copies them into an
:class:`~backend.models.ActiveSession`, so edits made here never reach a
session that is already running and vice versa.
"""

from __future__ import annotations

import copy
from typing import TypeVar

from core import new_id
from backend.app_state import AppState
from backend.catalog import ExerciseCatalog
from backend.errors import TemplateNotFoundError, TemplateValidationError
from backend.models import Program, WorkoutTemplate

T = TypeVar("T")


def move_item(items: list[T], from_index: int, to_index: int) -> list[T]:
    """Move ``items[from_index]`` to ``to_index`` in place and return ``items``."""

    if not (0 <= from_index < len(items)) or not (0 <= to_index < len(items)):
        raise IndexError("Invalid reorder indices")
    if from_index != to_index:
        item = items.pop(from_index)
        items.insert(to_index, item)
    return items


class TemplateRepository:
    def __init__(self, state: AppState, catalog: ExerciseCatalog) -> None:
        self.state = state
        self.catalog = catalog

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def validate_workout(self, workout: WorkoutTemplate) -> None:
        """Raise :class:`TemplateValidationError` if ``workout`` can't be saved."""

        if not workout.name.strip():
            raise TemplateValidationError("Workout name required")
        empty = [e for e in workout.exercises if not e.sets]
        if empty:
            names = ", ".join(self.catalog.display_name(e.exercise_id) for e in empty)
            raise TemplateValidationError(
                f"These exercises have no sets: {names}. "
                "Add at least 1 set or remove them."
            )

    def validate_program(self, program: Program) -> None:
        if not program.name.strip():
            raise TemplateValidationError("Please enter a program name")
        if program.total_weeks < 1:
            raise TemplateValidationError("A program needs at least one week")
        for workout in program.workouts:
            self.validate_workout(workout)

    # ------------------------------------------------------------------
    # Programs
    # ------------------------------------------------------------------
    def get_program(self, program_id: int) -> Program:
        for program in self.state.programs:
            if program.id == program_id:
                return program
        raise TemplateNotFoundError(f"Program {program_id} not found")

    def save_program(self, program: Program) -> Program:
        """Insert ``program`` or replace the stored program with its id."""

        program.name = program.name.strip()
        self.validate_program(program)
        stored = copy.deepcopy(program)
        for idx, existing in enumerate(self.state.programs):
            if program.id is not None and existing.id == program.id:
                self.state.programs[idx] = stored
                return stored
        stored.id = program.id or new_id({p.id for p in self.state.programs})
        self.state.programs.append(stored)
        return stored

    def delete_program(self, program_id: int) -> bool:
        before = len(self.state.programs)
        self.state.programs[:] = [p for p in self.state.programs if p.id != program_id]
        if self.state.current_program_id == program_id:
            self.state.current_program_id = None
        return len(self.state.programs) != before

    def save_workout_to_program(
        self, program: Program, workout: WorkoutTemplate, index: int | None = None
    ) -> None:
        """Add ``workout`` to the program being built, or replace ``index``."""

        workout.name = workout.name.strip()
        workout.day_label = workout.day_label.strip()
        self.validate_workout(workout)
        if index is None:
            program.workouts.append(workout)
        else:
            program.workouts[index] = workout

    @staticmethod
    def remove_workout_from_program(program: Program, index: int) -> WorkoutTemplate:
        return program.workouts.pop(index)

    # ------------------------------------------------------------------
    # Standalone workouts
    # ------------------------------------------------------------------
    def get_standalone(self, workout_id: int) -> WorkoutTemplate:
        for workout in self.state.standalone_workouts:
            if workout.id == workout_id:
                return workout
        raise TemplateNotFoundError(f"Workout {workout_id} not found")

    def save_standalone(self, workout: WorkoutTemplate) -> WorkoutTemplate:
        workout.name = workout.name.strip()
        workout.day_label = workout.day_label.strip()
        self.validate_workout(workout)
        stored = copy.deepcopy(workout)
        for idx, existing in enumerate(self.state.standalone_workouts):
            if workout.id is not None and existing.id == workout.id:
                self.state.standalone_workouts[idx] = stored
                return stored
        if stored.id is None:
            stored.id = new_id({w.id for w in self.state.standalone_workouts})
        self.state.standalone_workouts.append(stored)
        return stored

    def delete_standalone(self, workout_id: int) -> bool:
        before = len(self.state.standalone_workouts)
        self.state.standalone_workouts[:] = [
            w for w in self.state.standalone_workouts if w.id != workout_id
        ]
        return len(self.state.standalone_workouts) != before

    # ------------------------------------------------------------------
    # Current program and week
    # ------------------------------------------------------------------
    def select_program(self, program_id: int) -> Program:
        program = self.get_program(program_id)
        self.state.current_program_id = program.id
        self.state.current_week = 1
        return program

    def current_program(self) -> Program | None:
        """Return the selected program, dropping a dangling selection."""

        if self.state.current_program_id is None:
            return None
        try:
            return self.get_program(self.state.current_program_id)
        except TemplateNotFoundError:
            self.state.current_program_id = None
            return None

    def advance_week(self, reset: bool = False) -> bool:
        """Move to the next week; after the last week only ``reset`` goes back to 1."""

        program = self.current_program()
        if program is None:
            return False
        if self.state.current_week < program.total_weeks:
            self.state.current_week += 1
            return True
        if reset:
            self.state.current_week = 1
            return True
        return False

    def retreat_week(self) -> bool:
        if self.state.current_week > 1:
            self.state.current_week -= 1
            return True
        return False
