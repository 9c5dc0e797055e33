import pytest

from backend.errors import TemplateNotFoundError, TemplateValidationError
from backend.models import ExerciseTemplateEntry, Program, TargetSet, WorkoutTemplate
from backend.templates import move_item

from utils import PUSH_PROGRAM_ID


def _workout(name="Pull Day", sets=1, exercise_id=3):
    return WorkoutTemplate(
        name=name,
        exercises=[ExerciseTemplateEntry(exercise_id=exercise_id, sets=[TargetSet("10")] * sets)],
    )


def test_move_item():
    items = ["a", "b", "c", "d"]
    assert move_item(items, 0, 2) == ["b", "c", "a", "d"]
    assert move_item(items, 3, 0) == ["d", "b", "c", "a"]
    with pytest.raises(IndexError):
        move_item(items, -1, 0)
    with pytest.raises(IndexError):
        move_item(items, 0, 4)


def test_validate_workout(templates):
    with pytest.raises(TemplateValidationError, match="Workout name required"):
        templates.validate_workout(_workout(name="  "))
    with pytest.raises(TemplateValidationError, match="Pull Up"):
        templates.validate_workout(_workout(sets=0))
    templates.validate_workout(_workout())


def test_save_program_assigns_id_and_copies(templates, state):
    program = Program(name="  Hypertrophy ", total_weeks=6, workouts=[_workout()])
    stored = templates.save_program(program)

    assert stored.id is not None
    assert stored.name == "Hypertrophy"
    assert stored is not program
    assert templates.get_program(stored.id) is stored

    program.workouts.clear()
    assert len(stored.workouts) == 1


def test_save_program_replaces_by_id(templates, state):
    edited = Program(name="Renamed", id=PUSH_PROGRAM_ID, workouts=[_workout()])
    templates.save_program(edited)
    assert len(state.programs) == 1
    assert templates.get_program(PUSH_PROGRAM_ID).name == "Renamed"


def test_save_program_validation(templates):
    with pytest.raises(TemplateValidationError, match="program name"):
        templates.save_program(Program(name=""))
    with pytest.raises(TemplateValidationError):
        templates.save_program(Program(name="Bad", workouts=[_workout(sets=0)]))


def test_program_workout_builder(templates):
    program = Program(name="New")
    templates.save_workout_to_program(program, _workout("Day A"))
    templates.save_workout_to_program(program, _workout("Day B"))
    templates.save_workout_to_program(program, _workout("Day B2"), index=1)
    assert [w.name for w in program.workouts] == ["Day A", "Day B2"]
    removed = templates.remove_workout_from_program(program, 0)
    assert removed.name == "Day A"
    assert [w.name for w in program.workouts] == ["Day B2"]


def test_delete_program_clears_selection(templates, state):
    templates.select_program(PUSH_PROGRAM_ID)
    assert state.current_program_id == PUSH_PROGRAM_ID
    assert templates.delete_program(PUSH_PROGRAM_ID) is True
    assert state.current_program_id is None
    with pytest.raises(TemplateNotFoundError):
        templates.get_program(PUSH_PROGRAM_ID)


def test_standalone_crud(templates, state):
    stored = templates.save_standalone(_workout("Arms"))
    assert templates.get_standalone(stored.id).name == "Arms"
    stored_again = templates.save_standalone(WorkoutTemplate(name="Arms 2", id=stored.id,
                                                             exercises=stored.exercises))
    assert len(state.standalone_workouts) == 1
    assert stored_again.name == "Arms 2"
    assert templates.delete_standalone(stored.id) is True
    with pytest.raises(TemplateNotFoundError):
        templates.get_standalone(stored.id)


def test_week_navigation(templates, state):
    assert templates.advance_week() is False
    templates.select_program(PUSH_PROGRAM_ID)
    state.current_week = 3
    assert templates.advance_week() is True
    assert state.current_week == 4
    assert templates.advance_week() is False
    assert state.current_week == 4
    assert templates.advance_week(reset=True) is True
    assert state.current_week == 1
    assert templates.retreat_week() is False
    state.current_week = 2
    assert templates.retreat_week() is True
    assert state.current_week == 1


def test_current_program_drops_dangling_selection(templates, state):
    state.current_program_id = 12345
    assert templates.current_program() is None
    assert state.current_program_id is None
