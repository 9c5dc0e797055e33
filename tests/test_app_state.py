import json

from backend import SOURCE_FREESTYLE, SOURCE_PROGRAM
from backend.app_state import AppState
from backend.models import (
    ActiveSession,
    ExerciseDefinition,
    Program,
    SessionExercise,
    SessionSet,
)


def test_defaults_for_missing_document():
    state = AppState.from_dict(None)
    assert state.exercises == []
    assert state.current_week == 1
    assert state.active_session is None
    assert state.weight_unit == "lbs"
    assert AppState.from_dict(["not", "a", "dict"]) == AppState()


def test_partial_document_fills_defaults():
    state = AppState.from_dict({
        "exercises": [{"id": 5, "name": "Dip"}, "junk"],
        "programs": [{"id": 9, "name": "P", "weeks": 0}],
        "currentWeek": "2",
        "weightUnit": "stone",
        "workoutHistory": {"not": "a list"},
    })
    assert state.exercises == [ExerciseDefinition(id=5, name="Dip", category="Other", rest_seconds=90)]
    assert state.programs[0].total_weeks == 1
    assert state.current_week == 2
    assert state.weight_unit == "lbs"
    assert state.history == []


def test_malformed_active_workout_is_dropped():
    assert AppState.from_dict({"activeWorkout": "oops"}).active_session is None


def test_active_session_document_shape():
    session = ActiveSession(
        name="Push Day",
        source_kind=SOURCE_PROGRAM,
        source_program_id=500,
        source_workout_index=0,
        week=2,
        started_at=1714557600.5,
        exercises=[SessionExercise(1, 120, [SessionSet(weight="135", target_reps="8-12", reps="10", completed=True)])],
    )
    data = session.to_dict()
    assert data["type"] == "program"
    assert data["startTime"] == 1714557600500
    assert data["programId"] == 500
    assert "historyId" not in data
    assert "standaloneWorkoutId" not in data
    assert data["exercises"][0] == {
        "exerciseId": 1,
        "restTime": 120,
        "sets": [{"weight": "135", "targetReps": "8-12", "reps": "10", "completed": True}],
    }

    restored = ActiveSession.from_dict(json.loads(json.dumps(data)))
    assert restored.started_at == 1714557600.5
    assert restored == session


def test_active_session_from_legacy_values():
    restored = ActiveSession.from_dict({"name": "", "type": "weird", "exercises": [
        {"exerciseId": "3", "sets": [{"weight": 135.0, "reps": 8}]},
    ]})
    assert restored.name == "Quick Workout"
    assert restored.source_kind == SOURCE_FREESTYLE
    assert restored.exercises[0].exercise_id == 3
    assert restored.exercises[0].rest_seconds == 90
    assert restored.exercises[0].sets[0].weight == "135"
    assert restored.exercises[0].sets[0].reps == "8"


def test_state_document_keys(state):
    data = state.to_dict()
    assert set(data) == {
        "exercises", "programs", "standaloneWorkouts", "currentProgram", "currentWeek",
        "workoutHistory", "bodyweightHistory", "activeWorkout", "weightUnit",
    }
    assert data["exercises"][0] == {"id": 1, "name": "Bench Press", "category": "Chest", "restTime": 120}
    assert data["programs"][0]["weeks"] == 4
    assert data["programs"][0]["workouts"][0]["exercises"][0]["sets"][0] == {"reps": "8-12"}
    assert AppState.from_dict(json.loads(json.dumps(data))) == state


def test_program_from_partial_dict():
    program = Program.from_dict({"name": "X"})
    assert program.total_weeks == 4
    assert program.workouts == []
    assert program.id is None
