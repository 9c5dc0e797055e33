import os
from pathlib import Path
import sys

import pytest

os.environ.setdefault("KIVY_NO_ARGS", "1")
os.environ.setdefault("KIVY_NO_CONSOLELOG", "1")
os.environ.setdefault("KIVY_NO_FILELOG", "1")

sys.path.append(str(Path(__file__).resolve().parents[1]))

from backend import settings  # noqa: E402
from backend.app_state import AppState  # noqa: E402
from backend.catalog import ExerciseCatalog  # noqa: E402
from backend.history import HistoryLedger  # noqa: E402
from backend.models import (  # noqa: E402
    ExerciseDefinition,
    ExerciseTemplateEntry,
    Program,
    TargetSet,
    WorkoutTemplate,
)
from backend.rest_timer import RestTimer  # noqa: E402
from backend.save_scheduler import SaveCoalescer  # noqa: E402
from backend.templates import TemplateRepository  # noqa: E402
from backend.workout_clock import WorkoutClock  # noqa: E402
from backend.workout_session import SessionEngine  # noqa: E402
from utils import PUSH_PROGRAM_ID, FakeClock  # noqa: E402



@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep device settings inside the test's temporary directory."""
    monkeypatch.setattr(settings, "SETTINGS_PATH", tmp_path / "settings.json")
    settings.clear_cache()
    yield
    settings.clear_cache()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def state():
    """State with a small catalog and a program holding a 'Push Day' workout."""
    state = AppState(
        exercises=[
            ExerciseDefinition(id=1, name="Bench Press", category="Chest", rest_seconds=120),
            ExerciseDefinition(id=2, name="Squat", category="Legs", rest_seconds=180),
            ExerciseDefinition(id=3, name="Pull Up", category="Back", rest_seconds=90),
        ]
    )
    state.programs.append(
        Program(
            name="Strength Block",
            id=PUSH_PROGRAM_ID,
            total_weeks=4,
            workouts=[
                WorkoutTemplate(
                    name="Push Day",
                    day_label="Monday",
                    exercises=[
                        ExerciseTemplateEntry(
                            exercise_id=1,
                            rest_seconds=120,
                            sets=[TargetSet("8-12") for _ in range(3)],
                        )
                    ],
                ),
                WorkoutTemplate(
                    name="Leg Day",
                    exercises=[
                        ExerciseTemplateEntry(exercise_id=2, sets=[TargetSet("5")]),
                        ExerciseTemplateEntry(exercise_id=99, sets=[TargetSet("10")]),
                    ],
                ),
            ],
        )
    )
    return state


@pytest.fixture
def catalog(state):
    return ExerciseCatalog(state)


@pytest.fixture
def templates(state, catalog):
    return TemplateRepository(state, catalog)


@pytest.fixture
def ledger(state):
    return HistoryLedger(state)


@pytest.fixture
def saver(clock):
    return SaveCoalescer(lambda: None, interval=1.0, clock=clock)


@pytest.fixture
def engine(state, catalog, templates, ledger, saver, clock):
    return SessionEngine(
        state,
        catalog,
        templates,
        ledger,
        RestTimer(clock=clock),
        saver,
        WorkoutClock(clock=clock),
    )
