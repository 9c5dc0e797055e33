import argparse
import asyncio
from pathlib import Path

from core import DEFAULT_DB_PATH, parse_iso
from backend.app_state import AppState
from backend.catalog import ExerciseCatalog
from backend.history import HistoryLedger
from backend.store import LocalStore


def format_timestamp(value):
    """Convert a stored ISO timestamp to a readable local date/time string."""
    parsed = parse_iso(value)
    if parsed is None:
        return "N/A"
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def print_history(state: AppState) -> None:
    catalog = ExerciseCatalog(state)
    for record in HistoryLedger(state).records():
        print(f"\n=== Workout: {record.name} ===")
        print(f"Date:  {format_timestamp(record.date)}")
        if record.program_id is not None:
            print(f"Week:  {record.week}")
        if record.notes:
            print(f"Notes: {record.notes}")

        for exercise in record.exercises:
            print(f"\n  Exercise: {catalog.display_name(exercise.exercise_id)}")
            for number, logged in enumerate(exercise.sets, start=1):
                print(f"    Set {number}: {logged.weight or '-'} x {logged.reps or '-'}")

    if state.active_session is not None:
        print(f"\nIn progress: {state.active_session.name}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Print the workout history in a state database.")
    parser.add_argument("--db", type=Path, default=DEFAULT_DB_PATH, help="path to the state database")
    args = parser.parse_args(argv)

    document = asyncio.run(LocalStore(args.db).load())
    if document is None:
        print(f"No saved state in {args.db}")
        return
    print_history(AppState.from_dict(document))


if __name__ == "__main__":
    main()
