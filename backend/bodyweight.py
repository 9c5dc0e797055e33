from __future__ import annotations

from datetime import datetime, timezone

from core import iso_now, new_id, parse_iso
from backend.app_state import AppState
from backend.models import BodyweightEntry

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def parse_weight(value) -> float:
    """Return ``value`` as a float, raising ``ValueError`` if it is blank."""

    if value is None or str(value).strip() == "":
        raise ValueError("Enter a weight")
    return float(value)


class BodyweightLog:
    """Log of the user's bodyweight measurements."""

    def __init__(self, state: AppState) -> None:
        self.state = state

    def log(self, value) -> BodyweightEntry:
        entry = BodyweightEntry(
            id=new_id({b.id for b in self.state.bodyweight}),
            date=iso_now(),
            weight=parse_weight(value),
        )
        self.state.bodyweight.append(entry)
        return entry

    def edit(self, entry_id: int, value) -> BodyweightEntry | None:
        weight = parse_weight(value)
        for entry in self.state.bodyweight:
            if entry.id == entry_id:
                entry.weight = weight
                return entry
        return None

    def delete(self, entry_id: int) -> bool:
        before = len(self.state.bodyweight)
        self.state.bodyweight[:] = [b for b in self.state.bodyweight if b.id != entry_id]
        return len(self.state.bodyweight) != before

    def entries(self) -> list[BodyweightEntry]:
        """Return entries newest first."""

        return list(reversed(self.series()))

    def series(self) -> list[BodyweightEntry]:
        """Return entries oldest first for charting."""

        return sorted(self.state.bodyweight, key=lambda b: (parse_iso(b.date) or _EPOCH, b.id))
