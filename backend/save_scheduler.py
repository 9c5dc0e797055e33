"""Write coalescing for state saves.

Rapid edits (typing a weight, editing notes) call :meth:`SaveCoalescer.request`
which only raises a pending flag; a single flush is scheduled on the Kivy
clock and runs ``interval`` seconds after the first request, so there is at
most one write per interval.  Edits that must not be lost call
:meth:`SaveCoalescer.save_now` which writes straight away and drops any
scheduled flush, since every write stores the whole document anyway.
"""

from __future__ import annotations

from typing import Callable

from kivy.clock import Clock

from core import SAVE_DEBOUNCE_SECONDS


class SaveCoalescer:
    def __init__(
        self,
        flush: Callable[[], None],
        interval: float = SAVE_DEBOUNCE_SECONDS,
        clock=Clock,
    ) -> None:
        self._flush = flush
        self.interval = interval
        self._clock = clock
        self._event = None
        self.pending = False
        self.writes = 0

    def request(self) -> None:
        """Mark state dirty and make sure a flush is scheduled."""

        self.pending = True
        if self._event is None:
            self._event = self._clock.schedule_once(self._on_timer, self.interval)

    def save_now(self) -> None:
        """Write immediately, superseding any scheduled flush."""

        self.cancel()
        self.pending = False
        self._write()

    def flush_pending(self) -> bool:
        """Write now if a request is outstanding; return whether it wrote."""

        self.cancel()
        if not self.pending:
            return False
        self.pending = False
        self._write()
        return True

    def cancel(self) -> None:
        """Drop the scheduled flush without touching the pending flag."""

        if self._event is not None:
            self._event.cancel()
            self._event = None

    def _on_timer(self, dt) -> None:
        self._event = None
        if self.pending:
            self.pending = False
            self._write()

    def _write(self) -> None:
        self.writes += 1
        self._flush()
