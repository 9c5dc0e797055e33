from __future__ import annotations

import time

from kivy.clock import Clock
from kivy.event import EventDispatcher
from kivy.properties import NumericProperty, StringProperty

from backend.formatting import format_duration


class WorkoutClock(EventDispatcher):
    """Live elapsed-time display for the open session.

    Elapsed time is wall-clock ``now - started_at``.  Stopping the clock only
    stops the display from refreshing; the workout keeps accruing time while
    its view is closed.
    """

    elapsed_seconds = NumericProperty(0)
    elapsed_label = StringProperty("0:00")

    def __init__(self, clock=Clock, **kwargs):
        super().__init__(**kwargs)
        self._clock = clock
        self._event = None
        self.started_at: float | None = None

    @property
    def running(self) -> bool:
        return self._event is not None

    def start(self, started_at: float) -> None:
        self.stop()
        self.started_at = started_at
        self.update()
        self._event = self._clock.schedule_interval(self.update, 1)

    def stop(self) -> None:
        if self._event is not None:
            self._event.cancel()
            self._event = None

    def update(self, dt=None) -> None:
        if self.started_at is None:
            return
        self.elapsed_seconds = max(0, int(time.time() - self.started_at))
        self.elapsed_label = format_duration(self.elapsed_seconds)
