"""Rest countdown shown after a set is completed.

There is a single timer for the whole app.  It is advisory only: logging
keeps working while it runs.  The countdown is driven by a one-second
``ClockEvent`` which is always cancelled when the timer stops, is skipped or
is restarted, so repeated starts never leave a second interval running.
"""

from __future__ import annotations

import logging

from kivy.clock import Clock
from kivy.event import EventDispatcher
from kivy.properties import BooleanProperty, NumericProperty, StringProperty


class RestTimer(EventDispatcher):
    """Idle -> Running -> Idle countdown with observable state.

    ``on_expire`` is dispatched with the timer label when the countdown
    reaches zero on its own; skipping does not dispatch it.
    """

    remaining_seconds = NumericProperty(0)
    total_seconds = NumericProperty(0)
    is_running = BooleanProperty(False)
    label = StringProperty("")

    __events__ = ("on_expire",)

    def __init__(self, clock=Clock, **kwargs):
        super().__init__(**kwargs)
        self._clock = clock
        self._event = None

    def start(self, duration: int, label: str = "") -> None:
        """Begin a countdown of ``duration`` seconds, replacing any running one."""

        self._cancel_event()
        self.total_seconds = duration
        self.remaining_seconds = duration
        self.label = label
        self.is_running = True
        self._event = self._clock.schedule_interval(self.tick, 1)

    def tick(self, dt=None) -> None:
        if not self.is_running:
            return
        self.remaining_seconds -= 1
        if self.remaining_seconds <= 0:
            self.remaining_seconds = 0
            self._cancel_event()
            self.is_running = False
            logging.info("Rest timer finished: %s", self.label)
            self.dispatch("on_expire", self.label)

    def skip(self) -> None:
        """Stop the countdown immediately without signalling expiry."""

        self._cancel_event()
        self.is_running = False

    def adjust(self, delta: int) -> None:
        """Add ``delta`` seconds; the total only ever grows."""

        self.remaining_seconds = max(1, self.remaining_seconds + delta)
        self.total_seconds = max(self.total_seconds, self.remaining_seconds)

    def progress(self) -> float:
        """Return the fraction of the rest period still remaining."""

        if not self.total_seconds:
            return 0.0
        return self.remaining_seconds / self.total_seconds

    def on_expire(self, label):
        pass

    def _cancel_event(self) -> None:
        if self._event is not None:
            self._event.cancel()
            self._event = None
