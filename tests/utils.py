"""Test doubles shared by the test modules."""

# Id of the program created by the ``state`` fixture
PUSH_PROGRAM_ID = 500


class FakeEvent:
    """Stand-in for a Kivy ``ClockEvent``."""

    def __init__(self, clock, callback, timeout, repeat):
        self.clock = clock
        self.callback = callback
        self.timeout = timeout
        self.repeat = repeat
        self.due = clock.now + timeout
        self.cancelled = False

    def cancel(self):
        self.cancelled = True
        if self in self.clock.events:
            self.clock.events.remove(self)


class FakeClock:
    """Deterministic replacement for ``kivy.clock.Clock``.

    Nothing runs until :meth:`advance` is called, which fires every due
    callback in order, re-arming interval events.
    """

    def __init__(self):
        self.now = 0.0
        self.events = []

    def _add(self, callback, timeout, repeat):
        event = FakeEvent(self, callback, timeout, repeat)
        self.events.append(event)
        return event

    def schedule_interval(self, callback, timeout):
        return self._add(callback, timeout, True)

    def schedule_once(self, callback, timeout=0):
        return self._add(callback, timeout, False)

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [e for e in self.events if e.due <= target]
            if not due:
                break
            event = min(due, key=lambda e: e.due)
            self.now = event.due
            if event.repeat:
                event.due += event.timeout
            else:
                self.events.remove(event)
            event.callback(event.timeout)
        self.now = target


class FakeSounds:
    """Records rest-expiry signals instead of playing audio."""

    def __init__(self):
        self.expired = []

    def on_rest_expired(self, timer, label):
        self.expired.append(label)


class MemoryStore:
    """In-memory replacement for :class:`backend.store.LocalStore`."""

    def __init__(self, document=None, fail=False):
        self.document = document
        self.fail = fail
        self.saves = 0

    async def load(self):
        from backend.errors import StoreUnavailableError

        if self.fail:
            raise StoreUnavailableError("store offline")
        return self.document

    async def save(self, document):
        import json

        from backend.errors import StoreUnavailableError

        if self.fail:
            raise StoreUnavailableError("store offline")
        self.saves += 1
        self.document = json.loads(document) if isinstance(document, str) else document

    async def clear(self):
        self.document = None
