from pathlib import Path
from kivy.core.audio import SoundLoader
from kivy.clock import Clock

from backend import settings

# Gap between the short pulses played when a rest period ends
PULSE_SPACING = 0.15


class SoundSystem:
    """Manage playback of workout sounds.

    Sounds are loaded lazily from the ``assets/sounds`` directory to keep
    memory usage minimal.  Missing files are tolerated: ``play`` is then a
    no-op, so a device without audio support still runs the timer.
    """

    def __init__(self, base: Path | None = None, clock=Clock):
        self._base = base or Path(__file__).resolve().parent
        self._clock = clock
        self._cache: dict[str, object] = {}
        self._events: list = []

    # ------------------------------------------------------------------
    # Core helpers
    # ------------------------------------------------------------------
    def _load(self, name: str):
        snd = self._cache.get(name)
        if snd is None:
            path = self._base / f"{name}.wav"
            snd = SoundLoader.load(str(path))
            self._cache[name] = snd
        return snd

    def play(self, name: str) -> bool:
        """Play a named sound if available and enabled."""
        if not settings.get_value("sound_on", True):
            return False
        snd = self._load(name)
        if not snd:
            return False
        snd.volume = float(settings.get_value("sound_level", 1.0))
        snd.stop()
        snd.play()
        return True

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def stop(self) -> None:
        """Cancel any scheduled playback."""
        for event in self._events:
            event.cancel()
        self._events = []

    def play_pulses(self, name: str = "rest_done", count: int = 3, spacing: float = PULSE_SPACING) -> None:
        """Play ``name`` ``count`` times, ``spacing`` seconds apart."""
        self.stop()
        self.play(name)
        for idx in range(1, count):
            self._events.append(
                self._clock.schedule_once(lambda dt: self.play(name), spacing * idx)
            )

    def on_rest_expired(self, timer, label) -> None:
        """``RestTimer.on_expire`` handler: signal the end of the rest period."""
        self.play_pulses()
