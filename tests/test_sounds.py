from assets import sounds as sounds_module
from assets.sounds import SoundSystem
from backend import settings

from utils import FakeClock


class DummySound:
    def __init__(self):
        self.plays = 0
        self.volume = None

    def stop(self):
        pass

    def play(self):
        self.plays += 1


def _system(monkeypatch, snd):
    monkeypatch.setattr(sounds_module.SoundLoader, "load", staticmethod(lambda path: snd))
    clock = FakeClock()
    return SoundSystem(clock=clock), clock


def test_pulses_play_three_times(monkeypatch):
    snd = DummySound()
    system, clock = _system(monkeypatch, snd)
    settings.set_value("sound_level", 0.5)

    system.play_pulses()
    assert snd.plays == 1
    clock.advance(0.15)
    assert snd.plays == 2
    clock.advance(0.15)
    assert snd.plays == 3
    assert snd.volume == 0.5


def test_sound_off_setting_mutes(monkeypatch):
    snd = DummySound()
    system, clock = _system(monkeypatch, snd)
    settings.set_value("sound_on", False)
    system.on_rest_expired(None, "Squat")
    clock.advance(1)
    assert snd.plays == 0


def test_missing_sound_file_is_tolerated(monkeypatch):
    system, clock = _system(monkeypatch, None)
    assert system.play("rest_done") is False
    system.play_pulses()
    clock.advance(1)


def test_stop_cancels_pending_pulses(monkeypatch):
    snd = DummySound()
    system, clock = _system(monkeypatch, snd)
    system.play_pulses()
    system.stop()
    clock.advance(1)
    assert snd.plays == 1
    assert clock.events == []


def test_new_pulse_train_replaces_pending_one(monkeypatch):
    snd = DummySound()
    system, clock = _system(monkeypatch, snd)
    system.play_pulses()
    system.play_pulses()
    assert len(clock.events) == 2
    clock.advance(1)
    assert snd.plays == 4
