import pytest

from backend.save_scheduler import SaveCoalescer

from utils import FakeClock


def _saver(interval=1.0):
    clock = FakeClock()
    flushed = []
    saver = SaveCoalescer(lambda: flushed.append(clock.now), interval=interval, clock=clock)
    return saver, clock, flushed


def test_burst_of_requests_writes_once():
    saver, clock, flushed = _saver()
    for _ in range(5):
        saver.request()
        clock.advance(0.1)
    assert flushed == []

    clock.advance(1.0)
    assert flushed == [1.0]
    assert saver.writes == 1
    assert not saver.pending


def test_at_most_one_write_per_interval():
    saver, clock, flushed = _saver()
    saver.request()
    clock.advance(0.9)
    saver.request()
    clock.advance(0.2)
    saver.request()
    clock.advance(1.0)

    assert flushed == [1.0, pytest.approx(2.1)]


def test_save_now_supersedes_scheduled_flush():
    saver, clock, flushed = _saver()
    saver.request()
    saver.save_now()
    assert flushed == [0.0]
    assert not saver.pending

    clock.advance(2.0)
    assert flushed == [0.0]
    assert clock.events == []


def test_flush_pending_only_writes_when_dirty():
    saver, clock, flushed = _saver()
    assert saver.flush_pending() is False
    saver.request()
    assert saver.flush_pending() is True
    assert saver.flush_pending() is False
    assert len(flushed) == 1


def test_cancel_keeps_pending_flag():
    saver, clock, flushed = _saver()
    saver.request()
    saver.cancel()
    clock.advance(5)
    assert flushed == []
    assert saver.pending
