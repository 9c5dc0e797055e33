import core


def test_iso_now_format(monkeypatch):
    monkeypatch.setattr(core.time, "time", lambda: 1714557600.25)
    assert core.iso_now() == "2024-05-01T10:00:00.250Z"


def test_parse_iso():
    parsed = core.parse_iso("2024-05-01T10:00:00.000Z")
    assert parsed.year == 2024 and parsed.hour == 10
    assert parsed.utcoffset().total_seconds() == 0
    assert core.parse_iso("2024-05-01T10:00:00").tzinfo is not None
    assert core.parse_iso("not a date") is None
    assert core.parse_iso("") is None


def test_new_id_avoids_collisions(monkeypatch):
    monkeypatch.setattr(core.time, "time", lambda: 1000.0)
    assert core.now_ms() == 1000000
    assert core.new_id() == 1000000
    assert core.new_id({1000000, 1000001}) == 1000002
