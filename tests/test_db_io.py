from datetime import date
import json

import pytest

from backend import db_io
from backend.errors import InvalidImportError


def test_make_export_name():
    assert db_io.make_export_name(date(2024, 5, 1)) == "workouts_backup_2024-05-01.json"


def test_export_writes_document(tmp_path):
    path = db_io.export_state_json({"exercises": [{"id": 1}]}, tmp_path)
    assert path.parent == tmp_path.resolve()
    assert path.name.startswith("workouts_backup_")
    assert json.loads(path.read_text()) == {"exercises": [{"id": 1}]}


def test_export_to_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        db_io.export_state_json({"exercises": []}, tmp_path / "missing")


def test_validate_document():
    assert db_io.validate_document({"exercises": []}) == (True, [])
    ok, errors = db_io.validate_document({"programs": []})
    assert not ok and errors == ["missing field: exercises"]
    ok, errors = db_io.validate_document([1, 2])
    assert not ok


def test_read_import_file(tmp_path):
    good = tmp_path / "good.json"
    good.write_text(json.dumps({"exercises": [], "weightUnit": "kg"}))
    assert db_io.read_import_file(good)["weightUnit"] == "kg"

    broken = tmp_path / "broken.json"
    broken.write_text("{oops")
    with pytest.raises(InvalidImportError, match="Error parsing file."):
        db_io.read_import_file(broken)

    wrong = tmp_path / "wrong.json"
    wrong.write_text(json.dumps({"exercises": None}))
    with pytest.raises(InvalidImportError, match="Invalid file format."):
        db_io.read_import_file(wrong)


def test_backup_state(tmp_path):
    path = db_io.backup_state({"exercises": []}, tmp_path / "backups")
    assert path.exists()
    assert path.suffixes[-2:] == [".json", ".bak"]
    assert json.loads(path.read_text()) == {"exercises": []}
