from __future__ import annotations

from pathlib import Path

from sqlscratch import database
from sqlscratch.database import Database


def test_settings_round_trip(tmp_path):
    db = Database(tmp_path / "settings.db")
    assert db.get_setting("font_size", "12") == "12"

    db.set_setting("font_size", "14")
    db.set_setting("font_size", "16")
    assert db.get_setting("font_size") == "16"

    db.delete_setting("font_size")
    assert db.get_setting("font_size") is None


def test_open_tabs_keep_order(tmp_path):
    db = Database(tmp_path / "settings.db")
    db.save_open_tabs([
        (Path("/work/report.sql"), ""),
        (None, "select 1 from dual;"),
    ])
    assert db.load_open_tabs() == [
        (str(Path("/work/report.sql")), ""),
        (None, "select 1 from dual;"),
    ]

    db.save_open_tabs([])
    assert db.load_open_tabs() == []


def test_module_helpers_use_selected_database(tmp_path, monkeypatch):
    monkeypatch.setattr(database, "_db", None)
    database.use_database(Database(tmp_path / "nested" / "app.db"))

    database.set_setting("default_database", "DEV")
    assert database.get_setting("default_database") == "DEV"
    assert (tmp_path / "nested" / "app.db").exists()
