from __future__ import annotations

from pathlib import Path

from sqlscratch.scripts import DEFAULT_ENCODING, ScriptFile, read_script, write_script


def test_utf8_script(tmp_path: Path):
    path = tmp_path / "report.sql"
    path.write_text("select 'Müller' from dual;\n", encoding="utf-8")

    script = read_script(path)

    assert script.text == "select 'Müller' from dual;\n"
    assert script.encoding == DEFAULT_ENCODING


def test_latin1_script_is_read_and_saved_back_unchanged(tmp_path: Path):
    path = tmp_path / "legacy.sql"
    path.write_bytes("select 'Müller' from dual;".encode("latin-1"))

    script = read_script(path)
    assert script.text == "select 'Müller' from dual;"
    assert script.encoding != DEFAULT_ENCODING

    script.text += "\n-- checked"
    write_script(script)
    assert path.read_bytes() == "select 'Müller' from dual;\n-- checked".encode("latin-1")


def test_text_outside_original_encoding_is_saved_as_utf8(tmp_path: Path):
    path = tmp_path / "legacy.sql"
    script = ScriptFile(path, "select '€ ✓' from dual;", "latin-1")

    write_script(script)

    assert script.encoding == DEFAULT_ENCODING
    assert path.read_text(encoding="utf-8") == "select '€ ✓' from dual;"


def test_missing_file_is_an_empty_script(tmp_path: Path):
    script = read_script(tmp_path / "new.sql")
    assert script == ScriptFile(tmp_path / "new.sql", "", DEFAULT_ENCODING)
