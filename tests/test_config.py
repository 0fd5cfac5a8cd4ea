from __future__ import annotations

from pathlib import Path

from sqlscratch.config import DEFAULT_SETUP_COMMANDS, default_interpreter_path, load_settings


def test_defaults_come_from_oracle_environment():
    settings = load_settings(environ={"ORACLE_HOME": "/opt/oracle", "ORACLE_SID": "ORCL"})
    assert settings.interpreter_path == str(Path("/opt/oracle") / "bin" / "sqlplus")
    assert settings.default_database == "ORCL"
    assert settings.setup_commands == DEFAULT_SETUP_COMMANDS
    assert settings.initial_user == ""


def test_interpreter_falls_back_to_path_lookup():
    assert default_interpreter_path({}) == "sqlplus"


def test_stored_settings_override_defaults():
    stored = {"default_database": "STORED", "setup_commands": "set linesize 200"}
    settings = load_settings(environ={"ORACLE_SID": "ORCL"}, get_setting=stored.get)
    assert settings.default_database == "STORED"
    assert settings.setup_commands == "set linesize 200\n"


def test_environment_overrides_win():
    stored = {"default_database": "STORED", "interpreter_path": "/stored/sqlplus"}
    environ = {
        "SQLSCRATCH_DATABASE": "ENVDB",
        "SQLSCRATCH_INTERPRETER": "/env/sqlplus",
        "SQLSCRATCH_SETUP_COMMANDS": "set pagesize 0\\nset feedback off",
        "SQLSCRATCH_SNIPPETS": "/tmp/snips.sql",
        "SQLSCRATCH_USER": "scott",
        "SQLSCRATCH_PASSWORD": "tiger",
        "SQLSCRATCH_LOG_LEVEL": "debug",
    }
    settings = load_settings(environ=environ, get_setting=stored.get)
    assert settings.default_database == "ENVDB"
    assert settings.interpreter_path == "/env/sqlplus"
    assert settings.setup_commands == "set pagesize 0\nset feedback off\n"
    assert settings.snippets_path == Path("/tmp/snips.sql")
    assert (settings.initial_user, settings.initial_password) == ("scott", "tiger")
    assert settings.log_level == "DEBUG"


def test_stored_setup_commands_keep_backslashes():
    stored = {"setup_commands": "prompt C:\\new\nset linesize 200"}
    settings = load_settings(environ={}, get_setting=stored.get)
    assert settings.setup_commands == "prompt C:\\new\nset linesize 200\n"
