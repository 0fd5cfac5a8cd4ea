"""Configuration for SQLScratch.

Values come from, in order of precedence: SQLSCRATCH_* environment
overrides, the settings store, then built-in defaults derived from the
Oracle client environment (ORACLE_HOME, ORACLE_SID).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Final, Optional

from dotenv import load_dotenv

load_dotenv(override=False)


DEFAULT_SETUP_COMMANDS: Final[str] = (
    "set pagesize 50000\n"
    "set linesize 4000\n"
    "set trimout on\n"
    "set wrap off\n"
    "set tab off\n"
)
DEFAULT_SNIPPETS_PATH: Final[Path] = Path.home() / ".sqlscratch" / "snippets.sql"
INTERPRETER_NAME: Final[str] = "sqlplus"

# setting key -> environment override
SETTING_ENV_OVERRIDES: Final[dict] = {
    "interpreter_path": "SQLSCRATCH_INTERPRETER",
    "setup_commands": "SQLSCRATCH_SETUP_COMMANDS",
    "default_database": "SQLSCRATCH_DATABASE",
    "snippets_path": "SQLSCRATCH_SNIPPETS",
}


def default_interpreter_path(environ=None) -> str:
    """Interpreter under ORACLE_HOME when set, otherwise looked up on PATH."""
    environ = os.environ if environ is None else environ
    oracle_home = environ.get("ORACLE_HOME", "").strip()
    if oracle_home:
        return str(Path(oracle_home) / "bin" / INTERPRETER_NAME)
    return INTERPRETER_NAME


@dataclass(frozen=True)
class Settings:
    interpreter_path: str
    setup_commands: str
    default_database: str
    snippets_path: Path
    initial_user: str = ""
    initial_password: str = ""
    log_level: str = "WARNING"


def load_settings(environ=None, get_setting: Optional[Callable] = None) -> Settings:
    """Build Settings from the environment and an optional settings lookup.

    ``get_setting`` has the signature of ``database.get_setting``.
    """
    environ = os.environ if environ is None else environ

    def resolve(key: str, default: str) -> str:
        override = environ.get(SETTING_ENV_OVERRIDES[key])
        if override:
            return override
        if get_setting is not None:
            stored = get_setting(key)
            if stored:
                return stored
        return default

    setup = resolve("setup_commands", DEFAULT_SETUP_COMMANDS)
    if environ.get(SETTING_ENV_OVERRIDES["setup_commands"]):
        # A single-line environment value separates commands with a literal "\n"
        setup = setup.replace("\\n", "\n")
    if setup and not setup.endswith("\n"):
        setup += "\n"

    return Settings(
        interpreter_path=resolve("interpreter_path", default_interpreter_path(environ)),
        setup_commands=setup,
        default_database=resolve("default_database", environ.get("ORACLE_SID", "")),
        snippets_path=Path(resolve("snippets_path", str(DEFAULT_SNIPPETS_PATH))).expanduser(),
        initial_user=environ.get("SQLSCRATCH_USER", ""),
        initial_password=environ.get("SQLSCRATCH_PASSWORD", ""),
        log_level=environ.get("SQLSCRATCH_LOG_LEVEL", "WARNING").upper(),
    )
