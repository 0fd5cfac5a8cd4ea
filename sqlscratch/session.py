"""Session state: cached credentials and the target database.

A Session lives for one run of the application. Credentials are kept in
memory only.
"""

import getpass
import logging
from typing import Tuple

from .config import Settings
from .errors import OperationCancelled

_logger = logging.getLogger(__name__)


def default_login_name() -> str:
    """Best-effort OS login name, or an empty string."""
    try:
        return getpass.getuser()
    except (OSError, KeyError, ImportError):
        return ""


class Session:
    """Credential store and interpreter settings for one editing session."""

    def __init__(self, interpreter_path: str, setup_commands: str = "",
                 database: str = "", user_id: str = "", password: str = ""):
        self.interpreter_path = interpreter_path
        self.setup_commands = setup_commands
        self.database = database
        self.user_id = user_id
        self.password = password

    @classmethod
    def from_settings(cls, settings: Settings) -> "Session":
        return cls(
            interpreter_path=settings.interpreter_path,
            setup_commands=settings.setup_commands,
            database=settings.default_database,
            user_id=settings.initial_user,
            password=settings.initial_password,
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.user_id)

    def get_credentials(self, prompter, force_prompt: bool = False) -> Tuple[str, str]:
        """Return (user_id, password), prompting when none are cached.

        ``prompter`` provides ``prompt(label, default)`` and
        ``prompt_secret(label)``; either returns None when cancelled.
        """
        if self.user_id and not force_prompt:
            return self.user_id, self.password

        candidate = self.user_id or default_login_name()
        user_id = prompter.prompt("User id", candidate)
        if user_id is None:
            raise OperationCancelled("credential entry cancelled")
        password = prompter.prompt_secret(f"Password for {user_id}")
        if password is None:
            raise OperationCancelled("credential entry cancelled")

        self.user_id = user_id
        self.password = password
        _logger.info("Credentials set for user %s", user_id)
        return self.user_id, self.password

    def reset_credentials(self) -> None:
        self.user_id = ""
        self.password = ""
        _logger.info("Credentials cleared")

    def set_database(self, name: str) -> None:
        self.database = name
        _logger.info("Target database set to %r", name)

    def connect_string(self, mask_password: bool = False) -> str:
        """The ``user/password@database`` argument passed to the interpreter."""
        password = "****" if mask_password else self.password
        return f"{self.user_id}/{password}@{self.database}"

    def describe(self) -> str:
        """Short label for status displays."""
        user = self.user_id or "(no user)"
        return f"{user}@{self.database or '(no database)'}"
