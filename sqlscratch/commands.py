"""User-facing commands and the host editor interface they drive."""

import functools
import logging
from abc import ABC, abstractmethod
from contextlib import nullcontext
from pathlib import Path
from typing import Optional

from . import locator
from .binds import resolve_binds
from .errors import (
    InterpreterInvocationError,
    OperationCancelled,
    SqlScratchError,
    StatementNotFound,
)
from .normalizer import normalize
from .presenter import trim_trailing_blank_lines
from .runner import RunResult, ScriptRunner
from .scripts import ScriptFile, read_script
from .session import Session

_logger = logging.getLogger(__name__)


class HostEditor(ABC):
    """What the commands need from the editor hosting them."""

    @abstractmethod
    def buffer_text(self) -> str:
        """Full text of the current script."""
        pass

    @abstractmethod
    def cursor_position(self) -> int:
        """Cursor offset into buffer_text()."""
        pass

    @abstractmethod
    def selected_text(self) -> str:
        """Highlighted text, or an empty string when nothing is selected."""
        pass

    @abstractmethod
    def prompt(self, label: str, default: str = "") -> Optional[str]:
        """Ask for a line of text. None means the user cancelled."""
        pass

    @abstractmethod
    def prompt_secret(self, label: str) -> Optional[str]:
        """Ask for masked text. None means the user cancelled."""
        pass

    @abstractmethod
    def show_message(self, message: str) -> None:
        pass

    @abstractmethod
    def show_result(self, text: str, title: str) -> None:
        """Display interpreter output in a read-only result area."""
        pass

    @abstractmethod
    def open_script(self, script: ScriptFile) -> None:
        """Show ``script`` in the editor; a None path means a scratch script."""
        pass

    def show_status(self, message: str) -> None:
        self.show_message(message)

    def busy(self):
        """Context manager wrapped around the blocking interpreter call."""
        return nullcontext()


def _command(method):
    """Report pipeline errors to the host instead of raising them."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            method(self, *args, **kwargs)
        except OperationCancelled as e:
            _logger.info("%s cancelled: %s", method.__name__, e)
            self.host.show_status("Cancelled")
        except StatementNotFound as e:
            self.host.show_message(f"Statement not found: {e}")
        except InterpreterInvocationError as e:
            _logger.error("%s", e)
            self.host.show_message(str(e))
        except SqlScratchError as e:
            _logger.error("%s failed: %s", method.__name__, e)
            self.host.show_message(str(e))
        except OSError as e:
            _logger.error("%s failed: %s", method.__name__, e)
            self.host.show_message(f"File error: {e}")
    return wrapper


def _title_for(text: str, limit: int = 40) -> str:
    title = " ".join(text.split())
    if len(title) > limit:
        title = title[:limit - 3] + "..."
    return title


class SqlCommands:
    """The command surface bound to menus and shortcuts.

    Every command runs to completion, prompts and interpreter call
    included, before returning.
    """

    def __init__(self, session: Session, host: HostEditor,
                 runner: Optional[ScriptRunner] = None,
                 snippets_path: Optional[Path] = None):
        self.session = session
        self.host = host
        self.runner = runner or ScriptRunner(session)
        self.snippets_path = snippets_path

    # Statement execution

    @_command
    def run_selected_or_prompted_statement(self) -> None:
        """Run the selection, or the statement around the cursor."""
        text = self.host.selected_text()
        if not text.strip():
            text = locator.statement_at_cursor(
                self.host.buffer_text(), self.host.cursor_position())
        self._execute(text)

    @_command
    def run_literal_statement(self, text: str) -> None:
        self._execute(text)

    @_command
    def run_prompted_statement(self) -> None:
        """Ask for a statement and run it."""
        text = self.host.prompt("SQL statement")
        if text is None:
            raise OperationCancelled("no statement given")
        if not text.strip():
            raise StatementNotFound("No statement entered")
        self._execute(text)

    @_command
    def run_current_line(self) -> None:
        line = locator.line_at_cursor(self.host.buffer_text(), self.host.cursor_position())
        if not line.strip():
            raise StatementNotFound("The current line is empty")
        self._execute(line)

    def _execute(self, text: str) -> None:
        statement = normalize(text)
        bound = resolve_binds(statement, self._prompt_bind)
        self._run(lambda: self.runner.run_statement(bound), _title_for(bound))

    def _prompt_bind(self, name: str) -> Optional[str]:
        return self.host.prompt(f"Value for :{name}")

    # Describe

    @_command
    def describe_table(self, name: str) -> None:
        self._describe(name)

    @_command
    def describe_table_under_cursor(self) -> None:
        name = locator.word_at_cursor(self.host.buffer_text(), self.host.cursor_position())
        self._describe(name)

    @_command
    def describe_table_named_by_prompt(self) -> None:
        name = self.host.prompt("Table name")
        if name is None:
            raise OperationCancelled("no table name given")
        self._describe(name.strip())

    def _describe(self, name: str) -> None:
        self._run(lambda: self.runner.describe_table(name), f"describe {name}")

    def _run(self, invoke, title: str) -> None:
        self.session.get_credentials(self.host)
        with self.host.busy():
            result: RunResult = invoke()
        if result.returncode != 0:
            _logger.warning("Interpreter returned %d for %s", result.returncode, title)
        self.host.show_result(trim_trailing_blank_lines(result.output), title)

    # Session

    @_command
    def set_database(self, name: str) -> None:
        self.session.set_database(name)
        self.host.show_status(f"Database: {name}")

    @_command
    def set_database_by_prompt(self) -> None:
        name = self.host.prompt("Database", self.session.database)
        if name is None:
            raise OperationCancelled("no database given")
        self.set_database(name.strip())

    @_command
    def reset_credentials(self) -> None:
        self.session.reset_credentials()
        self.host.show_status("Credentials cleared")

    # Scripts

    @_command
    def open_blank_scratch_script(self) -> None:
        self.host.open_script(ScriptFile())

    @_command
    def open_named_script(self, path) -> None:
        self.host.open_script(read_script(Path(path).expanduser()))

    @_command
    def open_snippets_script(self) -> None:
        if self.snippets_path is None:
            self.host.show_message("No snippets file configured")
            return
        path = Path(self.snippets_path).expanduser()
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        self.host.open_script(read_script(path))
