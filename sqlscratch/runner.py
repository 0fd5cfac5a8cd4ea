"""Assemble SQL*Plus scripts and run them through the external interpreter."""

import logging
import os
import subprocess
import tempfile
from dataclasses import dataclass

from .errors import InterpreterInvocationError
from .session import Session

_logger = logging.getLogger(__name__)

SCRIPT_SUFFIX = ".sql"


@dataclass
class RunResult:
    output: str
    returncode: int


def describe_statement(table_name: str) -> str:
    """Two-line script body that echoes the table name then describes it."""
    return f"prompt Table: {table_name}\ndescribe {table_name}"


class ScriptRunner:
    """Runs scripts for a Session.

    Each run writes its own temporary script file and removes it before
    returning, whether or not the interpreter could be started.
    """

    def __init__(self, session: Session):
        self.session = session

    def build_script(self, statement: str) -> str:
        return f"{self.session.setup_commands}{statement}\n"

    def command(self, mask_password: bool = False) -> list:
        return [
            self.session.interpreter_path,
            self.session.connect_string(mask_password=mask_password),
        ]

    def run_script(self, script: str) -> RunResult:
        """Run ``script`` and return the interpreter's combined output.

        Blocks until the interpreter exits; there is no timeout. A non-zero
        exit status is returned, not raised.
        """
        tmp = tempfile.NamedTemporaryFile(
            mode="w", suffix=SCRIPT_SUFFIX, delete=False, encoding="utf-8"
        )
        script_path = tmp.name
        try:
            with tmp:
                tmp.write(script)

            _logger.info("Running %s < %s", " ".join(self.command(mask_password=True)), script_path)
            try:
                with open(script_path, "r", encoding="utf-8") as script_file:
                    result = subprocess.run(
                        self.command(),
                        stdin=script_file,
                        stdout=subprocess.PIPE,
                        stderr=subprocess.STDOUT,
                        text=True,
                        errors="replace",
                    )
            except OSError as e:
                _logger.error("Interpreter failed to start: %s", e)
                raise InterpreterInvocationError(self.session.interpreter_path, str(e)) from e

            _logger.info("Interpreter exited with status %d", result.returncode)
            return RunResult(output=result.stdout or "", returncode=result.returncode)
        finally:
            try:
                os.remove(script_path)
            except FileNotFoundError:
                pass

    def run_statement(self, statement: str) -> RunResult:
        return self.run_script(self.build_script(statement))

    def describe_table(self, table_name: str) -> RunResult:
        return self.run_statement(describe_statement(table_name))
