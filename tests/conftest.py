from __future__ import annotations

import os
import stat
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pytest

from sqlscratch.commands import HostEditor
from sqlscratch.runner import RunResult, ScriptRunner
from sqlscratch.scripts import ScriptFile
from sqlscratch.session import Session


@dataclass
class FakeHost(HostEditor):
    text: str = ""
    cursor: int = 0
    selection: str = ""
    answers: list = field(default_factory=list)
    prompts: list = field(default_factory=list)
    messages: list = field(default_factory=list)
    statuses: list = field(default_factory=list)
    results: list = field(default_factory=list)
    opened: list = field(default_factory=list)
    scripts: list = field(default_factory=list)

    def buffer_text(self) -> str:
        return self.text

    def cursor_position(self) -> int:
        return self.cursor

    def selected_text(self) -> str:
        return self.selection

    def _answer(self, label: str) -> Optional[str]:
        self.prompts.append(label)
        return self.answers.pop(0)

    def prompt(self, label: str, default: str = "") -> Optional[str]:
        return self._answer(label)

    def prompt_secret(self, label: str) -> Optional[str]:
        return self._answer(label)

    def show_message(self, message: str) -> None:
        self.messages.append(message)

    def show_status(self, message: str) -> None:
        self.statuses.append(message)

    def show_result(self, text: str, title: str) -> None:
        self.results.append((text, title))

    def open_script(self, script: ScriptFile) -> None:
        self.scripts.append(script)
        self.opened.append(script.path)


class RecordingRunner(ScriptRunner):
    """ScriptRunner that records scripts instead of starting SQL*Plus."""

    def __init__(self, session: Session, output: str = "OK\n", returncode: int = 0):
        super().__init__(session)
        self.output = output
        self.returncode = returncode
        self.scripts: list = []

    def run_script(self, script: str) -> RunResult:
        self.scripts.append(script)
        return RunResult(output=self.output, returncode=self.returncode)


@pytest.fixture
def session() -> Session:
    return Session(interpreter_path="sqlplus", setup_commands="set pagesize 100\n", database="ORCL")


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def fake_interpreter(tmp_path: Path) -> Path:
    """Executable that prints its connect argument and echoes the script it reads."""
    if sys.platform == "win32":
        pytest.skip("fake interpreter is a POSIX shell script")
    script = tmp_path / "fake-sqlplus"
    script.write_text('#!/bin/sh\necho "CONNECT $1"\ncat\nexit ${FAKE_EXIT:-0}\n')
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch):
    for name in list(os.environ):
        if name.startswith("SQLSCRATCH_"):
            monkeypatch.delenv(name, raising=False)
