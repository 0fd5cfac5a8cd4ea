from __future__ import annotations

import pytest

from sqlscratch import session as session_module
from sqlscratch.config import Settings
from sqlscratch.errors import OperationCancelled
from sqlscratch.session import Session

from conftest import FakeHost


def test_first_use_prompts_for_user_and_password(session: Session):
    host = FakeHost(answers=["scott", "tiger"])
    assert session.get_credentials(host) == ("scott", "tiger")
    assert len(host.prompts) == 2


def test_cached_credentials_are_reused(session: Session):
    host = FakeHost(answers=["scott", "tiger"])
    session.get_credentials(host)
    assert session.get_credentials(host) == ("scott", "tiger")
    assert len(host.prompts) == 2


def test_force_prompt_asks_again(session: Session):
    host = FakeHost(answers=["scott", "tiger", "hr", "hr"])
    session.get_credentials(host)
    assert session.get_credentials(host, force_prompt=True) == ("hr", "hr")


def test_reset_clears_credentials(session: Session):
    host = FakeHost(answers=["scott", "tiger", "scott", "lion"])
    session.get_credentials(host)
    session.reset_credentials()
    assert session.user_id == ""
    assert session.password == ""
    assert session.get_credentials(host) == ("scott", "lion")
    assert len(host.prompts) == 4


def test_user_prompt_is_prefilled_with_login_name(session: Session, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(session_module, "default_login_name", lambda: "oracle")
    seen = {}

    class Prompter:
        def prompt(self, label, default=""):
            seen["default"] = default
            return default

        def prompt_secret(self, label):
            return ""

    assert session.get_credentials(Prompter()) == ("oracle", "")
    assert seen["default"] == "oracle"


def test_login_name_lookup_failure_gives_empty_default(monkeypatch: pytest.MonkeyPatch):
    def fail():
        raise OSError("no login")

    monkeypatch.setattr(session_module.getpass, "getuser", fail)
    assert session_module.default_login_name() == ""


def test_cancelled_password_leaves_store_empty(session: Session):
    host = FakeHost(answers=["scott", None])
    with pytest.raises(OperationCancelled):
        session.get_credentials(host)
    assert session.user_id == ""


def test_set_database_and_connect_string(session: Session):
    session.user_id, session.password = "scott", "tiger"
    session.set_database("PROD")
    assert session.connect_string() == "scott/tiger@PROD"
    assert session.connect_string(mask_password=True) == "scott/****@PROD"


def test_from_settings_uses_initial_credentials(tmp_path):
    settings = Settings(
        interpreter_path="/opt/oracle/bin/sqlplus",
        setup_commands="set pagesize 10\n",
        default_database="DEV",
        snippets_path=tmp_path / "snippets.sql",
        initial_user="app",
        initial_password="secret",
    )
    s = Session.from_settings(settings)
    assert s.database == "DEV"
    assert s.has_credentials
    assert s.get_credentials(FakeHost()) == ("app", "secret")
