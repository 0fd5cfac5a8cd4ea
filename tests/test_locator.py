from __future__ import annotations

import pytest

from sqlscratch.errors import StatementNotFound
from sqlscratch.locator import (
    line_at_cursor,
    statement_at_cursor,
    statement_open_after,
    word_at_cursor,
)


def test_qualified_keyword_is_skipped():
    text = "begin foo.select * from t; select a from b; end"
    cursor = text.index("a from b")
    assert statement_at_cursor(text, cursor) == "select a from b"


def test_nearest_statement_before_cursor_wins():
    text = "select 1 from dual;\nupdate emp\n   set sal = 0\n where id = 1;\n"
    cursor = text.index("set sal")
    assert statement_at_cursor(text, cursor) == "update emp\n   set sal = 0\n where id = 1"


def test_keyword_is_case_insensitive():
    text = "DELETE FROM emp WHERE id = 3;"
    assert statement_at_cursor(text, 10) == "DELETE FROM emp WHERE id = 3"


def test_cursor_on_keyword_itself():
    text = "select a from b;"
    assert statement_at_cursor(text, 0) == "select a from b"


def test_keyword_inside_identifier_is_not_a_match():
    text = "create table reselect_log (x number); "
    with pytest.raises(StatementNotFound):
        statement_at_cursor(text, len(text))


def test_missing_terminator_fails():
    with pytest.raises(StatementNotFound):
        statement_at_cursor("select a from b", 5)


def test_no_keyword_before_cursor_fails():
    text = "-- nothing here\nfoo.select * from t;"
    with pytest.raises(StatementNotFound):
        statement_at_cursor(text, len(text) - 1)


def test_line_at_cursor_returns_whole_line():
    text = "first line\nselect * from dual\nlast"
    cursor = text.index("from")
    assert line_at_cursor(text, cursor) == "select * from dual"
    assert line_at_cursor(text, len(text)) == "last"
    assert line_at_cursor(text, 0) == "first line"


def test_word_at_cursor():
    text = "desc hr.employees here"
    assert word_at_cursor(text, text.index("employees") + 2) == "hr.employees"
    assert word_at_cursor(text, text.index("here")) == "here"


def test_word_at_cursor_on_blank_fails():
    with pytest.raises(StatementNotFound):
        word_at_cursor("a   b", 2)


@pytest.mark.parametrize(
    "line, was_open, expected",
    [
        ("update emp", False, True),
        ("   set sal = 0", True, True),
        (" where id = 1;", True, False),
        ("set pagesize 100", False, False),
        ("select 1 from dual; -- done", False, False),
        ("select ';' from dual", False, True),
        ("-- still going", True, True),
        ("", True, False),
        ("/", True, False),
    ],
)
def test_statement_open_after(line, was_open, expected):
    assert statement_open_after(line, was_open) is expected
