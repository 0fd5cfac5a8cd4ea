from __future__ import annotations

import pytest

from sqlscratch.normalizer import ensure_terminator, join_lines, normalize, strip_into_clause


@pytest.mark.parametrize(
    "sql",
    [
        "select a,\n  b\nfrom t",
        "select a\r\nfrom t\r\nwhere x = 1;",
        "select a\nfrom t;\n\n",
        "  update t\n set a = 1\n where b = 2 ;; ",
    ],
)
def test_normalize_is_single_line_with_one_terminator(sql: str):
    result = normalize(sql)
    assert "\n" not in result
    assert "\r" not in result
    assert result.endswith(";")
    assert not result.endswith(";;")


def test_into_clause_is_collapsed_to_from():
    result = normalize("select a, b INTO x, y FROM t where a = 1")
    assert "FROM t" in result
    assert "INTO" not in result.upper()


def test_into_clause_spanning_lines():
    result = normalize("select a\n  into v_a\n  from t")
    assert result.split() == ["select", "a", "FROM", "t;"]


def test_into_collapse_stops_at_first_from():
    sql = "select a into v from t where b in (select c from d)"
    assert strip_into_clause(sql) == "select a FROM t where b in (select c from d)"


def test_identifier_starting_with_into_is_kept():
    assert strip_into_clause("select into_date from t") == "select into_date from t"


def test_join_lines_keeps_tokens_apart():
    assert join_lines("select a\nfrom t") == "select a from t"


def test_existing_terminator_is_not_doubled():
    assert ensure_terminator("select 1 from dual;") == "select 1 from dual;"
    assert ensure_terminator("select 1 from dual") == "select 1 from dual;"


@pytest.mark.parametrize(
    "sql",
    [
        "select a into x from t",
        "select a\nfrom t\nwhere b = :b",
        "delete from t;",
        "select a into x from t where y in (select z into w from q)",
    ],
)
def test_normalize_is_idempotent(sql: str):
    once = normalize(sql)
    assert normalize(once) == once
