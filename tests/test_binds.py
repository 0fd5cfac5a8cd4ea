from __future__ import annotations

import pytest

from sqlscratch.binds import find_placeholders, resolve_binds, substitute
from sqlscratch.errors import OperationCancelled


class Prompter:
    def __init__(self, **answers):
        self.answers = answers
        self.asked = []

    def __call__(self, name):
        self.asked.append(name)
        return self.answers.get(name)


def test_each_distinct_placeholder_is_prompted_once():
    prompt = Prompter(a="1", b="'x'")
    result = resolve_binds("select * from t where a = :a and b = :b or a2 = :a and :b is null;", prompt)
    assert prompt.asked == ["a", "b"]
    assert result == "select * from t where a = 1 and b = 'x' or a2 = 1 and 'x' is null;"
    assert find_placeholders(result) == []


def test_whole_name_matching():
    sql = "WHERE :id = 1 AND x = :identifier"
    assert substitute(sql, {"id": "5"}) == "WHERE 5 = 1 AND x = :identifier"


def test_prompt_order_follows_first_occurrence():
    prompt = Prompter(zeta="1", alpha="2")
    resolve_binds("select :zeta, :alpha, :zeta from dual;", prompt)
    assert prompt.asked == ["zeta", "alpha"]


def test_end_to_end_substitution_example():
    result = resolve_binds("select :name from emp;", Prompter(name="'SMITH'"))
    assert result == "select 'SMITH' from emp;"


def test_empty_value_is_a_valid_substitution():
    result = resolve_binds("select * from t where a = :a;", Prompter(a=""))
    assert result == "select * from t where a = ;"


def test_cancelled_prompt_aborts():
    with pytest.raises(OperationCancelled):
        resolve_binds("select :missing from dual;", Prompter())


def test_no_placeholders_means_no_prompts():
    prompt = Prompter()
    assert resolve_binds("select 1 from dual;", prompt) == "select 1 from dual;"
    assert prompt.asked == []


def test_colons_inside_string_literals_are_not_binds():
    sql = "select to_char(sysdate, 'HH24:MI:SS'), :fmt from dual;"
    assert find_placeholders(sql) == ["fmt"]
    assert substitute(sql, {"fmt": "1", "MI": "x"}) == (
        "select to_char(sysdate, 'HH24:MI:SS'), 1 from dual;"
    )


def test_assignment_and_digits_are_not_binds():
    assert find_placeholders("begin x := 1; y := :p1_value; end;") == ["p1_value"]
    assert find_placeholders("select '12:30' from dual where a = :9") == []


def test_substituted_values_are_not_rescanned():
    prompt = Prompter(a=":b", b="2")
    assert resolve_binds("select :a, :b from dual;", prompt) == "select :b, 2 from dual;"
    assert prompt.asked == ["a", "b"]
