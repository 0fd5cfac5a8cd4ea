from __future__ import annotations

from sqlscratch.presenter import count_lines, fit_height, trim_trailing_blank_lines


def test_trailing_blank_lines_are_removed():
    output = "NAME\n----\nSMITH\n\n   \n"
    trimmed = trim_trailing_blank_lines(output)
    assert trimmed == "NAME\n----\nSMITH"
    assert count_lines(trimmed) == 3


def test_leading_and_inner_blank_lines_are_kept():
    assert trim_trailing_blank_lines("\nA\n\nB\n\n") == "\nA\n\nB"


def test_empty_output():
    assert trim_trailing_blank_lines("\n\n") == ""
    assert count_lines("") == 0


def test_display_shrinks_to_content():
    assert fit_height(3, current_height=20) == 3


def test_display_never_grows_past_current_area():
    assert fit_height(500, current_height=20) == 20


def test_display_is_bounded_by_maximum():
    assert fit_height(500, current_height=200, max_height=60) == 60


def test_display_keeps_at_least_one_line():
    assert fit_height(0, current_height=20) == 1
