"""Locate SQL statements and table names in editor text.

Everything here works on a plain string plus a character offset, so the
patterns can be swapped for a real lexer without touching callers.
"""

import re

from .errors import StatementNotFound

# select/update/delete as a whole word, not a qualified name like obj.select
LEADING_KEYWORD_RE = re.compile(r"(?<![.\w])(select|update|delete)\b", re.IGNORECASE)
TERMINATOR = ";"
IDENTIFIER_RE = re.compile(r"[\w$#]+(?:\.[\w$#]+)*")


def statement_at_cursor(text: str, cursor_pos: int) -> str:
    """Return the statement around ``cursor_pos`` without its terminator.

    Searches backward for the nearest leading keyword, then forward from
    that keyword to the next ``;``.
    """
    start = None
    for match in LEADING_KEYWORD_RE.finditer(text):
        if match.start() > cursor_pos:
            break
        start = match.start()

    if start is None:
        raise StatementNotFound("No select, update or delete before the cursor")

    end = text.find(TERMINATOR, start)
    if end == -1:
        raise StatementNotFound("No ';' after the statement at the cursor")

    return text[start:end]


def line_at_cursor(text: str, cursor_pos: int) -> str:
    """Return the full line containing ``cursor_pos``, verbatim."""
    line_start = text.rfind("\n", 0, cursor_pos) + 1
    line_end = text.find("\n", cursor_pos)
    if line_end == -1:
        line_end = len(text)
    return text[line_start:line_end]


def word_at_cursor(text: str, cursor_pos: int) -> str:
    """Return the identifier under the cursor (``schema.table`` allowed)."""
    for match in IDENTIFIER_RE.finditer(text):
        if match.start() > cursor_pos:
            break
        if cursor_pos <= match.end():
            return match.group(0)
    raise StatementNotFound("No table name under the cursor")


# Statements that SQL*Plus buffers until a terminator
STATEMENT_START_RE = re.compile(
    r"(select|insert|update|delete|merge|with|create|alter|drop)\b", re.IGNORECASE)
QUOTED_RE = re.compile(r"'(?:[^']|'')*'")


def statement_open_after(line: str, was_open: bool) -> bool:
    """Whether a SQL statement is still unterminated after ``line``.

    A statement ends at a trailing ``;``, a lone ``/`` or a blank line.
    Comment-only lines leave the state unchanged.
    """
    if not line.strip():
        return False
    code = QUOTED_RE.sub("''", line).split("--", 1)[0].strip()
    if not code:
        return was_open
    if not was_open and not STATEMENT_START_RE.match(code):
        return False
    return not (code.endswith(TERMINATOR) or code == "/")
