"""Turn a raw statement span into a single-line, terminated command."""

import re

INTO_FROM_RE = re.compile(r"\binto\b.*?\bfrom\b", re.IGNORECASE | re.DOTALL)
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def strip_into_clause(sql: str) -> str:
    """Collapse ``INTO <vars> FROM`` to ``FROM``.

    PL/SQL ``select ... into`` variables cannot be honoured interactively.
    """
    return INTO_FROM_RE.sub("FROM", sql)


def join_lines(sql: str) -> str:
    """Replace every line break with a single space."""
    return LINE_BREAK_RE.sub(" ", sql)


def ensure_terminator(sql: str) -> str:
    """Make ``sql`` end with exactly one ``;``."""
    body = sql.rstrip()
    while body.endswith(";"):
        body = body[:-1].rstrip()
    return body + ";"


def normalize(sql: str) -> str:
    return ensure_terminator(join_lines(strip_into_clause(sql)).strip())
