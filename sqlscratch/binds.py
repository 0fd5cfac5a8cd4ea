"""Bind variable detection and interactive substitution.

A bind placeholder is ``:`` followed by a letter and any run of letters,
digits or underscores. Text inside single-quoted literals is never treated
as a placeholder, so format masks like ``'HH24:MI:SS'`` survive.
"""

import logging
import re
from typing import Callable, Dict, List, Optional

from .errors import OperationCancelled

_logger = logging.getLogger(__name__)

# Group 1 is the placeholder name; string literals match without a group.
STRING_OR_BIND_RE = re.compile(r"'(?:[^']|'')*'|(?<![\w:]):([A-Za-z]\w*)")


def find_placeholders(sql: str) -> List[str]:
    """Distinct placeholder names in order of first occurrence."""
    names: List[str] = []
    for match in STRING_OR_BIND_RE.finditer(sql):
        name = match.group(1)
        if name and name not in names:
            names.append(name)
    return names


def substitute(sql: str, values: Dict[str, str]) -> str:
    """Replace every placeholder named in ``values`` with its literal.

    Matching is on whole names: a value for ``id`` leaves ``:identifier``
    untouched. Substituted text is not scanned again.
    """
    def replace(match):
        name = match.group(1)
        if name and name in values:
            return values[name]
        return match.group(0)

    return STRING_OR_BIND_RE.sub(replace, sql)


def resolve_binds(sql: str, prompt: Callable[[str], Optional[str]]) -> str:
    """Prompt once per distinct placeholder and substitute the answers.

    ``prompt`` receives the placeholder name without the colon and returns
    the literal to insert, or None when the user cancels. Values are used
    verbatim; quoting string literals is up to the user.
    """
    values: Dict[str, str] = {}
    for name in find_placeholders(sql):
        value = prompt(name)
        if value is None:
            raise OperationCancelled(f"no value given for :{name}")
        values[name] = value

    if not values:
        return sql

    _logger.debug("Substituting binds: %s", ", ".join(values))
    return substitute(sql, values)
