"""Splice formatted parameter values into a SQL template for log output.

The rendered statement is for humans reading logs.  Executing it could
introduce a SQL injection vulnerability; always execute the original template
with bound parameters instead.
"""

from __future__ import annotations

import re
from typing import Any

from .formatter import default_param_formatter
from .types import ParamFormatter

__all__ = [
    "DOLLAR_WRAPPED_PLACEHOLDER",
    "ORACLE_PLACEHOLDER",
    "POSTGRES_PLACEHOLDER",
    "SQLSERVER_PLACEHOLDER",
    "explain_sql",
]

POSTGRES_PLACEHOLDER = re.compile(r"\$([0-9]+)")
SQLSERVER_PLACEHOLDER = re.compile(r"@p([0-9]+)")
ORACLE_PLACEHOLDER = re.compile(r":([0-9]+)")
DOLLAR_WRAPPED_PLACEHOLDER = re.compile(r"\$([0-9]+)\$")

# Canonical form every numbered placeholder is rewritten to before substitution.
_CANONICAL_PLACEHOLDER = re.compile(r"\$[0-9]+\$")


def explain_sql(
    sql: str,
    numeric_placeholder: re.Pattern[str] | str | None,
    escaper: str,
    *values: Any,
    formatter: ParamFormatter | None = None,
) -> str:
    """Return ``sql`` with its placeholders replaced by formatted ``values``.

    With ``numeric_placeholder=None`` every ``?`` is replaced left to right;
    surplus ``?`` characters are kept once ``values`` runs out.  Otherwise
    ``numeric_placeholder`` must capture the 1-based position in its first
    group (for instance :data:`POSTGRES_PLACEHOLDER`) and each match is replaced
    by the value at that position.  Positions outside ``values`` are left in
    the ``$N$`` form.

    >>> explain_sql("SELECT * FROM t WHERE id = ? AND name = ?", None, "'", 5, "bob")
    "SELECT * FROM t WHERE id = 5 AND name = 'bob'"
    """

    if formatter is None:
        formatter = default_param_formatter
    rendered = [formatter.format(value, escaper) for value in values]

    if numeric_placeholder is None:
        return _replace_question_marks(sql, rendered)
    return _replace_numbered(sql, numeric_placeholder, rendered)


def _replace_question_marks(sql: str, rendered: list[str]) -> str:
    parts: list[str] = []
    idx = 0
    for char in sql:
        if char == "?" and idx < len(rendered):
            parts.append(rendered[idx])
            idx += 1
            continue
        parts.append(char)
    return "".join(parts)


def _replace_numbered(
    sql: str, numeric_placeholder: re.Pattern[str] | str, rendered: list[str]
) -> str:
    pattern = re.compile(numeric_placeholder)

    def canonical(match: re.Match[str]) -> str:
        number = match.group(1) if pattern.groups else None
        return f"${number or ''}$"

    def substitute(match: re.Match[str]) -> str:
        token = match.group(0)
        try:
            position = int(token[1:-1]) - 1
        except ValueError:
            # Numbers past the interpreter's int conversion limit.
            return token
        if 0 <= position < len(rendered):
            return rendered[position]
        return token

    sql = pattern.sub(canonical, sql)
    return _CANONICAL_PLACEHOLDER.sub(substitute, sql)
