"""Helper utilities for rendering SQL literals.

All quoting goes through this module so that the escape rules stay in one
place.  The output is meant for log lines and debugging output: the escaping
is cosmetic and does not make a value safe to execute.
"""

from __future__ import annotations


def escape_literal(value: str, escaper: str = "'") -> str:
    """Prefix every occurrence of ``escaper`` inside ``value`` with a backslash."""

    return value.replace(escaper, "\\" + escaper)


def wrap_literal(value: str, escaper: str = "'") -> str:
    """Surround ``value`` with ``escaper`` without touching its contents."""

    return f"{escaper}{value}{escaper}"


def format_literal(value: object, escaper: str = "'") -> str:
    """Return ``value`` formatted as a quoted SQL literal.

    ``str(value)`` is escaped first and then wrapped, so ``o'brien`` becomes
    ``'o\\'brien'`` with the default escaper.
    """

    return wrap_literal(escape_literal(str(value), escaper), escaper)
