"""Public protocols shared by the formatter and the substitution engine."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

__all__ = ["ParamFormatter", "SQLValuer"]


@runtime_checkable
class SQLValuer(Protocol):
    """Value that can reveal the representation a database driver would bind.

    Wrapper types (money, JSON documents, nullable columns) implement
    ``sql_value`` so their log rendering matches what reaches the database.
    Returning ``None`` renders the null literal.
    """

    def sql_value(self) -> Any: ...


class ParamFormatter(Protocol):
    """Anything able to render a single bound parameter as SQL text."""

    def format(self, value: Any, escaper: str) -> str: ...
