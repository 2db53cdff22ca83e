"""Render BigQuery parameterized queries for logging.

BigQuery accepts either positional ``?`` parameters or named ``@name``
parameters, never both in one statement.  Parameters are rendered with the
same rules as :func:`~sqlexplain.core.explain.explain_sql`; arrays and structs
additionally get BigQuery literal syntax.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from google.cloud import bigquery

from .explain import _replace_question_marks
from .formatter import default_param_formatter
from .types import ParamFormatter

__all__ = ["explain_parameters", "explain_query"]

# ``@@`` prefixes system variables such as ``@@dataset_id``.
_NAMED_PARAMETER = re.compile(r"(?<!@)@(\w+)")


def explain_query(
    sql: str,
    job_config: bigquery.QueryJobConfig | None = None,
    *,
    escaper: str = "'",
    formatter: ParamFormatter | None = None,
) -> str:
    """Return ``sql`` with the query parameters of ``job_config`` spliced in."""

    parameters = list(job_config.query_parameters) if job_config is not None else []
    return explain_parameters(sql, parameters, escaper=escaper, formatter=formatter)


def explain_parameters(
    sql: str,
    parameters: Sequence[Any],
    *,
    escaper: str = "'",
    formatter: ParamFormatter | None = None,
) -> str:
    """Substitute BigQuery ``parameters`` into ``sql``.

    Named parameters replace matching ``@name`` tokens; unknown names are left
    untouched.  Unnamed parameters fill ``?`` placeholders from left to right.
    """

    if formatter is None:
        formatter = default_param_formatter
    rendered = [_format_parameter(parameter, formatter, escaper) for parameter in parameters]

    names = [getattr(parameter, "name", None) for parameter in parameters]
    if not any(names):
        return _replace_question_marks(sql, rendered)

    by_name = {name: text for name, text in zip(names, rendered) if name}

    def substitute(match: re.Match[str]) -> str:
        return by_name.get(match.group(1), match.group(0))

    return _NAMED_PARAMETER.sub(substitute, sql)


def _format_parameter(parameter: Any, formatter: ParamFormatter, escaper: str) -> str:
    # Nested struct members are stored as plain dicts and lists.
    if isinstance(parameter, bigquery.ArrayQueryParameter):
        parameter = list(parameter.values or [])
    elif isinstance(parameter, bigquery.StructQueryParameter):
        parameter = parameter.struct_values

    if isinstance(parameter, (list, tuple)):
        items = [_format_parameter(value, formatter, escaper) for value in parameter]
        return "[{}]".format(", ".join(items))

    if isinstance(parameter, dict):
        fields = [
            "{} AS {}".format(_format_parameter(value, formatter, escaper), key)
            for key, value in parameter.items()
        ]
        return "STRUCT({})".format(", ".join(fields))

    return formatter.format(parameter, escaper)
