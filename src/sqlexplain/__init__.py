"""Public package API."""

from importlib import metadata

from .core import (
    DOLLAR_WRAPPED_PLACEHOLDER,
    ORACLE_PLACEHOLDER,
    POSTGRES_PLACEHOLDER,
    SQLSERVER_PLACEHOLDER,
    DefaultParamFormatter,
    ParamFormatter,
    SQLTracer,
    SQLValuer,
    TraceConfig,
    TracedBigQuery,
    explain_query,
    explain_sql,
    format_param,
)

__all__ = [
    "explain_sql",
    "explain_query",
    "format_param",
    "DefaultParamFormatter",
    "ParamFormatter",
    "SQLValuer",
    "SQLTracer",
    "TraceConfig",
    "TracedBigQuery",
    "POSTGRES_PLACEHOLDER",
    "SQLSERVER_PLACEHOLDER",
    "ORACLE_PLACEHOLDER",
    "DOLLAR_WRAPPED_PLACEHOLDER",
]

try:
    __version__ = metadata.version("sqlexplain")
except (
    metadata.PackageNotFoundError
):  # pragma: no cover - fallback for editable installs
    __version__ = "0.0.0"
