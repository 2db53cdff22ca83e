from .bigquery import explain_parameters, explain_query
from .client import TracedBigQuery
from .explain import (
    DOLLAR_WRAPPED_PLACEHOLDER,
    ORACLE_PLACEHOLDER,
    POSTGRES_PLACEHOLDER,
    SQLSERVER_PLACEHOLDER,
    explain_sql,
)
from .formatter import DefaultParamFormatter, default_param_formatter, format_param
from .tracer import SQLTracer, TraceConfig, TraceSpan
from .types import ParamFormatter, SQLValuer

__all__ = [
    "DOLLAR_WRAPPED_PLACEHOLDER",
    "DefaultParamFormatter",
    "ORACLE_PLACEHOLDER",
    "POSTGRES_PLACEHOLDER",
    "ParamFormatter",
    "SQLSERVER_PLACEHOLDER",
    "SQLTracer",
    "SQLValuer",
    "TraceConfig",
    "TraceSpan",
    "TracedBigQuery",
    "default_param_formatter",
    "explain_parameters",
    "explain_query",
    "explain_sql",
    "format_param",
]
