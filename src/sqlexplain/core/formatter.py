"""Render bound parameter values as SQL literal text.

The rules are checked in a fixed order because a value can match several of
them at once (a ``pandas.Timestamp`` is a ``datetime`` and also defines
``__str__``; an ``IntEnum`` is both an integer and a stringer).  The first
matching rule wins:

1. ``bool``
2. ``datetime`` (``pandas.NaT`` renders the null literal)
3. driver value accessors (:class:`~sqlexplain.core.types.SQLValuer`,
   ``bigquery.ScalarQueryParameter``)
4. stringers, i.e. instances with a Python level ``__str__``
5. ``bytes``
6. integers, 32-bit floats, 64-bit floats, ``str``
7. the generic fallback: absent values, weak references, convertible types and
   finally ``str(value)``
"""

from __future__ import annotations

import inspect
import logging
import numbers
import re
import types
import weakref
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import numpy as np
import pandas as pd
from google.cloud import bigquery

from .sql import format_literal, wrap_literal
from .types import SQLValuer

__all__ = [
    "BINARY_STR",
    "DefaultParamFormatter",
    "NULL_STR",
    "TIME_FORMAT",
    "ZERO_TIME_STR",
    "default_param_formatter",
    "format_param",
    "is_absent",
]

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
ZERO_TIME_STR = "0000-00-00 00:00:00"
NULL_STR = "NULL"
BINARY_STR = "<binary>"

_ZERO_TIME_FIELDS = (1, 1, 1, 0, 0, 0, 0)
_YEAR_DIRECTIVE = re.compile(r"%[%Y]")

# Sentinel returned by the unwrapping helpers when a rule does not apply.
_MISSING = object()


def is_absent(value: Any) -> bool:
    """Return ``True`` for values that render as the null literal.

    ``None``, ``pandas.NA``, ``pandas.NaT`` and dead weak references are absent.
    Zero-valued primitives (``0``, ``""``, ``False``) are present.
    """

    if value is None or value is pd.NA or value is pd.NaT:
        return True
    if isinstance(value, weakref.ref):
        return value() is None
    return False


def _has_custom_str(value: Any) -> bool:
    """Return ``True`` when ``value``'s class implements ``__str__`` in Python."""

    return isinstance(inspect.getattr_static(type(value), "__str__", None), types.FunctionType)


def _is_zero_time(value: datetime) -> bool:
    fields = (
        value.year,
        value.month,
        value.day,
        value.hour,
        value.minute,
        value.second,
        value.microsecond,
    )
    return fields == _ZERO_TIME_FIELDS


def _to_datetime(value: Any) -> Any:
    if isinstance(value, np.datetime64):
        try:
            return pd.Timestamp(value)
        except (ValueError, OverflowError):
            return _MISSING
    return _MISSING


def _to_bool(value: Any) -> Any:
    if isinstance(value, np.bool_):
        return bool(value)
    return _MISSING


def _to_bytes(value: Any) -> Any:
    if isinstance(value, (bytearray, memoryview)) or hasattr(type(value), "__bytes__"):
        return bytes(value)
    return _MISSING


def _format_float(value: np.floating) -> str:
    """Shortest round-trip positional text at the precision of ``value``."""

    if np.isnan(value):
        return "NaN"
    if np.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return np.format_float_positional(value, unique=True, trim="-")


_CONVERTERS: dict[type, Callable[[Any], Any]] = {
    datetime: _to_datetime,
    bool: _to_bool,
    bytes: _to_bytes,
}


@dataclass(frozen=True)
class DefaultParamFormatter:
    """Standard :class:`~sqlexplain.core.types.ParamFormatter` implementation.

    Instances are immutable and can be shared freely between threads.
    ``zero_time_str`` replaces ``datetime.min`` when non-empty; leave it empty
    to format the zero time with ``time_format`` like any other timestamp.
    ``fraction_digits`` sub-second digits are appended to ``time_format`` with
    trailing zeros trimmed, so ``12:00:00.500000`` renders ``12:00:00.5``.
    """

    time_format: str = TIME_FORMAT
    fraction_digits: int = 3
    zero_time_str: str = ZERO_TIME_STR
    null_str: str = NULL_STR
    binary_str: str = BINARY_STR
    convertible_types: tuple[type, ...] = (datetime, bool, bytes)

    def __post_init__(self) -> None:
        if not 0 <= self.fraction_digits <= 6:
            raise ValueError("fraction_digits must be between 0 and 6")

    def format(self, value: Any, escaper: str) -> str:
        """Return the SQL literal text for ``value`` quoted with ``escaper``."""

        if isinstance(value, bool):
            return self._format_bool(value)

        if isinstance(value, datetime):
            if value is pd.NaT:
                return self.null_str
            return self._format_time(value, escaper)

        unwrapped = self._driver_value(value)
        if unwrapped is not _MISSING:
            return self.format(unwrapped, escaper)

        if _has_custom_str(value):
            return self._format_stringer(value, escaper)

        if isinstance(value, bytes):
            text = value.decode("utf-8", errors="replace")
            if text.isprintable():
                return format_literal(text, escaper)
            return wrap_literal(self.binary_str, escaper)

        if isinstance(value, numbers.Integral):
            return str(int(value))

        if isinstance(value, (np.float32, np.float16)):
            return _format_float(np.float32(value))

        if isinstance(value, float):
            return _format_float(np.float64(value))

        if isinstance(value, str):
            return format_literal(value, escaper)

        return self._format_fallback(value, escaper)

    def _format_fallback(self, value: Any, escaper: str) -> str:
        if is_absent(value):
            return self.null_str

        if isinstance(value, weakref.ref):
            return self.format(value(), escaper)

        converted = self._convert(value)
        if converted is not _MISSING:
            return self.format(converted, escaper)

        return format_literal(str(value), escaper)

    def _format_stringer(self, value: Any, escaper: str) -> str:
        if isinstance(value, numbers.Integral):
            return str(int(value))
        if isinstance(value, numbers.Real):
            return "%.6f" % float(value)
        if isinstance(value, str):
            return format_literal(str(value), escaper)
        if is_absent(value):
            return self.null_str
        return format_literal(str(value), escaper)

    def _format_time(self, value: datetime, escaper: str) -> str:
        if _is_zero_time(value) and self.zero_time_str:
            return format_literal(self.zero_time_str, escaper)

        # strftime does not zero-pad years below 1000 on every platform.
        layout = _YEAR_DIRECTIVE.sub(
            lambda match: f"{value.year:04d}" if match.group(0) == "%Y" else "%%",
            self.time_format,
        )
        text = value.strftime(layout)
        fraction = f"{value.microsecond:06d}"[: self.fraction_digits].rstrip("0")
        if fraction:
            text = f"{text}.{fraction}"
        return format_literal(text, escaper)

    def _driver_value(self, value: Any) -> Any:
        """Return the value a driver would bind, or ``_MISSING`` if not a wrapper.

        Failures inside ``sql_value`` are not propagated; the wrapper then
        renders as the null literal.
        """

        if isinstance(value, bigquery.ScalarQueryParameter):
            return value.value
        if isinstance(value, SQLValuer):
            try:
                return value.sql_value()
            except Exception:
                logger.debug("sql_value() failed for %s", type(value).__name__, exc_info=True)
                return None
        return _MISSING

    def _convert(self, value: Any) -> Any:
        for target in self.convertible_types:
            converter = _CONVERTERS.get(target)
            if converter is None:
                continue
            converted = converter(value)
            if converted is not _MISSING:
                return converted
        return _MISSING

    @staticmethod
    def _format_bool(value: bool) -> str:
        return "true" if value else "false"


default_param_formatter = DefaultParamFormatter()


def format_param(value: Any, escaper: str) -> str:
    """Format ``value`` with the process-wide default formatter."""

    return default_param_formatter.format(value, escaper)
