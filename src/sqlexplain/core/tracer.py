"""Log rendered SQL statements together with timing and row counts."""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from .explain import explain_sql
from .types import ParamFormatter

__all__ = ["SQLTracer", "TraceConfig", "TraceSpan"]

logger = logging.getLogger(__name__)

DEFAULT_LOGGER_NAME = "sqlexplain.sql"


@dataclass(frozen=True)
class TraceConfig:
    """Settings shared by every statement a :class:`SQLTracer` logs.

    ``slow_threshold`` of ``None`` or zero disables slow query warnings.  With
    ``parameterized_queries`` enabled the template is logged as-is and bound
    values never reach the log.
    """

    slow_threshold: timedelta | None = timedelta(milliseconds=200)
    level: int = logging.DEBUG
    parameterized_queries: bool = False
    numeric_placeholder: re.Pattern[str] | str | None = None
    escaper: str = "'"

    def __post_init__(self) -> None:
        if self.slow_threshold is not None and self.slow_threshold < timedelta(0):
            raise ValueError("slow_threshold must be non-negative")


@dataclass
class TraceSpan:
    """Statement being timed by :meth:`SQLTracer.span`; set ``rows`` when known."""

    sql: str
    values: tuple[Any, ...] = field(default_factory=tuple)
    rows: int | None = None


class SQLTracer:
    """Write one log record per executed statement."""

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        config: TraceConfig | None = None,
        formatter: ParamFormatter | None = None,
    ) -> None:
        self.logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.config = config or TraceConfig()
        self.formatter = formatter

    def explain(self, sql: str, *values: Any) -> str:
        """Return the text that would be logged for ``sql`` bound to ``values``."""

        if self.config.parameterized_queries:
            return sql
        return explain_sql(
            sql,
            self.config.numeric_placeholder,
            self.config.escaper,
            *values,
            formatter=self.formatter,
        )

    def trace(
        self,
        begin: float,
        fc: Callable[[], tuple[str, int | None]],
        error: BaseException | None = None,
        *,
        template: str | None = None,
    ) -> None:
        """Log the statement described by ``fc``.

        ``begin`` is the :func:`time.perf_counter` reading taken before the
        statement ran.  ``fc`` returns the rendered SQL and the affected row
        count (``None`` or a negative number when unknown); it is only called
        when the record is actually emitted.  If ``fc`` itself fails, ``template``
        (the statement without values) is logged instead so the failure never
        replaces the outcome of the statement.
        """

        elapsed = timedelta(seconds=time.perf_counter() - begin)

        if error is not None:
            level, header = logging.ERROR, str(error)
        elif self._is_slow(elapsed):
            threshold_ms = self.config.slow_threshold / timedelta(milliseconds=1)
            level, header = logging.WARNING, f"SLOW SQL >= {threshold_ms:g}ms"
        else:
            level, header = self.config.level, None

        if not self.logger.isEnabledFor(level):
            return

        try:
            sql, rows = fc()
        except Exception:
            logger.debug("Rendering the traced statement failed", exc_info=True)
            sql = template if template is not None else "<unrenderable statement>"
            rows = None
        elapsed_ms = elapsed / timedelta(milliseconds=1)
        rows_text = "-" if rows is None or rows < 0 else str(rows)
        if header is None:
            self.logger.log(level, "[%.3fms] [rows:%s] %s", elapsed_ms, rows_text, sql)
        else:
            self.logger.log(
                level, "%s\n[%.3fms] [rows:%s] %s", header, elapsed_ms, rows_text, sql
            )

    @contextmanager
    def span(self, sql: str, *values: Any) -> Iterator[TraceSpan]:
        """Time the body of a ``with`` block and trace ``sql`` when it exits.

        Exceptions raised inside the block are logged and re-raised.
        """

        record = TraceSpan(sql=sql, values=values)
        begin = time.perf_counter()

        def describe() -> tuple[str, int | None]:
            return self.explain(record.sql, *record.values), record.rows

        try:
            yield record
        except Exception as exc:
            self.trace(begin, describe, exc, template=record.sql)
            raise
        self.trace(begin, describe, template=record.sql)

    def _is_slow(self, elapsed: timedelta) -> bool:
        threshold = self.config.slow_threshold
        return bool(threshold) and elapsed > threshold
