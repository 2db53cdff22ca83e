"""BigQuery client wrapper that traces every statement it runs."""

from __future__ import annotations

import time

import pandas as pd
from google.cloud import bigquery

from .bigquery import explain_query
from .tracer import SQLTracer


class TracedBigQuery:
    """Run queries through ``client`` and log them with their parameters."""

    def __init__(
        self,
        client: bigquery.Client | None = None,
        *,
        tracer: SQLTracer | None = None,
    ) -> None:
        self.client = client or bigquery.Client()
        self.tracer = tracer or SQLTracer()

    def query_to_dataframe(
        self, sql: str, job_config: bigquery.QueryJobConfig | None = None
    ) -> pd.DataFrame:
        """Execute ``sql`` and return the resulting dataframe.

        Query errors are logged and re-raised unchanged.
        """

        begin = time.perf_counter()
        try:
            df = self.client.query(sql, job_config=job_config).result().to_dataframe()
        except Exception as exc:
            self.tracer.trace(
                begin, lambda: (self._explain(sql, job_config), None), exc, template=sql
            )
            raise

        self.tracer.trace(
            begin, lambda: (self._explain(sql, job_config), len(df)), template=sql
        )
        return df

    def _explain(self, sql: str, job_config: bigquery.QueryJobConfig | None) -> str:
        config = self.tracer.config
        if config.parameterized_queries:
            return sql
        return explain_query(
            sql, job_config, escaper=config.escaper, formatter=self.tracer.formatter
        )
