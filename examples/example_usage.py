
import logging
from datetime import datetime

from google.cloud import bigquery
from sqlexplain import POSTGRES_PLACEHOLDER, SQLTracer, TraceConfig, TracedBigQuery, explain_sql

logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

print(
    explain_sql(
        "SELECT * FROM orders WHERE customer = ? AND created_at > ?",
        None,
        "'",
        "o'brien",
        datetime(2024, 1, 1, 12, 30),
    )
)
print(explain_sql("UPDATE orders SET status = $2 WHERE id = $1", POSTGRES_PLACEHOLDER, "'", 42, "shipped"))

TABLE_ID = "bigquery-public-data.ga4_obfuscated_sample_ecommerce.events_20201101"

tracer = SQLTracer(config=TraceConfig(slow_threshold=None))
bq = TracedBigQuery(client=bigquery.Client(), tracer=tracer)

job_config = bigquery.QueryJobConfig(
    query_parameters=[
        bigquery.ScalarQueryParameter("event_name", "STRING", "page_view"),
        bigquery.ScalarQueryParameter("limit", "INT64", 5),
    ]
)
df = bq.query_to_dataframe(
    f"SELECT event_name, event_timestamp FROM `{TABLE_ID}` WHERE event_name = @event_name LIMIT @limit",
    job_config=job_config,
)
print(df.tail())
