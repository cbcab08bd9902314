"""Prometheus metrics shared by clients, synchronizer and flows."""
from prometheus_client import Counter, Histogram

# ───────────────────── HTTP
hubspot_api_call_total = Counter(
    "hubspot_api_call_total",
    "Outbound API calls by endpoint, method and status code",
    ["endpoint", "method", "status_code"],
)
hubspot_api_errors_total = Counter(
    "hubspot_api_errors_total",
    "Transport-level API failures (after retry) by endpoint",
    ["endpoint", "error_type"],
)
api_request_duration_hist = Histogram(
    "api_request_duration_seconds",
    "Outbound API call duration",
    ["endpoint", "method"],
)
api_breaker_open_total = Counter(
    "api_breaker_open_total",
    "Times a client circuit breaker opened",
    ["breaker"],
)

# ───────────────────── Sync
sync_records_processed_total = Counter(
    "sync_records_processed_total",
    "HubSpot records projected into PostHog",
    ["entity"],
)
sync_pages_total = Counter(
    "sync_pages_total",
    "Pages handled by the synchronizer by outcome",
    ["entity", "outcome"],
)
sync_seen_skipped_total = Counter(
    "sync_seen_skipped_total",
    "Records skipped because their seen-marker was already set",
    ["entity"],
)
sync_record_failures_total = Counter(
    "sync_record_failures_total",
    "Records whose projection into PostHog failed",
    ["entity"],
)
contact_upsert_total = Counter(
    "contact_upsert_total",
    "Contact upserts by outcome",
    ["outcome"],
)
score_writeback_total = Counter(
    "score_writeback_total",
    "Score writebacks by outcome",
    ["outcome"],
)

# ───────────────────── Flows
sync_flow_runs_total = Counter(
    "sync_flow_runs_total",
    "Flow runs started",
    ["flow"],
)
sync_flow_failures_total = Counter(
    "sync_flow_failures_total",
    "Flow runs that raised",
    ["flow"],
)
sync_flow_duration_seconds = Histogram(
    "sync_flow_duration_seconds",
    "Flow run duration",
    ["flow"],
)
