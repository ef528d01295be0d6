"""Prometheus metrics for barcode generation volume and quota deductions"""

from prometheus_client import Counter, Histogram

# Generation metrics
generation_counter = Counter(
    "barcode_generation_total",
    "Total barcode generation requests",
    ["outcome"],  # ok | invalid_date_format | invalid_amount | invalid_request
)

cycles_histogram = Histogram(
    "barcode_cycles_generated",
    "Billing cycles produced per successful generation request",
    buckets=[1, 2, 3, 6, 12, 24, 60, 120],
)

# Quota metrics
deduction_counter = Counter(
    "quota_deduction_total",
    "Quota deduction attempts",
    ["outcome"],  # deducted | duplicate | insufficient_balance | storage_conflict | ...
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_generation(outcome: str, cycle_count: int = 0) -> None:
    """Record generation outcome and, on success, the schedule length"""
    generation_counter.labels(outcome=outcome).inc()
    if outcome == "ok":
        cycles_histogram.observe(cycle_count)


def record_deduction(outcome: str) -> None:
    """Record deduction outcome; a rising duplicate share points at client retries"""
    deduction_counter.labels(outcome=outcome).inc()
