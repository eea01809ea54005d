"""Prometheus metrics for rollover accrual, ledger mutations and advice requests"""

from prometheus_client import Counter, Histogram

# Rollover metrics
rollover_run_counter = Counter(
    "finance_rollover_runs_total",
    "Startup month rollover runs",
    ["outcome"],  # changed | unchanged
)

installments_accrued_counter = Counter(
    "finance_installments_accrued_total",
    "Installments automatically marked paid by the rollover",
)

# Ledger metrics
mutation_counter = Counter(
    "finance_mutations_total",
    "Snapshot mutations applied",
    ["operation"],
)

# Storage metrics
storage_fallback_counter = Counter(
    "finance_storage_fallbacks_total",
    "Stored values replaced by defaults because they were malformed",
    ["key"],
)

# Advice metrics
advice_request_counter = Counter(
    "finance_advice_requests_total",
    "Advice assistant requests",
    ["outcome"],  # completed | unavailable | failed
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_rollover(changes_made: bool, installments_accrued: int) -> None:
    """Record the outcome of a rollover run"""
    rollover_run_counter.labels(outcome="changed" if changes_made else "unchanged").inc()
    if installments_accrued:
        installments_accrued_counter.inc(installments_accrued)


def record_mutation(operation: str) -> None:
    mutation_counter.labels(operation=operation).inc()
