"""Prometheus metrics for archiving, rollovers, card purchases and store health"""

from prometheus_client import Counter, Histogram

# Month lifecycle metrics
archive_counter = Counter(
    "mei_month_archive_total",
    "Monthly summaries archived",
    ["outcome"],  # created | updated
)

rollover_counter = Counter(
    "mei_month_rollover_total",
    "Months prepared from recurring transactions",
)

rollover_copied_counter = Counter(
    "mei_rollover_copied_transactions_total",
    "Recurring transactions copied into a new month",
)

# Card metrics
card_purchase_counter = Counter(
    "mei_card_purchase_total",
    "Card purchases recorded by installment plan size",
    ["plan"],  # single | 2-6 | 7-12 | 13+
)

# Store health
store_failures_counter = Counter(
    "mei_store_failures_total",
    "Failed data store operations",
    ["operation"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_card_purchase(installment_count: int) -> None:
    """Record card purchase bucketed by number of installments"""
    if installment_count <= 1:
        plan = "single"
    elif installment_count <= 6:
        plan = "2-6"
    elif installment_count <= 12:
        plan = "7-12"
    else:
        plan = "13+"

    card_purchase_counter.labels(plan=plan).inc()


def record_archive(created: bool) -> None:
    archive_counter.labels(outcome="created" if created else "updated").inc()


def record_rollover(copied: int) -> None:
    rollover_counter.inc()
    rollover_copied_counter.inc(copied)
