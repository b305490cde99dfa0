from __future__ import annotations

from prometheus_client import Counter, Gauge

WAITLIST_QUEUE_SIZE = Gauge(
    "tablewait_waitlist_queue_size",
    "Number of waiting parties in the most recent snapshot.",
    ["restaurant_id"],
)

STATUS_EVALUATIONS_TOTAL = Counter(
    "tablewait_status_evaluations_total",
    "Total number of restaurant status evaluations by resulting status.",
    ["status"],
)

HOUR_ROWS_SKIPPED_TOTAL = Counter(
    "tablewait_hour_rows_skipped_total",
    "Total number of malformed hour rows dropped during evaluation.",
    ["restaurant_id"],
)

SNAPSHOT_RECOMPUTE_TOTAL = Counter(
    "tablewait_snapshot_recompute_total",
    "Total number of recomputations triggered by incoming snapshots.",
    ["kind"],
)

SNAPSHOT_PUBLISH_FAILURES_TOTAL = Counter(
    "tablewait_snapshot_publish_failures_total",
    "Total number of recompute results that could not be published.",
    ["kind"],
)


def record_queue_size(restaurant_id: str, size: int) -> None:
    WAITLIST_QUEUE_SIZE.labels(restaurant_id=restaurant_id).set(size)


def record_status_evaluation(restaurant_id: str, status: str, skipped_rows: int) -> None:
    STATUS_EVALUATIONS_TOTAL.labels(status=status).inc()
    if skipped_rows > 0:
        HOUR_ROWS_SKIPPED_TOTAL.labels(restaurant_id=restaurant_id).inc(skipped_rows)


def record_snapshot_recompute(kind: str) -> None:
    SNAPSHOT_RECOMPUTE_TOTAL.labels(kind=kind).inc()


def record_snapshot_publish_failure(kind: str) -> None:
    SNAPSHOT_PUBLISH_FAILURES_TOTAL.labels(kind=kind).inc()
