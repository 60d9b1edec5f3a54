# infrastructure/metrics/metrics.py
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

payment_operations_total = Counter(
    "payment_operations_total",
    "Monthly payment operations",
    ["operation", "outcome"]  # generate|update|mark_paid|delete x success|validation_error|not_found|storage_error
)

notification_cycles_total = Counter(
    "notification_cycles_total",
    "Expiry notification check cycles",
    ["outcome"]  # sent|skipped|error
)

notifications_emitted_total = Counter(
    "notifications_emitted_total",
    "Notification events emitted by the scheduler",
    ["kind", "urgent"]
)

push_delivery_failures_total = Counter(
    "push_delivery_failures_total",
    "Push notifications the gateway did not accept after retries"
)

push_delivery_latency_seconds = Histogram(
    "push_delivery_latency_seconds",
    "Push gateway latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1, 2.5, 5]
)


def metrics_endpoint():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
