from __future__ import annotations

from prometheus_client import Counter, Histogram

USER_ORDER_LOOKUPS_TOTAL = Counter(
    "uos_user_order_lookups_total",
    "Total number of user order lookups by outcome.",
    ["outcome"],
)

RESTAURANT_LOOKUP_IDS = Histogram(
    "uos_restaurant_lookup_ids",
    "Number of distinct restaurant ids requested per restaurant service call.",
    buckets=(1, 2, 5, 10, 20, 50, 100),
)

RESTAURANT_LOOKUP_DURATION_SECONDS = Histogram(
    "uos_restaurant_lookup_duration_seconds",
    "Duration of restaurant service calls.",
    ["outcome"],
)


def record_user_order_lookup(outcome: str) -> None:
    USER_ORDER_LOOKUPS_TOTAL.labels(outcome=outcome).inc()


def record_restaurant_lookup_ids(count: int) -> None:
    RESTAURANT_LOOKUP_IDS.observe(count)


def record_restaurant_lookup_duration(outcome: str, duration_seconds: float) -> None:
    RESTAURANT_LOOKUP_DURATION_SECONDS.labels(outcome=outcome).observe(max(duration_seconds, 0.0))
