"""Prometheus metrics for monitoring decisions, flip suggestions, and classification"""

from prometheus_client import Counter, Histogram, Gauge

# Decision metrics
decision_counter = Counter(
    "purchase_decision_total",
    "Total purchase decisions made",
    ["outcome"],  # buy | dont_buy
)

final_score_histogram = Histogram(
    "purchase_decision_final_score",
    "Distribution of final decision scores",
    buckets=[20, 35, 50, 60, 65, 80, 100],
)

flip_suggestion_counter = Counter(
    "purchase_flip_suggestions_total",
    "Feasible flip suggestions by lever",
    ["lever"],
)

# Classification metrics
classification_counter = Counter(
    "purchase_classification_total",
    "Purchase classifications by category and cache outcome",
    ["category", "cached"],
)

categorization_failures_counter = Counter(
    "categorization_failures_total",
    "Failed categorization API calls",
    ["reason"],  # timeout | http_status | network | malformed
)

classification_cache_size_gauge = Gauge(
    "classification_cache_entries",
    "Live entries in the classification cache",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_decision(decision: str, final_score: float, flip_levers: list[str]) -> None:
    """Record decision outcome, score distribution, and which levers could flip it"""
    outcome = "buy" if decision == "Buy" else "dont_buy"
    decision_counter.labels(outcome=outcome).inc()
    final_score_histogram.observe(final_score)

    for lever in flip_levers:
        flip_suggestion_counter.labels(lever=lever).inc()


def record_classification(category: str, cached: bool, cache_size: int) -> None:
    """Record classification outcome and current cache occupancy"""
    classification_counter.labels(category=category, cached=str(cached).lower()).inc()
    classification_cache_size_gauge.set(cache_size)
