"""Prometheus metrics for monitoring evaluations, recommendations and curve sweeps"""

from prometheus_client import Counter, Histogram

# Evaluation metrics
evaluation_counter = Counter(
    "payment_calculator_evaluations_total",
    "Total strategy cost evaluations",
    ["strategy"],  # direct | merchant_of_record
)

recommendation_counter = Counter(
    "payment_calculator_recommendation_total",
    "Recommended strategy per comparison",
    ["strategy"],
)

# Curve metrics
sweep_points_histogram = Histogram(
    "payment_calculator_sweep_points",
    "Points produced per curve sweep",
    buckets=[10, 25, 50, 100, 250, 500],
)

break_even_counter = Counter(
    "payment_calculator_break_even_found_total",
    "Curve sweeps by whether a break-even turnover was found",
    ["found"],  # yes | no
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_comparison(recommended_strategy: str) -> None:
    """Record one evaluation of each strategy and the resulting recommendation"""
    evaluation_counter.labels(strategy="direct").inc()
    evaluation_counter.labels(strategy="merchant_of_record").inc()
    recommendation_counter.labels(strategy=recommended_strategy).inc()


def record_sweep(points: int, break_even_turnover: float | None) -> None:
    """Record curve size and whether the curves crossed"""
    sweep_points_histogram.observe(points)
    evaluation_counter.labels(strategy="direct").inc(points)
    evaluation_counter.labels(strategy="merchant_of_record").inc(points)
    break_even_counter.labels(found="yes" if break_even_turnover is not None else "no").inc()
