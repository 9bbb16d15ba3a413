"""Prometheus metrics for monitoring financial health, alerts and upstream fetches"""

from typing import Iterable

from prometheus_client import Counter, Gauge, Histogram

from fiscal_engine.domain.models import Alert

# Summary metrics
summary_counter = Counter(
    "fiscal_summary_total",
    "Total financial summaries built",
    ["health_level"],  # excellent | good | fair | poor
)

health_score_gauge = Gauge(
    "fiscal_health_score",
    "Health score of the most recent summary (0-100)",
)

summary_duration_histogram = Histogram(
    "fiscal_summary_duration_seconds",
    "Time to fetch records and build a financial summary",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

alert_counter = Counter(
    "fiscal_alerts_total",
    "Alerts raised by type and category",
    ["type", "category"],
)

# Automation metrics
rules_triggered_counter = Counter(
    "fiscal_automation_rules_triggered_total",
    "Automation rules found due for execution",
)

# Finance API metrics
finance_api_failures_counter = Counter(
    "finance_api_failures_total",
    "Failed finance API calls",
)


def record_summary(health_score: int, health_level: str, alerts: Iterable[Alert], rules_to_run: int) -> None:
    """Record summary metrics for monitoring health and alert volume"""
    summary_counter.labels(health_level=health_level).inc()
    health_score_gauge.set(health_score)

    for alert in alerts:
        alert_counter.labels(type=alert.type.value, category=alert.category).inc()

    rules_triggered_counter.inc(rules_to_run)
