"""Dashboard summary - composes every engine against a single reference day"""

from datetime import date
from typing import List

from fiscal_engine.domain.aging import payables_aging_report, receivables_aging_report
from fiscal_engine.domain.attention import receivables_needing_attention, urgent_payables
from fiscal_engine.domain.automation import calculate_automation_metrics, get_rules_to_execute
from fiscal_engine.domain.forecast import (
    DEFAULT_FORECAST_DAYS,
    calculate_cash_flow_forecast,
    expected_cash_inflow,
    expected_cash_outflow,
)
from fiscal_engine.domain.health import calculate_health_indicators, generate_alerts
from fiscal_engine.domain.metrics import (
    calculate_collection_metrics,
    calculate_payment_metrics,
    group_by_category,
    vendor_summary,
)
from fiscal_engine.domain.models import AutomationRule, FinancialRecord, FinancialSummary
from fiscal_engine.domain.schedule import calculate_payment_schedule


def build_financial_summary(
    receivables: List[FinancialRecord],
    payables: List[FinancialRecord],
    rules: List[AutomationRule],
    today: date,
    forecast_days: int = DEFAULT_FORECAST_DAYS,
) -> FinancialSummary:
    """
    Main entry point: metrics, forecast, health and alerts for one dashboard render.

    `today` is threaded through every calculation so a run spanning midnight
    never mixes two reference days.
    """
    receivables_metrics = calculate_collection_metrics(receivables)
    payables_metrics = calculate_payment_metrics(payables)
    forecast = calculate_cash_flow_forecast(receivables, payables, today, forecast_days)
    health = calculate_health_indicators(receivables_metrics, payables_metrics, forecast)

    return FinancialSummary(
        today=today,
        receivables_metrics=receivables_metrics,
        payables_metrics=payables_metrics,
        receivables_aging=receivables_aging_report(receivables, today),
        payables_aging=payables_aging_report(payables, today),
        payment_schedule=calculate_payment_schedule(payables, today),
        cash_flow_forecast=forecast,
        health=health,
        alerts=generate_alerts(receivables, payables, health, today),
        automation=calculate_automation_metrics(rules, today),
        rules_to_execute=get_rules_to_execute(rules, today),
        receivables_attention=receivables_needing_attention(receivables, today),
        urgent_payables=urgent_payables(payables, today),
        vendors=vendor_summary(payables),
        payables_by_category=group_by_category(payables),
        expected_inflow=expected_cash_inflow(receivables, today, forecast_days),
        expected_outflow=expected_cash_outflow(payables, today, forecast_days),
    )
