"""Financial health scoring engine and automated alerts"""

from datetime import date
from decimal import Decimal
from typing import List

from fiscal_engine.domain.buckets import days_overdue, days_until_due
from fiscal_engine.domain.models import (
    Alert,
    AlertType,
    CashFlowPoint,
    CollectionMetrics,
    FinancialRecord,
    HealthIndicators,
    PaymentMetrics,
    RecordStatus,
)

OVERDUE_PENALTY_PER_RECORD = 5
OVERDUE_PENALTY_CAP = 30
CASH_CRUNCH_PENALTY = 20
COLLECTION_RATE_BONUS = 10
COLLECTION_RATE_BONUS_THRESHOLD = 90

CRITICAL_RECEIVABLE_DAYS = 30
URGENT_PAYABLE_DAYS = 3
OVERDUE_RECEIVABLES_INFO_THRESHOLD = 5

ALERT_ORDER = {AlertType.CRITICAL: 0, AlertType.WARNING: 1, AlertType.INFO: 2}


def calculate_health_score(
    receivables_metrics: CollectionMetrics,
    payables_metrics: PaymentMetrics,
    has_cash_crunch: bool,
) -> int:
    """
    Composite health score from 0 (critical) to 100 (healthy).

    Scoring rules:
    - Start at 100
    - -5 per overdue receivable, capped at -30
    - -5 per overdue payable, capped at -30
    - -20 if the forecast ever dips below zero
    - +10 if more than 90% of invoiced amounts were collected
    - Clamped to [0, 100]
    """
    score = 100
    score -= min(OVERDUE_PENALTY_CAP, receivables_metrics.overdue_count * OVERDUE_PENALTY_PER_RECORD)
    score -= min(OVERDUE_PENALTY_CAP, payables_metrics.overdue_count * OVERDUE_PENALTY_PER_RECORD)

    if has_cash_crunch:
        score -= CASH_CRUNCH_PENALTY

    if receivables_metrics.collection_rate > COLLECTION_RATE_BONUS_THRESHOLD:
        score += COLLECTION_RATE_BONUS

    return max(0, min(100, score))


def determine_health_level(score: int) -> str:
    """Map health score to a level: excellent / good / fair / poor"""
    if score >= 80:
        return "excellent"
    elif score >= 60:
        return "good"
    elif score >= 40:
        return "fair"
    else:
        return "poor"


def calculate_health_indicators(
    receivables_metrics: CollectionMetrics,
    payables_metrics: PaymentMetrics,
    cash_flow_forecast: List[CashFlowPoint],
) -> HealthIndicators:
    """
    Derive liquidity indicators and the composite health score.

    - DSO / DPO come from average days to collect / pay
    - Cash conversion cycle = DSO - DPO
    - Quick ratio = outstanding receivables / outstanding payables (0 without payables)
    - A cash crunch is any forecast point with a negative running balance
    """
    dso = receivables_metrics.average_days_to_collect
    dpo = payables_metrics.average_days_to_pay

    quick_ratio = (
        float(receivables_metrics.total_outstanding / payables_metrics.total_outstanding)
        if payables_metrics.total_outstanding > 0
        else 0.0
    )

    cash_crunches = [p for p in cash_flow_forecast if p.running_balance < 0]
    has_cash_crunch = len(cash_crunches) > 0
    worst_cash_position = min((p.running_balance for p in cash_crunches), default=Decimal("0"))

    score = calculate_health_score(receivables_metrics, payables_metrics, has_cash_crunch)

    return HealthIndicators(
        dso=dso,
        dpo=dpo,
        cash_conversion_cycle=dso - dpo,
        quick_ratio=quick_ratio,
        has_cash_crunch=has_cash_crunch,
        worst_cash_position=worst_cash_position,
        cash_crunch_days=len(cash_crunches),
        health_score=score,
        health_level=determine_health_level(score),
    )


def _plural(count: int, suffix: str = "s") -> str:
    return suffix if count > 1 else ""


def generate_alerts(
    receivables: List[FinancialRecord],
    payables: List[FinancialRecord],
    health: HealthIndicators,
    today: date,
) -> List[Alert]:
    """Threshold alerts for the dashboard, most severe first"""
    alerts: List[Alert] = []

    critical_receivables = [
        r for r in receivables
        if r.is_open and days_overdue(r.due_date, today) > CRITICAL_RECEIVABLE_DAYS
    ]
    if critical_receivables:
        count = len(critical_receivables)
        alerts.append(
            Alert(
                type=AlertType.CRITICAL,
                category="receivables",
                title="Cuentas por Cobrar Críticas",
                message=f"{count} factura{_plural(count)} con más de {CRITICAL_RECEIVABLE_DAYS} días de retraso",
                count=count,
                action="view_receivables",
            )
        )

    urgent = [
        p for p in payables
        if p.is_open and 0 <= days_until_due(p.due_date, today) <= URGENT_PAYABLE_DAYS
    ]
    if urgent:
        count = len(urgent)
        alerts.append(
            Alert(
                type=AlertType.WARNING,
                category="payables",
                title="Pagos Urgentes",
                message=f"{count} pago{_plural(count)} por vencer en los próximos {URGENT_PAYABLE_DAYS} días",
                count=count,
                action="view_payables",
            )
        )

    if health.has_cash_crunch:
        days = health.cash_crunch_days
        alerts.append(
            Alert(
                type=AlertType.WARNING,
                category="cashflow",
                title="Alerta de Flujo de Efectivo",
                message=f"Se detectan {days} día{_plural(days)} con déficit de efectivo",
                action="view_forecast",
            )
        )

    overdue_receivables = sum(1 for r in receivables if r.status == RecordStatus.OVERDUE)
    if overdue_receivables > OVERDUE_RECEIVABLES_INFO_THRESHOLD:
        alerts.append(
            Alert(
                type=AlertType.INFO,
                category="receivables",
                title="Cobranza Requiere Atención",
                message=f"{overdue_receivables} facturas vencidas pendientes de cobro",
                count=overdue_receivables,
                action="view_receivables",
            )
        )

    overdue_payables = sum(1 for p in payables if p.status == RecordStatus.OVERDUE)
    if overdue_payables:
        alerts.append(
            Alert(
                type=AlertType.CRITICAL,
                category="payables",
                title="Pagos Vencidos",
                message=f"{overdue_payables} pago{_plural(overdue_payables)} vencido{_plural(overdue_payables)}",
                count=overdue_payables,
                action="view_payables",
            )
        )

    return sorted(alerts, key=lambda a: ALERT_ORDER[a.type])
