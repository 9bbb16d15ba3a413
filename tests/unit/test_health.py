"""Unit tests for health scoring and alerts"""

import pytest
from datetime import date
from decimal import Decimal
from fiscal_engine.domain.forecast import calculate_cash_flow_forecast
from fiscal_engine.domain.health import (
    calculate_health_indicators,
    calculate_health_score,
    determine_health_level,
    generate_alerts,
)
from fiscal_engine.domain.metrics import calculate_collection_metrics, calculate_payment_metrics
from fiscal_engine.domain.models import (
    AlertType,
    CashFlowPoint,
    CollectionMetrics,
    PaymentMetrics,
    RecordStatus,
)


def collection(overdue_count=0, collection_rate=50.0, outstanding="0", days=0) -> CollectionMetrics:
    return CollectionMetrics(
        total_invoiced=Decimal("0"),
        total_collected=Decimal("0"),
        total_outstanding=Decimal(outstanding),
        collection_rate=collection_rate,
        paid_count=0,
        overdue_count=overdue_count,
        pending_count=0,
        average_days_to_collect=days,
    )


def payment(overdue_count=0, outstanding="0", days=0) -> PaymentMetrics:
    return PaymentMetrics(
        total_billed=Decimal("0"),
        total_paid=Decimal("0"),
        total_outstanding=Decimal(outstanding),
        payment_rate=0.0,
        paid_count=0,
        overdue_count=overdue_count,
        pending_count=0,
        average_days_to_pay=days,
        on_time_payment_rate=0.0,
    )


def point(balance: str) -> CashFlowPoint:
    value = Decimal(balance)
    return CashFlowPoint(date=date(2024, 3, 20), inflow=Decimal("0"), outflow=Decimal("0"), net_flow=value, running_balance=value)


def test_health_score_clamped_to_100():
    """Test collection bonus cannot push score above 100"""
    assert calculate_health_score(collection(collection_rate=95.0), payment(), False) == 100


def test_health_score_penalties_are_capped():
    """Test overdue penalties cap at 30 each"""
    score = calculate_health_score(collection(overdue_count=10), payment(overdue_count=10), True)

    assert score == 20  # 100 - 30 - 30 - 20
    assert 0 <= score <= 100


def test_health_score_bonus_requires_above_90():
    assert calculate_health_score(collection(collection_rate=90.0), payment(), False) == 100
    assert calculate_health_score(collection(overdue_count=2, collection_rate=90.0), payment(), False) == 90
    assert calculate_health_score(collection(overdue_count=2, collection_rate=90.1), payment(), False) == 100


@pytest.mark.parametrize(
    "score, level",
    [(100, "excellent"), (80, "excellent"), (79, "good"), (60, "good"), (59, "fair"), (40, "fair"), (39, "poor"), (0, "poor")],
)
def test_health_levels(score, level):
    assert determine_health_level(score) == level


def test_health_indicators_ratios():
    """Test DSO/DPO, cash conversion cycle and quick ratio"""
    health = calculate_health_indicators(
        collection(outstanding="3000", days=45),
        payment(outstanding="2000", days=30),
        [],
    )

    assert health.dso == 45
    assert health.dpo == 30
    assert health.cash_conversion_cycle == 15
    assert health.quick_ratio == pytest.approx(1.5)
    assert health.has_cash_crunch is False
    assert health.worst_cash_position == Decimal("0")
    assert health.cash_crunch_days == 0


def test_quick_ratio_zero_without_payables():
    health = calculate_health_indicators(collection(outstanding="3000"), payment(), [])
    assert health.quick_ratio == 0


def test_cash_crunch_detection():
    """Test negative running balances mark crunch days and the worst position"""
    health = calculate_health_indicators(collection(), payment(), [point("-100"), point("50"), point("-400")])

    assert health.has_cash_crunch is True
    assert health.cash_crunch_days == 2
    assert health.worst_cash_position == Decimal("-400")
    assert health.health_score == 80


def test_sample_portfolio_health(sample_receivables, sample_payables, today):
    receivables_metrics = calculate_collection_metrics(sample_receivables)
    payables_metrics = calculate_payment_metrics(sample_payables)
    forecast = calculate_cash_flow_forecast(sample_receivables, sample_payables, today)

    health = calculate_health_indicators(receivables_metrics, payables_metrics, forecast)

    assert health.health_score == 70
    assert health.health_level == "good"
    assert health.cash_crunch_days == 2
    assert health.worst_cash_position == Decimal("-700")
    assert health.dso == 30
    assert health.dpo == 14


def test_generate_alerts_sample(sample_receivables, sample_payables, today):
    """Test alert selection and severity ordering"""
    receivables_metrics = calculate_collection_metrics(sample_receivables)
    payables_metrics = calculate_payment_metrics(sample_payables)
    forecast = calculate_cash_flow_forecast(sample_receivables, sample_payables, today)
    health = calculate_health_indicators(receivables_metrics, payables_metrics, forecast)

    alerts = generate_alerts(sample_receivables, sample_payables, health, today)

    assert [(a.type, a.category) for a in alerts] == [
        (AlertType.CRITICAL, "receivables"),
        (AlertType.CRITICAL, "payables"),
        (AlertType.WARNING, "payables"),
        (AlertType.WARNING, "cashflow"),
    ]
    assert alerts[0].message == "1 factura con más de 30 días de retraso"
    assert alerts[1].message == "1 pago vencido"
    assert alerts[2].message == "1 pago por vencer en los próximos 3 días"
    assert alerts[3].message == "Se detectan 2 días con déficit de efectivo"
    assert alerts[3].count is None


def test_collection_attention_alert(record_factory, today):
    """Test info alert once more than five receivables are overdue"""
    receivables = [
        record_factory(f"r{i}", due_in_days=-5, status=RecordStatus.OVERDUE) for i in range(6)
    ]
    health = calculate_health_indicators(collection(), payment(), [])

    alerts = generate_alerts(receivables, [], health, today)

    assert [a.type for a in alerts] == [AlertType.INFO]
    assert alerts[0].count == 6
    assert alerts[0].message == "6 facturas vencidas pendientes de cobro"


def test_no_alerts_for_healthy_books(record_factory, today):
    health = calculate_health_indicators(collection(), payment(), [])
    receivables = [record_factory("r", due_in_days=20)]
    payables = [record_factory("p", due_in_days=10)]

    assert generate_alerts(receivables, payables, health, today) == []
