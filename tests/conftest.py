"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Callable

from fiscal_engine.domain.models import AutomationRule, FinancialRecord, RecordStatus

# Wednesday; week closes Sunday 2024-03-17, month 2024-03-31, next month 2024-04-30
TODAY = date(2024, 3, 13)


def make_record(
    record_id: str = "1",
    due_in_days: int = 0,
    amount: str | int = "1000",
    amount_paid: str | int = "0",
    status: RecordStatus = RecordStatus.PENDING,
    counterparty: str = "Comercializadora del Norte",
    document_date: date | None = None,
    updated_at: datetime | None = None,
    category: str | None = None,
    today: date = TODAY,
) -> FinancialRecord:
    return FinancialRecord(
        id=record_id,
        counterparty_name=counterparty,
        counterparty_tax_id="CNO010101AAA",
        document_number=f"F-{record_id}",
        document_date=document_date,
        due_date=today + timedelta(days=due_in_days),
        amount=Decimal(str(amount)),
        amount_paid=Decimal(str(amount_paid)),
        status=status,
        payment_terms=30,
        updated_at=updated_at,
        category=category,
    )


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def record_factory() -> Callable[..., FinancialRecord]:
    """Factory for receivables/payables relative to TODAY"""
    return make_record


@pytest.fixture
def recurring_rule() -> AutomationRule:
    """Active monthly recurring invoice due today"""
    return AutomationRule(
        id="rule_1",
        name="Renta mensual",
        rule_type="recurring_invoice",
        is_active=True,
        customer_name="Inmobiliaria Centro",
        amount=Decimal("15000"),
        frequency="monthly",
        start_date=date(2024, 1, 13),
        next_generation_date=TODAY,
    )


@pytest.fixture
def sample_receivables() -> list[FinancialRecord]:
    """Mixed receivable portfolio"""
    return [
        make_record("r1", due_in_days=-45, amount="5000", status=RecordStatus.OVERDUE),
        make_record("r2", due_in_days=-10, amount="2000", amount_paid="500", status=RecordStatus.PARTIAL),
        make_record("r3", due_in_days=5, amount="3000"),
        make_record(
            "r4",
            due_in_days=-20,
            amount="4000",
            amount_paid="4000",
            status=RecordStatus.PAID,
            document_date=TODAY - timedelta(days=50),
            updated_at=datetime(2024, 2, 22, 16, 30),
        ),
        make_record("r5", due_in_days=-100, amount="800", status=RecordStatus.CANCELLED),
    ]


@pytest.fixture
def sample_payables() -> list[FinancialRecord]:
    """Mixed payable portfolio"""
    return [
        make_record("p1", due_in_days=-3, amount="1200", status=RecordStatus.OVERDUE, counterparty="Papelera SA"),
        make_record("p2", due_in_days=2, amount="700", counterparty="Papelera SA", category="Oficina"),
        make_record("p3", due_in_days=25, amount="2500", counterparty="CFE", category="Servicios"),
        make_record(
            "p4",
            due_in_days=-5,
            amount="900",
            amount_paid="900",
            status=RecordStatus.PAID,
            counterparty="CFE",
            document_date=TODAY - timedelta(days=20),
            updated_at=datetime(2024, 3, 7, 9, 0),
        ),
    ]
