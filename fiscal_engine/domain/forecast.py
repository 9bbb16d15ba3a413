"""Cash-flow forecasting from receivable and payable due dates"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, List

from fiscal_engine.domain.models import CashFlowPoint, ExpectedCashFlow, FinancialRecord
from fiscal_engine.utils.date_utils import generate_date_range

DEFAULT_FORECAST_DAYS = 90


def _outstanding_by_due_date(records: List[FinancialRecord]) -> Dict[date, Decimal]:
    """Open outstanding amounts keyed by exact due date"""
    totals: Dict[date, Decimal] = defaultdict(lambda: Decimal("0"))
    for record in records:
        if record.is_open:
            totals[record.due_date] += record.outstanding
    return totals


def calculate_cash_flow_forecast(
    receivables: List[FinancialRecord],
    payables: List[FinancialRecord],
    today: date,
    days_ahead: int = DEFAULT_FORECAST_DAYS,
) -> List[CashFlowPoint]:
    """
    Project daily net cash flow and running balance over a horizon.

    Requirements:
    - Days today .. today + days_ahead inclusive
    - Inflow/outflow only count open records due exactly on that day;
      anything already overdue is never projected
    - Running balance accumulates over every day, but only days with
      inflow or outflow are emitted (sparse output)
    """
    inflows = _outstanding_by_due_date(receivables)
    outflows = _outstanding_by_due_date(payables)

    forecast: List[CashFlowPoint] = []
    running_balance = Decimal("0")

    for day in generate_date_range(today, days_ahead):
        inflow = inflows.get(day, Decimal("0"))
        outflow = outflows.get(day, Decimal("0"))
        net_flow = inflow - outflow
        running_balance += net_flow

        if inflow > 0 or outflow > 0:
            forecast.append(
                CashFlowPoint(
                    date=day,
                    inflow=inflow,
                    outflow=outflow,
                    net_flow=net_flow,
                    running_balance=running_balance,
                )
            )

    return forecast


def _expected_flow(records: List[FinancialRecord], today: date, days_ahead: int) -> List[ExpectedCashFlow]:
    totals = _outstanding_by_due_date(records)
    return [
        ExpectedCashFlow(date=day, amount=totals[day])
        for day in generate_date_range(today, days_ahead)
        if totals.get(day, Decimal("0")) > 0
    ]


def expected_cash_inflow(
    receivables: List[FinancialRecord], today: date, days_ahead: int = DEFAULT_FORECAST_DAYS
) -> List[ExpectedCashFlow]:
    """Expected collections per day from receivables due within the horizon"""
    return _expected_flow(receivables, today, days_ahead)


def expected_cash_outflow(
    payables: List[FinancialRecord], today: date, days_ahead: int = DEFAULT_FORECAST_DAYS
) -> List[ExpectedCashFlow]:
    """Expected payments per day from payables due within the horizon"""
    return _expected_flow(payables, today, days_ahead)
