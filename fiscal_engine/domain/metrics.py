"""Collection and payment KPIs for receivables and payables"""

import math
from decimal import Decimal
from typing import Dict, List, Optional

from fiscal_engine.domain.models import (
    CategorySummary,
    CollectionMetrics,
    FinancialRecord,
    PaymentMetrics,
    RecordStatus,
    VendorSummary,
)

UNCATEGORIZED = "Sin categoría"


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _percentage(part: Decimal, whole: Decimal) -> float:
    """part / whole as a percentage, 0 when whole is 0"""
    return float(part / whole * 100) if whole else 0.0


def _days_to_settle(record: FinancialRecord) -> Optional[int]:
    """Days from document date to last update (proxy for the paid date)"""
    if record.document_date is None or record.updated_at is None:
        return None
    return (record.updated_at.date() - record.document_date).days


def _average_days_to_settle(paid: List[FinancialRecord]) -> int:
    days = [d for d in (_days_to_settle(r) for r in paid) if d is not None]
    if not days:
        return 0
    return round_half_up(sum(days) / len(days))


def _group_by_status(records: List[FinancialRecord]) -> Dict[str, List[FinancialRecord]]:
    return {
        "paid": [r for r in records if r.status == RecordStatus.PAID],
        "overdue": [r for r in records if r.status == RecordStatus.OVERDUE],
        "pending": [r for r in records if r.status in (RecordStatus.PENDING, RecordStatus.PARTIAL)],
    }


def _open_outstanding(records: List[FinancialRecord]) -> Decimal:
    return sum((r.outstanding for r in records if r.is_open), Decimal("0"))


def calculate_collection_metrics(receivables: List[FinancialRecord]) -> CollectionMetrics:
    """
    Collection efficiency for receivables.

    - total_invoiced / total_collected cover every record regardless of status
    - total_outstanding covers open records only
    - average_days_to_collect uses updated_at as the paid date of paid records
    """
    groups = _group_by_status(receivables)

    total_invoiced = sum((r.amount for r in receivables), Decimal("0"))
    total_collected = sum((r.amount_paid for r in receivables), Decimal("0"))

    return CollectionMetrics(
        total_invoiced=total_invoiced,
        total_collected=total_collected,
        total_outstanding=_open_outstanding(receivables),
        collection_rate=_percentage(total_collected, total_invoiced),
        paid_count=len(groups["paid"]),
        overdue_count=len(groups["overdue"]),
        pending_count=len(groups["pending"]),
        average_days_to_collect=_average_days_to_settle(groups["paid"]),
    )


def calculate_payment_metrics(payables: List[FinancialRecord]) -> PaymentMetrics:
    """
    Payment efficiency for payables.

    Mirrors calculate_collection_metrics and adds the share of paid bills
    settled on or before their due date.
    """
    groups = _group_by_status(payables)
    paid = groups["paid"]

    total_billed = sum((p.amount for p in payables), Decimal("0"))
    total_paid = sum((p.amount_paid for p in payables), Decimal("0"))

    on_time = sum(
        1 for p in paid
        if p.updated_at is not None and p.updated_at.date() <= p.due_date
    )

    return PaymentMetrics(
        total_billed=total_billed,
        total_paid=total_paid,
        total_outstanding=_open_outstanding(payables),
        payment_rate=_percentage(total_paid, total_billed),
        paid_count=len(paid),
        overdue_count=len(groups["overdue"]),
        pending_count=len(groups["pending"]),
        average_days_to_pay=_average_days_to_settle(paid),
        on_time_payment_rate=on_time / len(paid) * 100 if paid else 0.0,
    )


def vendor_summary(payables: List[FinancialRecord]) -> List[VendorSummary]:
    """Per-vendor totals, largest outstanding balance first"""
    vendors: Dict[str, VendorSummary] = {}

    for payable in payables:
        summary = vendors.get(payable.counterparty_name)
        if summary is None:
            summary = VendorSummary(
                vendor_name=payable.counterparty_name,
                vendor_tax_id=payable.counterparty_tax_id,
            )
            vendors[payable.counterparty_name] = summary

        summary.payable_count += 1
        summary.total_amount += payable.amount
        summary.paid_amount += payable.amount_paid

        if payable.is_open:
            summary.outstanding_amount += payable.outstanding
        if payable.status == RecordStatus.PAID:
            summary.paid_count += 1
        if payable.status == RecordStatus.OVERDUE:
            summary.overdue_count += 1

    return sorted(vendors.values(), key=lambda v: v.outstanding_amount, reverse=True)


def group_by_category(payables: List[FinancialRecord]) -> List[CategorySummary]:
    """Payables grouped by expense category, largest outstanding first"""
    categories: Dict[str, CategorySummary] = {}

    for payable in payables:
        name = payable.category or UNCATEGORIZED
        group = categories.setdefault(name, CategorySummary(category=name))

        group.count += 1
        group.total += payable.amount
        if payable.is_open:
            group.outstanding += payable.outstanding
        group.items.append(payable)

    return sorted(categories.values(), key=lambda c: c.outstanding, reverse=True)
