"""Aging report engine for receivables and payables"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List

from fiscal_engine.domain.buckets import classify_aging, days_overdue
from fiscal_engine.domain.models import (
    AgedItem,
    AgingBucketKey,
    AgingReport,
    Bucket,
    FinancialRecord,
    RecordRole,
)


def calculate_aging_report(
    records: Iterable[FinancialRecord],
    today: date,
    role: RecordRole = RecordRole.RECEIVABLE,
) -> AgingReport:
    """
    Group outstanding balances by how long they have been past due.

    Requirements:
    - Paid and cancelled records are skipped
    - Each open record lands in exactly one bucket with its outstanding amount
    - total_count counts open records; total_outstanding sums bucket totals

    Args:
        records: Receivables or payables
        today: Reference calendar day
        role: Selects the receivable (< 0) or payable (<= 0) "current" rule
    """
    buckets = {key: Bucket[AgedItem]() for key in AgingBucketKey}
    records = list(records)

    for record in records:
        if not record.is_open:
            continue

        overdue = days_overdue(record.due_date, today)
        outstanding = record.outstanding
        key = classify_aging(overdue, role)
        buckets[key].add(AgedItem(record=record, outstanding=outstanding, days_overdue=overdue), outstanding)

    total_count = sum(1 for r in records if r.is_open)
    total_outstanding = sum((b.total for b in buckets.values()), Decimal("0"))

    return AgingReport(buckets=buckets, total_count=total_count, total_outstanding=total_outstanding)


def receivables_aging_report(receivables: List[FinancialRecord], today: date) -> AgingReport:
    return calculate_aging_report(receivables, today, RecordRole.RECEIVABLE)


def payables_aging_report(payables: List[FinancialRecord], today: date) -> AgingReport:
    return calculate_aging_report(payables, today, RecordRole.PAYABLE)
