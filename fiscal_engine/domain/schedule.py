"""Payment schedule for payables grouped by time until due"""

from datetime import date
from decimal import Decimal
from typing import List

from fiscal_engine.domain.buckets import classify_schedule, days_until_due
from fiscal_engine.domain.models import (
    Bucket,
    FinancialRecord,
    PaymentSchedule,
    ScheduleBucketKey,
    ScheduledItem,
)


def calculate_payment_schedule(payables: List[FinancialRecord], today: date) -> PaymentSchedule:
    """
    Bucket open payables into overdue / this week / this month / next month / future.

    Week closes on the coming Sunday-based boundary, months on their last
    calendar day. total_amount is the sum of the five bucket totals.
    """
    buckets = {key: Bucket[ScheduledItem]() for key in ScheduleBucketKey}

    for payable in payables:
        if not payable.is_open:
            continue

        outstanding = payable.outstanding
        key = classify_schedule(payable.due_date, today)
        buckets[key].add(
            ScheduledItem(
                record=payable,
                outstanding=outstanding,
                days_until_due=days_until_due(payable.due_date, today),
            ),
            outstanding,
        )

    total_count = sum(1 for p in payables if p.is_open)
    total_amount = sum((b.total for b in buckets.values()), Decimal("0"))

    return PaymentSchedule(buckets=buckets, total_count=total_count, total_amount=total_amount)
