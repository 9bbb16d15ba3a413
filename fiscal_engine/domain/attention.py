"""Reminder decisions and prioritized follow-up lists"""

from datetime import date
from typing import List, Optional

from fiscal_engine.domain.buckets import days_until_due
from fiscal_engine.domain.models import AttentionItem, FinancialRecord, Priority

PRIORITY_ORDER = {Priority.CRITICAL: 0, Priority.HIGH: 1, Priority.MEDIUM: 2}

REMINDER_LEAD_DAYS = 7
REMINDER_REPEAT_DAYS = 7


def should_send_reminder(receivable: FinancialRecord, today: date) -> bool:
    """
    Reminder cadence for an open receivable.

    Sent 7 days before the due date, on the due date, and every 7 days
    once overdue.
    """
    if not receivable.is_open:
        return False

    days = days_until_due(receivable.due_date, today)

    if days == REMINDER_LEAD_DAYS or days == 0:
        return True
    return days < 0 and abs(days) % REMINDER_REPEAT_DAYS == 0


def _reason(days: int) -> str:
    if days < 0:
        return f"Overdue by {abs(days)} days"
    return f"Due in {days} days"


def _receivable_priority(days: int) -> Optional[Priority]:
    if days < -30:
        return Priority.CRITICAL
    elif days < 0:
        return Priority.HIGH
    elif days <= 7:
        return Priority.MEDIUM
    return None


def _payable_priority(days: int) -> Optional[Priority]:
    if days < 0:
        return Priority.CRITICAL
    elif days <= 3:
        return Priority.HIGH
    elif days <= 7:
        return Priority.MEDIUM
    return None


def _prioritize(records: List[FinancialRecord], today: date, classify) -> List[AttentionItem]:
    items = []
    for record in records:
        if not record.is_open:
            continue

        days = days_until_due(record.due_date, today)
        priority = classify(days)
        if priority is None:
            continue

        items.append(
            AttentionItem(
                record=record,
                priority=priority,
                reason=_reason(days),
                days_until_due=days,
                outstanding=record.outstanding,
            )
        )

    return sorted(items, key=lambda i: (PRIORITY_ORDER[i.priority], i.days_until_due))


def receivables_needing_attention(receivables: List[FinancialRecord], today: date) -> List[AttentionItem]:
    """Overdue or soon-due receivables: critical (>30 days late), high (late), medium (due within a week)"""
    return _prioritize(receivables, today, _receivable_priority)


def urgent_payables(payables: List[FinancialRecord], today: date) -> List[AttentionItem]:
    """Payables to settle soon: critical (late), high (due within 3 days), medium (within a week)"""
    return _prioritize(payables, today, _payable_priority)
