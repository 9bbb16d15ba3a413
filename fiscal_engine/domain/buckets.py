"""Due-date classification into aging and payment-schedule buckets"""

from datetime import date

from fiscal_engine.domain.models import AgingBucketKey, RecordRole, ScheduleBucketKey
from fiscal_engine.utils.date_utils import end_of_month, end_of_week


def days_overdue(due_date: date, today: date) -> int:
    """Whole calendar days past due (negative while not yet due)"""
    return (today - due_date).days


def days_until_due(due_date: date, today: date) -> int:
    """Whole calendar days until due (negative once overdue)"""
    return (due_date - today).days


def classify_aging(overdue_days: int, role: RecordRole) -> AgingBucketKey:
    """
    Map days overdue to an aging bucket.

    Receivables are current only before the due date (days < 0), payables
    are still current on the due date itself (days <= 0).
    """
    if role is RecordRole.PAYABLE:
        is_current = overdue_days <= 0
    else:
        is_current = overdue_days < 0

    if is_current:
        return AgingBucketKey.CURRENT
    elif overdue_days <= 30:
        return AgingBucketKey.DAYS_1_30
    elif overdue_days <= 60:
        return AgingBucketKey.DAYS_31_60
    elif overdue_days <= 90:
        return AgingBucketKey.DAYS_61_90
    else:
        return AgingBucketKey.DAYS_90_PLUS


def classify_schedule(due_date: date, today: date) -> ScheduleBucketKey:
    """Map a payable due date to the window in which it must be paid"""
    if due_date < today:
        return ScheduleBucketKey.OVERDUE
    elif due_date <= end_of_week(today):
        return ScheduleBucketKey.THIS_WEEK
    elif due_date <= end_of_month(today):
        return ScheduleBucketKey.THIS_MONTH
    elif due_date <= end_of_month(today, months_ahead=1):
        return ScheduleBucketKey.NEXT_MONTH
    else:
        return ScheduleBucketKey.FUTURE
