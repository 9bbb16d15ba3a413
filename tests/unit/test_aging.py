"""Unit tests for aging reports and the payment schedule"""

from decimal import Decimal
from fiscal_engine.domain.aging import calculate_aging_report, payables_aging_report, receivables_aging_report
from fiscal_engine.domain.models import AgingBucketKey, RecordRole, RecordStatus, ScheduleBucketKey
from fiscal_engine.domain.schedule import calculate_payment_schedule


def test_receivables_aging_buckets(sample_receivables, today):
    """Test open receivables land in buckets by days overdue"""
    report = receivables_aging_report(sample_receivables, today)

    assert report[AgingBucketKey.DAYS_31_60].total == Decimal("5000")
    assert report[AgingBucketKey.DAYS_1_30].total == Decimal("1500")  # partially paid
    assert report[AgingBucketKey.CURRENT].total == Decimal("3000")
    assert report[AgingBucketKey.DAYS_61_90].count == 0
    assert report[AgingBucketKey.DAYS_90_PLUS].count == 0
    assert report.total_count == 3
    assert report.total_outstanding == Decimal("9500")


def test_aging_items_carry_outstanding_and_days(sample_receivables, today):
    report = receivables_aging_report(sample_receivables, today)
    item = report[AgingBucketKey.DAYS_1_30].items[0]

    assert item.record.id == "r2"
    assert item.outstanding == Decimal("1500")
    assert item.days_overdue == 10


def test_aging_totals_match_bucket_sums(sample_receivables, sample_payables, today):
    """Test bucket totals and counts add up to report totals"""
    for report in (
        receivables_aging_report(sample_receivables, today),
        payables_aging_report(sample_payables, today),
    ):
        assert sum(b.total for b in report.buckets.values()) == report.total_outstanding
        assert sum(b.count for b in report.buckets.values()) == report.total_count


def test_aging_excludes_paid_and_cancelled(sample_receivables, today):
    """Test closed records never appear in any bucket"""
    report = receivables_aging_report(sample_receivables, today)
    ids = {item.record.id for b in report.buckets.values() for item in b.items}

    assert ids == {"r1", "r2", "r3"}


def test_due_today_asymmetry(record_factory, today):
    """Test due-today receivable is already aging while a due-today payable is current"""
    record = record_factory("x", due_in_days=0)

    receivable_report = calculate_aging_report([record], today, RecordRole.RECEIVABLE)
    payable_report = calculate_aging_report([record], today, RecordRole.PAYABLE)

    assert receivable_report[AgingBucketKey.DAYS_1_30].count == 1
    assert receivable_report[AgingBucketKey.CURRENT].count == 0
    assert payable_report[AgingBucketKey.CURRENT].count == 1


def test_aging_empty_input(today):
    report = receivables_aging_report([], today)

    assert report.total_count == 0
    assert report.total_outstanding == Decimal("0")
    assert set(report.buckets) == set(AgingBucketKey)


def test_overpayment_passes_through(record_factory, today):
    """Test negative outstanding is aggregated unchanged"""
    record = record_factory("x", due_in_days=-5, amount="100", amount_paid="150", status=RecordStatus.PARTIAL)
    report = receivables_aging_report([record], today)

    assert report.total_outstanding == Decimal("-50")


def test_payment_schedule_windows(sample_payables, today):
    """Test payables grouped by time until due"""
    schedule = calculate_payment_schedule(sample_payables, today)

    assert schedule[ScheduleBucketKey.OVERDUE].total == Decimal("1200")
    assert schedule[ScheduleBucketKey.THIS_WEEK].total == Decimal("700")
    assert schedule[ScheduleBucketKey.NEXT_MONTH].total == Decimal("2500")
    assert schedule[ScheduleBucketKey.THIS_MONTH].count == 0
    assert schedule[ScheduleBucketKey.FUTURE].count == 0
    assert schedule.total_count == 3
    assert schedule.total_amount == Decimal("4400")


def test_payment_schedule_days_until_due(sample_payables, today):
    schedule = calculate_payment_schedule(sample_payables, today)

    assert schedule[ScheduleBucketKey.OVERDUE].items[0].days_until_due == -3
    assert schedule[ScheduleBucketKey.THIS_WEEK].items[0].days_until_due == 2
    assert schedule[ScheduleBucketKey.NEXT_MONTH].items[0].days_until_due == 25


def test_payment_schedule_excludes_paid(sample_payables, today):
    schedule = calculate_payment_schedule(sample_payables, today)
    ids = {item.record.id for b in schedule.buckets.values() for item in b.items}

    assert "p4" not in ids
