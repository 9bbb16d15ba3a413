"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, timedelta
from typing import List


def generate_date_range(start: date, days_ahead: int) -> List[date]:
    """Generate list of dates from start to start + days_ahead (inclusive)"""
    return [start + timedelta(days=i) for i in range(days_ahead + 1)]


def sunday_based_weekday(day: date) -> int:
    """Weekday number with Sunday = 0 ... Saturday = 6"""
    return (day.weekday() + 1) % 7


def end_of_week(today: date) -> date:
    """Closing day of the current week: today + (7 - weekday), Sunday = 0"""
    return today + timedelta(days=7 - sunday_based_weekday(today))


def end_of_month(day: date, months_ahead: int = 0) -> date:
    """Last calendar day of the month `months_ahead` after the month of `day`"""
    month_index = day.month - 1 + months_ahead
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, calendar.monthrange(year, month)[1])


def parse_date(value: str | date | datetime) -> date:
    """
    Parse an ISO date or timestamp into a calendar date.

    Accepts 'YYYY-MM-DD', full ISO timestamps and SQL-style
    'YYYY-MM-DD HH:MM:SS'. Raises ValueError when unparseable and
    TypeError for anything that is not a string, date or datetime.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise TypeError(f"expected an ISO date string, got {type(value).__name__}")
    text = value.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return parse_timestamp(text).date()


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse ISO / SQL timestamps, tolerating a trailing 'Z'"""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise TypeError(f"expected an ISO timestamp string, got {type(value).__name__}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)
