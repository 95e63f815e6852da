"""Date manipulation utilities"""

from datetime import date, datetime, timedelta, timezone
from typing import List


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def trailing_days(end: date, count: int) -> List[date]:
    """The `count` calendar days ending at `end`, oldest first"""
    return generate_date_range(end - timedelta(days=count - 1), end)


def day_label(day: date) -> str:
    """Short chart label, e.g. 'Oct 19'"""
    return f"{day:%b} {day.day}"


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC"""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
