# analytics/services/ranges.py

"""
DASHBOARD DATE RANGES

Filters (all bounded above by `now`, inclusive):
- today    local midnight today
- week     local midnight of the most recent Sunday
- month    first day of the current month
- 6months  first day of the month five months back (current month included)
- year     January 1st
- all      no lower bound (start is None)
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from django.utils import timezone

RANGE_TODAY = "today"
RANGE_WEEK = "week"
RANGE_MONTH = "month"
RANGE_SIX_MONTHS = "6months"
RANGE_YEAR = "year"
RANGE_ALL = "all"

RANGE_CHOICES = (
    (RANGE_TODAY, "Today"),
    (RANGE_WEEK, "This Week"),
    (RANGE_MONTH, "This Month"),
    (RANGE_SIX_MONTHS, "Last 6 Months"),
    (RANGE_YEAR, "This Year"),
    (RANGE_ALL, "All Time"),
)
RANGE_FILTERS = tuple(value for value, _ in RANGE_CHOICES)


class UnknownRangeError(ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown range '{value}'. Expected one of: {', '.join(RANGE_FILTERS)}")


def _local_midnight(d: date) -> datetime:
    return timezone.make_aware(datetime.combine(d, time.min), timezone.get_current_timezone())


def _months_back(d: date, months: int) -> date:
    month_index = d.year * 12 + (d.month - 1) - months
    return date(month_index // 12, month_index % 12 + 1, 1)


def resolve_range(range_filter: str, now: datetime | None = None) -> tuple[datetime | None, datetime]:
    """
    Returns (start, end) as aware datetimes; start is None for "all".
    """
    now = timezone.localtime(now or timezone.now())
    today = now.date()

    if range_filter == RANGE_TODAY:
        start = today
    elif range_filter == RANGE_WEEK:
        # Python: Monday=0 ... Sunday=6
        start = today - timedelta(days=(today.weekday() + 1) % 7)
    elif range_filter == RANGE_MONTH:
        start = today.replace(day=1)
    elif range_filter == RANGE_SIX_MONTHS:
        start = _months_back(today, 5)
    elif range_filter == RANGE_YEAR:
        start = date(today.year, 1, 1)
    elif range_filter == RANGE_ALL:
        return None, now
    else:
        raise UnknownRangeError(range_filter)

    return _local_midnight(start), now
