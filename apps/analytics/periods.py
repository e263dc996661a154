"""
Reporting period presets.

Each preset resolves to an inclusive pair of calendar dates relative to
"today" in the project time zone; ``interval_bounds`` turns that pair into
aware datetimes running from start-of-day to end-of-day.
"""

import calendar
from datetime import date, datetime, time, timedelta

from django.utils import timezone

from .exceptions import InvalidDateRangeError


class DateRange:
    TODAY = 'today'
    YESTERDAY = 'yesterday'
    LAST_7_DAYS = 'last7days'
    LAST_30_DAYS = 'last30days'
    THIS_MONTH = 'thisMonth'
    LAST_MONTH = 'lastMonth'
    CUSTOM = 'custom'

    CHOICES = (TODAY, YESTERDAY, LAST_7_DAYS, LAST_30_DAYS, THIS_MONTH, LAST_MONTH, CUSTOM)


def _month_end(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def resolve_date_range(range_key, today: date, start_date=None, end_date=None) -> tuple[date, date]:
    """
    Resolve a preset into (first_day, last_day), both inclusive.

    ``last7days`` and ``last30days`` reach back N days and include today.
    ``custom`` requires both dates with start not after end.

    Raises:
        InvalidDateRangeError: Unknown preset or bad custom dates.
    """
    if range_key == DateRange.TODAY:
        return today, today
    if range_key == DateRange.YESTERDAY:
        yesterday = today - timedelta(days=1)
        return yesterday, yesterday
    if range_key == DateRange.LAST_7_DAYS:
        return today - timedelta(days=7), today
    if range_key == DateRange.LAST_30_DAYS:
        return today - timedelta(days=30), today
    if range_key == DateRange.THIS_MONTH:
        return today.replace(day=1), _month_end(today)
    if range_key == DateRange.LAST_MONTH:
        last_month_end = today.replace(day=1) - timedelta(days=1)
        return last_month_end.replace(day=1), last_month_end
    if range_key == DateRange.CUSTOM:
        if start_date is None or end_date is None:
            raise InvalidDateRangeError("Custom range requires start_date and end_date")
        if start_date > end_date:
            raise InvalidDateRangeError("Start date must be before end date")
        return start_date, end_date

    raise InvalidDateRangeError(f"Unknown range: {range_key!r}")


def interval_bounds(first_day: date, last_day: date, tz=None) -> tuple[datetime, datetime]:
    """Aware datetimes spanning first_day 00:00 through last_day 23:59:59.999999."""
    tz = tz or timezone.get_current_timezone()
    start = timezone.make_aware(datetime.combine(first_day, time.min), tz)
    end = timezone.make_aware(datetime.combine(last_day, time.max), tz)
    return start, end
