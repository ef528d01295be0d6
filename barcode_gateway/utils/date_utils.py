"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta


def normalize_date(year: int, month: int, day: int) -> date:
    """
    Build a date, rolling out-of-range month/day values into neighbouring periods.

    month=13 becomes January of the following year, month=0 December of the
    previous one; day=0 is the last day of the previous month and days past
    the month's end spill into the next month.
    """
    extra_years, month_index = divmod(month - 1, 12)
    first_of_month = date(year + extra_years, month_index + 1, 1)
    return first_of_month + timedelta(days=day - 1)


def add_months(from_date: date, months: int) -> date:
    """Add calendar months, clamping the day to the target month's length"""
    extra_years, month_index = divmod(from_date.month - 1 + months, 12)
    year = from_date.year + extra_years
    month = month_index + 1
    day = min(from_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
