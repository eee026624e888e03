"""
Date and urgency helpers.

All arithmetic is done in local time. A deadline day ends at
23:59:59.999, so a project due today has zero days left until midnight.
"""

from __future__ import annotations
import math
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from domain.shared.value_objects import MonthCursor, UrgencyBand

from .labels import DisplayStrings, INDONESIAN

DAY = timedelta(days=1)
END_OF_DAY = time(23, 59, 59, 999000)
DEFAULT_START_OFFSET = timedelta(days=30)
DUE_SOON_DAYS = 7

DateLike = Union[date, str]


def today(now: Optional[datetime] = None) -> date:
    return (now or datetime.now()).date()


def parse_iso_date(value: DateLike) -> date:
    """
    Parse a `yyyy-mm-dd` date.

    Longer ISO strings (timestamps) are read by their date prefix.
    Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO date string, got {type(value).__name__}")
    return date.fromisoformat(value.strip()[:10])


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


def days_until(deadline: DateLike, now: Optional[datetime] = None) -> int:
    """
    Whole days between the end of the deadline day and now, floored.

    Negative means overdue, 0 means due today.
    """
    now = now or datetime.now()
    remaining = end_of_day(parse_iso_date(deadline)) - now
    return math.floor(remaining / DAY)


def default_start_from_deadline(deadline: date) -> date:
    """Projects without a start date are assumed to start 30 days earlier."""
    return deadline - DEFAULT_START_OFFSET


def urgency_band(days: int) -> UrgencyBand:
    if days < 0:
        return UrgencyBand.OVERDUE
    if days <= DUE_SOON_DAYS:
        return UrgencyBand.DUE_SOON
    return UrgencyBand.ON_TRACK


def is_due_this_week(days: int) -> bool:
    return 0 <= days <= DUE_SOON_DAYS


def pretty_days_left(days: int, strings: DisplayStrings = INDONESIAN) -> str:
    if days < 0:
        return strings.overdue_by.format(days=abs(days))
    if days == 0:
        return strings.due_today
    if days == 1:
        return strings.one_day_left
    return strings.days_left.format(days=days)


def format_date(day: DateLike, strings: DisplayStrings = INDONESIAN) -> str:
    """Render `day` as e.g. '5 Agu 2025'."""
    day = parse_iso_date(day)
    return f"{day.day} {strings.month_abbreviations[day.month - 1]} {day.year}"


def month_label(cursor: MonthCursor, strings: DisplayStrings = INDONESIAN) -> str:
    return f"{strings.month_names[cursor.month - 1]} {cursor.year}"
