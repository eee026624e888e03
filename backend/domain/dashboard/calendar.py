"""
Calendar, monthly progress and yearly timeline aggregations.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from domain.project.aggregates import Project
from domain.shared.value_objects import MonthCursor, UrgencyBand

from .dates import days_until, urgency_band
from .stats import average_progress

WEEKS_SHOWN = 6


@dataclass(frozen=True)
class CalendarCell:
    day: date
    in_month: bool


@dataclass(frozen=True)
class CalendarDay:
    """A calendar cell with the deadlines falling on it."""

    day: date
    in_month: bool
    deadline_count: int = 0
    urgency: Optional[UrgencyBand] = None
    is_today: bool = False


@dataclass(frozen=True)
class TimelineRow:
    """Month-by-month occupancy of one project within a year."""

    project: Project
    months: Tuple[bool, ...]


def build_month_matrix(cursor: MonthCursor) -> List[List[CalendarCell]]:
    """
    Monday-first grid of six weeks covering the cursor month.

    Days of the previous and next month pad the grid and are flagged
    with in_month=False.
    """
    first = cursor.first_day
    grid_start = first - timedelta(days=first.weekday())
    cells = [
        CalendarCell(day=day, in_month=cursor.contains(day))
        for day in (grid_start + timedelta(days=i) for i in range(WEEKS_SHOWN * 7))
    ]
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def deadlines_by_day(projects: Iterable[Project]) -> Dict[date, int]:
    return dict(Counter(p.deadline for p in projects))


def build_calendar(
    projects: Iterable[Project],
    cursor: MonthCursor,
    now: Optional[datetime] = None,
) -> List[List[CalendarDay]]:
    now = now or datetime.now()
    counts = deadlines_by_day(projects)
    current = now.date()

    weeks = []
    for week in build_month_matrix(cursor):
        row = []
        for cell in week:
            count = counts.get(cell.day, 0)
            row.append(CalendarDay(
                day=cell.day,
                in_month=cell.in_month,
                deadline_count=count,
                urgency=urgency_band(days_until(cell.day, now)) if count else None,
                is_today=cell.day == current,
            ))
        weeks.append(row)
    return weeks


def month_projects(projects: Iterable[Project], cursor: MonthCursor) -> List[Project]:
    """Projects due within the cursor month, earliest deadline first."""
    return sorted(
        (p for p in projects if cursor.contains(p.deadline)),
        key=lambda p: p.deadline,
    )


def month_average_progress(projects: Iterable[Project], cursor: MonthCursor) -> int:
    return average_progress(month_projects(projects, cursor))


def overlaps_month(project: Project, year: int, month: int) -> bool:
    cursor = MonthCursor(year, month)
    return project.span.overlaps(cursor.first_day, cursor.last_day)


def year_projects(projects: Iterable[Project], year: int) -> List[Project]:
    """Projects whose span touches the given year."""
    return [
        p for p in projects
        if not (p.span.end.year < year or p.span.start.year > year)
    ]


def year_timeline(projects: Iterable[Project], year: int) -> List[TimelineRow]:
    return [
        TimelineRow(
            project=p,
            months=tuple(overlaps_month(p, year, m) for m in range(1, 13)),
        )
        for p in year_projects(projects, year)
    ]
