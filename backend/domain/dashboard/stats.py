"""
Progress and dashboard counters.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, Optional

from domain.project.aggregates import Project

from .dates import is_due_this_week


def round_half_up(value: Decimal) -> int:
    """Round .5 away from zero (2.5 -> 3), unlike the built-in round()."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def project_progress(project: Project) -> int:
    """Percentage of done tasks; 0 for a project without tasks."""
    if not project.tasks:
        return 0
    return round_half_up(Decimal(100 * project.done_count) / Decimal(project.task_count))


def average_progress(projects: Iterable[Project]) -> int:
    values = [project_progress(p) for p in projects]
    if not values:
        return 0
    return round_half_up(Decimal(sum(values)) / Decimal(len(values)))


@dataclass(frozen=True)
class DashboardStats:
    """Counters shown at the top of the dashboard."""

    active: int = 0
    ongoing_tasks: int = 0
    due_this_week: int = 0
    overdue: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def compute_stats(projects: Iterable[Project], now: Optional[datetime] = None) -> DashboardStats:
    """
    Reduce the full project list into dashboard counters.

    Archived projects count towards ongoing tasks only.
    """
    now = now or datetime.now()
    active = ongoing_tasks = due_this_week = overdue = 0

    for project in projects:
        ongoing_tasks += project.ongoing_count
        if project.archived:
            continue
        active += 1
        days = project.days_until_deadline(now)
        if is_due_this_week(days):
            due_this_week += 1
        elif days < 0:
            overdue += 1

    return DashboardStats(
        active=active,
        ongoing_tasks=ongoing_tasks,
        due_this_week=due_this_week,
        overdue=overdue,
    )
