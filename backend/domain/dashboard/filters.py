"""
Project list filtering.

Three independent predicates, applied in sequence and ANDed:
archived visibility, category tab, free-text search.
"""

from __future__ import annotations
from datetime import datetime
from typing import Iterable, List, Optional, Union

from domain.project.aggregates import Project
from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import DashboardTab

from .dates import is_due_this_week


def coerce_tab(tab: Union[DashboardTab, str]) -> DashboardTab:
    try:
        return DashboardTab(tab)
    except ValueError:
        raise ValidationException(f"Unknown tab '{tab}'", field="tab", value=tab)


def matches_archived(project: Project, show_archived: bool) -> bool:
    return show_archived or not project.archived


def matches_tab(project: Project, tab: DashboardTab, now: Optional[datetime] = None) -> bool:
    if tab == DashboardTab.ONGOING:
        return project.has_ongoing_tasks
    if tab == DashboardTab.WEEK:
        return is_due_this_week(project.days_until_deadline(now))
    if tab == DashboardTab.OVERDUE:
        return project.days_until_deadline(now) < 0
    return True


def matches_query(project: Project, query: str) -> bool:
    """Case-insensitive substring match; a blank query matches everything."""
    if not query.strip():
        return True
    return query.lower() in project.search_text().lower()


def filter_projects(
    projects: Iterable[Project],
    *,
    show_archived: bool = False,
    tab: Union[DashboardTab, str] = DashboardTab.ALL,
    query: str = "",
    now: Optional[datetime] = None,
) -> List[Project]:
    tab = coerce_tab(tab)
    now = now or datetime.now()
    return [
        p for p in projects
        if matches_archived(p, show_archived)
        and matches_tab(p, tab, now)
        and matches_query(p, query)
    ]
