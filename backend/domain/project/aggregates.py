"""
Project Domain - Aggregates.

Project is the aggregate root: it owns its tasks and is the unit of
persistence. Any change, including a single task status, rewrites the
whole project document.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from domain.dashboard.dates import (
    days_until,
    default_start_from_deadline,
    parse_iso_date,
    today as current_day,
)
from domain.shared.exceptions import EntityNotFoundException, ValidationException
from domain.shared.value_objects import DateRange, TaskStatus

from .entities import Task, new_id

UNTITLED_PROJECT = "Untitled"


@dataclass
class Project:
    """
    A tracked unit of work with a deadline, an optional start date and
    an ordered list of tasks.
    """

    deadline: date
    name: str = ""
    id: str = field(default_factory=new_id)
    description: str = ""
    functional_areas: List[str] = field(default_factory=list)
    start_date: Optional[date] = None
    tasks: List[Task] = field(default_factory=list)
    archived: bool = False

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def task_count(self) -> int:
        return len(self.tasks)

    @property
    def done_count(self) -> int:
        return sum(1 for t in self.tasks if t.is_done)

    @property
    def ongoing_count(self) -> int:
        return sum(1 for t in self.tasks if t.is_ongoing)

    @property
    def has_ongoing_tasks(self) -> bool:
        return any(t.is_ongoing for t in self.tasks)

    @property
    def span(self) -> DateRange:
        """Start-to-deadline span, using the default start if none is set."""
        start = self.start_date or default_start_from_deadline(self.deadline)
        return DateRange(start=start, end=self.deadline)

    def days_until_deadline(self, now: Optional[datetime] = None) -> int:
        return days_until(self.deadline, now)

    def search_text(self) -> str:
        """Text matched by the free-text search box."""
        return " ".join([
            self.name,
            self.description,
            ", ".join(self.functional_areas),
            ", ".join(t.title for t in self.tasks),
        ])

    def get_task(self, task_id: str) -> Task:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise EntityNotFoundException("Task", task_id)

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def set_task_status(self, task_id: str, status: Union[TaskStatus, str]) -> Task:
        """Change the status of one task, leaving the others untouched."""
        task = self.get_task(task_id)
        task.status = coerce_task_status(status)
        return task

    def toggle_archive(self) -> bool:
        self.archived = not self.archived
        return self.archived

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the stored document shape (camelCase keys, ISO dates)."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "functionalAreas": list(self.functional_areas),
            "startDate": self.span.start.isoformat(),
            "deadline": self.deadline.isoformat(),
            "tasks": [t.to_document() for t in self.tasks],
            "archived": self.archived,
        }


def coerce_task_status(status: Union[TaskStatus, str]) -> TaskStatus:
    try:
        return TaskStatus(status)
    except ValueError:
        raise ValidationException(
            f"Unknown task status '{status}'",
            field="status",
            value=status,
        )


def build_project(
    *,
    id: Optional[str] = None,
    name: Optional[str] = None,
    description: Optional[str] = None,
    functional_areas: Optional[Iterable[str]] = None,
    start_date: Union[date, str, None] = None,
    deadline: Union[date, str, None] = None,
    tasks: Optional[Iterable[Task]] = None,
    archived: bool = False,
    today: Optional[date] = None,
) -> Project:
    """
    Build a project from an edit-form draft, applying write-time defaults.

    - a missing id is generated
    - a blank name becomes "Untitled"
    - a missing deadline becomes today
    - a missing start date becomes 30 days before the deadline
    - tasks get an id when missing and a status of "todo" when missing

    Raises ValidationException for dates that do not parse.
    """
    due = _parse_form_date(deadline, "deadline") or today or current_day()
    start = _parse_form_date(start_date, "startDate") or default_start_from_deadline(due)

    return Project(
        id=id or new_id(),
        name=name or UNTITLED_PROJECT,
        description=description or "",
        functional_areas=[a for a in (functional_areas or []) if a],
        start_date=start,
        deadline=due,
        tasks=[
            Task(
                id=t.id or new_id(),
                title=t.title or "",
                status=coerce_task_status(t.status or TaskStatus.TODO),
                area=t.area,
            )
            for t in (tasks or [])
        ],
        archived=bool(archived),
    )


def _parse_form_date(value: Union[date, str, None], field_name: str) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationException(
            f"'{value}' is not a valid date (expected yyyy-mm-dd)",
            field=field_name,
            value=value,
        )
