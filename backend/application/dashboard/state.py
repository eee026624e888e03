"""
Dashboard application state.

One explicit state object per mounted dashboard, owned by its
DashboardController. Nothing here is persisted.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from domain.project.aggregates import Project
from domain.project.entities import Task
from domain.shared.value_objects import DashboardTab, MonthCursor


class LoadState(str, Enum):
    LOADING = "loading"
    READY = "ready"


@dataclass
class ProjectForm:
    """Edit buffer of the project dialog, holding raw form values."""

    name: str = ""
    description: str = ""
    functional_areas: List[str] = field(default_factory=list)
    start_date: str = ""
    deadline: str = ""
    tasks: List[Task] = field(default_factory=list)
    archived: bool = False

    @classmethod
    def from_project(cls, project: Project) -> ProjectForm:
        return cls(
            name=project.name,
            description=project.description,
            functional_areas=list(project.functional_areas),
            start_date=project.start_date.isoformat() if project.start_date else "",
            deadline=project.deadline.isoformat(),
            tasks=[
                Task(id=t.id, title=t.title, status=t.status, area=t.area)
                for t in project.tasks
            ],
            archived=project.archived,
        )


@dataclass
class EditDialog:
    is_open: bool = False
    editing_id: Optional[str] = None
    form: ProjectForm = field(default_factory=ProjectForm)
    areas_text: str = ""


@dataclass
class DashboardState:
    status: LoadState = LoadState.LOADING
    projects: List[Project] = field(default_factory=list)
    query: str = ""
    show_archived: bool = False
    tab: DashboardTab = DashboardTab.ALL
    cursor: MonthCursor = field(default_factory=MonthCursor.of)
    dialog: EditDialog = field(default_factory=EditDialog)
    notices: List[str] = field(default_factory=list)
