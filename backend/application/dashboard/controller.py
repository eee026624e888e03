"""
Dashboard Controller.

Holds the canonical in-memory project list and the view state of one
mounted dashboard. Every change goes through a named operation here;
local state is updated first and the store is written afterwards.

Write failures:
- create/update: logged, a notice is shown, the dialog stays open
- delete, archive toggle, task status: logged and absorbed, no rollback
"""

from __future__ import annotations
import logging
from dataclasses import fields
from datetime import datetime
from typing import Callable, List, Optional, Tuple, Union

from domain.dashboard import calendar as calendar_view
from domain.dashboard.filters import coerce_tab, filter_projects
from domain.dashboard.labels import DisplayStrings, INDONESIAN
from domain.dashboard.stats import DashboardStats, compute_stats
from domain.project.aggregates import Project, build_project, coerce_task_status
from domain.project.entities import Task
from domain.shared.exceptions import EntityNotFoundException, ValidationException
from domain.shared.value_objects import DashboardTab, MonthCursor, TaskStatus

from .state import DashboardState, EditDialog, LoadState, ProjectForm
from .sync import ProjectSync, Subscription

logger = logging.getLogger(__name__)

FORM_FIELDS = frozenset(f.name for f in fields(ProjectForm)) - {"tasks"}
TASK_ROW_FIELDS = frozenset({"title", "area", "status"})
TEXT_FORM_FIELDS = frozenset({"name", "description", "start_date", "deadline"})


def _check_text(name: str, value, optional: bool = False) -> None:
    if isinstance(value, str) or (optional and value is None):
        return
    raise ValidationException(f"'{name}' must be a string", field=name, value=value)


def _check_form_value(name: str, value) -> None:
    if name in TEXT_FORM_FIELDS:
        _check_text(name, value)
    elif name == "archived" and not isinstance(value, bool):
        raise ValidationException("'archived' must be a boolean", field=name, value=value)
    elif name == "functional_areas" and not (
        isinstance(value, list) and all(isinstance(a, str) for a in value)
    ):
        raise ValidationException(
            "'functional_areas' must be a list of strings", field=name, value=value
        )


def parse_areas(text: str) -> List[str]:
    """Split the raw functional-areas text on commas."""
    return [part.strip() for part in (text or "").split(",") if part.strip()]


class DashboardController:
    """
    Single source of truth for one dashboard.

    Lifecycle: start() subscribes through the sync layer and moves the
    state from loading to ready exactly once; stop() tears the
    subscription down. While loading, local changes are not written to
    the store so an empty list can never overwrite it.
    """

    def __init__(
        self,
        sync: ProjectSync,
        strings: DisplayStrings = INDONESIAN,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.sync = sync
        self.strings = strings
        self._clock = clock
        self._subscription: Optional[Subscription] = None
        self.state = DashboardState(cursor=MonthCursor.of(clock().date()))

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def is_ready(self) -> bool:
        return self.state.status == LoadState.READY

    def now(self) -> datetime:
        return self._clock()

    async def start(self) -> None:
        if self._subscription is not None:
            return
        try:
            self._subscription = await self.sync.subscribe(self.apply_snapshot)
        except Exception:
            logger.exception("Initial project load failed; starting with an empty list")
        self._mark_ready()

    def stop(self) -> None:
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None

    async def refresh(self) -> None:
        await self.sync.refresh()

    def apply_snapshot(self, projects: List[Project]) -> None:
        """Replace the project list wholesale with a store snapshot."""
        self.state.projects = list(projects)
        self._mark_ready()

    def _mark_ready(self) -> None:
        if self.state.status == LoadState.LOADING:
            self.state.status = LoadState.READY
            logger.debug("Dashboard ready with %d projects", len(self.state.projects))

    # =========================================================================
    # PROJECT OPERATIONS
    # =========================================================================

    def get_project(self, project_id: str) -> Project:
        for project in self.state.projects:
            if project.id == project_id:
                return project
        raise EntityNotFoundException("Project", project_id)

    async def upsert(self, draft: Project) -> Optional[Project]:
        """
        Create or update a project.

        Returns the stored project, or None if the write failed. In that
        case a notice is added and the dialog is left open for a retry.
        """
        project = build_project(
            id=draft.id,
            name=draft.name,
            description=draft.description,
            functional_areas=draft.functional_areas,
            start_date=draft.start_date,
            deadline=draft.deadline,
            tasks=draft.tasks,
            archived=draft.archived,
            today=self.now().date(),
        )
        self._replace_or_prepend(project)

        try:
            await self._persist(project)
        except Exception:
            logger.exception("Could not save project %s", project.id)
            self.state.notices.append(self.strings.save_failed)
            return None

        self._reset_dialog()
        return project

    async def delete_project(self, project_id: str) -> None:
        """Remove locally right away; a failed remote delete is absorbed."""
        self.state.projects = [p for p in self.state.projects if p.id != project_id]
        try:
            await self.sync.remove(project_id)
        except Exception:
            logger.warning("Could not delete project %s remotely", project_id, exc_info=True)

    async def toggle_archive(self, project_id: str) -> Project:
        project = self.get_project(project_id)
        project.toggle_archive()
        await self._persist_quietly(project)
        return project

    async def set_task_status(
        self,
        project_id: str,
        task_id: str,
        status: Union[TaskStatus, str],
    ) -> Project:
        project = self.get_project(project_id)
        project.set_task_status(task_id, status)
        await self._persist_quietly(project)
        return project

    def _replace_or_prepend(self, project: Project) -> None:
        for index, existing in enumerate(self.state.projects):
            if existing.id == project.id:
                self.state.projects[index] = project
                return
        self.state.projects.insert(0, project)

    async def _persist(self, project: Project) -> None:
        if not self.is_ready:
            logger.debug("Still loading; not writing project %s", project.id)
            return
        await self.sync.save(project)

    async def _persist_quietly(self, project: Project) -> None:
        try:
            await self._persist(project)
        except Exception:
            logger.warning("Could not save project %s", project.id, exc_info=True)

    # =========================================================================
    # EDIT DIALOG
    # =========================================================================

    def open_create(self) -> None:
        self.state.dialog = EditDialog(is_open=True)

    def open_edit(self, project_id: str) -> None:
        project = self.get_project(project_id)
        self.state.dialog = EditDialog(
            is_open=True,
            editing_id=project.id,
            form=ProjectForm.from_project(project),
            areas_text=", ".join(project.functional_areas),
        )

    def close_dialog(self) -> None:
        self.state.dialog.is_open = False

    def _reset_dialog(self) -> None:
        self.state.dialog = EditDialog()

    def update_form(self, **changes) -> ProjectForm:
        unknown = set(changes) - FORM_FIELDS
        if unknown:
            raise ValidationException(
                f"Unknown form field(s): {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )
        for name, value in changes.items():
            _check_form_value(name, value)
        form = self.state.dialog.form
        for name, value in changes.items():
            setattr(form, name, value)
        return form

    def set_areas_text(self, text: str) -> None:
        _check_text("areas_text", text)
        self.state.dialog.areas_text = text

    def commit_areas_text(self) -> List[str]:
        """Parse the raw areas text into tags (the field lost focus)."""
        areas = parse_areas(self.state.dialog.areas_text)
        self.state.dialog.form.functional_areas = areas
        return areas

    def add_task_row(self) -> Task:
        task = Task(title="", status=TaskStatus.TODO, area="")
        self.state.dialog.form.tasks.append(task)
        return task

    def update_task_row(self, index: int, **patch) -> Task:
        unknown = set(patch) - TASK_ROW_FIELDS
        if unknown:
            raise ValidationException(
                f"Unknown task field(s): {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )
        if "title" in patch:
            _check_text("title", patch["title"])
        if "area" in patch:
            _check_text("area", patch["area"], optional=True)
        task = self._task_row(index)
        if "status" in patch:
            patch["status"] = coerce_task_status(patch["status"])
        for name, value in patch.items():
            setattr(task, name, value)
        return task

    def remove_task_row(self, index: int) -> Task:
        task = self._task_row(index)
        self.state.dialog.form.tasks.remove(task)
        return task

    def _task_row(self, index: int) -> Task:
        tasks = self.state.dialog.form.tasks
        if not isinstance(index, int) or not (0 <= index < len(tasks)):
            raise ValidationException(f"No task row at index {index}", field="index", value=index)
        return tasks[index]

    def build_draft(self) -> Project:
        """Turn the edit buffer into a project with defaults applied."""
        dialog = self.state.dialog
        form = dialog.form
        return build_project(
            id=dialog.editing_id,
            name=form.name,
            description=form.description,
            functional_areas=parse_areas(dialog.areas_text),
            start_date=form.start_date,
            deadline=form.deadline,
            tasks=form.tasks,
            archived=form.archived,
            today=self.now().date(),
        )

    async def save_dialog(self) -> Optional[Project]:
        return await self.upsert(self.build_draft())

    # =========================================================================
    # VIEW STATE
    # =========================================================================

    def set_query(self, query: str) -> None:
        _check_text("query", query, optional=True)
        self.state.query = query or ""

    def set_tab(self, tab: Union[DashboardTab, str]) -> None:
        self.state.tab = coerce_tab(tab)

    def set_show_archived(self, show: bool) -> None:
        self.state.show_archived = bool(show)

    def next_month(self) -> MonthCursor:
        return self._move_cursor(self.state.cursor.next)

    def previous_month(self) -> MonthCursor:
        return self._move_cursor(self.state.cursor.previous)

    def _move_cursor(self, step: Callable[[], MonthCursor]) -> MonthCursor:
        try:
            self.state.cursor = step()
        except ValueError:
            raise ValidationException(
                f"No month beyond {self.state.cursor}", field="month", value=str(self.state.cursor)
            )
        return self.state.cursor

    def go_to_month(self, year: int, month: int) -> MonthCursor:
        try:
            self.state.cursor = MonthCursor(int(year), int(month))
        except (TypeError, ValueError):
            raise ValidationException(f"Invalid month {year}-{month}", field="month", value=month)
        return self.state.cursor

    def dismiss_notices(self) -> None:
        self.state.notices.clear()

    # =========================================================================
    # DERIVED DATA
    # =========================================================================

    def visible_projects(self) -> List[Project]:
        return filter_projects(
            self.state.projects,
            show_archived=self.state.show_archived,
            tab=self.state.tab,
            query=self.state.query,
            now=self.now(),
        )

    def stats(self) -> DashboardStats:
        return compute_stats(self.state.projects, self.now())

    def calendar(self) -> List[List[calendar_view.CalendarDay]]:
        return calendar_view.build_calendar(self.state.projects, self.state.cursor, self.now())

    def month_progress(self) -> Tuple[List[Project], int]:
        projects = calendar_view.month_projects(self.state.projects, self.state.cursor)
        return projects, calendar_view.month_average_progress(projects, self.state.cursor)

    def timeline(self) -> List[calendar_view.TimelineRow]:
        return calendar_view.year_timeline(self.state.projects, self.state.cursor.year)
