"""
Project Domain - Record Mapper.

Turns loosely-typed stored documents into well-formed Projects.
The store is schema-less and may return partial or legacy documents,
so every field is coerced to a default instead of being rejected.
`map_document_to_project` never raises.
"""

from __future__ import annotations
from collections.abc import Mapping
from datetime import date
from typing import Any, List, Optional

from domain.dashboard.dates import default_start_from_deadline, parse_iso_date
from domain.shared.value_objects import TaskStatus

from .aggregates import Project
from .entities import Task, new_id


def as_string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def as_string_list(value: Any) -> List[str]:
    """Coerce a list of tags to strings, dropping empty entries."""
    if not isinstance(value, (list, tuple)):
        return []
    return [str(v) for v in value if v is not None and str(v)]


def as_date(value: Any) -> Optional[date]:
    """Read an ISO date string; anything else (or garbage) is None."""
    if not isinstance(value, str) or not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        return None


def is_task_record(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    status = value.get("status")
    return (
        isinstance(value.get("title"), str)
        and isinstance(status, str)
        and status in TaskStatus.values()
    )


def as_task_list(value: Any) -> List[Task]:
    """Keep only valid task records; invalid ones are dropped, not defaulted."""
    if not isinstance(value, (list, tuple)):
        return []
    tasks = []
    for record in value:
        if not is_task_record(record):
            continue
        task_id = record.get("id")
        area = record.get("area")
        tasks.append(Task(
            id=task_id if isinstance(task_id, str) and task_id else new_id(),
            title=record["title"],
            status=TaskStatus(record["status"]),
            area=area if isinstance(area, str) else None,
        ))
    return tasks


def map_document_to_project(key: Any, data: Any, today: Optional[date] = None) -> Project:
    """
    Map a stored document to a Project.

    Args:
        key: The store's own record key, used when the document has no id
        data: The stored fields, of any shape
        today: Fallback deadline (defaults to the current date)
    """
    if not isinstance(data, Mapping):
        data = {}

    doc_id = data.get("id")
    deadline = as_date(data.get("deadline")) or today or date.today()
    start_date = as_date(data.get("startDate")) or default_start_from_deadline(deadline)

    return Project(
        id=doc_id if isinstance(doc_id, str) and doc_id else str(key),
        name=as_string(data.get("name")),
        description=as_string(data.get("description")),
        functional_areas=as_string_list(data.get("functionalAreas")),
        start_date=start_date,
        deadline=deadline,
        tasks=as_task_list(data.get("tasks")),
        archived=bool(data.get("archived")),
    )
