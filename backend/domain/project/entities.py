"""
Project Domain - Entities.

Tasks live inside a project and have no identity outside of it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from uuid import uuid4

from domain.shared.value_objects import TaskStatus


def new_id() -> str:
    """Generate an opaque identifier for a project or task."""
    return str(uuid4())


@dataclass
class Task:
    """
    A sub-item of a project with a tri-state status.

    Created with a generated id when added to a project's task list and
    destroyed together with its parent project.
    """

    title: str = ""
    status: TaskStatus = TaskStatus.TODO
    area: Optional[str] = None
    id: str = field(default_factory=new_id)

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE

    @property
    def is_ongoing(self) -> bool:
        return self.status == TaskStatus.ONGOING

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the stored document shape."""
        document: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
        }
        if self.area is not None:
            document["area"] = self.area
        return document
