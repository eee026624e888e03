"""
Project Domain - Repository Interfaces.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class StoredDocument:
    """A raw document as kept by the store, before mapping."""

    key: str
    data: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProjectDocumentStore(ABC):
    """
    Interface to the "projects" document collection.

    Documents are keyed by project id. The store manages creation and
    update timestamps and returns documents in a stable order.
    """

    collection = "projects"

    @abstractmethod
    async def fetch_all(self) -> List[StoredDocument]:
        """Get every document, ordered by creation time then key."""
        pass

    @abstractmethod
    async def upsert(self, key: str, fields: Dict[str, Any]) -> StoredDocument:
        """Create or merge a document. Fields not given are preserved."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a document. Returns False if it did not exist."""
        pass
