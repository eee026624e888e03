"""
Synchronization between the dashboard and the project document store.

Two disciplines exist and are not mixed:

- FetchOnceSync: the collection is read once when the dashboard mounts;
  from then on the in-memory list is the authority and writes are only
  sent outwards.
- LiveSubscriptionSync: the store stays authoritative. Every refresh
  re-reads the whole collection and pushes the snapshot to each
  subscriber, which replaces its state wholesale.
"""

from __future__ import annotations
import copy
import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Union

from domain.project.aggregates import Project
from domain.project.mapper import map_document_to_project
from domain.project.repositories import ProjectDocumentStore
from domain.shared.value_objects import SyncMode

logger = logging.getLogger(__name__)

SnapshotHandler = Callable[[List[Project]], None]


class Subscription:
    """Handle returned by subscribe(); close() stops further snapshots."""

    def __init__(self, on_close: Optional[Callable[[], None]] = None):
        self._on_close = on_close
        self.closed = False

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self._on_close:
            self._on_close()


class ProjectSync(ABC):
    """Loads, writes and deletes projects through a document store."""

    mode: SyncMode

    def __init__(self, store: ProjectDocumentStore):
        self.store = store

    async def load(self) -> List[Project]:
        """Fetch the whole collection and map every document."""
        documents = await self.store.fetch_all()
        return [map_document_to_project(d.key, d.data) for d in documents]

    async def save(self, project: Project) -> None:
        """Merge-upsert the whole project document."""
        await self.store.upsert(project.id, project.to_document())

    async def remove(self, project_id: str) -> None:
        await self.store.delete(project_id)

    @abstractmethod
    async def subscribe(self, handler: SnapshotHandler) -> Subscription:
        """
        Deliver the current snapshot to `handler`.

        Raises whatever the store raises if the initial load fails.
        """
        pass

    async def refresh(self) -> None:
        """React to a change notification from the store."""
        pass


class FetchOnceSync(ProjectSync):
    mode = SyncMode.FETCH_ONCE

    async def subscribe(self, handler: SnapshotHandler) -> Subscription:
        handler(await self.load())
        return Subscription()


class LiveSubscriptionSync(ProjectSync):
    mode = SyncMode.LIVE

    def __init__(self, store: ProjectDocumentStore):
        super().__init__(store)
        self._handlers: List[SnapshotHandler] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    async def subscribe(self, handler: SnapshotHandler) -> Subscription:
        snapshot = await self.load()
        self._handlers.append(handler)
        handler(snapshot)
        return Subscription(lambda: self._unsubscribe(handler))

    async def refresh(self) -> None:
        if not self._handlers:
            return
        try:
            snapshot = await self.load()
        except Exception:
            # Keep the last snapshot; the next notification retries.
            logger.exception("Could not refresh projects snapshot")
            return
        for handler in list(self._handlers):
            handler(copy.deepcopy(snapshot))

    def _unsubscribe(self, handler: SnapshotHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)


SYNC_CLASSES = {
    SyncMode.FETCH_ONCE: FetchOnceSync,
    SyncMode.LIVE: LiveSubscriptionSync,
}


def build_sync(store: ProjectDocumentStore, mode: Union[SyncMode, str] = SyncMode.LIVE) -> ProjectSync:
    """Create the sync layer for the configured discipline."""
    return SYNC_CLASSES[SyncMode(mode)](store)
