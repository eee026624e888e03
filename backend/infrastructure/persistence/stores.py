"""
Project document store backends.

DjangoDocumentStore keeps documents in the `projects` table through the
ORM; InMemoryDocumentStore keeps them in a process-local dict and is used
in development and tests. Both merge partial writes into the existing
document and return documents ordered by (created_at, key).
"""

import copy
import logging
from functools import lru_cache
from typing import Any, Dict, List

from channels.db import database_sync_to_async
from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone
from django.utils.module_loading import import_string

from domain.project.repositories import ProjectDocumentStore, StoredDocument
from domain.shared.exceptions import PersistenceException

from .broadcast import broadcast_projects_changed
from .models import ProjectDocument

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT_STORE = 'infrastructure.persistence.stores.DjangoDocumentStore'


def _to_stored(document: ProjectDocument) -> StoredDocument:
    return StoredDocument(
        key=document.key,
        data=document.data if isinstance(document.data, dict) else {},
        created_at=document.created_at,
        updated_at=document.updated_at,
    )


class DjangoDocumentStore(ProjectDocumentStore):
    """
    ORM-backed store.

    Change notifications are sent by the model's post_save/post_delete
    receivers once the transaction commits.
    """

    async def fetch_all(self) -> List[StoredDocument]:
        return await database_sync_to_async(self._fetch_all)()

    async def upsert(self, key: str, fields: Dict[str, Any]) -> StoredDocument:
        return await database_sync_to_async(self._upsert)(key, fields)

    async def delete(self, key: str) -> bool:
        return await database_sync_to_async(self._delete)(key)

    def _fetch_all(self) -> List[StoredDocument]:
        try:
            return [_to_stored(d) for d in ProjectDocument.objects.order_by('created_at', 'key')]
        except DatabaseError as e:
            raise PersistenceException('fetch', self.collection, str(e))

    def _upsert(self, key: str, fields: Dict[str, Any]) -> StoredDocument:
        try:
            with transaction.atomic():
                document, created = (
                    ProjectDocument.objects
                    .select_for_update()
                    .get_or_create(key=key, defaults={'data': dict(fields)})
                )
                if not created:
                    data = document.data if isinstance(document.data, dict) else {}
                    data.update(fields)
                    document.data = data
                    document.save(update_fields=['data', 'updated_at'])
        except DatabaseError as e:
            raise PersistenceException('upsert', key, str(e))

        logger.debug("%s project document %s", 'Created' if created else 'Updated', key)
        return _to_stored(document)

    def _delete(self, key: str) -> bool:
        try:
            document = ProjectDocument.objects.filter(key=key).first()
            if document is None:
                return False
            document.delete()
        except DatabaseError as e:
            raise PersistenceException('delete', key, str(e))

        logger.debug("Deleted project document %s", key)
        return True


class InMemoryDocumentStore(ProjectDocumentStore):
    """Process-local store; documents are copied on the way in and out."""

    def __init__(self):
        self._documents: Dict[str, StoredDocument] = {}

    async def fetch_all(self) -> List[StoredDocument]:
        ordered = sorted(self._documents.values(), key=lambda d: (d.created_at, d.key))
        return [copy.deepcopy(d) for d in ordered]

    async def upsert(self, key: str, fields: Dict[str, Any]) -> StoredDocument:
        now = timezone.now()
        existing = self._documents.get(key)
        if existing is None:
            document = StoredDocument(key=key, data=copy.deepcopy(dict(fields)), created_at=now, updated_at=now)
            action = 'created'
        else:
            data = copy.deepcopy(existing.data)
            data.update(copy.deepcopy(dict(fields)))
            document = StoredDocument(key=key, data=data, created_at=existing.created_at, updated_at=now)
            action = 'updated'
        self._documents[key] = document

        await broadcast_projects_changed(key, action)
        return copy.deepcopy(document)

    async def delete(self, key: str) -> bool:
        if self._documents.pop(key, None) is None:
            return False
        await broadcast_projects_changed(key, 'deleted')
        return True

    def clear(self) -> None:
        self._documents.clear()


@lru_cache(maxsize=None)
def _load_store(path: str) -> ProjectDocumentStore:
    store_class = import_string(path)
    logger.info("Using project document store %s", path)
    return store_class()


def get_document_store() -> ProjectDocumentStore:
    """The store configured by PROJECT_DOCUMENT_STORE (one per backend path)."""
    return _load_store(getattr(settings, 'PROJECT_DOCUMENT_STORE', DEFAULT_DOCUMENT_STORE))


reset_document_stores = _load_store.cache_clear
