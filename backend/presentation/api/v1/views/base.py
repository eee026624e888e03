"""
Base Views.

Every request mounts a short-lived dashboard controller over a
fetch-once sync: the collection is read once, the operation runs through
the controller and writes go straight to the document store.
"""

from asgiref.sync import async_to_sync
from django.conf import settings

from application.dashboard.controller import DashboardController
from application.dashboard.sync import FetchOnceSync
from domain.dashboard.labels import get_display_strings
from domain.shared.exceptions import ValidationException
from infrastructure.persistence.stores import get_document_store

TRUE_VALUES = {'1', 'true', 'yes', 'on'}


async def mount_controller() -> DashboardController:
    """
    Build a ready controller holding the current collection.

    Unlike a live dashboard, a request must not silently fall back to an
    empty list, so load errors propagate.
    """
    sync = FetchOnceSync(get_document_store())
    controller = DashboardController(
        sync,
        strings=get_display_strings(getattr(settings, 'DASHBOARD_LOCALE', 'id')),
    )
    controller.apply_snapshot(await sync.load())
    return controller


class ControllerViewMixin:
    """Helpers shared by views that work through a dashboard controller."""

    def get_controller(self) -> DashboardController:
        return async_to_sync(mount_controller)()

    def serializer_context(self, controller: DashboardController) -> dict:
        return {
            'request': self.request,
            'now': controller.now(),
            'strings': controller.strings,
        }

    def int_param(self, name: str, default=None):
        raw = self.request.query_params.get(name)
        if raw in (None, ''):
            return default
        try:
            return int(raw)
        except ValueError:
            raise ValidationException(f"'{name}' must be an integer", field=name, value=raw)

    def bool_param(self, name: str, default: bool = False) -> bool:
        raw = self.request.query_params.get(name)
        if raw is None:
            return default
        return raw.strip().lower() in TRUE_VALUES
