"""
WebSocket Consumers.

One DashboardConsumer per open dashboard. Each connection mounts its own
DashboardController; client actions are dispatched to it and the full
view is pushed back after every action and, in live mode, after every
change announced on the "projects" group.
"""

import logging

from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.conf import settings

from application.dashboard.controller import DashboardController
from application.dashboard.sync import build_sync
from domain.dashboard.labels import get_display_strings
from domain.shared.exceptions import DomainException, ValidationException
from domain.shared.value_objects import SyncMode
from infrastructure.persistence.broadcast import PROJECTS_GROUP
from infrastructure.persistence.stores import get_document_store
from presentation.api.v1.serializers import view_payload

logger = logging.getLogger(__name__)

# Client form keys -> edit buffer attributes.
FORM_KEYS = {
    'name': 'name',
    'description': 'description',
    'functionalAreas': 'functional_areas',
    'startDate': 'start_date',
    'deadline': 'deadline',
    'archived': 'archived',
}


def _require(content, key):
    if key not in content:
        raise ValidationException(f"'{key}' is required", field=key)
    return content[key]


class DashboardConsumer(AsyncJsonWebsocketConsumer):
    """
    WebSocket consumer for the project dashboard.

    Client messages are JSON objects with an "action" key, e.g.
    {"action": "set_tab", "tab": "overdue"}. Server messages:
    - {"type": "view", "data": {...}}  - full dashboard view
    - {"type": "error", ...}           - rejected action
    - {"type": "pong"}
    """

    controller = None
    joined_group = False

    async def connect(self):
        """Accept, mount a controller and push the first view."""
        await self.accept()

        sync = build_sync(get_document_store(), getattr(settings, 'PROJECT_SYNC_MODE', SyncMode.LIVE))
        self.controller = DashboardController(
            sync,
            strings=get_display_strings(getattr(settings, 'DASHBOARD_LOCALE', 'id')),
        )

        if sync.mode == SyncMode.LIVE and self.channel_layer is not None:
            await self.channel_layer.group_add(PROJECTS_GROUP, self.channel_name)
            self.joined_group = True

        await self.controller.start()
        await self.send_view()
        logger.info("Dashboard connected (%s, %s)", sync.mode.value, self.channel_name)

    async def disconnect(self, close_code):
        """Tear down the subscription and leave the projects group."""
        if self.controller is not None:
            self.controller.stop()
        if self.joined_group:
            await self.channel_layer.group_discard(PROJECTS_GROUP, self.channel_name)
            self.joined_group = False

    async def receive_json(self, content, **kwargs):
        """Handle incoming actions."""
        if not isinstance(content, dict):
            await self.send_error('INVALID_MESSAGE', 'Expected a JSON object')
            return

        action = content.get('action') or content.get('type')
        if action == 'ping':
            await self.send_json({'type': 'pong'})
            return

        handler = getattr(self, f'action_{action}', None) if isinstance(action, str) else None
        if handler is None:
            await self.send_error('UNKNOWN_ACTION', f"Unknown action '{action}'")
            return

        try:
            await handler(content)
        except DomainException as e:
            await self.send_error(e.code, e.message, e.details)
            return

        await self.send_view()

    # Event handlers (called by channel layer)

    async def projects_changed(self, event):
        """Re-read the collection after a change made anywhere."""
        await self.controller.refresh()
        await self.send_view()

    # Actions

    async def action_set_query(self, content):
        self.controller.set_query(content.get('query', ''))

    async def action_set_tab(self, content):
        self.controller.set_tab(_require(content, 'tab'))

    async def action_set_show_archived(self, content):
        self.controller.set_show_archived(bool(content.get('showArchived')))

    async def action_next_month(self, content):
        self.controller.next_month()

    async def action_previous_month(self, content):
        self.controller.previous_month()

    async def action_go_to_month(self, content):
        self.controller.go_to_month(_require(content, 'year'), _require(content, 'month'))

    async def action_open_create(self, content):
        self.controller.open_create()

    async def action_open_edit(self, content):
        self.controller.open_edit(_require(content, 'id'))

    async def action_close_dialog(self, content):
        self.controller.close_dialog()

    async def action_update_form(self, content):
        fields = _require(content, 'fields')
        if not isinstance(fields, dict):
            raise ValidationException("'fields' must be an object", field='fields')
        self.controller.update_form(**{FORM_KEYS.get(k, k): v for k, v in fields.items()})

    async def action_set_areas_text(self, content):
        self.controller.set_areas_text(content.get('text', ''))

    async def action_commit_areas_text(self, content):
        self.controller.commit_areas_text()

    async def action_add_task_row(self, content):
        self.controller.add_task_row()

    async def action_update_task_row(self, content):
        fields = _require(content, 'fields')
        if not isinstance(fields, dict):
            raise ValidationException("'fields' must be an object", field='fields')
        self.controller.update_task_row(_require(content, 'index'), **fields)

    async def action_remove_task_row(self, content):
        self.controller.remove_task_row(_require(content, 'index'))

    async def action_save_dialog(self, content):
        await self.controller.save_dialog()

    async def action_delete_project(self, content):
        await self.controller.delete_project(_require(content, 'id'))

    async def action_toggle_archive(self, content):
        await self.controller.toggle_archive(_require(content, 'id'))

    async def action_set_task_status(self, content):
        await self.controller.set_task_status(
            _require(content, 'id'),
            _require(content, 'taskId'),
            _require(content, 'status'),
        )

    async def action_dismiss_notices(self, content):
        self.controller.dismiss_notices()

    async def action_refresh(self, content):
        await self.controller.refresh()

    # Outgoing

    async def send_view(self):
        await self.send_json({'type': 'view', 'data': view_payload(self.controller)})

    async def send_error(self, code, message, details=None):
        await self.send_json({
            'type': 'error',
            'error': code,
            'message': message,
            'details': details or {},
        })
