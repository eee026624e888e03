"""
Change notifications for the projects collection.

Every write or delete is announced to the "projects" channel-layer group
so that live dashboards can re-read the collection.
"""

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)

PROJECTS_GROUP = 'projects'
PROJECTS_CHANGED = 'projects.changed'


def _message(key: str, action: str) -> dict:
    return {'type': PROJECTS_CHANGED, 'key': key, 'action': action}


async def broadcast_projects_changed(key: str, action: str) -> None:
    """Announce a change from async code."""
    layer = get_channel_layer()
    if layer is None:
        return
    try:
        await layer.group_send(PROJECTS_GROUP, _message(key, action))
    except Exception:
        logger.warning("Could not broadcast %s of project %s", action, key, exc_info=True)


def send_projects_changed(key: str, action: str) -> None:
    """Announce a change from sync code (signal receivers, commands)."""
    layer = get_channel_layer()
    if layer is None:
        return
    try:
        async_to_sync(layer.group_send)(PROJECTS_GROUP, _message(key, action))
    except Exception:
        logger.warning("Could not broadcast %s of project %s", action, key, exc_info=True)
