"""
WebSocket Routing.

URL routing for WebSocket connections.
"""

from django.urls import re_path
from . import consumers

websocket_urlpatterns = [
    # Dashboard view and actions
    re_path(
        r'ws/dashboard/$',
        consumers.DashboardConsumer.as_asgi()
    ),
]
