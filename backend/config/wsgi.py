"""
WSGI config for the project tracker (REST API only, no WebSockets).
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_wsgi_application()

from infrastructure.telemetry import init_telemetry  # noqa: E402

init_telemetry()
