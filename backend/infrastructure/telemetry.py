"""
Error-tracking initialization.

Called once when the ASGI/WSGI application is built. Telemetry must
never keep the service from starting, so every failure is ignored.
"""

import logging

logger = logging.getLogger(__name__)


def init_telemetry(dsn=None) -> bool:
    """
    Initialize Sentry if a DSN is configured.

    Returns True when the SDK was initialized.
    """
    try:
        from django.conf import settings

        dsn = dsn if dsn is not None else getattr(settings, 'SENTRY_DSN', '')
        if not dsn:
            return False

        import sentry_sdk
        from sentry_sdk.integrations.django import DjangoIntegration

        sentry_sdk.init(
            dsn=dsn,
            integrations=[DjangoIntegration()],
            traces_sample_rate=getattr(settings, 'SENTRY_TRACES_SAMPLE_RATE', 0.0),
            send_default_pii=False,
        )
        return True
    except Exception:
        logger.debug("Telemetry initialization skipped", exc_info=True)
        return False
