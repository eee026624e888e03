from django.apps import AppConfig


class PersistenceConfig(AppConfig):
    name = 'infrastructure.persistence'
    label = 'persistence'
    verbose_name = "Project documents"
    default_auto_field = 'django.db.models.BigAutoField'

    def ready(self):
        # Connect change-notification receivers.
        from . import signals  # noqa: F401
