"""
Project ORM Models.

The "projects" document collection: one JSON document per project key.
The document body is schema-less; it is validated when read, by the
record mapper, never when written.
"""

from django.db import models

from .base import TimeStampedMixin


class ProjectDocument(TimeStampedMixin):
    """
    A stored project document.

    `key` is the project id. `data` holds the document fields exactly as
    written (camelCase keys, ISO dates).
    """

    key = models.CharField(
        primary_key=True,
        max_length=128,
        verbose_name="Key"
    )
    data = models.JSONField(
        default=dict,
        blank=True,
        verbose_name="Document"
    )

    class Meta:
        db_table = 'projects'
        verbose_name = "Project document"
        verbose_name_plural = "Project documents"
        ordering = ['created_at', 'key']

    def __str__(self):
        name = self.data.get('name') if isinstance(self.data, dict) else None
        return f"{self.key} ({name})" if name else self.key
