"""
Base ORM Models and Mixins.

Provides common functionality for all models:
- Timestamps (created_at, updated_at) managed by the store
"""

from django.db import models


class TimeStampedMixin(models.Model):
    """Mixin for created_at and updated_at timestamps."""

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        verbose_name="Created at"
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name="Updated at"
    )

    class Meta:
        abstract = True
