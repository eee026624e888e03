"""
Signal receivers for project documents.

Notifications are sent only after the surrounding transaction commits.
"""

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .broadcast import send_projects_changed
from .models import ProjectDocument


@receiver(post_save, sender=ProjectDocument)
def project_document_saved(sender, instance, created, **kwargs):
    action = 'created' if created else 'updated'
    key = instance.key
    transaction.on_commit(lambda: send_projects_changed(key, action))


@receiver(post_delete, sender=ProjectDocument)
def project_document_deleted(sender, instance, **kwargs):
    key = instance.key
    transaction.on_commit(lambda: send_projects_changed(key, 'deleted'))
