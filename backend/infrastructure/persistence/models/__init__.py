"""
Persistence Models Package.

All Django ORM models for the project tracker.
"""

# Base mixins
from .base import TimeStampedMixin

# Project documents
from .project import ProjectDocument

__all__ = [
    'TimeStampedMixin',
    'ProjectDocument',
]
