"""
Serializers Package.

All API serializers for the project dashboard.
"""

from .project import (
    TaskSerializer,
    TaskWriteSerializer,
    TaskStatusSerializer,
    ProjectSerializer,
    ProjectWriteSerializer,
)

from .dashboard import (
    CARD_LIMIT,
    StatsSerializer,
    CalendarDaySerializer,
    TimelineRowSerializer,
    EditDialogSerializer,
    calendar_payload,
    progress_payload,
    timeline_payload,
    view_payload,
)
