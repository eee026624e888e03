"""
Dashboard Views.

Read-only aggregates over the whole collection: counters, the month
calendar, monthly progress and the yearly timeline.
"""

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from ..serializers import (
    CARD_LIMIT,
    StatsSerializer,
    calendar_payload,
    progress_payload,
    timeline_payload,
)
from .base import ControllerViewMixin


class DashboardViewSet(ControllerViewMixin, viewsets.ViewSet):
    """
    ViewSet for dashboard aggregates.

    Endpoints:
    - GET /dashboard/summary/                     - Counters
    - GET /dashboard/calendar/?year=&month=       - Month calendar
    - GET /dashboard/progress/?year=&month=&limit= - Projects due in the month
    - GET /dashboard/timeline/?year=&limit=       - Year timeline
    """

    permission_classes = [AllowAny]

    def _controller_for_month(self, default_month=None):
        controller = self.get_controller()
        cursor = controller.state.cursor
        year = self.int_param('year', cursor.year)
        month = self.int_param('month', default_month or cursor.month)
        controller.go_to_month(year, month)
        return controller

    @action(detail=False, methods=['get'])
    def summary(self, request):
        controller = self.get_controller()
        projects = controller.state.projects
        return Response({
            'stats': StatsSerializer(controller.stats()).data,
            'total': len(projects),
            'archived': sum(1 for p in projects if p.archived),
        })

    @action(detail=False, methods=['get'])
    def calendar(self, request):
        controller = self._controller_for_month()
        return Response(
            calendar_payload(controller.calendar(), controller.state.cursor, controller.strings)
        )

    @action(detail=False, methods=['get'])
    def progress(self, request):
        controller = self._controller_for_month()
        projects, average = controller.month_progress()
        return Response(progress_payload(
            projects,
            average,
            controller.state.cursor,
            self.serializer_context(controller),
            limit=self.int_param('limit', CARD_LIMIT),
        ))

    @action(detail=False, methods=['get'])
    def timeline(self, request):
        controller = self._controller_for_month(default_month=1)
        return Response(timeline_payload(
            controller.timeline(),
            controller.state.cursor.year,
            self.serializer_context(controller),
            limit=self.int_param('limit', CARD_LIMIT),
        ))
