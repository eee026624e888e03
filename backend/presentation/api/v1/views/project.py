"""
Project Views.

CRUD over the projects collection plus archive toggling and task status
changes. Failed deletes, archive toggles and task status writes are
logged and absorbed by the controller; a failed create/update answers
503.
"""

from asgiref.sync import async_to_sync
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from domain.project.aggregates import build_project
from domain.shared.exceptions import PersistenceException

from ..serializers import (
    ProjectSerializer,
    ProjectWriteSerializer,
    TaskStatusSerializer,
)
from .base import ControllerViewMixin


class ProjectViewSet(ControllerViewMixin, viewsets.ViewSet):
    """
    ViewSet for projects.

    Endpoints:
    - GET    /projects/?tab=&q=&show_archived=  - Filtered list
    - POST   /projects/                          - Create
    - GET    /projects/{id}/                     - Detail
    - PUT    /projects/{id}/                     - Replace
    - PATCH  /projects/{id}/                     - Partial update
    - DELETE /projects/{id}/                     - Delete
    - POST   /projects/{id}/toggle-archive/      - Archive / unarchive
    - POST   /projects/{id}/tasks/{task_id}/status/ - Change task status
    """

    permission_classes = [AllowAny]
    lookup_value_regex = '[^/]+'

    def list(self, request):
        controller = self.get_controller()
        controller.set_tab(request.query_params.get('tab') or 'all')
        controller.set_query(request.query_params.get('q', ''))
        controller.set_show_archived(self.bool_param('show_archived'))

        projects = controller.visible_projects()
        serializer = ProjectSerializer(
            projects, many=True, context=self.serializer_context(controller)
        )
        return Response({
            'count': len(projects),
            'total': len(controller.state.projects),
            'results': serializer.data,
        })

    def retrieve(self, request, pk=None):
        controller = self.get_controller()
        project = controller.get_project(pk)
        return Response(
            ProjectSerializer(project, context=self.serializer_context(controller)).data
        )

    def create(self, request):
        controller = self.get_controller()
        serializer = ProjectWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        draft = build_project(today=controller.now().date(), **serializer.to_fields())
        project = self._save(controller, draft)
        return Response(
            ProjectSerializer(project, context=self.serializer_context(controller)).data,
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, pk=None, partial=False):
        controller = self.get_controller()
        existing = controller.get_project(pk)
        serializer = ProjectWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        fields = {
            'name': existing.name,
            'description': existing.description,
            'functional_areas': existing.functional_areas,
            'start_date': existing.start_date,
            'deadline': existing.deadline,
            'tasks': existing.tasks,
            'archived': existing.archived,
        }
        fields.update(serializer.to_fields())

        draft = build_project(id=existing.id, today=controller.now().date(), **fields)
        project = self._save(controller, draft)
        return Response(
            ProjectSerializer(project, context=self.serializer_context(controller)).data
        )

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        controller = self.get_controller()
        controller.get_project(pk)
        async_to_sync(controller.delete_project)(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'], url_path='toggle-archive')
    def toggle_archive(self, request, pk=None):
        controller = self.get_controller()
        project = async_to_sync(controller.toggle_archive)(pk)
        return Response(
            ProjectSerializer(project, context=self.serializer_context(controller)).data
        )

    @action(detail=True, methods=['post'], url_path=r'tasks/(?P<task_id>[^/]+)/status')
    def task_status(self, request, pk=None, task_id=None):
        controller = self.get_controller()
        serializer = TaskStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = async_to_sync(controller.set_task_status)(
            pk, task_id, serializer.validated_data['status']
        )
        return Response(
            ProjectSerializer(project, context=self.serializer_context(controller)).data
        )

    def _save(self, controller, draft):
        project = async_to_sync(controller.upsert)(draft)
        if project is None:
            reason = controller.state.notices[-1] if controller.state.notices else None
            raise PersistenceException('save', draft.id, reason)
        return project
