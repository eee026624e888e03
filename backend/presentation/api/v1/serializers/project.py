"""
Project Serializers.

Projects are plain domain objects, not model instances, so these are
non-model serializers. Field names follow the stored document shape
(camelCase). Output serializers expect `now` and `strings` in their
context for the computed deadline fields.
"""

from datetime import datetime

from rest_framework import serializers

from domain.dashboard.dates import format_date, pretty_days_left, urgency_band
from domain.dashboard.labels import INDONESIAN
from domain.dashboard.stats import project_progress
from domain.project.entities import Task
from domain.shared.value_objects import TaskStatus

TASK_STATUS_CHOICES = sorted(TaskStatus.values())


class TaskSerializer(serializers.Serializer):
    """Task representation."""

    id = serializers.CharField(read_only=True)
    title = serializers.CharField(read_only=True)
    status = serializers.CharField(source='status.value', read_only=True)
    area = serializers.CharField(read_only=True, allow_null=True)
    displayTitle = serializers.SerializerMethodField()

    def get_displayTitle(self, obj):
        strings = self.context.get('strings') or INDONESIAN
        return obj.title or strings.untitled_task


class TaskWriteSerializer(serializers.Serializer):
    """Task row as submitted from the edit form."""

    id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    title = serializers.CharField(required=False, allow_blank=True, default='')
    status = serializers.ChoiceField(choices=TASK_STATUS_CHOICES, default=TaskStatus.TODO.value)
    area = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)

    def to_task(self, data) -> Task:
        return Task(
            id=data.get('id') or '',
            title=data.get('title') or '',
            status=TaskStatus(data.get('status') or TaskStatus.TODO),
            area=data.get('area'),
        )


class ProjectSerializer(serializers.Serializer):
    """
    Project representation with computed progress and deadline fields.
    """

    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    functionalAreas = serializers.ListField(
        source='functional_areas', child=serializers.CharField(), read_only=True
    )
    startDate = serializers.DateField(source='span.start', read_only=True)
    deadline = serializers.DateField(read_only=True)
    tasks = TaskSerializer(many=True, read_only=True)
    archived = serializers.BooleanField(read_only=True)

    progress = serializers.SerializerMethodField()
    doneCount = serializers.IntegerField(source='done_count', read_only=True)
    taskCount = serializers.IntegerField(source='task_count', read_only=True)
    daysLeft = serializers.SerializerMethodField()
    urgency = serializers.SerializerMethodField()
    urgencyColor = serializers.SerializerMethodField()
    daysLeftLabel = serializers.SerializerMethodField()
    deadlineLabel = serializers.SerializerMethodField()
    tasksLabel = serializers.SerializerMethodField()

    def _now(self):
        return self.context.get('now') or datetime.now()

    def _strings(self):
        return self.context.get('strings') or INDONESIAN

    def get_progress(self, obj):
        return project_progress(obj)

    def get_daysLeft(self, obj):
        return obj.days_until_deadline(self._now())

    def get_urgency(self, obj):
        return urgency_band(self.get_daysLeft(obj)).value

    def get_urgencyColor(self, obj):
        return urgency_band(self.get_daysLeft(obj)).color

    def get_daysLeftLabel(self, obj):
        return pretty_days_left(self.get_daysLeft(obj), self._strings())

    def get_deadlineLabel(self, obj):
        return format_date(obj.deadline, self._strings())

    def get_tasksLabel(self, obj):
        return self._strings().tasks_done.format(done=obj.done_count, total=obj.task_count)


class ProjectWriteSerializer(serializers.Serializer):
    """
    Create/update payload.

    Dates are accepted as raw `yyyy-mm-dd` strings; blanks fall back to
    the write-time defaults and unparseable values are rejected when the
    project is built.
    """

    name = serializers.CharField(required=False, allow_blank=True, default='')
    description = serializers.CharField(required=False, allow_blank=True, default='')
    functionalAreas = serializers.ListField(
        source='functional_areas',
        child=serializers.CharField(allow_blank=True),
        required=False,
        default=list,
    )
    startDate = serializers.CharField(source='start_date', required=False, allow_blank=True, allow_null=True)
    deadline = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    tasks = TaskWriteSerializer(many=True, required=False, default=list)
    archived = serializers.BooleanField(required=False, default=False)

    def to_fields(self) -> dict:
        """Validated data as keyword arguments for build_project()."""
        data = dict(self.validated_data)
        if 'tasks' in data:
            data['tasks'] = [TaskWriteSerializer().to_task(t) for t in data['tasks']]
        return data


class TaskStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TASK_STATUS_CHOICES)
