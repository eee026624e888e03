"""
Dashboard Serializers.

Counters, calendar, month progress and timeline payloads, plus the full
view payload pushed to live dashboards.
"""

from rest_framework import serializers

from domain.dashboard.dates import month_label
from domain.dashboard.labels import INDONESIAN

from .project import ProjectSerializer, TaskSerializer

# Progress and timeline cards show at most this many projects.
CARD_LIMIT = 6


class StatsSerializer(serializers.Serializer):
    active = serializers.IntegerField()
    ongoingTasks = serializers.IntegerField(source='ongoing_tasks')
    dueThisWeek = serializers.IntegerField(source='due_this_week')
    overdue = serializers.IntegerField()


class CalendarDaySerializer(serializers.Serializer):
    date = serializers.DateField(source='day')
    day = serializers.SerializerMethodField()
    inMonth = serializers.BooleanField(source='in_month')
    deadlineCount = serializers.IntegerField(source='deadline_count')
    urgency = serializers.SerializerMethodField()
    urgencyColor = serializers.SerializerMethodField()
    isToday = serializers.BooleanField(source='is_today')

    def get_day(self, obj):
        return obj.day.day

    def get_urgency(self, obj):
        return obj.urgency.value if obj.urgency else None

    def get_urgencyColor(self, obj):
        return obj.urgency.color if obj.urgency else None


class TimelineRowSerializer(serializers.Serializer):
    project = ProjectSerializer()
    months = serializers.ListField(child=serializers.BooleanField())


class ProjectFormSerializer(serializers.Serializer):
    name = serializers.CharField()
    description = serializers.CharField()
    functionalAreas = serializers.ListField(source='functional_areas', child=serializers.CharField())
    startDate = serializers.CharField(source='start_date')
    deadline = serializers.CharField()
    tasks = TaskSerializer(many=True)
    archived = serializers.BooleanField()


class EditDialogSerializer(serializers.Serializer):
    isOpen = serializers.BooleanField(source='is_open')
    editingId = serializers.CharField(source='editing_id', allow_null=True)
    areasText = serializers.CharField(source='areas_text')
    form = ProjectFormSerializer()


def cursor_payload(cursor, strings=INDONESIAN):
    return {
        'year': cursor.year,
        'month': cursor.month,
        'label': month_label(cursor, strings),
    }


def calendar_payload(weeks, cursor, strings=INDONESIAN):
    return {
        **cursor_payload(cursor, strings),
        'weekdays': list(strings.weekday_abbreviations),
        'weeks': [CalendarDaySerializer(week, many=True).data for week in weeks],
    }


def progress_payload(projects, average, cursor, context, limit=CARD_LIMIT):
    return {
        **cursor_payload(cursor, context['strings']),
        'averageProgress': average,
        'count': len(projects),
        'projects': ProjectSerializer(projects[:limit], many=True, context=context).data,
    }


def timeline_payload(rows, year, context, limit=CARD_LIMIT):
    return {
        'year': year,
        'months': list(context['strings'].month_abbreviations),
        'count': len(rows),
        'rows': TimelineRowSerializer(rows[:limit], many=True, context=context).data,
    }


def view_payload(controller):
    """Everything a mounted dashboard renders, derived from its controller."""
    state = controller.state
    strings = controller.strings
    context = {'now': controller.now(), 'strings': strings}
    month_projects, average = controller.month_progress()

    return {
        'status': state.status.value,
        'projects': ProjectSerializer(controller.visible_projects(), many=True, context=context).data,
        'stats': StatsSerializer(controller.stats()).data,
        'filters': {
            'query': state.query,
            'tab': state.tab.value,
            'showArchived': state.show_archived,
        },
        'cursor': cursor_payload(state.cursor, strings),
        'dialog': EditDialogSerializer(state.dialog).data,
        'notices': list(state.notices),
        'calendar': calendar_payload(controller.calendar(), state.cursor, strings),
        'progress': progress_payload(month_projects, average, state.cursor, context),
        'timeline': timeline_payload(controller.timeline(), state.cursor.year, context),
    }
