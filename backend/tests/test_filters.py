from django.test import SimpleTestCase

from domain.dashboard.filters import filter_projects, matches_query
from domain.project.entities import Task
from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import DashboardTab

from .factories import NOW, make_project


class FilterTests(SimpleTestCase):

    def setUp(self):
        self.soon = make_project('Website redesign', deadline_in_days=3, statuses=['ongoing'],
                                 functional_areas=['Frontend'])
        self.late = make_project('Billing migration', deadline_in_days=-10, statuses=['todo'])
        self.later = make_project('Mobile beta', deadline_in_days=30, description='Closed beta')
        self.archived = make_project('Office move', deadline_in_days=-40, archived=True)
        self.projects = [self.soon, self.late, self.later, self.archived]

    def names(self, **kwargs):
        return [p.name for p in filter_projects(self.projects, now=NOW, **kwargs)]

    def test_tabs(self):
        self.assertEqual(self.names(), ['Website redesign', 'Billing migration', 'Mobile beta'])
        self.assertEqual(self.names(tab='ongoing'), ['Website redesign'])
        self.assertEqual(self.names(tab='week'), ['Website redesign'])
        self.assertEqual(self.names(tab=DashboardTab.OVERDUE), ['Billing migration'])

    def test_archived_hidden_unless_requested(self):
        self.assertNotIn('Office move', self.names())
        self.assertIn('Office move', self.names(show_archived=True))
        self.assertEqual(self.names(tab='overdue', show_archived=True), ['Billing migration', 'Office move'])

    def test_overdue_is_subset_of_all(self):
        for show_archived in (False, True):
            overdue = set(self.names(tab='overdue', show_archived=show_archived))
            everything = set(self.names(tab='all', show_archived=show_archived))
            self.assertLessEqual(overdue, everything)

    def test_search_never_enlarges(self):
        for tab in DashboardTab:
            base = set(self.names(tab=tab))
            for query in ('', '  ', 'beta', 'FRONT', 'zzz', 'task 1'):
                self.assertLessEqual(set(self.names(tab=tab, query=query)), base)

    def test_search_fields(self):
        self.assertEqual(self.names(query='closed'), ['Mobile beta'])
        self.assertEqual(self.names(query='frontend'), ['Website redesign'])
        self.assertEqual(self.names(query='BILLING'), ['Billing migration'])
        self.assertEqual(len(self.names(query='   ')), 3)

    def test_search_matches_task_titles(self):
        project = make_project('Plain')
        project.tasks.append(Task(title='Write release notes'))
        self.assertTrue(matches_query(project, 'release'))
        self.assertFalse(matches_query(project, 'deploy'))

    def test_unknown_tab(self):
        with self.assertRaises(ValidationException):
            filter_projects(self.projects, tab='someday', now=NOW)
