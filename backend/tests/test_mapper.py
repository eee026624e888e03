from datetime import date

from django.test import SimpleTestCase

from domain.project.mapper import map_document_to_project
from domain.shared.value_objects import TaskStatus

from .factories import TODAY, make_project

TASK_ID = 't-1'


class MapperDefaultsTests(SimpleTestCase):

    def test_empty_document(self):
        project = map_document_to_project('doc-1', {}, today=TODAY)

        self.assertEqual(project.id, 'doc-1')
        self.assertEqual(project.name, '')
        self.assertEqual(project.description, '')
        self.assertEqual(project.functional_areas, [])
        self.assertEqual(project.deadline, TODAY)
        self.assertEqual(project.start_date, date(2025, 7, 6))
        self.assertEqual(project.tasks, [])
        self.assertFalse(project.archived)

    def test_never_raises(self):
        inputs = [
            None,
            [],
            'text',
            42,
            {'tasks': 'not a list', 'functionalAreas': 'x', 'deadline': 12},
            {'name': None, 'description': 3, 'startDate': 'garbage', 'deadline': 'garbage'},
            {'tasks': [None, 1, 'a', [], {}], 'functionalAreas': [None, '', 'Ops', 7]},
            {'id': 5, 'archived': 'yes'},
        ]
        for data in inputs:
            project = map_document_to_project('key', data, today=TODAY)
            self.assertIsInstance(project.id, str)
            self.assertIsInstance(project.name, str)
            self.assertIsInstance(project.deadline, date)
            self.assertIsInstance(project.start_date, date)
            self.assertIsInstance(project.tasks, list)
            self.assertIsInstance(project.archived, bool)

    def test_document_id_wins_over_key(self):
        self.assertEqual(map_document_to_project('key', {'id': 'p-1'}).id, 'p-1')
        self.assertEqual(map_document_to_project('key', {'id': 5}).id, 'key')
        self.assertEqual(map_document_to_project('key', {'id': ''}).id, 'key')

    def test_start_defaults_from_stored_deadline(self):
        project = map_document_to_project('key', {'deadline': '2025-08-31'}, today=TODAY)
        self.assertEqual(project.deadline, date(2025, 8, 31))
        self.assertEqual(project.start_date, date(2025, 8, 1))

    def test_areas_are_coerced_to_strings(self):
        project = map_document_to_project('key', {'functionalAreas': ['Ops', None, '', 7]})
        self.assertEqual(project.functional_areas, ['Ops', '7'])


class MapperTaskTests(SimpleTestCase):

    def test_invalid_tasks_are_dropped(self):
        data = {'tasks': [
            {'id': TASK_ID, 'title': 'Valid', 'status': 'ongoing', 'area': 'Ops'},
            {'title': 1, 'status': 'done'},
            {'title': 'Bad status', 'status': 'blocked'},
            {'title': 'Unhashable status', 'status': ['done']},
            {'status': 'done'},
            None,
        ]}
        tasks = map_document_to_project('key', data).tasks

        self.assertEqual(len(tasks), 1)
        self.assertEqual(tasks[0].id, TASK_ID)
        self.assertEqual(tasks[0].status, TaskStatus.ONGOING)
        self.assertEqual(tasks[0].area, 'Ops')

    def test_missing_task_id_is_generated(self):
        task = map_document_to_project('key', {'tasks': [{'title': '', 'status': 'todo'}]}).tasks[0]
        self.assertTrue(task.id)
        self.assertIsNone(task.area)


class MapperIdempotenceTests(SimpleTestCase):

    def test_well_formed_project_round_trips(self):
        project = make_project(
            'Website',
            description='Landing page',
            functional_areas=['Frontend', 'Design'],
            statuses=['done', 'ongoing', 'todo'],
            archived=True,
        )
        project.tasks[0].area = 'Design'

        mapped = map_document_to_project('other-key', project.to_document())
        self.assertEqual(mapped, project)
        self.assertEqual(map_document_to_project('k', mapped.to_document()), mapped)
