from datetime import date, timedelta

from asgiref.sync import async_to_sync
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APISimpleTestCase

from domain.project.entities import Task
from domain.shared.value_objects import TaskStatus
from infrastructure.persistence.stores import (
    InMemoryDocumentStore,
    get_document_store,
    reset_document_stores,
)

from .factories import make_project


def project(name, days, **kwargs):
    return make_project(name, deadline_in_days=days, today=date.today(), **kwargs)


class APITestCase(APISimpleTestCase):

    def setUp(self):
        reset_document_stores()
        self.store = get_document_store()

    def tearDown(self):
        reset_document_stores()

    def seed(self, *projects):
        for p in projects:
            async_to_sync(InMemoryDocumentStore.upsert)(self.store, p.id, p.to_document())
        return projects

    def stored(self):
        return {d.key: d.data for d in async_to_sync(self.store.fetch_all)()}


class ProjectListTests(APITestCase):

    def setUp(self):
        super().setUp()
        self.soon, self.late, self.archived = self.seed(
            project('Website', 3, statuses=['ongoing', 'done'], functional_areas=['Frontend']),
            project('Billing', -5, statuses=['todo']),
            project('Office move', -40, archived=True),
        )
        self.url = reverse('api_v1:project-list')

    def names(self, **params):
        response = self.client.get(self.url, params)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        return [p['name'] for p in response.json()['results']]

    def test_default_list_hides_archived(self):
        response = self.client.get(self.url)
        body = response.json()
        self.assertEqual(body['count'], 2)
        self.assertEqual(body['total'], 3)
        self.assertEqual([p['name'] for p in body['results']], ['Website', 'Billing'])

    def test_filters(self):
        self.assertEqual(self.names(tab='overdue'), ['Billing'])
        self.assertEqual(self.names(tab='week'), ['Website'])
        self.assertEqual(self.names(tab='ongoing'), ['Website'])
        self.assertEqual(self.names(q='FRONT'), ['Website'])
        self.assertEqual(self.names(show_archived='true', tab='overdue'), ['Billing', 'Office move'])

    def test_unknown_tab(self):
        response = self.client.get(self.url, {'tab': 'someday'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()['error'], 'VALIDATION_ERROR')

    def test_computed_fields(self):
        body = self.client.get(reverse('api_v1:project-detail', args=[self.soon.id])).json()

        self.assertEqual(body['progress'], 50)
        self.assertEqual(body['doneCount'], 1)
        self.assertEqual(body['taskCount'], 2)
        self.assertEqual(body['daysLeft'], 3)
        self.assertEqual(body['urgency'], 'due_soon')
        self.assertEqual(body['urgencyColor'], 'amber')
        self.assertEqual(body['daysLeftLabel'], '3 days left')
        self.assertEqual(body['tasksLabel'], '1/2 done')
        self.assertEqual(body['functionalAreas'], ['Frontend'])
        self.assertEqual(body['startDate'], (self.soon.deadline - timedelta(days=30)).isoformat())
        self.assertEqual(body['tasks'][0]['status'], 'ongoing')

    def test_overdue_label(self):
        body = self.client.get(reverse('api_v1:project-detail', args=[self.late.id])).json()
        self.assertEqual(body['daysLeft'], -5)
        self.assertEqual(body['urgencyColor'], 'red')
        self.assertEqual(body['daysLeftLabel'], 'overdue by 5 days')


class ProjectWriteTests(APITestCase):

    def test_create_with_defaults(self):
        response = self.client.post(reverse('api_v1:project-list'), {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        body = response.json()
        today = date.today()
        self.assertEqual(body['name'], 'Untitled')
        self.assertEqual(body['deadline'], today.isoformat())
        self.assertEqual(body['startDate'], (today - timedelta(days=30)).isoformat())
        self.assertEqual(body['daysLeftLabel'], 'due today')
        self.assertIn(body['id'], self.stored())

    def test_create_with_tasks(self):
        payload = {
            'name': 'Launch',
            'functionalAreas': ['Ops', ''],
            'deadline': (date.today() + timedelta(days=20)).isoformat(),
            'startDate': '',
            'tasks': [{'title': 'Plan', 'status': 'ongoing', 'area': 'Ops'}, {'title': ''}],
        }
        body = self.client.post(reverse('api_v1:project-list'), payload, format='json').json()

        self.assertEqual(body['functionalAreas'], ['Ops'])
        self.assertEqual([t['status'] for t in body['tasks']], ['ongoing', 'todo'])
        self.assertTrue(all(t['id'] for t in body['tasks']))
        self.assertEqual(body['tasks'][1]['displayTitle'], '(untitled)')
        self.assertEqual(self.stored()[body['id']]['tasks'][0]['area'], 'Ops')

    def test_invalid_date(self):
        response = self.client.post(reverse('api_v1:project-list'), {'deadline': '31/12/2025'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        body = response.json()
        self.assertEqual(body['error'], 'VALIDATION_ERROR')
        self.assertEqual(body['details']['field'], 'deadline')
        self.assertEqual(self.stored(), {})

    def test_invalid_task_status(self):
        payload = {'tasks': [{'title': 'x', 'status': 'blocked'}]}
        response = self.client.post(reverse('api_v1:project-list'), payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_missing_project(self):
        response = self.client.get(reverse('api_v1:project-detail', args=['missing']))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()['error'], 'ENTITY_NOT_FOUND')

    def test_patch_keeps_other_fields(self):
        (existing,) = self.seed(project('Before', 10, statuses=['todo', 'done'], description='Kept'))

        response = self.client.patch(
            reverse('api_v1:project-detail', args=[existing.id]), {'name': 'After'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        stored = self.stored()[existing.id]
        self.assertEqual(stored['name'], 'After')
        self.assertEqual(stored['description'], 'Kept')
        self.assertEqual([t['id'] for t in stored['tasks']], [t.id for t in existing.tasks])
        self.assertEqual(stored['deadline'], existing.deadline.isoformat())

    def test_put_replaces(self):
        (existing,) = self.seed(project('Before', 10, statuses=['todo']))
        deadline = (date.today() + timedelta(days=2)).isoformat()

        response = self.client.put(
            reverse('api_v1:project-detail', args=[existing.id]),
            {'name': 'Replaced', 'deadline': deadline},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        stored = self.stored()[existing.id]
        self.assertEqual(stored['tasks'], [])
        self.assertEqual(stored['deadline'], deadline)

    def test_delete(self):
        (existing,) = self.seed(project('Doomed', 1))
        url = reverse('api_v1:project-detail', args=[existing.id])

        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.stored(), {})

    def test_toggle_archive(self):
        (existing,) = self.seed(project('Archive me', 1))
        url = reverse('api_v1:project-toggle-archive', args=[existing.id])

        self.assertTrue(self.client.post(url).json()['archived'])
        self.assertTrue(self.stored()[existing.id]['archived'])
        self.assertFalse(self.client.post(url).json()['archived'])

    def test_task_status(self):
        existing = project('Tasks', 5)
        existing.tasks.append(Task(id='t-1', title='Only', status=TaskStatus.TODO))
        self.seed(existing)
        url = reverse('api_v1:project-task-status', args=[existing.id, 't-1'])

        body = self.client.post(url, {'status': 'done'}, format='json').json()
        self.assertEqual(body['progress'], 100)
        self.assertEqual(self.stored()[existing.id]['tasks'][0]['status'], 'done')

        self.assertEqual(
            self.client.post(url, {'status': 'blocked'}, format='json').status_code,
            status.HTTP_400_BAD_REQUEST,
        )
        missing = reverse('api_v1:project-task-status', args=[existing.id, 'nope'])
        self.assertEqual(
            self.client.post(missing, {'status': 'done'}, format='json').status_code,
            status.HTTP_404_NOT_FOUND,
        )


@override_settings(PROJECT_DOCUMENT_STORE='tests.factories.FailingDocumentStore')
class StoreFailureTests(APITestCase):

    def test_failed_create_is_unavailable(self):
        response = self.client.post(reverse('api_v1:project-list'), {'name': 'x'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        body = response.json()
        self.assertEqual(body['error'], 'PERSISTENCE_ERROR')
        self.assertIn('Could not save the project', body['detail'])

    def test_failed_archive_toggle_is_absorbed(self):
        (existing,) = self.seed(project('Local only', 3))
        response = self.client.post(reverse('api_v1:project-toggle-archive', args=[existing.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.json()['archived'])
        self.assertFalse(self.stored()[existing.id]['archived'])

    def test_delete_always_succeeds(self):
        (existing,) = self.seed(project('Stays', 3))
        response = self.client.delete(reverse('api_v1:project-detail', args=[existing.id]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)


@override_settings(PROJECT_DOCUMENT_STORE='tests.factories.OfflineDocumentStore')
class StoreOfflineTests(APITestCase):

    def test_list_is_unavailable(self):
        response = self.client.get(reverse('api_v1:project-list'))
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)


class DashboardTests(APITestCase):

    def test_summary(self):
        self.seed(
            project('Soon', 2, statuses=['ongoing']),
            project('Late', -3),
            project('Old', -30, statuses=['ongoing'], archived=True),
        )
        body = self.client.get(reverse('api_v1:dashboard-summary')).json()

        self.assertEqual(body['stats'], {'active': 2, 'ongoingTasks': 2, 'dueThisWeek': 1, 'overdue': 1})
        self.assertEqual(body['total'], 3)
        self.assertEqual(body['archived'], 1)

    def test_calendar(self):
        self.seed(
            make_project('a', deadline=date(2030, 5, 14), today=date.today()),
            make_project('b', deadline=date(2030, 5, 14), today=date.today()),
        )
        body = self.client.get(reverse('api_v1:dashboard-calendar'), {'year': 2030, 'month': 5}).json()

        self.assertEqual(body['label'], 'May 2030')
        self.assertEqual(body['weekdays'][0], 'Mon')
        self.assertEqual(len(body['weeks']), 6)
        cells = {c['date']: c for week in body['weeks'] for c in week}
        self.assertEqual(cells['2030-05-14']['deadlineCount'], 2)
        self.assertEqual(cells['2030-05-14']['urgencyColor'], 'green')
        self.assertIsNone(cells['2030-05-15']['urgency'])

    def test_calendar_rejects_bad_month(self):
        url = reverse('api_v1:dashboard-calendar')
        self.assertEqual(self.client.get(url, {'month': 13}).status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.client.get(url, {'year': 'soon'}).status_code, status.HTTP_400_BAD_REQUEST)

    def test_progress_and_timeline_limits(self):
        self.seed(*[
            make_project(f'P{day}', deadline=date(2030, 5, day), today=date.today(), statuses=['done'])
            for day in range(8, 0, -1)
        ])

        progress = self.client.get(reverse('api_v1:dashboard-progress'), {'year': 2030, 'month': 5}).json()
        self.assertEqual(progress['count'], 8)
        self.assertEqual(progress['averageProgress'], 100)
        self.assertEqual([p['name'] for p in progress['projects']], ['P1', 'P2', 'P3', 'P4', 'P5', 'P6'])

        limited = self.client.get(
            reverse('api_v1:dashboard-progress'), {'year': 2030, 'month': 5, 'limit': 2}
        ).json()
        self.assertEqual(len(limited['projects']), 2)

        timeline = self.client.get(reverse('api_v1:dashboard-timeline'), {'year': 2030}).json()
        self.assertEqual(timeline['count'], 8)
        self.assertEqual(len(timeline['rows']), 6)
        self.assertEqual(timeline['rows'][0]['months'][3:5], [True, True])

    def test_schema(self):
        self.assertEqual(self.client.get(reverse('schema')).status_code, status.HTTP_200_OK)
