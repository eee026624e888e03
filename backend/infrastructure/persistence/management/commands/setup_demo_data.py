"""\
Setup Demo Data Command.

Purpose:
- Optionally remove every existing project document (--clear).
- Seed a handful of demo projects with deadlines spread around today,
  so that every dashboard tab and urgency colour has something to show.

Documents go through the configured project document store, so live
dashboards are notified as they are written.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Tuple

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from domain.project.aggregates import build_project
from domain.project.entities import Task
from domain.shared.value_objects import TaskStatus
from infrastructure.persistence.stores import get_document_store


@dataclass(frozen=True)
class DemoProject:
    name: str
    description: str
    areas: Tuple[str, ...]
    deadline_in_days: int
    duration_days: int
    tasks: Tuple[Tuple[str, str, TaskStatus], ...]
    archived: bool = False


DEMO_PROJECTS = (
    DemoProject(
        name='Website Redesign',
        description='New landing page and pricing section',
        areas=('Frontend', 'Design'),
        deadline_in_days=5,
        duration_days=45,
        tasks=(
            ('Wireframes', 'Design', TaskStatus.DONE),
            ('Landing page', 'Frontend', TaskStatus.ONGOING),
            ('Pricing table', 'Frontend', TaskStatus.TODO),
        ),
    ),
    DemoProject(
        name='Billing Migration',
        description='Move invoices to the new payment provider',
        areas=('Backend', 'Finance'),
        deadline_in_days=-3,
        duration_days=60,
        tasks=(
            ('Export invoices', 'Backend', TaskStatus.DONE),
            ('Reconcile balances', 'Finance', TaskStatus.ONGOING),
        ),
    ),
    DemoProject(
        name='Mobile App Beta',
        description='Closed beta for the companion app',
        areas=('Mobile', 'QA'),
        deadline_in_days=40,
        duration_days=90,
        tasks=(
            ('Crash reporting', 'Mobile', TaskStatus.DONE),
            ('Beta feedback form', 'Mobile', TaskStatus.TODO),
            ('Regression pass', 'QA', TaskStatus.TODO),
            ('Store listing', None, TaskStatus.TODO),
        ),
    ),
    DemoProject(
        name='Data Warehouse',
        description='Nightly exports for reporting',
        areas=('Data',),
        deadline_in_days=0,
        duration_days=30,
        tasks=(
            ('Schema draft', 'Data', TaskStatus.DONE),
            ('Nightly job', 'Data', TaskStatus.DONE),
        ),
    ),
    DemoProject(
        name='Office Move',
        description='Relocation to the new floor',
        areas=('Operations',),
        deadline_in_days=-45,
        duration_days=20,
        tasks=(('Pack equipment', 'Operations', TaskStatus.DONE),),
        archived=True,
    ),
)


class Command(BaseCommand):
    help = 'Seed demo projects into the project document store'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Remove existing project documents before seeding'
        )

    def handle(self, *args, **options):
        store = get_document_store()

        if options.get('clear'):
            self.stdout.write('Clearing project documents...')
            removed = async_to_sync(self._clear)(store)
            self.stdout.write(self.style.SUCCESS(f'Removed {removed} project document(s).'))

        self.stdout.write('Seeding demo projects...')
        created = async_to_sync(self._seed)(store)
        self.stdout.write(self.style.SUCCESS(f'Seeded {created} demo project(s).'))

    async def _clear(self, store) -> int:
        removed = 0
        for document in await store.fetch_all():
            if await store.delete(document.key):
                removed += 1
        return removed

    async def _seed(self, store) -> int:
        today = date.today()
        for demo in DEMO_PROJECTS:
            deadline = today + timedelta(days=demo.deadline_in_days)
            project = build_project(
                name=demo.name,
                description=demo.description,
                functional_areas=demo.areas,
                start_date=deadline - timedelta(days=demo.duration_days),
                deadline=deadline,
                tasks=[Task(title=title, area=area, status=status) for title, area, status in demo.tasks],
                archived=demo.archived,
                today=today,
            )
            await store.upsert(project.id, project.to_document())
        return len(DEMO_PROJECTS)
