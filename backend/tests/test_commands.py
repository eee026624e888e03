from io import StringIO

from asgiref.sync import async_to_sync
from django.core.management import call_command
from django.test import SimpleTestCase

from infrastructure.persistence.management.commands.setup_demo_data import DEMO_PROJECTS
from infrastructure.persistence.stores import get_document_store, reset_document_stores


class SetupDemoDataTests(SimpleTestCase):

    def setUp(self):
        reset_document_stores()
        self.store = get_document_store()

    def tearDown(self):
        reset_document_stores()

    def count(self):
        return len(async_to_sync(self.store.fetch_all)())

    def test_seeds_and_clears(self):
        out = StringIO()
        call_command('setup_demo_data', stdout=out)
        self.assertEqual(self.count(), len(DEMO_PROJECTS))
        self.assertIn('Seeded', out.getvalue())

        call_command('setup_demo_data', stdout=StringIO())
        self.assertEqual(self.count(), 2 * len(DEMO_PROJECTS))

        call_command('setup_demo_data', '--clear', stdout=StringIO())
        self.assertEqual(self.count(), len(DEMO_PROJECTS))

    def test_demo_documents_are_well_formed(self):
        call_command('setup_demo_data', stdout=StringIO())
        documents = async_to_sync(self.store.fetch_all)()
        names = {d.data['name'] for d in documents}
        self.assertEqual(names, {spec.name for spec in DEMO_PROJECTS})
        self.assertTrue(any(d.data['archived'] for d in documents))
