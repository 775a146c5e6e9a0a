"""
Lead Views Tests
================

1. List View - lead_list_view (filters, search, pagination, create)
2. Detail View - lead_detail_view (read, partial update, hard delete)

Run tests:
    python manage.py test apps.leads.tests.test_views
"""

from apps.contacts.models import Contact
from apps.core.tests.helpers import AdminApiTestCase
from apps.leads.models import Lead


class LeadListViewTest(AdminApiTestCase):
    """Test lead list view with filters and search"""

    def setUp(self):
        super().setUp()
        self.login()

        self.ana = Contact.objects.create(name='Ana Torres', email='ana@example.com')
        self.luis = Contact.objects.create(name='Luis Gomez', email='luis@example.com')

        # Create test leads
        for i in range(11):
            Lead.objects.create(contact=self.ana, status='cold', value=100 + i)
        Lead.objects.create(contact=self.luis, status='hot')

    def test_first_page_has_ten_leads(self):
        response = self.client.get('/api/leads')

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(len(data['leads']), 10)
        self.assertEqual(data['pagination'], {'page': 1, 'page_size': 10, 'total': 12, 'total_pages': 2})

    def test_second_page(self):
        data = self.client.get('/api/leads', {'page': 2}).json()

        self.assertEqual(len(data['leads']), 2)

    def test_filter_by_status(self):
        data = self.client.get('/api/leads', {'status': 'hot'}).json()

        self.assertEqual(len(data['leads']), 1)
        self.assertEqual(data['leads'][0]['contact']['name'], 'Luis Gomez')

    def test_search_by_contact(self):
        data = self.client.get('/api/leads', {'search': 'luis@'}).json()

        self.assertEqual(data['pagination']['total'], 1)

    def test_value_is_a_number(self):
        data = self.client.get('/api/leads', {'status': 'cold'}).json()

        self.assertIsInstance(data['leads'][0]['value'], float)

    def test_create_lead_with_defaults(self):
        response = self.post_json('/api/leads', {'contact_id': self.luis.id, 'value': '2500.50'})

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data['status'], 'cold')
        self.assertEqual(data['priority'], 'medium')
        self.assertEqual(data['value'], 2500.5)
        self.assertIsNone(data['notes'])

    def test_create_requires_contact(self):
        response = self.post_json('/api/leads', {'status': 'hot'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], 'contact_id is required')

    def test_create_with_unknown_contact(self):
        response = self.post_json('/api/leads', {'contact_id': 99999})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], 'Contact not found')

    def test_create_with_invalid_value(self):
        response = self.post_json('/api/leads', {'contact_id': self.luis.id, 'value': 'lots'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], 'value must be a number')

    def test_create_rejects_value_too_large(self):
        response = self.post_json('/api/leads', {'contact_id': self.luis.id, 'value': 1e12})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], 'value is too large')
        self.assertFalse(Lead.objects.filter(contact=self.luis, value__isnull=False).exists())

    def test_create_returns_stored_value(self):
        created = self.post_json('/api/leads', {'contact_id': self.luis.id, 'value': '99.999'}).json()

        fetched = self.client.get(f"/api/leads/{created['id']}").json()
        self.assertEqual(created['value'], fetched['value'])
        self.assertEqual(created['value'], 100.0)


class LeadDetailViewTest(AdminApiTestCase):

    def setUp(self):
        super().setUp()
        self.login()
        self.contact = Contact.objects.create(name='Ana Torres', email='ana@example.com')
        self.lead = Lead.objects.create(contact=self.contact, status='warm', notes='Called twice', score=40)
        self.url = f'/api/leads/{self.lead.id}'

    def test_get_lead(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['status'], 'warm')
        self.assertEqual(data['contact'], {'id': self.contact.id, 'name': 'Ana Torres', 'email': 'ana@example.com'})

    def test_partial_update(self):
        response = self.put_json(self.url, {'status': 'hot'})

        self.assertEqual(response.status_code, 200)
        self.lead.refresh_from_db()
        self.assertEqual(self.lead.status, 'hot')
        self.assertEqual(self.lead.notes, 'Called twice')
        self.assertEqual(self.lead.score, 40)

    def test_update_clears_value_with_null(self):
        self.lead.value = 100
        self.lead.save()

        response = self.put_json(self.url, {'value': None})

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()['value'])

    def test_update_moves_lead_to_other_contact(self):
        other = Contact.objects.create(name='Luis Gomez', email='luis@example.com')

        data = self.put_json(self.url, {'contact_id': other.id}).json()

        self.assertEqual(data['contact']['name'], 'Luis Gomez')

    def test_update_rejects_invalid_score(self):
        response = self.put_json(self.url, {'score': 'high'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], 'score must be a whole number')

    def test_delete_is_permanent(self):
        response = self.client.delete(self.url)

        self.assertEqual(response.status_code, 200)
        self.assertFalse(Lead.objects.filter(pk=self.lead.pk).exists())

    def test_unknown_lead(self):
        response = self.client.get('/api/leads/99999')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'error': 'Lead not found'})

    def test_patch_not_allowed(self):
        response = self.client.patch(self.url)

        self.assertEqual(response.status_code, 405)
