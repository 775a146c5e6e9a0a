"""
Contact Views Tests
===================

1. List View - contact_list_view (search, pagination, create)
2. Detail View - contact_detail_view (read, partial update, delete)
"""

from apps.contacts.models import Contact
from apps.core.tests.helpers import AdminApiTestCase
from apps.leads.models import Lead


class ContactListViewTest(AdminApiTestCase):

    def setUp(self):
        super().setUp()
        self.login()

        Contact.objects.create(name='Ana Torres', email='ana@example.com')
        Contact.objects.create(name='Luis Gomez', email='luis@example.com', company='Gomez SL')

    def test_list_contacts(self):
        response = self.client.get('/api/contacts')

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(len(data['contacts']), 2)
        self.assertEqual(data['pagination']['total'], 2)

    def test_search_by_name_or_email(self):
        by_name = self.client.get('/api/contacts', {'search': 'torres'}).json()
        by_email = self.client.get('/api/contacts', {'search': 'luis@'}).json()

        self.assertEqual([c['name'] for c in by_name['contacts']], ['Ana Torres'])
        self.assertEqual([c['name'] for c in by_email['contacts']], ['Luis Gomez'])

    def test_create_contact(self):
        response = self.post_json('/api/contacts', {
            'name': 'Marta Ruiz',
            'email': 'Marta@Example.com',
            'iban': 'es91 2100 0418 4502 0005 1332',
        })

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data['email'], 'marta@example.com')
        self.assertEqual(data['iban'], 'ES9121000418450200051332')
        self.assertTrue(Contact.objects.filter(email='marta@example.com').exists())

    def test_create_requires_valid_email(self):
        response = self.post_json('/api/contacts', {'name': 'Bad', 'email': 'not-an-email'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], 'Invalid email')

    def test_create_requires_name(self):
        response = self.post_json('/api/contacts', {'email': 'x@example.com'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], 'Name is required')


class ContactDetailViewTest(AdminApiTestCase):

    def setUp(self):
        super().setUp()
        self.login()
        self.contact = Contact.objects.create(name='Ana Torres', email='ana@example.com', city='Madrid')
        self.url = f'/api/contacts/{self.contact.id}'

    def test_detail_includes_leads(self):
        Lead.objects.create(contact=self.contact, status='hot')

        data = self.client.get(self.url).json()

        self.assertEqual(data['name'], 'Ana Torres')
        self.assertEqual(len(data['leads']), 1)
        self.assertEqual(data['leads'][0]['status'], 'hot')

    def test_partial_update_keeps_other_fields(self):
        response = self.put_json(self.url, {'phone': '+34 600 000 000'})

        self.assertEqual(response.status_code, 200)
        self.contact.refresh_from_db()
        self.assertEqual(self.contact.phone, '+34 600 000 000')
        self.assertEqual(self.contact.city, 'Madrid')
        self.assertEqual(self.contact.name, 'Ana Torres')

    def test_update_rejects_empty_name(self):
        response = self.put_json(self.url, {'name': ''})

        self.assertEqual(response.status_code, 400)

    def test_delete_contact(self):
        response = self.client.delete(self.url)

        self.assertEqual(response.status_code, 200)
        self.assertFalse(Contact.objects.filter(pk=self.contact.pk).exists())

    def test_delete_contact_with_leads_is_conflict(self):
        Lead.objects.create(contact=self.contact)

        response = self.client.delete(self.url)

        self.assertEqual(response.status_code, 409)
        self.assertTrue(Contact.objects.filter(pk=self.contact.pk).exists())

    def test_unknown_contact(self):
        response = self.client.get('/api/contacts/99999')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'error': 'Contact not found'})
