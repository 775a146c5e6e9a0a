"""
Shared fixtures for the API tests.

AdminApiTestCase configures the administrator credentials, clears the
login rate limiter and offers JSON request helpers.
"""

import json

from django.conf import settings
from django.test import Client, TestCase, override_settings

from apps.core.ratelimit import login_limiter


ADMIN_EMAIL = 'admin@example.com'
ADMIN_PASSWORD = 'correct-horse-battery'


@override_settings(CRM_ADMIN_EMAIL=ADMIN_EMAIL, CRM_ADMIN_PASSWORD=ADMIN_PASSWORD)
class AdminApiTestCase(TestCase):

    def setUp(self):
        """Setup test data"""
        self.client = Client()
        login_limiter.reset()

    def tearDown(self):
        login_limiter.reset()

    def login(self):
        """Attach an authenticated admin session to self.client"""
        session = self.client.session
        session[settings.ADMIN_SESSION_KEY] = ADMIN_EMAIL
        session.save()

    def get_json(self, url, params=None):
        return self.client.get(url, params or {})

    def post_json(self, url, payload, **extra):
        return self.client.post(url, data=json.dumps(payload), content_type='application/json', **extra)

    def put_json(self, url, payload):
        return self.client.put(url, data=json.dumps(payload), content_type='application/json')

    def delete_json(self, url, payload=None):
        if payload is None:
            return self.client.delete(url)
        return self.client.delete(url, data=json.dumps(payload), content_type='application/json')
