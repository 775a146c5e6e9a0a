from datetime import datetime
from zoneinfo import ZoneInfo

from django.test import RequestFactory, SimpleTestCase, TestCase, override_settings

from apps.contacts.models import Contact
from apps.core.exceptions import ApiValidationError
from apps.core.utils import get_client_ip, month_bounds, paginate, parse_json_body


@override_settings(TIME_ZONE='Europe/Madrid')
class MonthBoundsTest(SimpleTestCase):

    def test_february_of_leap_year(self):
        start, end = month_bounds('2024-02')
        madrid = ZoneInfo('Europe/Madrid')

        self.assertEqual(start, datetime(2024, 2, 1, 0, 0, 0, tzinfo=madrid))
        self.assertEqual(end, datetime(2024, 2, 29, 23, 59, 59, 999999, tzinfo=madrid))

    def test_malformed_month(self):
        for value in ('2024', '2024-13', 'abc', '2024-02-01', ''):
            with self.subTest(value=value):
                with self.assertRaises(ApiValidationError):
                    month_bounds(value)


class RequestHelpersTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def test_client_ip_prefers_first_forwarded_hop(self):
        request = self.factory.get('/', HTTP_X_FORWARDED_FOR='203.0.113.7, 10.0.0.1', HTTP_X_REAL_IP='10.0.0.2')
        self.assertEqual(get_client_ip(request), '203.0.113.7')

    def test_client_ip_falls_back_to_real_ip_then_socket(self):
        request = self.factory.get('/', HTTP_X_REAL_IP='198.51.100.4')
        self.assertEqual(get_client_ip(request), '198.51.100.4')

        request = self.factory.get('/', REMOTE_ADDR='192.0.2.1')
        self.assertEqual(get_client_ip(request), '192.0.2.1')

    def test_empty_body_is_empty_object(self):
        request = self.factory.post('/', data='', content_type='application/json')
        self.assertEqual(parse_json_body(request), {})

    def test_invalid_json(self):
        request = self.factory.post('/', data='{not json', content_type='application/json')

        with self.assertRaises(ApiValidationError) as ctx:
            parse_json_body(request)
        self.assertEqual(ctx.exception.message, 'Invalid JSON payload')

    def test_json_must_be_object(self):
        request = self.factory.post('/', data='[1, 2]', content_type='application/json')

        with self.assertRaises(ApiValidationError) as ctx:
            parse_json_body(request)
        self.assertEqual(ctx.exception.message, 'JSON body must be an object')


class PaginateTest(TestCase):

    def setUp(self):
        self.factory = RequestFactory()
        for i in range(12):
            Contact.objects.create(name=f'Contact {i}', email=f'c{i}@example.com')

    def test_defaults(self):
        page_obj, pagination = paginate(self.factory.get('/'), Contact.objects.all())

        self.assertEqual(len(page_obj), 10)
        self.assertEqual(pagination, {'page': 1, 'page_size': 10, 'total': 12, 'total_pages': 2})

    def test_page_size_is_clamped(self):
        _, pagination = paginate(self.factory.get('/', {'page_size': 500}), Contact.objects.all())
        self.assertEqual(pagination['page_size'], 100)

        _, pagination = paginate(self.factory.get('/', {'page_size': 0}), Contact.objects.all())
        self.assertEqual(pagination['page_size'], 1)

    def test_invalid_page_falls_back_to_first(self):
        page_obj, pagination = paginate(self.factory.get('/', {'page': 'x'}), Contact.objects.all())

        self.assertEqual(pagination['page'], 1)
        self.assertEqual(len(page_obj), 10)
