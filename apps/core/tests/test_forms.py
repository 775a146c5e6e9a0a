from datetime import datetime, timezone as dt_timezone

from django import forms
from django.test import SimpleTestCase

from apps.core.forms import ApiForm, IsoDateTimeField, NumberField, StringListField


class SampleForm(ApiForm):
    name = forms.CharField(error_messages={'required': 'Name is required'})
    amount = NumberField(required=False)
    tags = StringListField()
    when = IsoDateTimeField(required=False)


class ApiFormTest(SimpleTestCase):

    def test_partial_makes_absent_fields_optional(self):
        form = SampleForm({'amount': '12.5'}, partial=True)

        self.assertTrue(form.is_valid())
        self.assertEqual(form.submitted_data, {'amount': 12.5})

    def test_partial_still_validates_sent_fields(self):
        form = SampleForm({'name': ''}, partial=True)

        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['name'], ['Name is required'])

    def test_full_form_requires_fields(self):
        self.assertFalse(SampleForm({}).is_valid())


class FieldTest(SimpleTestCase):

    def test_number_field_rejects_booleans(self):
        form = SampleForm({'name': 'x', 'amount': True})

        self.assertFalse(form.is_valid())
        self.assertIn('amount', form.errors)

    def test_tags_default_to_empty_list(self):
        form = SampleForm({'name': 'x'})

        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data['tags'], [])

    def test_tags_must_be_strings(self):
        form = SampleForm({'name': 'x', 'tags': ['ok', 3]})

        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['tags'], ['Must be a list of strings'])

    def test_date_only_is_midnight_utc(self):
        form = SampleForm({'name': 'x', 'when': '2024-01-15'})

        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data['when'], datetime(2024, 1, 15, tzinfo=dt_timezone.utc))

    def test_naive_datetime_is_utc(self):
        form = SampleForm({'name': 'x', 'when': '2024-01-15T10:30:00'})

        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data['when'], datetime(2024, 1, 15, 10, 30, tzinfo=dt_timezone.utc))

    def test_invalid_dates(self):
        for value in ('2024-02-30', 'yesterday', 20240115):
            with self.subTest(value=value):
                self.assertFalse(SampleForm({'name': 'x', 'when': value}).is_valid())
