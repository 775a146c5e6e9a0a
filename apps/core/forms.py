import re
from datetime import datetime, time, timezone as dt_timezone

from django import forms
from django.core.exceptions import ValidationError
from django.utils.dateparse import parse_datetime


DATE_ONLY_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')

# Largest value a DecimalField(max_digits=12, decimal_places=2) can hold
MAX_AMOUNT = 9_999_999_999.99


class ApiForm(forms.Form):
    """
    Form bound to a decoded JSON object.

    partial=True (PUT): fields absent from the payload become optional,
    fields that are present keep their own rules, so an explicit empty
    name is still rejected.
    """

    def __init__(self, data=None, *args, partial=False, **kwargs):
        super().__init__(data, *args, **kwargs)
        self.partial = partial

        if partial:
            for name, field in self.fields.items():
                if name not in (data or {}):
                    field.required = False

    @property
    def submitted_data(self):
        """cleaned_data restricted to the keys the caller sent"""
        return {key: value for key, value in self.cleaned_data.items() if key in self.data}


class StringListField(forms.JSONField):
    """
    A JSON array of strings (tags). Missing or empty → [].
    """

    default_error_messages = {
        'invalid': 'Must be a list of strings',
    }

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        super().__init__(**kwargs)

    def to_python(self, value):
        if value in self.empty_values:
            return []
        value = super().to_python(value)
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ValidationError(self.error_messages['invalid'], code='invalid')
        return value

    def bound_data(self, data, initial):
        return data

    def prepare_value(self, value):
        return value


class NumberField(forms.FloatField):
    """
    Accepts a JSON number or a numeric string, cleaned to float.

    Booleans are rejected even though Python treats them as ints.
    """

    def to_python(self, value):
        if isinstance(value, bool):
            raise ValidationError(self.error_messages['invalid'], code='invalid')
        return super().to_python(value)


class IsoDateTimeField(forms.Field):
    """
    ISO datetime, plain YYYY-MM-DD (midnight UTC) or empty (None).

    Naive datetimes are read as UTC.
    """

    default_error_messages = {
        'invalid': 'Enter an ISO date (YYYY-MM-DD) or datetime',
    }

    def to_python(self, value):
        if value in self.empty_values:
            return None
        if not isinstance(value, str):
            raise ValidationError(self.error_messages['invalid'], code='invalid')

        value = value.strip()
        if DATE_ONLY_RE.match(value):
            try:
                day = datetime.strptime(value, '%Y-%m-%d').date()
            except ValueError:
                raise ValidationError(self.error_messages['invalid'], code='invalid')
            return datetime.combine(day, time.min, tzinfo=dt_timezone.utc)

        try:
            parsed = parse_datetime(value)
        except ValueError:
            parsed = None
        if parsed is None:
            raise ValidationError(self.error_messages['invalid'], code='invalid')
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=dt_timezone.utc)
        return parsed
