from django import forms
from django.core.exceptions import ValidationError

from apps.core.forms import MAX_AMOUNT, ApiForm, IsoDateTimeField, NumberField, StringListField
from apps.invoices.models import Invoice
from .models import Income


def amount_field(name, required=True):
    return NumberField(required=required, max_value=MAX_AMOUNT, error_messages={
        'required': f'{name} is required',
        'invalid': f'{name} must be a number',
        'max_value': f'{name} is too large',
    })


def percent_field(name, required=False):
    return NumberField(required=required, min_value=0, max_value=100, error_messages={
        'required': f'{name} is required',
        'invalid': f'{name} must be a number',
        'min_value': f'{name} must be between 0 and 100',
        'max_value': f'{name} must be between 0 and 100',
    })


def date_field(name):
    return IsoDateTimeField(error_messages={
        'required': f'{name} is required',
        'invalid': f'{name} must be an ISO date (YYYY-MM-DD) or datetime',
    })


def blank_to_none(cleaned_data, names):
    # Blank optional text is stored as NULL
    for name in names:
        if name in cleaned_data and not cleaned_data[name]:
            cleaned_data[name] = None


class SalaryForm(ApiForm):
    person_name = forms.CharField(max_length=200, error_messages={'required': 'Name is required'})
    date = date_field('date')
    amount = amount_field('amount')
    notes = forms.CharField(required=False)
    tags = StringListField()

    def clean_notes(self):
        return self.cleaned_data.get('notes') or None


class FixedExpenseForm(ApiForm):
    name = forms.CharField(max_length=200, error_messages={'required': 'Name is required'})
    amount = amount_field('amount')
    has_iva = forms.BooleanField(required=False)
    # Absent or empty → NULL, 0 is kept
    iva_percent = percent_field('iva_percent')
    is_active = forms.BooleanField(required=False)
    tags = StringListField()

    def clean_has_iva(self):
        return self._clean_flag('has_iva', default=False)

    def clean_is_active(self):
        return self._clean_flag('is_active', default=True)

    def _clean_flag(self, name, default):
        # Only real JSON booleans, no "false" strings
        if name not in self.data or self.data[name] is None:
            return default
        if not isinstance(self.data[name], bool):
            raise ValidationError(f'{name} must be true or false')
        return self.data[name]


class ExpenseForm(ApiForm):
    """
    Manual expense over a date range.

    On a partial update the range check uses the stored bound for the
    side that was not sent, so pass ``instance``.
    """

    name = forms.CharField(max_length=200, error_messages={'required': 'Name is required'})
    date_start = date_field('date_start')
    date_end = date_field('date_end')
    base_amount = amount_field('base_amount')
    iva_amount = amount_field('iva_amount', required=False)
    total_amount = amount_field('total_amount')
    tags = StringListField()
    person_name = forms.CharField(max_length=200, required=False)
    project = forms.CharField(max_length=200, required=False)
    client_name = forms.CharField(max_length=200, required=False)
    notes = forms.CharField(required=False)

    OPTIONAL_TEXT_FIELDS = ('person_name', 'project', 'client_name', 'notes')

    def __init__(self, data=None, *args, instance=None, **kwargs):
        super().__init__(data, *args, **kwargs)
        self.instance = instance

    def clean_iva_amount(self):
        iva_amount = self.cleaned_data.get('iva_amount')
        return 0 if iva_amount is None else iva_amount

    def clean(self):
        cleaned_data = super().clean()
        blank_to_none(cleaned_data, self.OPTIONAL_TEXT_FIELDS)

        date_start = cleaned_data.get('date_start') or getattr(self.instance, 'date_start', None)
        date_end = cleaned_data.get('date_end') or getattr(self.instance, 'date_end', None)
        if date_start and date_end and date_end < date_start:
            raise ValidationError('date_end cannot be before date_start')
        return cleaned_data


class IncomeForm(ApiForm):
    client_name = forms.CharField(max_length=200, error_messages={'required': 'Client name is required'})
    date = date_field('date')
    base_amount = amount_field('base_amount')
    iva_amount = amount_field('iva_amount', required=False)
    total_amount = amount_field('total_amount')
    status = forms.ChoiceField(choices=Income.STATUS_CHOICES, required=False, error_messages={
        'invalid_choice': 'status must be one of pending, paid, estimated',
    })
    project = forms.CharField(max_length=200, required=False)
    invoice_id = forms.IntegerField(required=False, min_value=1, error_messages={
        'invalid': 'invoice_id must be a whole number',
        'min_value': 'Invoice not found',
    })
    notes = forms.CharField(required=False)

    OPTIONAL_TEXT_FIELDS = ('project', 'notes')

    def clean_iva_amount(self):
        iva_amount = self.cleaned_data.get('iva_amount')
        return 0 if iva_amount is None else iva_amount

    def clean_status(self):
        return self.cleaned_data.get('status') or Income.STATUS_PENDING

    def clean_invoice_id(self):
        invoice_id = self.cleaned_data.get('invoice_id')
        if invoice_id is not None and not Invoice.objects.active().filter(pk=invoice_id).exists():
            raise ValidationError('Invoice not found')
        return invoice_id

    def clean(self):
        cleaned_data = super().clean()
        blank_to_none(cleaned_data, self.OPTIONAL_TEXT_FIELDS)
        return cleaned_data


class FinancialSettingsForm(ApiForm):
    corporate_tax_percent = percent_field('corporate_tax_percent', required=True)
