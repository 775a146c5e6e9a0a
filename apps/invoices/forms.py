from django import forms
from django.core.exceptions import ValidationError

from apps.core.forms import MAX_AMOUNT, ApiForm, IsoDateTimeField, NumberField
from .models import Invoice


DEFAULT_SERVICE_TAX = 21


def _number(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


class ServiceLinesField(forms.JSONField):
    """
    Non-empty list of service lines:
    ``{description, quantity, price, tax (0-100, default 21), total}``
    """

    default_error_messages = {
        'invalid': 'services must be a list of service lines',
        'empty': 'At least one service is required',
    }

    def bound_data(self, data, initial):
        return data

    def prepare_value(self, value):
        return value

    def to_python(self, value):
        if value in self.empty_values:
            return None
        value = super().to_python(value)
        if not isinstance(value, list):
            raise ValidationError(self.error_messages['invalid'], code='invalid')
        if not value:
            raise ValidationError(self.error_messages['empty'], code='empty')
        return [self.clean_line(line) for line in value]

    def clean_line(self, line):
        if not isinstance(line, dict):
            raise ValidationError(self.error_messages['invalid'], code='invalid')

        description = line.get('description')
        if not isinstance(description, str) or not description.strip():
            raise ValidationError('Service description is required')

        quantity = _number(line.get('quantity'))
        if quantity is None or quantity <= 0:
            raise ValidationError('Service quantity must be positive')

        price = _number(line.get('price'))
        if price is None or price <= 0:
            raise ValidationError('Service price must be positive')

        tax = line.get('tax', DEFAULT_SERVICE_TAX)
        tax = _number(tax)
        if tax is None or not 0 <= tax <= 100:
            raise ValidationError('Service tax must be between 0 and 100')

        total = _number(line.get('total'))
        if total is None or total <= 0:
            raise ValidationError('Service total must be positive')

        return {
            'description': description.strip(),
            'quantity': quantity,
            'price': price,
            'tax': tax,
            'total': total,
        }


class InvoiceForm(ApiForm):
    client_name = forms.CharField(max_length=200, error_messages={'required': 'Client name is required'})
    client_company_name = forms.CharField(max_length=200, required=False)
    client_email = forms.EmailField(required=False, error_messages={'invalid': 'Invalid email'})
    client_address = forms.CharField(required=False)
    client_tax_id = forms.CharField(max_length=50, required=False)
    company_name = forms.CharField(max_length=200, required=False)
    company_address = forms.CharField(required=False)
    issue_date = IsoDateTimeField(required=False, error_messages={'invalid': 'issue_date must be an ISO date'})
    due_date = IsoDateTimeField(required=False, error_messages={'invalid': 'due_date must be an ISO date'})
    services = ServiceLinesField(error_messages={'required': 'At least one service is required'})
    subtotal = NumberField(min_value=0, max_value=MAX_AMOUNT, error_messages={
        'required': 'subtotal is required',
        'invalid': 'subtotal must be a number',
        'min_value': 'subtotal cannot be negative',
        'max_value': 'subtotal is too large',
    })
    iva = NumberField(min_value=0, max_value=MAX_AMOUNT, error_messages={
        'required': 'iva is required',
        'invalid': 'iva must be a number',
        'min_value': 'iva cannot be negative',
        'max_value': 'iva is too large',
    })
    total = NumberField(max_value=MAX_AMOUNT, error_messages={
        'required': 'total is required',
        'invalid': 'total must be a number',
        'max_value': 'total is too large',
    })

    OPTIONAL_TEXT_FIELDS = (
        'client_company_name', 'client_email', 'client_address', 'client_tax_id',
        'company_name', 'company_address',
    )

    def clean_total(self):
        total = self.cleaned_data.get('total')
        if total is not None and total <= 0:
            raise ValidationError('total must be positive')
        return total

    def clean(self):
        cleaned_data = super().clean()
        # Blank optional text is stored as NULL
        for name in self.OPTIONAL_TEXT_FIELDS:
            if name in cleaned_data and not cleaned_data[name]:
                cleaned_data[name] = None
        return cleaned_data


class InvoiceUpdateForm(InvoiceForm):
    invoice_number = forms.CharField(max_length=50, required=False)
    status = forms.ChoiceField(choices=Invoice.STATUS_CHOICES, required=False, error_messages={
        'invalid_choice': 'status must be one of draft, sent, cancelled',
    })

    def __init__(self, *args, **kwargs):
        kwargs['partial'] = True
        super().__init__(*args, **kwargs)

    def clean_invoice_number(self):
        invoice_number = self.cleaned_data.get('invoice_number')
        if 'invoice_number' in self.data and not invoice_number:
            raise ValidationError('invoice_number cannot be empty')
        return invoice_number

    def clean_status(self):
        status = self.cleaned_data.get('status')
        if 'status' in self.data and not status:
            raise ValidationError('status must be one of draft, sent, cancelled')
        return status

    def clean_issue_date(self):
        # issue_date is NOT NULL
        issue_date = self.cleaned_data.get('issue_date')
        if 'issue_date' in self.data and issue_date is None:
            raise ValidationError('issue_date cannot be empty')
        return issue_date
