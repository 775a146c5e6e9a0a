from django import forms
from django.core.exceptions import ValidationError

from apps.contacts.models import Contact
from apps.core.forms import MAX_AMOUNT, ApiForm, NumberField
from .models import Lead


class LeadForm(ApiForm):
    contact_id = forms.IntegerField(error_messages={'required': 'contact_id is required', 'invalid': 'contact_id must be a number'})
    status = forms.CharField(max_length=50, required=False)
    value = NumberField(required=False, max_value=MAX_AMOUNT, error_messages={
        'invalid': 'value must be a number',
        'max_value': 'value is too large',
    })
    notes = forms.CharField(required=False)
    source = forms.CharField(max_length=100, required=False)
    priority = forms.CharField(max_length=20, required=False)
    score = forms.IntegerField(required=False, error_messages={'invalid': 'score must be a whole number'})

    def clean_contact_id(self):
        contact_id = self.cleaned_data.get('contact_id')
        if contact_id is not None and not Contact.objects.filter(pk=contact_id).exists():
            raise ValidationError('Contact not found')
        return contact_id

    def clean_status(self):
        # Blank status falls back to the default label
        return self.cleaned_data.get('status') or Lead.STATUS_COLD

    def clean_priority(self):
        return self.cleaned_data.get('priority') or 'medium'

    def clean_notes(self):
        return self.cleaned_data.get('notes') or None

    def clean_source(self):
        return self.cleaned_data.get('source') or None
