from django import forms
from django.conf import settings
from django.core.exceptions import ValidationError

from apps.core.forms import MAX_AMOUNT, ApiForm, IsoDateTimeField, NumberField, StringListField
from .models import ENTITY_TYPE_CHOICES


class PipelineForm(ApiForm):
    name = forms.CharField(max_length=200, error_messages={'required': 'Name is required'})
    entity_type = forms.ChoiceField(choices=ENTITY_TYPE_CHOICES, error_messages={
        'required': 'entity_type must be "client" or "contact"',
        'invalid_choice': 'entity_type must be "client" or "contact"',
    })


# STAGE FORMS

class StageRenameForm(ApiForm):
    old_stage = forms.CharField(max_length=100, error_messages={'required': 'old_stage is required'})
    new_stage = forms.CharField(max_length=100, error_messages={'required': 'new_stage is required'})
    new_color = forms.CharField(max_length=20, required=False, strip=True)

    def clean_new_color(self):
        # Explicit empty color is allowed, absent key is not
        if 'new_color' not in self.data:
            raise ValidationError('new_color is required')
        return self.cleaned_data.get('new_color', '')


class StageCreateForm(ApiForm):
    stage_name = forms.CharField(max_length=100, error_messages={'required': 'stage_name is required'})
    color = forms.CharField(max_length=20, required=False)

    def clean_color(self):
        return self.cleaned_data.get('color') or settings.DEFAULT_STAGE_COLOR


class StageDeleteForm(ApiForm):
    stage_name = forms.CharField(max_length=100, error_messages={'required': 'stage_name is required'})


# CARD FORMS

class CardForm(ApiForm):
    entity_id = forms.CharField(max_length=64, error_messages={'required': 'entity_id is required and cannot be empty'})
    entity_type = forms.ChoiceField(choices=ENTITY_TYPE_CHOICES, error_messages={
        'required': 'entity_type must be "client" or "contact"',
        'invalid_choice': 'entity_type must be "client" or "contact"',
    })
    stage = forms.CharField(max_length=100, error_messages={'required': 'Stage is required'})
    stage_color = forms.CharField(max_length=20, required=False)
    tags = StringListField()
    capture_date = IsoDateTimeField(required=False, error_messages={'invalid': 'capture_date must be an ISO date (YYYY-MM-DD) or datetime'})
    amount = NumberField(required=False, max_value=MAX_AMOUNT, error_messages={
        'invalid': 'amount must be a number',
        'max_value': 'amount is too large',
    })
    notes = forms.CharField(required=False)

    def clean_stage_color(self):
        return self.cleaned_data.get('stage_color') or settings.DEFAULT_STAGE_COLOR

    def clean_notes(self):
        return self.cleaned_data.get('notes') or None


class CardUpdateForm(CardForm):
    """Partial update of a card's content; the board and entity are fixed"""

    def __init__(self, *args, **kwargs):
        kwargs['partial'] = True
        super().__init__(*args, **kwargs)
        del self.fields['entity_id']
        del self.fields['entity_type']

    def clean_stage_color(self):
        # Keep the current color when the caller sends an empty one
        return self.cleaned_data.get('stage_color') or None


class CardMoveForm(ApiForm):
    card_id = forms.UUIDField(error_messages={'required': 'card_id is required', 'invalid': 'card_id must be a valid UUID'})
    stage = forms.CharField(max_length=100, error_messages={'required': 'Stage is required'})
    stage_color = forms.CharField(max_length=20, required=False)
    position = forms.IntegerField(min_value=0, error_messages={
        'required': 'position is required',
        'invalid': 'position must be a whole number',
        'min_value': 'position cannot be negative',
    })
