from django import forms

from apps.core.forms import ApiForm


class ContactForm(ApiForm):
    name = forms.CharField(max_length=200, error_messages={'required': 'Name is required', 'max_length': 'Name is too long (max 200 characters)'})
    email = forms.EmailField(error_messages={'required': 'Email is required', 'invalid': 'Invalid email'})
    phone = forms.CharField(max_length=30, required=False)
    company = forms.CharField(max_length=200, required=False)
    instagram_user = forms.CharField(max_length=100, required=False)
    tax_address = forms.CharField(required=False)
    city = forms.CharField(max_length=100, required=False)
    postal_code = forms.CharField(max_length=20, required=False)
    country = forms.CharField(max_length=100, required=False)
    cif = forms.CharField(max_length=20, required=False)
    dni = forms.CharField(max_length=20, required=False)
    iban = forms.CharField(max_length=34, required=False)

    def clean_email(self):
        email = self.cleaned_data.get('email')
        if email:
            return email.strip().lower()
        return email

    def clean_iban(self):
        # Stored without spaces, upper case
        return self.cleaned_data.get('iban', '').replace(' ', '').upper()
