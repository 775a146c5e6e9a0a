from django import forms


# LOGIN FORM
class LoginForm(forms.Form):
    email = forms.EmailField(
        max_length=255,
        required=True,
        error_messages={'required': 'Email is required', 'invalid': 'Invalid email'},
    )

    password = forms.CharField(
        required=True,
        strip=False,
        error_messages={'required': 'Password is required'},
    )

    def clean_email(self):

        email = self.cleaned_data.get('email', '')
        return email.lower().strip()
