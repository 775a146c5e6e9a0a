from django.db import models

from apps.core.models import TimestampedModel


class Contact(TimestampedModel):

    # Basic Information
    name = models.CharField(max_length=200, help_text="Contact's full name")
    email = models.EmailField(help_text='Email address')
    phone = models.CharField(max_length=30, blank=True, default='', help_text='Phone number')
    company = models.CharField(max_length=200, blank=True, default='', help_text='Company the contact works for')
    instagram_user = models.CharField(max_length=100, blank=True, default='', help_text='Instagram handle')

    # Billing Information
    tax_address = models.TextField(blank=True, default='', help_text='Fiscal address used on invoices')
    city = models.CharField(max_length=100, blank=True, default='')
    postal_code = models.CharField(max_length=20, blank=True, default='')
    country = models.CharField(max_length=100, blank=True, default='')
    cif = models.CharField(max_length=20, blank=True, default='', help_text='Company tax id')
    dni = models.CharField(max_length=20, blank=True, default='', help_text='Personal id number')
    iban = models.CharField(max_length=34, blank=True, default='', help_text='Bank account')

    class Meta:
        verbose_name = 'Contact'
        verbose_name_plural = 'Contacts'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['email']),
        ]

    def __str__(self):
        return f"{self.name} <{self.email}>"

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'company': self.company,
            'instagram_user': self.instagram_user,
            'tax_address': self.tax_address,
            'city': self.city,
            'postal_code': self.postal_code,
            'country': self.country,
            'cif': self.cif,
            'dni': self.dni,
            'iban': self.iban,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
        }

    def to_summary(self):
        """Short form embedded in lead payloads"""
        return {'id': self.id, 'name': self.name, 'email': self.email}
