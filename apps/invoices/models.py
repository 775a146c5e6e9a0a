from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.core.models import SoftDeleteModel, TimestampedModel
from apps.core.utils import to_iso, to_number


class Invoice(TimestampedModel, SoftDeleteModel):

    STATUS_DRAFT = 'draft'
    STATUS_SENT = 'sent'
    STATUS_CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (STATUS_DRAFT, 'Draft'),
        (STATUS_SENT, 'Sent'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    invoice_number = models.CharField(max_length=50, unique=True, help_text='PREFIX-YYYY-NNNN')

    # Client
    client_name = models.CharField(max_length=200)
    client_company_name = models.CharField(max_length=200, null=True, blank=True)
    client_email = models.EmailField(null=True, blank=True)
    client_address = models.TextField(null=True, blank=True)
    client_tax_id = models.CharField(max_length=50, null=True, blank=True)

    # Issuer
    company_name = models.CharField(max_length=200, null=True, blank=True)
    company_address = models.TextField(null=True, blank=True)

    issue_date = models.DateTimeField(default=timezone.now, db_index=True)
    due_date = models.DateTimeField(null=True, blank=True)

    # [{description, quantity, price, tax, total}, ...]
    services = models.JSONField(default=list)
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    iva = models.DecimalField(max_digits=12, decimal_places=2)
    total = models.DecimalField(max_digits=12, decimal_places=2)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_DRAFT, db_index=True)

    class Meta:
        verbose_name = 'Invoice'
        verbose_name_plural = 'Invoices'
        ordering = ['-issue_date']

    def __str__(self):
        return f"{self.invoice_number} - {self.client_name}"

    @classmethod
    def generate_number(cls, year=None):
        """
        Next free number of the year: PREFIX-YYYY-NNNN.

        Soft-deleted invoices still hold their number, so they count too.
        """
        year = year or timezone.localdate().year
        prefix = f"{settings.INVOICE_NUMBER_PREFIX}-{year}-"

        last_number = 0
        for number in cls.objects.filter(invoice_number__startswith=prefix).values_list('invoice_number', flat=True):
            suffix = number[len(prefix):]
            if suffix.isdigit():
                last_number = max(last_number, int(suffix))

        candidate = f"{prefix}{last_number + 1:04d}"
        # Numbers edited by hand may not follow the sequence
        while cls.objects.filter(invoice_number=candidate).exists():
            last_number += 1
            candidate = f"{prefix}{last_number + 1:04d}"

        return candidate

    def to_dict(self):
        return {
            'id': self.id,
            'invoice_number': self.invoice_number,
            'client_name': self.client_name,
            'client_company_name': self.client_company_name,
            'client_email': self.client_email,
            'client_address': self.client_address,
            'client_tax_id': self.client_tax_id,
            'company_name': self.company_name,
            'company_address': self.company_address,
            'issue_date': to_iso(self.issue_date),
            'due_date': to_iso(self.due_date),
            'services': self.services,
            'subtotal': to_number(self.subtotal),
            'iva': to_number(self.iva),
            'total': to_number(self.total),
            'status': self.status,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
            'deleted_at': to_iso(self.deleted_at),
        }
