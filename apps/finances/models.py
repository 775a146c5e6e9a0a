from django.conf import settings
from django.db import models

from apps.core.models import SoftDeleteModel, TimestampedModel
from apps.core.utils import to_iso, to_number


class Salary(TimestampedModel, SoftDeleteModel):
    """A payroll entry (one person, one payment date)"""

    person_name = models.CharField(max_length=200)
    date = models.DateTimeField(db_index=True, help_text='Payment date')
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    notes = models.TextField(null=True, blank=True)
    tags = models.JSONField(default=list, blank=True)

    class Meta:
        verbose_name = 'Salary'
        verbose_name_plural = 'Salaries'
        ordering = ['-date']

    def __str__(self):
        return f"{self.person_name} - {self.date:%Y-%m-%d}"

    def to_dict(self):
        return {
            'id': self.id,
            'person_name': self.person_name,
            'date': to_iso(self.date),
            'amount': to_number(self.amount),
            'notes': self.notes,
            'tags': self.tags,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
            'deleted_at': to_iso(self.deleted_at),
        }


class FixedExpense(TimestampedModel, SoftDeleteModel):
    """A recurring monthly cost (rent, software, ...)"""

    name = models.CharField(max_length=200)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    has_iva = models.BooleanField(default=False, help_text='Amount is subject to VAT')
    iva_percent = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    tags = models.JSONField(default=list, blank=True)

    class Meta:
        verbose_name = 'Fixed Expense'
        verbose_name_plural = 'Fixed Expenses'
        ordering = ['name']

    def __str__(self):
        return self.name

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'amount': to_number(self.amount),
            'has_iva': self.has_iva,
            'iva_percent': to_number(self.iva_percent),
            'is_active': self.is_active,
            'tags': self.tags,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
            'deleted_at': to_iso(self.deleted_at),
        }


class Expense(TimestampedModel, SoftDeleteModel):
    """
    A one-off or period cost entered by hand (travel, a campaign, ...).

    The cost covers [date_start, date_end]; monthly reports include it in
    every month the period touches.
    """

    name = models.CharField(max_length=200)
    date_start = models.DateTimeField(db_index=True)
    date_end = models.DateTimeField(db_index=True)
    base_amount = models.DecimalField(max_digits=12, decimal_places=2)
    iva_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    tags = models.JSONField(default=list, blank=True)
    person_name = models.CharField(max_length=200, null=True, blank=True)
    project = models.CharField(max_length=200, null=True, blank=True)
    client_name = models.CharField(max_length=200, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    class Meta:
        verbose_name = 'Expense'
        verbose_name_plural = 'Expenses'
        ordering = ['-date_start']

    def __str__(self):
        return f"{self.name} ({self.date_start:%Y-%m-%d} - {self.date_end:%Y-%m-%d})"

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'date_start': to_iso(self.date_start),
            'date_end': to_iso(self.date_end),
            'base_amount': to_number(self.base_amount),
            'iva_amount': to_number(self.iva_amount),
            'total_amount': to_number(self.total_amount),
            'tags': self.tags,
            'person_name': self.person_name,
            'project': self.project,
            'client_name': self.client_name,
            'notes': self.notes,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
            'deleted_at': to_iso(self.deleted_at),
        }


class Income(TimestampedModel, SoftDeleteModel):
    """Money received (or expected) from a client"""

    STATUS_PENDING = 'pending'
    STATUS_PAID = 'paid'
    STATUS_ESTIMATED = 'estimated'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_PAID, 'Paid'),
        (STATUS_ESTIMATED, 'Estimated'),
    ]

    client_name = models.CharField(max_length=200)
    date = models.DateTimeField(db_index=True)
    base_amount = models.DecimalField(max_digits=12, decimal_places=2)
    iva_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    project = models.CharField(max_length=200, null=True, blank=True)
    # Loose reference, the invoice may be soft-deleted later
    invoice_id = models.PositiveIntegerField(null=True, blank=True, help_text='Invoice this income comes from')
    notes = models.TextField(null=True, blank=True)

    class Meta:
        verbose_name = 'Income'
        verbose_name_plural = 'Incomes'
        ordering = ['-date']

    def __str__(self):
        return f"{self.client_name} - {self.total_amount} ({self.status})"

    def to_dict(self):
        return {
            'id': self.id,
            'client_name': self.client_name,
            'date': to_iso(self.date),
            'base_amount': to_number(self.base_amount),
            'iva_amount': to_number(self.iva_amount),
            'total_amount': to_number(self.total_amount),
            'status': self.status,
            'project': self.project,
            'invoice_id': self.invoice_id,
            'notes': self.notes,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
            'deleted_at': to_iso(self.deleted_at),
        }


class FinancialSettings(models.Model):
    """
    Singleton row (pk=1) with the tax parameters used by the reports.
    """

    SINGLETON_ID = 1

    corporate_tax_percent = models.DecimalField(max_digits=5, decimal_places=2)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Financial Settings'
        verbose_name_plural = 'Financial Settings'

    def __str__(self):
        return f"Corporate tax {self.corporate_tax_percent}%"

    @classmethod
    def load(cls):
        """Return the settings row, creating it with the defaults on first read"""
        obj, _ = cls.objects.get_or_create(
            pk=cls.SINGLETON_ID,
            defaults={'corporate_tax_percent': settings.DEFAULT_CORPORATE_TAX_PERCENT},
        )
        return obj

    @classmethod
    def store(cls, corporate_tax_percent):
        obj, _ = cls.objects.update_or_create(
            pk=cls.SINGLETON_ID,
            defaults={'corporate_tax_percent': corporate_tax_percent},
        )
        # Read back the value as stored (rounded to 2 places)
        obj.refresh_from_db()
        return obj

    def to_dict(self):
        return {'corporate_tax_percent': to_number(self.corporate_tax_percent)}
