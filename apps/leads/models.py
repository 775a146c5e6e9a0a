from django.db import models

from apps.contacts.models import Contact
from apps.core.models import TimestampedModel
from apps.core.utils import to_number


class Lead(TimestampedModel):

    # Status is a free label (cold, warm, hot, won, lost, ...)
    STATUS_COLD = 'cold'

    PRIORITY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
    ]

    # Basic Information
    contact = models.ForeignKey(Contact, on_delete=models.PROTECT, related_name='leads', help_text='Which contact this lead belongs to')

    # Lead Classification
    status = models.CharField(max_length=50, default=STATUS_COLD, db_index=True, help_text='Current status label')
    priority = models.CharField(max_length=20, default='medium', blank=True, help_text='How urgent is this lead?')
    source = models.CharField(max_length=100, null=True, blank=True, help_text='Where did this lead come from?')
    score = models.IntegerField(null=True, blank=True, help_text='Qualification score')

    # Additional Information
    value = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True, help_text='Expected deal value')
    notes = models.TextField(null=True, blank=True, help_text='General notes about this lead')

    class Meta:
        verbose_name = 'Lead'
        verbose_name_plural = 'Leads'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['contact', 'status']),
            models.Index(fields=['created_at']),
        ]

    def __str__(self):
        """String representation: Contact - Status"""
        return f"{self.contact.name} - {self.status}"

    def to_dict(self, include_contact=True):
        data = {
            'id': self.id,
            'contact_id': self.contact_id,
            'status': self.status,
            'priority': self.priority,
            'source': self.source,
            'score': self.score,
            'value': to_number(self.value),
            'notes': self.notes,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
        }
        if include_contact:
            data['contact'] = self.contact.to_summary()
        return data
