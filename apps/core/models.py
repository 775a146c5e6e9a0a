from django.db import models
from django.utils import timezone


class SoftDeleteQuerySet(models.QuerySet):

    def active(self):
        """Rows not marked as deleted"""
        return self.filter(deleted_at__isnull=True)

    def soft_delete(self):
        """Mark every active row of the queryset in a single UPDATE"""
        return self.active().update(deleted_at=timezone.now())


class SoftDeleteModel(models.Model):
    """
    Abstract base for records that are hidden rather than removed.

    deleted_at = NULL means active. Soft-deleted rows are excluded from
    every read path and aggregate, but stay in the table for reporting.
    """

    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True, help_text='When was this record deleted (NULL = active)')

    objects = SoftDeleteQuerySet.as_manager()

    class Meta:
        abstract = True

    def soft_delete(self):
        self.deleted_at = timezone.now()
        self.save(update_fields=['deleted_at'])


class TimestampedModel(models.Model):

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
