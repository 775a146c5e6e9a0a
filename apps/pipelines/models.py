import uuid

from django.conf import settings
from django.db import models, transaction
from django.db.models import F, Max, Sum
from django.utils import timezone

from apps.core.models import SoftDeleteModel, SoftDeleteQuerySet, TimestampedModel
from apps.core.utils import to_iso, to_number


ENTITY_TYPE_CHOICES = [
    ('client', 'Client'),
    ('contact', 'Contact'),
]


def default_stage_color():
    return settings.DEFAULT_STAGE_COLOR


class Pipeline(TimestampedModel):
    """
    A kanban board.

    Stages (columns) are not stored: a stage is the set of active cards of
    this pipeline sharing the same ``stage`` label. A column exists as soon
    as one card references it, and vanishes when none does.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, help_text='Board name')
    entity_type = models.CharField(max_length=20, choices=ENTITY_TYPE_CHOICES, db_index=True, help_text='Kind of entity the cards point to')

    class Meta:
        verbose_name = 'Pipeline'
        verbose_name_plural = 'Pipelines'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.entity_type})"

    def active_cards(self):
        return Card.objects.active().filter(pipeline_id=self.pk)

    # STAGE MANAGEMENT

    def rename_stage(self, old_stage, new_stage, new_color):
        """
        Rename and recolor a column.

        One UPDATE over every active card of this pipeline in ``old_stage``,
        so either all of them move or none does. Soft-deleted cards keep
        their label. Renaming onto an existing column merges both.

        Returns the number of cards updated.
        """
        return self.active_cards().filter(stage=old_stage).update(
            stage=new_stage,
            stage_color=new_color,
            updated_at=timezone.now(),
        )

    def stage_card_count(self, stage):
        """Active cards currently in ``stage``"""
        return self.active_cards().filter(stage=stage).count()

    def can_delete_stage(self, stage):
        # Nothing is stored for an empty column, deleting it is a no-op
        return self.stage_card_count(stage) == 0

    # LIFECYCLE

    def delete_with_cards(self):
        """
        Two-phase removal: soft-delete the active cards, then hard-delete the
        board. Cards keep their pipeline_id for historical reporting.

        Returns the number of cards soft-deleted.
        """
        with transaction.atomic():
            removed = self.active_cards().soft_delete()
            self.delete()
        return removed

    def get_stats(self):
        """Count and summed amount of active cards (NULL amounts count as 0)"""
        totals = self.active_cards().aggregate(total_amount=Sum('amount'))
        return {
            'total_cards': self.active_cards().count(),
            'total_amount': to_number(totals['total_amount']) or 0,
        }

    def to_dict(self):
        return {
            'id': str(self.id),
            'name': self.name,
            'entity_type': self.entity_type,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
        }


class CardQuerySet(SoftDeleteQuerySet):

    def in_stage(self, pipeline_id, stage):
        return self.active().filter(pipeline_id=pipeline_id, stage=stage)


class Card(TimestampedModel, SoftDeleteModel):
    """
    A kanban item pointing to a client or contact.

    ``pipeline`` has no database constraint: cards outlive a deleted board
    and keep its id.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    pipeline = models.ForeignKey(Pipeline, on_delete=models.DO_NOTHING, db_constraint=False, related_name='cards', help_text='Board this card lives on')

    # Referenced entity
    entity_id = models.CharField(max_length=64, help_text='Id of the client/contact this card tracks')
    entity_type = models.CharField(max_length=20, choices=ENTITY_TYPE_CHOICES)

    # Column & order
    stage = models.CharField(max_length=100, db_index=True, help_text='Column label')
    stage_color = models.CharField(max_length=20, default=default_stage_color, help_text='Hex color of the column')
    position = models.PositiveIntegerField(default=0, help_text='Order inside the column (0 = top)')

    # Additional Information
    tags = models.JSONField(default=list, blank=True)
    capture_date = models.DateTimeField(null=True, blank=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    objects = CardQuerySet.as_manager()

    class Meta:
        verbose_name = 'Card'
        verbose_name_plural = 'Cards'
        ordering = ['stage', 'position']
        indexes = [
            models.Index(fields=['pipeline', 'stage', 'position']),
        ]

    def __str__(self):
        return f"{self.entity_type} {self.entity_id} @ {self.stage}"

    @classmethod
    def next_position(cls, pipeline_id, stage):
        """Position right after the last active card of a column"""
        last = cls.objects.in_stage(pipeline_id, stage).aggregate(last=Max('position'))['last']
        return 0 if last is None else last + 1

    def move_to(self, stage, position, stage_color=None):
        """
        Move this card to ``position`` of ``stage`` and keep both columns
        gap-free.

        - Other column: close the gap left behind, open one in the target
        - Same column: shift the cards between the old and new slot
        """
        siblings = Card.objects.active().filter(pipeline_id=self.pipeline_id).exclude(pk=self.pk)

        with transaction.atomic():
            if self.stage != stage:
                siblings.filter(stage=self.stage, position__gt=self.position).update(position=F('position') - 1)
                siblings.filter(stage=stage, position__gte=position).update(position=F('position') + 1)
            elif self.position < position:
                siblings.filter(stage=stage, position__gt=self.position, position__lte=position).update(position=F('position') - 1)
            elif self.position > position:
                siblings.filter(stage=stage, position__gte=position, position__lt=self.position).update(position=F('position') + 1)

            self.stage = stage
            self.stage_color = stage_color or self.stage_color
            self.position = position
            self.save(update_fields=['stage', 'stage_color', 'position', 'updated_at'])

    def to_dict(self):
        return {
            'id': str(self.id),
            'pipeline_id': str(self.pipeline_id),
            'entity_id': self.entity_id,
            'entity_type': self.entity_type,
            'stage': self.stage,
            'stage_color': self.stage_color,
            'position': self.position,
            'tags': self.tags,
            'capture_date': to_iso(self.capture_date),
            'amount': to_number(self.amount),
            'notes': self.notes,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
            'deleted_at': to_iso(self.deleted_at),
        }
