"""
Pipeline Models Tests
=====================

Stage management and card ordering at the model level.
"""

from decimal import Decimal

from django.test import TestCase

from apps.pipelines.models import Card, Pipeline


class PipelineTestMixin:

    def make_card(self, stage='New', position=0, **extra):
        extra.setdefault('entity_id', '1')
        extra.setdefault('entity_type', self.pipeline.entity_type)
        extra.setdefault('stage_color', '#3B82F6')
        return Card.objects.create(pipeline=self.pipeline, stage=stage, position=position, **extra)


class StageRenameTest(PipelineTestMixin, TestCase):

    def setUp(self):
        self.pipeline = Pipeline.objects.create(name='Sales', entity_type='client')
        self.active = [self.make_card('New', i) for i in range(3)]

        self.deleted = self.make_card('New', 3)
        self.deleted.soft_delete()

        self.other = self.make_card('Won', 0, stage_color='#FF0000')

    def test_rename_updates_active_cards_only(self):
        updated = self.pipeline.rename_stage('New', 'Contacted', '#00FF00')

        self.assertEqual(updated, 3)
        for card in self.active:
            card.refresh_from_db()
            self.assertEqual(card.stage, 'Contacted')
            self.assertEqual(card.stage_color, '#00FF00')

        self.deleted.refresh_from_db()
        self.assertEqual(self.deleted.stage, 'New')
        self.assertEqual(self.deleted.stage_color, '#3B82F6')

    def test_rename_leaves_other_stages_alone(self):
        self.pipeline.rename_stage('New', 'Contacted', '#00FF00')

        self.other.refresh_from_db()
        self.assertEqual(self.other.stage, 'Won')
        self.assertEqual(self.other.stage_color, '#FF0000')

    def test_rename_does_not_touch_other_pipelines(self):
        other_pipeline = Pipeline.objects.create(name='Other', entity_type='client')
        foreign = Card.objects.create(pipeline=other_pipeline, entity_id='9', entity_type='client', stage='New')

        self.pipeline.rename_stage('New', 'Contacted', '#00FF00')

        foreign.refresh_from_db()
        self.assertEqual(foreign.stage, 'New')

    def test_rename_onto_existing_stage_merges(self):
        self.pipeline.rename_stage('New', 'Won', '#FF0000')

        self.assertEqual(self.pipeline.stage_card_count('New'), 0)
        self.assertEqual(self.pipeline.stage_card_count('Won'), 4)

    def test_rename_unknown_stage_updates_nothing(self):
        self.assertEqual(self.pipeline.rename_stage('Missing', 'X', '#000000'), 0)


class StageDeleteTest(PipelineTestMixin, TestCase):

    def setUp(self):
        self.pipeline = Pipeline.objects.create(name='Sales', entity_type='client')

    def test_empty_stage_can_be_deleted(self):
        self.assertTrue(self.pipeline.can_delete_stage('Nothing here'))

    def test_stage_with_cards_cannot_be_deleted(self):
        self.make_card('New')

        self.assertFalse(self.pipeline.can_delete_stage('New'))

    def test_soft_deleted_cards_do_not_block(self):
        self.make_card('New').soft_delete()

        self.assertTrue(self.pipeline.can_delete_stage('New'))


class PipelineLifecycleTest(PipelineTestMixin, TestCase):

    def setUp(self):
        self.pipeline = Pipeline.objects.create(name='Sales', entity_type='client')

    def test_delete_soft_deletes_cards_then_removes_pipeline(self):
        cards = [self.make_card('New', i) for i in range(4)]
        pipeline_id = self.pipeline.pk

        removed = self.pipeline.delete_with_cards()

        self.assertEqual(removed, 4)
        self.assertFalse(Pipeline.objects.filter(pk=pipeline_id).exists())
        for card in cards:
            card.refresh_from_db()
            self.assertIsNotNone(card.deleted_at)
            self.assertEqual(card.pipeline_id, pipeline_id)

    def test_stats_ignore_deleted_cards_and_null_amounts(self):
        self.make_card('New', 0, amount=Decimal('100.50'))
        self.make_card('New', 1, amount=None)
        self.make_card('Won', 0, amount=Decimal('49.50'))
        self.make_card('Won', 1, amount=Decimal('1000')).soft_delete()

        stats = self.pipeline.get_stats()

        self.assertEqual(stats, {'total_cards': 3, 'total_amount': 150.0})

    def test_stats_of_empty_pipeline(self):
        self.assertEqual(self.pipeline.get_stats(), {'total_cards': 0, 'total_amount': 0})


class CardOrderingTest(PipelineTestMixin, TestCase):

    def setUp(self):
        self.pipeline = Pipeline.objects.create(name='Sales', entity_type='contact')
        self.a = self.make_card('New', 0, entity_id='a')
        self.b = self.make_card('New', 1, entity_id='b')
        self.c = self.make_card('New', 2, entity_id='c')
        self.d = self.make_card('Won', 0, entity_id='d')

    def positions(self, stage):
        return list(
            self.pipeline.active_cards().filter(stage=stage).order_by('position').values_list('entity_id', 'position')
        )

    def test_next_position_appends(self):
        self.assertEqual(Card.next_position(self.pipeline.pk, 'New'), 3)
        self.assertEqual(Card.next_position(self.pipeline.pk, 'Empty'), 0)

    def test_next_position_skips_deleted_cards(self):
        self.c.soft_delete()

        self.assertEqual(Card.next_position(self.pipeline.pk, 'New'), 2)

    def test_move_up_inside_stage(self):
        self.c.move_to('New', 0)

        self.assertEqual(self.positions('New'), [('c', 0), ('a', 1), ('b', 2)])

    def test_move_down_inside_stage(self):
        self.a.move_to('New', 2)

        self.assertEqual(self.positions('New'), [('b', 0), ('c', 1), ('a', 2)])

    def test_move_to_other_stage(self):
        self.a.move_to('Won', 0, stage_color='#22C55E')

        self.assertEqual(self.positions('New'), [('b', 0), ('c', 1)])
        self.assertEqual(self.positions('Won'), [('a', 0), ('d', 1)])
        self.a.refresh_from_db()
        self.assertEqual(self.a.stage_color, '#22C55E')

    def test_move_keeps_color_when_none_given(self):
        self.a.move_to('Won', 1)

        self.a.refresh_from_db()
        self.assertEqual(self.a.stage_color, '#3B82F6')
