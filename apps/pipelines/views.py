import logging

from django.db.models import Count, Q
from django.http import JsonResponse

from apps.accounts.decorators import admin_required
from apps.core.decorators import api_view
from apps.core.exceptions import ApiValidationError, NotFoundError
from apps.core.utils import parse_json_body, validate_form
from .forms import (
    CardForm,
    CardMoveForm,
    CardUpdateForm,
    PipelineForm,
    StageCreateForm,
    StageDeleteForm,
    StageRenameForm,
)
from .models import ENTITY_TYPE_CHOICES, Card, Pipeline

logger = logging.getLogger(__name__)


def get_pipeline_or_404(pk):
    try:
        return Pipeline.objects.get(pk=pk)
    except Pipeline.DoesNotExist:
        raise NotFoundError('Pipeline not found')


def get_card_or_404(pipeline_id, card_id):
    """Active card that belongs to the given board"""
    try:
        return Card.objects.active().get(pk=card_id, pipeline_id=pipeline_id)
    except Card.DoesNotExist:
        raise NotFoundError('Card not found')


# PIPELINES

@api_view('GET', 'POST')
@admin_required
def pipeline_list_view(request):
    if request.method == 'POST':
        form = PipelineForm(parse_json_body(request))
        pipeline = Pipeline.objects.create(**validate_form(form))
        logger.info(f"Pipeline created: {pipeline.id} - {pipeline.name}")
        return JsonResponse(pipeline.to_dict(), status=201)

    pipelines = Pipeline.objects.annotate(
        card_count=Count('cards', filter=Q(cards__deleted_at__isnull=True))
    ).order_by('-created_at')

    # Unknown values are ignored rather than rejected
    entity_type = request.GET.get('entity_type')
    if entity_type in dict(ENTITY_TYPE_CHOICES):
        pipelines = pipelines.filter(entity_type=entity_type)

    data = []
    for pipeline in pipelines:
        item = pipeline.to_dict()
        item['card_count'] = pipeline.card_count
        data.append(item)

    return JsonResponse({'pipelines': data})


@api_view('GET', 'DELETE')
@admin_required
def pipeline_detail_view(request, pk):
    pipeline = get_pipeline_or_404(pk)

    if request.method == 'DELETE':
        removed = pipeline.delete_with_cards()
        logger.info(f"Pipeline {pk} deleted, {removed} cards soft-deleted")
        return JsonResponse({'success': True})

    return JsonResponse({
        'pipeline': pipeline.to_dict(),
        'stats': pipeline.get_stats(),
    })


# STAGES (columns)

@api_view('PUT', 'POST', 'DELETE')
@admin_required
def pipeline_stages_view(request, pk):
    pipeline = get_pipeline_or_404(pk)
    payload = parse_json_body(request)

    if request.method == 'PUT':
        data = validate_form(StageRenameForm(payload))
        updated = pipeline.rename_stage(data['old_stage'], data['new_stage'], data['new_color'])
        logger.info(
            f"Pipeline {pk}: stage \"{data['old_stage']}\" renamed to \"{data['new_stage']}\" ({updated} cards)"
        )
        return JsonResponse({'success': True, 'updated': updated})

    if request.method == 'POST':
        # Nothing is stored: the column exists once a card uses it
        data = validate_form(StageCreateForm(payload))
        return JsonResponse({'stage': data['stage_name'], 'color': data['color']})

    data = validate_form(StageDeleteForm(payload))
    if not pipeline.can_delete_stage(data['stage_name']):
        raise ApiValidationError('Cannot delete a column that still has cards')

    return JsonResponse({'success': True})


# CARDS

@api_view('GET', 'POST', 'PUT')
@admin_required
def pipeline_cards_view(request, pk):
    pipeline = get_pipeline_or_404(pk)

    if request.method == 'POST':
        data = validate_form(CardForm(parse_json_body(request)))

        entity_id = data['entity_id'].strip()
        if not entity_id:
            raise ApiValidationError('entity_id is required and cannot be empty')

        if data['entity_type'] != pipeline.entity_type:
            raise ApiValidationError(f'entity_type must be "{pipeline.entity_type}" for this pipeline')

        data['entity_id'] = entity_id
        card = Card.objects.create(
            pipeline=pipeline,
            position=Card.next_position(pipeline.pk, data['stage']),
            **data
        )
        card.refresh_from_db()
        logger.info(f"Card created: {card.id} in pipeline {pipeline.id} / {card.stage}")
        return JsonResponse(card.to_dict(), status=201)

    if request.method == 'PUT':
        data = validate_form(CardMoveForm(parse_json_body(request)))
        card = get_card_or_404(pipeline.pk, data['card_id'])
        card.move_to(data['stage'], data['position'], data['stage_color'] or None)
        return JsonResponse(card.to_dict())

    cards = list(pipeline.active_cards().order_by('stage', 'position'))

    # Grouped by column for the board
    cards_by_stage = {}
    for card in cards:
        cards_by_stage.setdefault(card.stage, []).append(card.to_dict())

    return JsonResponse({
        'cards': [card.to_dict() for card in cards],
        'cards_by_stage': cards_by_stage,
        'stages': list(cards_by_stage),
    })


@api_view('GET', 'PUT', 'DELETE')
@admin_required
def card_detail_view(request, pk, card_id):
    card = get_card_or_404(pk, card_id)

    if request.method == 'PUT':
        payload = parse_json_body(request)
        form = CardUpdateForm(payload)
        validate_form(form)

        changes = form.submitted_data
        # An empty color keeps the current one
        if changes.get('stage_color') is None:
            changes.pop('stage_color', None)

        for field, value in changes.items():
            setattr(card, field, value)
        card.save()
        card.refresh_from_db()
        return JsonResponse(card.to_dict())

    if request.method == 'DELETE':
        card.soft_delete()
        logger.info(f"Card soft-deleted: {card.id}")
        return JsonResponse(card.to_dict())

    data = card.to_dict()
    data['pipeline'] = get_pipeline_or_404(pk).to_dict()
    return JsonResponse(data)
