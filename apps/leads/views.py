import logging

from django.db.models import Q
from django.http import JsonResponse

from apps.accounts.decorators import admin_required
from apps.core.decorators import api_view
from apps.core.exceptions import NotFoundError
from apps.core.utils import paginate, parse_json_body, validate_form
from .forms import LeadForm
from .models import Lead

logger = logging.getLogger(__name__)


def get_lead_or_404(pk):
    try:
        return Lead.objects.select_related('contact').get(pk=pk)
    except Lead.DoesNotExist:
        raise NotFoundError('Lead not found')


@api_view('GET', 'POST')
@admin_required
def lead_list_view(request):
    if request.method == 'POST':
        form = LeadForm(parse_json_body(request))
        lead = Lead.objects.create(**validate_form(form))
        lead.refresh_from_db()
        logger.info(f"New lead created: {lead.id} for contact {lead.contact_id}")
        return JsonResponse(lead.to_dict(), status=201)

    leads = Lead.objects.select_related('contact').order_by('-created_at')

    status = request.GET.get('status', '').strip()
    if status:
        leads = leads.filter(status=status)

    search_query = request.GET.get('search', '').strip()
    if search_query:
        # Search in the contact's name or email
        leads = leads.filter(
            Q(contact__name__icontains=search_query) |
            Q(contact__email__icontains=search_query)
        )

    page_obj, pagination = paginate(request, leads)

    return JsonResponse({
        'leads': [lead.to_dict() for lead in page_obj],
        'pagination': pagination,
    })


@api_view('GET', 'PUT', 'DELETE')
@admin_required
def lead_detail_view(request, pk):
    lead = get_lead_or_404(pk)

    if request.method == 'PUT':
        payload = parse_json_body(request)
        form = LeadForm(payload, partial=True)
        validate_form(form)

        changes = form.submitted_data
        for field, value in changes.items():
            setattr(lead, field, value)
        lead.save()

        # contact may have changed
        lead.refresh_from_db()
        logger.info(f"Lead {lead.id} updated: {', '.join(changes) or 'no changes'}")
        return JsonResponse(lead.to_dict())

    if request.method == 'DELETE':
        lead.delete()
        logger.info(f"Lead deleted: {pk}")
        return JsonResponse({'success': True})

    return JsonResponse(lead.to_dict())
