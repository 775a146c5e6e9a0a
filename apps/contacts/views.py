import logging

from django.db.models import Q
from django.http import JsonResponse

from apps.accounts.decorators import admin_required
from apps.core.decorators import api_view
from apps.core.exceptions import ConflictError, NotFoundError
from apps.core.utils import paginate, parse_json_body, validate_form
from .forms import ContactForm
from .models import Contact

logger = logging.getLogger(__name__)


def get_contact_or_404(pk):
    try:
        return Contact.objects.get(pk=pk)
    except Contact.DoesNotExist:
        raise NotFoundError('Contact not found')


@api_view('GET', 'POST')
@admin_required
def contact_list_view(request):
    if request.method == 'POST':
        form = ContactForm(parse_json_body(request))
        contact = Contact.objects.create(**validate_form(form))
        logger.info(f"Contact created: {contact.id} - {contact.name}")
        return JsonResponse(contact.to_dict(), status=201)

    contacts = Contact.objects.all()

    search_query = request.GET.get('search', '').strip()
    if search_query:
        contacts = contacts.filter(
            Q(name__icontains=search_query) |
            Q(email__icontains=search_query)
        )

    page_obj, pagination = paginate(request, contacts)

    return JsonResponse({
        'contacts': [contact.to_dict() for contact in page_obj],
        'pagination': pagination,
    })


@api_view('GET', 'PUT', 'DELETE')
@admin_required
def contact_detail_view(request, pk):
    contact = get_contact_or_404(pk)

    if request.method == 'PUT':
        payload = parse_json_body(request)
        form = ContactForm(payload, partial=True)
        validate_form(form)

        for field, value in form.submitted_data.items():
            setattr(contact, field, value)
        contact.save()

        return JsonResponse(contact.to_dict())

    if request.method == 'DELETE':
        if contact.leads.exists():
            raise ConflictError('Cannot delete a contact that still has leads')

        contact.delete()
        logger.info(f"Contact deleted: {pk}")
        return JsonResponse({'success': True})

    data = contact.to_dict()
    data['leads'] = [lead.to_dict(include_contact=False) for lead in contact.leads.all()]
    return JsonResponse(data)
