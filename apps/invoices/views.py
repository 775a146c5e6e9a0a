import csv
import logging

import openpyxl
from openpyxl.styles import Font, PatternFill
from django.db import transaction
from django.db.models import Q
from django.http import HttpResponse, JsonResponse
from django.utils import timezone
from django.utils.dateparse import parse_date

from apps.accounts.decorators import admin_required
from apps.core.decorators import api_view
from apps.core.exceptions import ApiValidationError, NotFoundError
from apps.core.utils import end_of_day, paginate, parse_json_body, start_of_day, validate_form
from .forms import InvoiceForm, InvoiceUpdateForm
from .models import Invoice

logger = logging.getLogger(__name__)


EXPORT_FORMATS = ('json', 'excel', 'csv')

EXPORT_HEADERS = [
    'Number', 'Client', 'Client Company', 'Client Email', 'Client Tax ID',
    'Issue Date', 'Due Date', 'Status', 'Subtotal', 'IVA', 'Total',
]


def get_invoice_or_404(pk):
    try:
        return Invoice.objects.active().get(pk=pk)
    except Invoice.DoesNotExist:
        raise NotFoundError('Invoice not found')


@api_view('GET', 'POST')
@admin_required
def invoice_list_view(request):
    if request.method == 'POST':
        form = InvoiceForm(parse_json_body(request))
        data = validate_form(form)

        if data.get('issue_date') is None:
            data['issue_date'] = timezone.now()

        with transaction.atomic():
            invoice = Invoice.objects.create(
                invoice_number=Invoice.generate_number(),
                status=Invoice.STATUS_DRAFT,
                **data
            )
        invoice.refresh_from_db()
        logger.info(f"Invoice created: {invoice.invoice_number} for {invoice.client_name}")
        return JsonResponse(invoice.to_dict(), status=201)

    invoices = Invoice.objects.active().order_by('-issue_date')

    status = request.GET.get('status', '').strip()
    if status and status != 'all':
        invoices = invoices.filter(status=status)

    search_query = request.GET.get('search', '').strip()
    if search_query:
        invoices = invoices.filter(
            Q(invoice_number__icontains=search_query) |
            Q(client_name__icontains=search_query) |
            Q(client_email__icontains=search_query)
        )

    page_obj, pagination = paginate(request, invoices)

    return JsonResponse({
        'invoices': [invoice.to_dict() for invoice in page_obj],
        'pagination': pagination,
    })


@api_view('GET', 'PUT', 'DELETE')
@admin_required
def invoice_detail_view(request, pk):
    invoice = get_invoice_or_404(pk)

    if request.method == 'PUT':
        form = InvoiceUpdateForm(parse_json_body(request))
        validate_form(form)

        changes = form.submitted_data
        for field, value in changes.items():
            setattr(invoice, field, value)
        invoice.save()
        invoice.refresh_from_db()
        logger.info(f"Invoice {invoice.invoice_number} updated: {', '.join(changes) or 'no changes'}")
        return JsonResponse(invoice.to_dict())

    if request.method == 'DELETE':
        invoice.soft_delete()
        logger.info(f"Invoice soft-deleted: {invoice.invoice_number}")
        return JsonResponse({'success': True})

    return JsonResponse(invoice.to_dict())


# EXPORT

def _parse_day(value, name):
    try:
        day = parse_date(value)
    except ValueError:
        day = None
    if day is None:
        raise ApiValidationError(f'{name} must use the YYYY-MM-DD format')
    return day


def _day_param(params, *names):
    """Date from the first of ``names`` present in the query string"""
    for name in names:
        value = params.get(name, '').strip()
        if value:
            return _parse_day(value, name)
    return None


def filter_export_queryset(params):
    """
    Active invoices matching the export filters.

    - ids: comma separated list, takes precedence over status
    - status: exact match, 'all' disables the filter
    - dateFrom / dateTo (or date_from / date_to): issue date range,
      the end day is inclusive
    """
    invoices = Invoice.objects.active()

    ids = [part.strip() for part in params.get('ids', '').split(',')]
    ids = [int(part) for part in ids if part.isdigit()]
    status = params.get('status', '').strip()

    if ids:
        invoices = invoices.filter(id__in=ids)
    elif status and status != 'all':
        invoices = invoices.filter(status=status)

    date_from = _day_param(params, 'dateFrom', 'date_from')
    if date_from:
        invoices = invoices.filter(issue_date__gte=start_of_day(date_from))

    date_to = _day_param(params, 'dateTo', 'date_to')
    if date_to:
        invoices = invoices.filter(issue_date__lte=end_of_day(date_to))

    return invoices.order_by('-issue_date')


def _format_date(value):
    if value is None:
        return ''
    return timezone.localtime(value).strftime('%Y-%m-%d')


def export_row(invoice):
    return [
        invoice.invoice_number,
        invoice.client_name,
        invoice.client_company_name or '',
        invoice.client_email or '',
        invoice.client_tax_id or '',
        _format_date(invoice.issue_date),
        _format_date(invoice.due_date),
        invoice.get_status_display(),
        float(invoice.subtotal),
        float(invoice.iva),
        float(invoice.total),
    ]


def export_excel(invoices):
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Invoices"

    # Write headers with styling
    for col, header in enumerate(EXPORT_HEADERS, start=1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = Font(bold=True, color="FFFFFF")
        cell.fill = PatternFill(start_color="3B82F6", end_color="3B82F6", fill_type="solid")

    for row, invoice in enumerate(invoices, start=2):
        for col, value in enumerate(export_row(invoice), start=1):
            ws.cell(row=row, column=col, value=value)

    # Adjust column widths
    for col in ws.columns:
        max_length = max(len(str(cell.value)) for cell in col if cell.value is not None)
        ws.column_dimensions[col[0].column_letter].width = min(max_length + 2, 50)

    response = HttpResponse(
        content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )
    response['Content-Disposition'] = f'attachment; filename="invoices_{timezone.now().strftime("%Y%m%d_%H%M%S")}.xlsx"'

    wb.save(response)
    return response


def export_csv(invoices):
    response = HttpResponse(content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="invoices_{timezone.now().strftime("%Y%m%d_%H%M%S")}.csv"'

    # Write BOM for Excel UTF-8 compatibility
    response.write('\ufeff')

    writer = csv.writer(response)
    writer.writerow(EXPORT_HEADERS)
    for invoice in invoices:
        writer.writerow(export_row(invoice))

    return response


@api_view('GET')
@admin_required
def invoice_export_view(request):
    export_format = request.GET.get('format', 'json').strip().lower() or 'json'
    if export_format not in EXPORT_FORMATS:
        raise ApiValidationError('format must be one of json, excel, csv')

    invoices = list(filter_export_queryset(request.GET))
    logger.info(f"Exporting {len(invoices)} invoices as {export_format}")

    if export_format == 'excel':
        return export_excel(invoices)

    if export_format == 'csv':
        return export_csv(invoices)

    return JsonResponse({
        'invoices': [invoice.to_dict() for invoice in invoices],
        'count': len(invoices),
    })
