"""
Helper utilities shared by the API views
"""
import calendar
import json
from datetime import datetime, time

from django.conf import settings
from django.core.paginator import Paginator
from django.utils import timezone

from .exceptions import ApiValidationError


# REQUEST HELPERS

def get_client_ip(request):
    """
    Identifier used for rate limiting.

    X-Forwarded-For can contain multiple IPs (proxy chain), the first
    one is the original client. Falls back to X-Real-IP, then to the
    socket address.
    """
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()

    x_real_ip = request.META.get('HTTP_X_REAL_IP')
    if x_real_ip:
        return x_real_ip.strip()

    return request.META.get('REMOTE_ADDR') or 'unknown'


def parse_json_body(request):
    """
    Decode the request body as a JSON object.

    An empty body counts as ``{}``; anything that is not a JSON object
    is rejected with a 400.
    """
    if not request.body:
        return {}

    try:
        payload = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ApiValidationError('Invalid JSON payload')

    if not isinstance(payload, dict):
        raise ApiValidationError('JSON body must be an object')

    return payload


# FORM HELPERS

def first_form_error(form):
    """Return the first validation message of a bound, invalid form"""
    for messages in form.errors.values():
        if messages:
            return str(messages[0])
    return 'Invalid data'


def validate_form(form):
    """Run form validation, raising a 400 with the first message"""
    if not form.is_valid():
        raise ApiValidationError(first_form_error(form))
    return form.cleaned_data


# SERIALIZATION HELPERS

def to_number(value):
    """Decimal (or None) → JSON number"""
    if value is None:
        return None
    return float(value)


def to_iso(value):
    """datetime/date (or None) → ISO-8601 string"""
    if value is None:
        return None
    return value.isoformat()


# PAGINATION

def paginate(request, queryset):
    """
    Slice a queryset using ?page and ?page_size.

    page defaults to 1, page_size to PAGINATION_SIZE and is clamped to
    [1, PAGINATION_MAX_SIZE]. Returns (page_obj, pagination_dict).
    """
    try:
        page_number = max(1, int(request.GET.get('page', 1)))
    except (TypeError, ValueError):
        page_number = 1

    try:
        page_size = int(request.GET.get('page_size', settings.PAGINATION_SIZE))
    except (TypeError, ValueError):
        page_size = settings.PAGINATION_SIZE
    page_size = min(settings.PAGINATION_MAX_SIZE, max(1, page_size))

    paginator = Paginator(queryset, page_size)
    # get_page() falls back to the last page when out of range
    page_obj = paginator.get_page(page_number)

    pagination = {
        'page': page_number,
        'page_size': page_size,
        'total': paginator.count,
        'total_pages': paginator.num_pages if paginator.count else 0,
    }
    return page_obj, pagination


# DATE HELPERS

def month_bounds(month):
    """
    'YYYY-MM' → (start, end) aware datetimes of that calendar month.

    start = day 1 00:00:00, end = last day 23:59:59.999999, both in the
    current time zone. Raises ApiValidationError on malformed input.
    """
    try:
        year_str, month_str = month.split('-')
        year, month_num = int(year_str), int(month_str)
        last_day = calendar.monthrange(year, month_num)[1]
        first = datetime(year, month_num, 1)
        last = datetime(year, month_num, last_day)
    except ValueError:
        raise ApiValidationError('month must use the YYYY-MM format')

    return start_of_day(first), end_of_day(last)


def end_of_day(day):
    """date → aware datetime at 23:59:59.999999 of that day"""
    return timezone.make_aware(datetime.combine(day, time.max))


def start_of_day(day):
    return timezone.make_aware(datetime.combine(day, time.min))
