import logging

from django.conf import settings
from django.http import JsonResponse
from django.utils.crypto import constant_time_compare

from apps.core.decorators import api_view
from apps.core.exceptions import AuthError, ConfigurationError
from apps.core.utils import get_client_ip, parse_json_body, validate_form
from .decorators import rate_limited
from .forms import LoginForm

logger = logging.getLogger(__name__)


def get_admin_credentials():
    """
    (email, password) of the single administrator.

    Raises ConfigurationError when either value is missing; the caller
    only sees a generic message.
    """
    email = (settings.CRM_ADMIN_EMAIL or '').lower().strip()
    password = settings.CRM_ADMIN_PASSWORD or ''

    if not email or not password:
        logger.critical("CRM_ADMIN_EMAIL or CRM_ADMIN_PASSWORD is not configured")
        raise ConfigurationError()

    return email, password


def credentials_match(email, password):
    """
    Compare both fields in constant time.

    Both comparisons always run so a wrong e-mail and a wrong password
    take the same path.
    """
    admin_email, admin_password = get_admin_credentials()
    email_ok = constant_time_compare(email, admin_email)
    password_ok = constant_time_compare(password, admin_password)
    return email_ok and password_ok


# AUTHENTICATION VIEWS
@api_view('POST')
@rate_limited()
def login_view(request):
    form = LoginForm(parse_json_body(request))
    data = validate_form(form)

    if not credentials_match(data['email'], data['password']):
        logger.warning(f"Failed login attempt from {get_client_ip(request)}")
        raise AuthError('Invalid credentials')

    # New session key on privilege change
    request.session.cycle_key()
    request.session[settings.ADMIN_SESSION_KEY] = data['email']
    request.session.set_expiry(settings.SESSION_COOKIE_AGE)

    logger.info(f"Admin logged in from {get_client_ip(request)}")
    return JsonResponse({'success': True})


@api_view('POST')
def logout_view(request):
    # Deletes the stored session and expires the cookie
    if request.session.session_key:
        request.session.flush()
        logger.info("Admin logged out")

    return JsonResponse({'success': True})
