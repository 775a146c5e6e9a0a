# Decorators in this file:
# 1. admin_required - Only the authenticated administrator can access
# 2. rate_limited - Fixed-window admission control per client
# ==============================================================================

import logging
from datetime import datetime, timezone as dt_timezone
from functools import wraps

from django.conf import settings
from django.utils.crypto import constant_time_compare

from apps.core.exceptions import ApiError, AuthError, RateLimitError
from apps.core.ratelimit import login_limiter
from apps.core.utils import get_client_ip

logger = logging.getLogger(__name__)


def is_admin_session(request):
    """
    True when the session belongs to the configured administrator.

    Changing CRM_ADMIN_EMAIL invalidates every existing session.
    """
    session_email = request.session.get(settings.ADMIN_SESSION_KEY)
    configured_email = (settings.CRM_ADMIN_EMAIL or '').lower().strip()

    if not session_email or not configured_email:
        return False

    return constant_time_compare(session_email, configured_email)


# AUTHENTICATION DECORATORS
def admin_required(view_func):
    """
    Decorator: Only the logged-in administrator can access this view

    Checks:
    1. Request carries a session cookie
    2. Session holds the admin e-mail

    Otherwise answers 401 itself; the view is never called, so it
    must not try to send a second response.

    Usage:
        @api_view('GET')
        @admin_required
        def pipeline_list_view(request):
            ...
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if is_admin_session(request):
            return view_func(request, *args, **kwargs)

        return AuthError().to_response()

    return wrapper


# ADMISSION CONTROL DECORATORS
def rate_limited(max_requests=None, window=None, limiter=login_limiter, key_func=get_client_ip):
    """
    Decorator: Fixed-window rate limit per client identifier

    Args:
        max_requests: Requests allowed per window (default LOGIN_RATE_LIMIT)
        window: Window length in seconds (default LOGIN_RATE_WINDOW)
        limiter: RateLimiter holding the counters
        key_func: request → identifier (client IP by default)

    Every response carries X-RateLimit-Limit / -Remaining / -Reset.
    Refused requests get a 429 with retry_after seconds.
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            limit = max_requests or settings.LOGIN_RATE_LIMIT
            window_seconds = window or settings.LOGIN_RATE_WINDOW

            identifier = key_func(request)
            result = limiter.check(identifier, limit, window_seconds)

            if result.allowed:
                try:
                    response = view_func(request, *args, **kwargs)
                except ApiError as exc:
                    response = exc.to_response()
            else:
                retry_after = limiter.retry_after(result)
                logger.warning(f"Rate limit exceeded for {identifier} on {request.path}")
                response = RateLimitError(retry_after).to_response()

            response['X-RateLimit-Limit'] = str(limit)
            response['X-RateLimit-Remaining'] = str(result.remaining)
            response['X-RateLimit-Reset'] = datetime.fromtimestamp(result.reset_time, tz=dt_timezone.utc).isoformat()
            return response

        return wrapper

    return decorator
