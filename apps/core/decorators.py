"""
API boundary decorator.

``api_view`` wraps every JSON endpoint:
1. Rejects methods the endpoint does not serve (405 + Allow header)
2. Translates ApiError subclasses into their JSON response
3. Maps ORM lookups that found nothing to 404
4. Maps integrity violations (unique, protected FK) to 409
5. Logs anything else with its traceback and answers a generic 500

The session cookie is SameSite=Lax, so the endpoints are CSRF exempt.
"""

import logging
from functools import wraps

from django.core.exceptions import ObjectDoesNotExist
from django.db import IntegrityError
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt

from .exceptions import ApiError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def api_view(*methods):
    """
    Usage:
        @api_view('GET', 'POST')
        @admin_required
        def pipeline_list_view(request):
            ...
    """
    allowed = [method.upper() for method in methods]

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if request.method not in allowed:
                response = JsonResponse({'error': 'Method not allowed'}, status=405)
                response['Allow'] = ', '.join(allowed)
                return response

            try:
                return view_func(request, *args, **kwargs)
            except ApiError as exc:
                return exc.to_response()
            except ObjectDoesNotExist:
                return NotFoundError().to_response()
            except IntegrityError as exc:
                logger.warning(f"Integrity error in {view_func.__name__}: {exc}")
                return ConflictError().to_response()
            except Exception:
                logger.exception(f"Unexpected error in {view_func.__name__}")
                return JsonResponse({'error': 'Internal server error'}, status=500)

        return csrf_exempt(wrapper)

    return decorator
