"""
API error taxonomy.

Every error a view can raise towards the caller carries its HTTP status
and the message shown in the ``{"error": ...}`` body. The ``api_view``
decorator (apps/core/decorators.py) turns them into responses.
"""

from django.http import JsonResponse


class ApiError(Exception):
    """Base class for errors that map to a JSON error response"""

    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None, **extra):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_response(self):
        body = {'error': self.message}
        body.update(self.extra)
        return JsonResponse(body, status=self.status_code)


class ApiValidationError(ApiError):
    """Malformed or missing input (first violation surfaced verbatim)"""

    status_code = 400
    default_message = 'Invalid data'


class AuthError(ApiError):
    status_code = 401
    default_message = 'Not authenticated'


class NotFoundError(ApiError):
    status_code = 404
    default_message = 'Record not found'


class ConflictError(ApiError):
    status_code = 409
    default_message = 'A record with this data already exists'


class RateLimitError(ApiError):
    """
    Too many requests for one client identifier.

    ``retry_after`` is included in the body and copied to the
    ``Retry-After`` header.
    """

    status_code = 429
    default_message = 'Too many requests. Please try again later.'

    def __init__(self, retry_after, message=None):
        self.retry_after = retry_after
        super().__init__(message, retry_after=retry_after)

    def to_response(self):
        response = super().to_response()
        response['Retry-After'] = str(self.retry_after)
        return response


class ConfigurationError(ApiError):
    # Never leak which setting is missing
    status_code = 500
    default_message = 'Server configuration error'
