import logging

from django.conf import settings
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.utils import timezone

from .decorators import api_view

logger = logging.getLogger(__name__)


@api_view('GET')
def health_view(request):
    """
    Health check for the load balancer / container platform.

    - 200 when the database answers a trivial query
    - 500 when the database is not configured or unreachable
    """
    timestamp = timezone.now().isoformat()

    if not settings.DATABASES.get('default', {}).get('NAME'):
        logger.error("Health check: database is not configured")
        return JsonResponse({
            'status': 'error',
            'database': 'not_configured',
            'message': 'Database is not configured',
            'timestamp': timestamp,
        }, status=500)

    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
            cursor.fetchone()
    except DatabaseError as e:
        logger.error(f"Health check failed: {e}")
        return JsonResponse({
            'status': 'error',
            'database': 'disconnected',
            'message': str(e),
            'timestamp': timestamp,
        }, status=500)

    return JsonResponse({
        'status': 'ok',
        'database': 'connected',
        'environment': 'development' if settings.DEBUG else 'production',
        'timestamp': timestamp,
    })


def not_found_view(request, exception=None):
    return JsonResponse({'error': 'Not found'}, status=404)


def server_error_view(request):
    return JsonResponse({'error': 'Internal server error'}, status=500)
