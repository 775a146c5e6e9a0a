from django.apps import AppConfig


class CoreConfig(AppConfig):
    """
    Configuration for Core application

    This app contains:
        - Soft-delete / timestamp model bases
        - API error taxonomy and the api_view boundary decorator
        - In-memory rate limiter
        - Health check
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core'
