from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """
    Configuration class for accounts app

    There is no user table: the single administrator is configured
    through CRM_ADMIN_EMAIL / CRM_ADMIN_PASSWORD and authenticated
    with a Django session.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.accounts'

    # Human-readable app name
    verbose_name = 'Accounts'
