from django.apps import AppConfig


class PipelinesConfig(AppConfig):
    """
    Kanban boards (pipelines) and their cards.

    Columns are derived from the cards' stage labels, there is no
    Stage table.
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.pipelines'
    verbose_name = 'Pipelines'
