#!/usr/bin/env python
# CRM ADMIN - management entry point
#
# The API has no migration files yet; create them once per deployment:
# - python manage.py makemigrations contacts leads pipelines invoices finances
# - python manage.py migrate
#
# Admin credentials and the database come from .env (see config/settings.py).
# ==============================================================================

import os
import sys


def main():
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Django is not importable. Install the project with "
            "`pip install -e .[test]` inside the active virtualenv."
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
