# WSGI (Web Server Gateway Interface) configuration for production deployment
#
# Used by production servers like:
# - Gunicorn: gunicorn config.wsgi:application --bind 0.0.0.0:8000 --workers 4
# - uWSGI
# ==============================================================================

import os
from django.core.wsgi import get_wsgi_application

# Set the default Django settings module
# Points to config/settings.py
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

# Create WSGI application
# This is what the production server will call
application = get_wsgi_application()


# ==============================================================================
# NOTES
# ==============================================================================
#
# 1. The login rate limiter lives in process memory.
#    Every worker keeps its own counters, so N workers allow up to
#    N x LOGIN_RATE_LIMIT attempts per window.
#
# 2. Set environment variables in production:
#    - DEBUG=False
#    - SECRET_KEY=<random-value>
#    - ALLOWED_HOSTS=yourdomain.com
#    - CRM_ADMIN_EMAIL / CRM_ADMIN_PASSWORD
#
# ==============================================================================
