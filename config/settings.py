from pathlib import Path
from decouple import config


# BASE DIRECTORY
# BASE_DIR points to the project root (where manage.py is)
BASE_DIR = Path(__file__).resolve().parent.parent


# SECURITY SETTINGS

# SECURITY WARNING: keep the secret key used in production secret!
# Signs the session cookie and CSRF tokens
SECRET_KEY = config('SECRET_KEY', default='django-insecure-CHANGE-THIS-IN-PRODUCTION')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=True, cast=bool)

# Format: 'domain.com,www.domain.com,api.domain.com'
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1,0.0.0.0,testserver').split(',')


# INSTALLED APPS

INSTALLED_APPS = [
    # Django built-in apps
    'django.contrib.sessions',  # Session framework (admin login)

    # Third-party apps
    'corsheaders',  # CORS headers support

    # Our custom apps
    'apps.core',  # Shared helpers, API boundary, health check
    'apps.accounts',  # Admin login/logout & rate limiting
    'apps.contacts',  # Contact management
    'apps.leads',  # Lead management
    'apps.pipelines',  # Kanban boards & cards
    'apps.invoices',  # Invoices & export
    'apps.finances',  # Salaries, fixed expenses, tax settings
]


# MIDDLEWARE

# Each request passes through these in order (top to bottom)
MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',  # Security enhancements
    'django.contrib.sessions.middleware.SessionMiddleware',  # Session support
    'corsheaders.middleware.CorsMiddleware',  # CORS support (must be before CommonMiddleware)
    'django.middleware.common.CommonMiddleware',  # Common utilities
    'django.middleware.csrf.CsrfViewMiddleware',  # CSRF protection
    'django.middleware.clickjacking.XFrameOptionsMiddleware',  # Clickjacking protection
]


# URL CONFIGURATION

ROOT_URLCONF = 'config.urls'

# The API never answers with a trailing-slash redirect
APPEND_SLASH = False


# ASGI/WSGI APPLICATION

ASGI_APPLICATION = 'config.asgi.application'
WSGI_APPLICATION = 'config.wsgi.application'


# DATABASE

# PostgreSQL in production (DB_ENGINE=django.db.backends.postgresql),
# SQLite file for local runs and tests
DB_ENGINE = config('DB_ENGINE', default='django.db.backends.sqlite3')

if DB_ENGINE.endswith('sqlite3'):
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': config('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': config('DB_NAME', default=''),
            'USER': config('DB_USER', default=''),
            'PASSWORD': config('DB_PASSWORD', default=''),
            'HOST': config('DB_HOST', default='localhost'),
            'PORT': config('DB_PORT', default='5432'),

            # Keep connection open for 10 minutes
            'CONN_MAX_AGE': 600,

            'OPTIONS': {
                'connect_timeout': 10,  # Timeout if connection fails
            }
        }
    }


# ADMIN CREDENTIALS

# Single administrator, no user table.
# Missing values make every login fail with a generic 500.
CRM_ADMIN_EMAIL = config('CRM_ADMIN_EMAIL', default='')
CRM_ADMIN_PASSWORD = config('CRM_ADMIN_PASSWORD', default='')

# Session key holding the authenticated admin e-mail
ADMIN_SESSION_KEY = 'crm_admin_email'


# RATE LIMITING

# Login attempts allowed per client inside one window
LOGIN_RATE_LIMIT = config('LOGIN_RATE_LIMIT', default=5, cast=int)

# Window length in seconds (15 minutes)
LOGIN_RATE_WINDOW = config('LOGIN_RATE_WINDOW', default=15 * 60, cast=int)


# INTERNATIONALIZATION

LANGUAGE_CODE = 'en-us'

# Month filters (salaries) are computed in this zone
TIME_ZONE = config('TIME_ZONE', default='Europe/Madrid')

USE_I18N = True

# All datetimes in database are stored in UTC
USE_TZ = True


# CORS HEADERS (Cross-Origin Resource Sharing)

# In development: allow all
# In production: specify exact domains
if DEBUG:
    CORS_ALLOW_ALL_ORIGINS = True
else:
    CORS_ALLOWED_ORIGINS = config('CORS_ALLOWED_ORIGINS', default='').split(',')

# The dashboard sends the session cookie cross-origin
CORS_ALLOW_CREDENTIALS = True


# LOGGING

LOG_DIR = BASE_DIR / 'logs'
LOG_DIR.mkdir(exist_ok=True)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,

    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },

    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
        'file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': LOG_DIR / 'crm.log',
            'maxBytes': 1024 * 1024 * 10,  # 10 MB
            'backupCount': 5,
            'formatter': 'verbose',
        },
    },

    'loggers': {
        'django': {
            'handlers': ['console', 'file'],
            'level': config('LOG_LEVEL', default='INFO'),
            'propagate': True,
        },
        'apps': {  # Our custom apps
            'handlers': ['console', 'file'],
            # Production runs with LOG_LEVEL=ERROR
            'level': config('LOG_LEVEL', default='INFO'),
            'propagate': False,
        },
    },
}


# CUSTOM SETTINGS

# Pagination size
PAGINATION_SIZE = 10
PAGINATION_MAX_SIZE = 100

# Session settings
SESSION_COOKIE_NAME = 'session_id'
SESSION_COOKIE_AGE = 7 * 24 * 60 * 60  # 7 days in seconds
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = 'Lax'
SESSION_SAVE_EVERY_REQUEST = False  # Only save if modified

# Invoice numbers look like BUF-2024-0001
INVOICE_NUMBER_PREFIX = config('INVOICE_NUMBER_PREFIX', default='BUF')

# Default color for new kanban columns
DEFAULT_STAGE_COLOR = '#3B82F6'

# Corporate tax applied when no settings row exists yet
DEFAULT_CORPORATE_TAX_PERCENT = 25


# SECURITY SETTINGS (Production)

if not DEBUG:
    SECURE_SSL_REDIRECT = config('SECURE_SSL_REDIRECT', default=True, cast=bool)
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True

    # Security headers
    SECURE_CONTENT_TYPE_NOSNIFF = True
    X_FRAME_OPTIONS = 'DENY'

    # HSTS (HTTP Strict Transport Security)
    SECURE_HSTS_SECONDS = 31536000  # 1 year
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = True


# DEFAULT AUTO FIELD

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
