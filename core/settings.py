"""
Django settings for the Spring Legal Consultancy website backend.

For more information on this file, see
https://docs.djangoproject.com/en/5.2/topics/settings/

For the full list of settings and their values, see
https://docs.djangoproject.com/en/5.2/ref/settings/
"""

import os
from datetime import timedelta
from pathlib import Path
from urllib.parse import parse_qsl, unquote, urlparse

from dotenv import load_dotenv

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
env_file = os.path.join(BASE_DIR, '.env.development')
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    load_dotenv()  # Try default .env


# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv('SECRET_KEY')
if not SECRET_KEY:
    raise ValueError(
        "SECRET_KEY environment variable is not set. "
        "Please add SECRET_KEY to your .env file. "
        "For development, you can generate one with: "
        "python -c 'from django.core.management.utils import get_random_secret_key; print(get_random_secret_key())'"
    )

# 'production' turns on rate limiting and the HTTPS-only settings below.
# NODE_ENV is honoured for deployments configured for the previous server.
APP_ENV = os.getenv('APP_ENV', os.getenv('NODE_ENV', 'development'))
IS_PRODUCTION = APP_ENV == 'production'

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv('DEBUG', 'False') == 'True'

ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')

# Behind one reverse proxy (Vercel, nginx): trust its scheme header
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')

SITE_NAME = os.getenv('SITE_NAME', 'Spring Legal Consultancy')

# Directory holding the static website (index.html, about.html, img/, css/ ...)
SITE_ROOT = BASE_DIR / os.getenv('SITE_ROOT', 'site')


# =============================================================================
# REDIS & CACHING (rate limit counters)
# =============================================================================

REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/1')

if os.getenv('REDIS_ENABLED', 'False') == 'True':
    CACHES = {
        'default': {
            'BACKEND': 'django_redis.cache.RedisCache',
            'LOCATION': REDIS_URL,
            'OPTIONS': {
                'CLIENT_CLASS': 'django_redis.client.DefaultClient',
            },
            'KEY_PREFIX': 'springlegal',
            'TIMEOUT': 300,  # 5 minutes default
        }
    }
else:
    # Development: use local memory cache
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'unique-snowflake',
        }
    }


# Application definition

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',

    # Third-party apps
    'rest_framework',
    'rest_framework_simplejwt',
    'corsheaders',

    # Local apps
    'accounts',
    'contact',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'corsheaders.middleware.CorsMiddleware',  # CORS before CommonMiddleware
    'core.middleware.RequestLoggingMiddleware',
    'core.middleware.RateLimitMiddleware',
    'core.middleware.ContentSecurityPolicyMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'core.urls'

# Clean URLs have no trailing slash
APPEND_SLASH = False

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
            ],
        },
    },
]

WSGI_APPLICATION = 'core.wsgi.application'


# Database
# https://docs.djangoproject.com/en/5.2/ref/settings/#databases

def database_from_url(url):
    """
    Postgres settings from a connection URL.

    Any sslmode in the URL is dropped; SSL is required without
    certificate verification, as hosted Postgres providers expect.
    """
    parsed = urlparse(url)
    options = {
        key: value
        for key, value in parse_qsl(parsed.query)
        if key != 'sslmode'
    }
    options['sslmode'] = 'require'
    return {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': unquote(parsed.path.lstrip('/')),
        'USER': unquote(parsed.username or ''),
        'PASSWORD': unquote(parsed.password or ''),
        'HOST': parsed.hostname or '',
        'PORT': str(parsed.port or ''),
        'OPTIONS': options,
    }


DATABASE_URL = os.getenv('DATABASE_URL') or os.getenv('POSTGRES_URL_NON_POOLING')

if DATABASE_URL:
    DATABASES = {'default': database_from_url(DATABASE_URL)}
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': os.getenv('DB_NAME', 'spring_legal_db'),
            'USER': os.getenv('DB_USER', 'postgres'),
            'PASSWORD': os.getenv('DB_PASSWORD', ''),
            'HOST': os.getenv('DB_HOST', 'localhost'),
            'PORT': os.getenv('DB_PORT', '5432'),
        }
    }


# Internationalization
# https://docs.djangoproject.com/en/5.2/topics/i18n/

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True

# Default primary key field type
# https://docs.djangoproject.com/en/5.2/ref/settings/#default-auto-field

DEFAULT_AUTO_FIELD = 'django.db.models.AutoField'


# =============================================================================
# ADMIN AUTHENTICATION
# =============================================================================

# Policy object deciding who may use the admin panel (accounts.policies)
ADMIN_AUTH_POLICY = os.getenv('ADMIN_AUTH_POLICY', 'accounts.policies.SharedPasswordPolicy')

ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'admin123')

ADMIN_TOKEN_LIFETIME = timedelta(hours=2)

JWT_SECRET = os.getenv('JWT_SECRET', SECRET_KEY)


# =============================================================================
# REST FRAMEWORK SETTINGS
# =============================================================================

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': (
        'accounts.authentication.AdminTokenAuthentication',
    ),
    'DEFAULT_PERMISSION_CLASSES': (
        'accounts.permissions.IsAdmin',
    ),
    'DEFAULT_RENDERER_CLASSES': (
        'rest_framework.renderers.JSONRenderer',
    ),
    'DEFAULT_PARSER_CLASSES': (
        'rest_framework.parsers.JSONParser',
        'rest_framework.parsers.FormParser',
        'rest_framework.parsers.MultiPartParser',
    ),
    'EXCEPTION_HANDLER': 'core.exceptions.api_exception_handler',
    'UNAUTHENTICATED_USER': None,
}

# Request bodies up to 10MB
DATA_UPLOAD_MAX_MEMORY_SIZE = 10 * 1024 * 1024


# =============================================================================
# JWT SETTINGS
# =============================================================================

SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': ADMIN_TOKEN_LIFETIME,
    'ALGORITHM': os.getenv('JWT_ALGORITHM', 'HS256'),
    'SIGNING_KEY': JWT_SECRET,
    'AUTH_HEADER_TYPES': ('Bearer',),
    'AUTH_TOKEN_CLASSES': ('rest_framework_simplejwt.tokens.AccessToken',),
    'TOKEN_TYPE_CLAIM': 'token_type',
}


# =============================================================================
# CORS SETTINGS
# =============================================================================

cors_origins_env = os.getenv(
    'ALLOWED_ORIGINS',
    'http://localhost:3001,http://127.0.0.1:5501,http://localhost:5501'
)
CORS_ALLOWED_ORIGINS = [origin.strip() for origin in cors_origins_env.split(',') if origin.strip()]
CORS_ALLOW_CREDENTIALS = True


# =============================================================================
# SECURITY HEADERS
# =============================================================================

X_FRAME_OPTIONS = 'SAMEORIGIN'
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = 'no-referrer'
SECURE_CROSS_ORIGIN_OPENER_POLICY = 'same-origin'

CONTENT_SECURITY_POLICY = {
    'default-src': ["'self'"],
    'style-src': ["'self'", "'unsafe-inline'", 'https://fonts.googleapis.com'],
    'script-src': ["'self'", "'unsafe-inline'", 'https://maps.google.com', 'https://maps.googleapis.com'],
    'script-src-attr': ["'unsafe-inline'"],
    'font-src': ["'self'", 'https://fonts.gstatic.com'],
    'img-src': ["'self'", 'data:', 'https:'],
    'frame-src': ["'self'", 'https://maps.google.com', 'https://www.google.com'],
    'connect-src': ["'self'", 'https://maps.google.com', 'https://maps.googleapis.com'],
}

if IS_PRODUCTION:
    SECURE_HSTS_SECONDS = int(os.getenv('SECURE_HSTS_SECONDS', 15552000))
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True


# =============================================================================
# RATE LIMITING
# =============================================================================

RATE_LIMIT_ENABLED = IS_PRODUCTION
RATE_LIMIT_MAX = int(os.getenv('RATE_LIMIT_MAX', 1000))
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv('RATE_LIMIT_WINDOW_SECONDS', 15 * 60))


# =============================================================================
# EMAIL SETTINGS
# =============================================================================

EMAIL_BACKEND = os.getenv('EMAIL_BACKEND', 'django.core.mail.backends.smtp.EmailBackend')
EMAIL_HOST = os.getenv('SMTP_SERVER', '')
# SMTP_SECURE=true: implicit TLS (port 465); otherwise STARTTLS
EMAIL_USE_SSL = os.getenv('SMTP_SECURE', 'false') == 'true'
EMAIL_PORT = int(os.getenv('SMTP_PORT') or (465 if EMAIL_USE_SSL else 587))
EMAIL_USE_TLS = not EMAIL_USE_SSL
EMAIL_HOST_USER = os.getenv('SMTP_USERNAME', '')
EMAIL_HOST_PASSWORD = os.getenv('SMTP_PASSWORD', '')
DEFAULT_FROM_EMAIL = os.getenv('FROM_EMAIL') or EMAIL_HOST_USER or 'webmaster@localhost'
EMAIL_TIMEOUT = int(os.getenv('EMAIL_TIMEOUT', 60))

# Check the SMTP connection once when the WSGI/ASGI application starts
EMAIL_VERIFY_ON_STARTUP = os.getenv('EMAIL_VERIFY_ON_STARTUP', 'True') == 'True'


# =============================================================================
# CONTACT FORM SETTINGS
# =============================================================================

# Inbox that receives a notification for every contact form submission
CONTACT_EMAIL_TO = os.getenv('TO_EMAIL', '')


# =============================================================================
# LOGGING SETTINGS
# =============================================================================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_TO_FILE = os.getenv('LOG_TO_FILE', 'False') == 'True'
LOG_FILE_PATH = os.getenv('LOG_FILE_PATH', 'logs/django.log')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
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
            'filename': LOG_FILE_PATH,
            'maxBytes': 1024 * 1024 * 10,  # 10MB
            'backupCount': 5,
            'formatter': 'verbose',
        } if LOG_TO_FILE else {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['console', 'file'] if LOG_TO_FILE else ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console', 'file'] if LOG_TO_FILE else ['console'],
            'level': os.getenv('DJANGO_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
        'django.db.backends': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
    },
}
