"""
Settings for the test-suite: SQLite, in-memory email, fixed secrets.
"""
import os

os.environ.setdefault('SECRET_KEY', 'test-secret-key-not-for-production-use-0123456789')
os.environ.setdefault('JWT_SECRET', 'test-jwt-signing-secret-not-for-production-0123456789')

from .settings import *  # noqa: E402,F401,F403

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'
EMAIL_VERIFY_ON_STARTUP = False
DEFAULT_FROM_EMAIL = 'website@springlegal.test'
CONTACT_EMAIL_TO = 'office@springlegal.test'

ADMIN_PASSWORD = 'correct-horse-battery-staple'

RATE_LIMIT_ENABLED = False

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'tests',
    }
}
