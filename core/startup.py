"""
Process startup hooks shared by the WSGI and ASGI entry points.
"""
import logging

from django.conf import settings

from .mail_service import mail_service

logger = logging.getLogger(__name__)


def check_mail_on_startup():
    """Verify SMTP once per process and log whether email is available."""
    if settings.EMAIL_VERIFY_ON_STARTUP:
        mail_service.verify()

    logger.info(f"Email: {'Configured' if mail_service.enabled else 'Not configured'}")
    if settings.RATE_LIMIT_ENABLED:
        logger.info(
            f"Rate limiting: {settings.RATE_LIMIT_MAX} requests per "
            f"{settings.RATE_LIMIT_WINDOW_SECONDS}s per IP"
        )
