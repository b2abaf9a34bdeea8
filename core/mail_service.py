"""
Outbound Email Service

Thin wrapper around Django's email backend (SMTP in production) used for
contact notifications and admin replies.

The service is built once per process and checked once at startup. If SMTP
is not configured, or the server cannot be reached, the service disables
itself: sends are skipped and logged, and callers receive False so the
response can say that no email went out.

Usage:
    from core.mail_service import mail_service
    sent = mail_service.send_html('client@example.com', 'Subject', '<p>Hi</p>')
"""

import logging
import smtplib

from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)

SMTP_BACKEND = 'django.core.mail.backends.smtp.EmailBackend'


class MailService:
    """
    Process-scoped email sender with an explicit enabled/disabled flag.
    """

    def __init__(self):
        self.disabled_reason = None

    @property
    def configured(self) -> bool:
        """SMTP needs a host; non-SMTP backends (console, locmem) need nothing."""
        if settings.EMAIL_BACKEND == SMTP_BACKEND:
            return bool(settings.EMAIL_HOST)
        return True

    @property
    def enabled(self) -> bool:
        return self.configured and self.disabled_reason is None

    def disable(self, reason: str) -> None:
        self.disabled_reason = reason
        logger.warning(f"Email disabled: {reason} (emails will not be sent)")

    def verify(self) -> bool:
        """
        Open and close one connection to the mail server.

        Returns:
            True if the server accepted the connection (and login, when
            credentials are set), False otherwise. On False the service
            is disabled for the life of the process.
        """
        if not self.configured:
            self.disable("SMTP_SERVER is not set")
            return False

        try:
            connection = get_connection(fail_silently=False)
            connection.open()
            connection.close()
        except (smtplib.SMTPException, OSError) as e:
            self.disable(f"email server connection failed: {e}")
            return False

        logger.info(f"Email configured (backend: {settings.EMAIL_BACKEND})")
        return True

    def send_html(self, to: str, subject: str, html_body: str, reply_to=None) -> bool:
        """
        Send an HTML email with a plain-text alternative.

        Returns:
            True if the message was handed to the backend, False if the
            service is disabled and the send was skipped.

        Raises:
            smtplib.SMTPException, OSError: the backend rejected the message.
        """
        if not self.enabled:
            reason = self.disabled_reason or "SMTP not configured"
            logger.warning(f"Email not sent to {to} ({subject}): {reason}")
            return False

        # Header values cannot span lines
        subject = " ".join(subject.splitlines())

        message = EmailMultiAlternatives(
            subject=subject,
            body=strip_tags(html_body),
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[to],
            reply_to=reply_to,
        )
        message.attach_alternative(html_body, "text/html")
        message.send(fail_silently=False)

        logger.info(f"Email sent to {to}: {subject}")
        return True


# Singleton instance
mail_service = MailService()
