"""
Contact Email Notifications

Builds and sends the two emails the contact flow produces:
- the operator notification for a new form submission
- an admin reply to a visitor

Both are sent inline, once. Failures propagate to the caller.
"""
import logging

from django.conf import settings
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)


def send_staff_notification(submission, mail_service):
    """
    Notify the firm's inbox about a new contact form submission.

    Args:
        submission: validated form data (name, email, phone, subject, message)
        mail_service: MailService used to send

    Returns:
        bool: whether an email was handed to the mail server
    """
    recipient = settings.CONTACT_EMAIL_TO
    if not recipient:
        logger.warning("TO_EMAIL is not set; skipping contact notification")
        return False

    html_content = render_to_string('contact/emails/staff_notification.html', {
        'name': submission['name'],
        'email': submission['email'],
        'phone': submission.get('phone') or 'Not provided',
        'subject': submission['subject'],
        'message': submission['message'],
        'site_name': settings.SITE_NAME,
    })

    return mail_service.send_html(
        recipient,
        f"New Contact Form Submission: {submission['subject']}",
        html_content,
        reply_to=[submission['email']],
    )


def send_reply_email(email, subject, message, mail_service):
    """
    Send an admin reply to the visitor's address.

    Returns:
        bool: whether an email was handed to the mail server
    """
    html_content = render_to_string('contact/emails/reply.html', {
        'message': message,
    })

    return mail_service.send_html(email, subject, html_content)
