"""
Contact Serializers

Serializers for the public contact form and admin contact management.
Submitted text is stored exactly as sent: no whitespace trimming and no
tag stripping. Escaping happens when the text is rendered into email.
"""
from rest_framework import serializers

from .models import Contact, Reply


# local@domain.tld, the same basic check the site's front-end performs
EMAIL_PATTERN = r'^[^\s@]+@[^\s@]+\.[^\s@]+$'

REQUIRED_FIELDS_MESSAGE = 'Name, email, subject, and message are required'
INVALID_EMAIL_MESSAGE = 'Invalid email address'

MISSING_VALUE_CODES = {'required', 'blank', 'null'}


def has_missing_value(errors, fields):
    """True when any of `fields` failed because the value was absent or empty."""
    return any(
        getattr(error, 'code', None) in MISSING_VALUE_CODES
        for field in fields
        for error in errors.get(field, [])
    )


class ContactSubmitSerializer(serializers.ModelSerializer):
    """
    Public contact form submission serializer.
    """

    email = serializers.RegexField(
        EMAIL_PATTERN,
        max_length=255,
        trim_whitespace=False,
        error_messages={'invalid': INVALID_EMAIL_MESSAGE},
        help_text="Email address for follow-up"
    )

    class Meta:
        model = Contact
        fields = ['name', 'email', 'phone', 'subject', 'message']
        extra_kwargs = {
            'name': {'trim_whitespace': False},
            'phone': {'trim_whitespace': False, 'required': False},
            'subject': {'trim_whitespace': False},
            'message': {'trim_whitespace': False},
        }

    def error_summary(self):
        """Single human-readable message for the `error` field of a 400."""
        errors = self.errors
        if has_missing_value(errors, ('name', 'email', 'subject', 'message')):
            return REQUIRED_FIELDS_MESSAGE
        if 'email' in errors:
            return INVALID_EMAIL_MESSAGE
        field, messages = next(iter(errors.items()))
        return f"{field}: {messages[0]}"


class ContactSerializer(serializers.ModelSerializer):
    """
    Full contact row as returned to the submitter and the admin panel.
    """

    class Meta:
        model = Contact
        fields = [
            'id', 'name', 'email', 'phone', 'subject',
            'message', 'status', 'created_at'
        ]
        read_only_fields = fields


class ReplySerializer(serializers.ModelSerializer):

    contact_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Reply
        fields = ['id', 'contact_id', 'message', 'created_at']
        read_only_fields = fields


class ContactStatusSerializer(serializers.Serializer):
    """
    Admin status update. Any string fits; the status is advisory.
    """

    status = serializers.CharField(max_length=20, trim_whitespace=False)


class ContactReplyCreateSerializer(serializers.Serializer):
    """
    Admin reply to a contact: who to write to and what to say.
    """

    id = serializers.IntegerField(help_text="Contact being replied to")

    email = serializers.RegexField(
        EMAIL_PATTERN,
        max_length=255,
        error_messages={'invalid': INVALID_EMAIL_MESSAGE},
        help_text="Recipient address"
    )

    subject = serializers.CharField(
        max_length=255,
        allow_blank=True,
        default='',
        help_text="Email subject line"
    )

    message = serializers.CharField(
        trim_whitespace=False,
        help_text="Reply message content"
    )

    def error_summary(self):
        errors = self.errors
        if 'message' in errors:
            return 'Message is required'
        field, messages = next(iter(errors.items()))
        return f"{field}: {messages[0]}"
