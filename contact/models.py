"""
Contact Models

Database schema for contact form submissions and the admin replies sent
back to them.
"""
from django.db import models, transaction


class Contact(models.Model):
    """
    A contact form submission from a site visitor.

    Status is free text. The site only ever sets 'new' (on submission) and
    'replied' (when an admin reply is recorded); any other value comes from
    an admin status update.
    """

    STATUS_NEW = 'new'
    STATUS_REPLIED = 'replied'

    id = models.AutoField(primary_key=True)

    name = models.CharField(
        max_length=255,
        help_text="Name of the person contacting the firm"
    )

    email = models.EmailField(
        max_length=255,
        help_text="Email address for follow-up"
    )

    phone = models.CharField(
        max_length=50,
        null=True,
        blank=True,
        help_text="Optional phone number"
    )

    subject = models.CharField(
        max_length=255,
        help_text="Subject line entered by the visitor"
    )

    message = models.TextField(
        help_text="The message content"
    )

    status = models.CharField(
        max_length=20,
        default=STATUS_NEW,
        help_text="Advisory status ('new', 'replied' or any admin-set value)"
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the message was submitted"
    )

    class Meta:
        db_table = 'contacts'
        ordering = ['-created_at', '-id']
        verbose_name = 'Contact'
        verbose_name_plural = 'Contacts'

    def __str__(self):
        return f"{self.name} <{self.email}> - {self.subject} ({self.status})"

    def record_reply(self, message):
        """
        Store an admin reply and mark the contact as replied.

        Both writes happen in one transaction, so a reply is never stored
        without the status change (or the other way round).
        """
        with transaction.atomic():
            reply = self.replies.create(message=message)
            self.status = self.STATUS_REPLIED
            self.save(update_fields=['status'])
        return reply


class Reply(models.Model):
    """
    An admin-authored reply to a contact, sent out by email.

    Append-only history; rows go away only when their contact is deleted.
    """

    id = models.AutoField(primary_key=True)

    contact = models.ForeignKey(
        Contact,
        on_delete=models.CASCADE,
        related_name='replies',
        help_text="The contact being replied to"
    )

    message = models.TextField(
        help_text="The reply message content"
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the reply was sent"
    )

    class Meta:
        db_table = 'replies'
        ordering = ['created_at', 'id']
        verbose_name = 'Reply'
        verbose_name_plural = 'Replies'

    def __str__(self):
        return f"Reply #{self.pk} to contact #{self.contact_id}"
