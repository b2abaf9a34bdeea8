"""
Contact Views

Public contact form submission and the admin panel's contact management
endpoints.
"""
import logging
import smtplib

from django.db import DatabaseError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdmin
from core.mail_service import mail_service

from .models import Contact
from .notifications import send_reply_email, send_staff_notification
from .serializers import (
    ContactReplyCreateSerializer,
    ContactSerializer,
    ContactStatusSerializer,
    ContactSubmitSerializer,
    ReplySerializer,
)

logger = logging.getLogger(__name__)

# Storage and mail failures a handler reports itself as a 500
INFRASTRUCTURE_ERRORS = (DatabaseError, smtplib.SMTPException, OSError)

FIREWALL_DETAILS = (
    'Your database provider blocked the connection. Please go to your '
    'Database Dashboard > Network Restrictions and allow access from '
    '0.0.0.0/0 (Anywhere).'
)


def is_allow_list_rejection(exc):
    """The hosted database refused us because our IP is not allow-listed."""
    return 'allow_list' in str(exc)


class ContactSubmitView(APIView):
    """
    Public endpoint for contact form submissions.

    POST /api/v1/contact

    Notifies the firm by email first; the contact is stored only if that
    did not raise.
    """

    authentication_classes = []
    permission_classes = [AllowAny]
    mail_service = mail_service

    def post(self, request):
        serializer = ContactSubmitSerializer(data=request.data)

        if not serializer.is_valid():
            logger.warning(f"Contact validation failed: {dict(serializer.errors)}")
            return Response(
                {
                    'success': False,
                    'error': serializer.error_summary(),
                    'fields': serializer.errors
                },
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            email_sent = send_staff_notification(serializer.validated_data, self.mail_service)
            contact = serializer.save()
        except INFRASTRUCTURE_ERRORS as e:
            logger.exception("Contact form error")

            if is_allow_list_rejection(e):
                return Response(
                    {'error': 'Database Firewall Error', 'details': FIREWALL_DETAILS},
                    status=status.HTTP_500_INTERNAL_SERVER_ERROR
                )

            return Response(
                {'error': 'Internal server error', 'details': str(e)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response(
            {
                'success': True,
                'message': 'Contact form submitted successfully',
                'data': ContactSerializer(contact).data,
                'email_sent': email_sent
            },
            status=status.HTTP_201_CREATED
        )


class ContactListView(APIView):
    """
    All contacts, newest first.

    GET /api/v1/admin/contacts
    """

    permission_classes = [IsAdmin]

    def get(self, request):
        try:
            contacts = list(Contact.objects.order_by('-created_at', '-id'))
        except DatabaseError as e:
            logger.exception("Failed to list contacts")
            return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(ContactSerializer(contacts, many=True).data)


class ContactHistoryView(APIView):
    """
    A contact and its replies, oldest reply first.

    GET /api/v1/admin/contacts/:id/history
    """

    permission_classes = [IsAdmin]

    def get(self, request, id):
        try:
            contact = Contact.objects.get(id=id)
            replies = list(contact.replies.order_by('created_at', 'id'))
        except Contact.DoesNotExist:
            return Response(
                {'error': 'Contact not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        except DatabaseError as e:
            logger.exception(f"Failed to load history for contact {id}")
            return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({
            'contact': ContactSerializer(contact).data,
            'replies': ReplySerializer(replies, many=True).data
        })


class ContactDetailView(APIView):
    """
    Update a contact's status or delete it.

    PATCH  /api/v1/admin/contacts/:id
    DELETE /api/v1/admin/contacts/:id
    """

    permission_classes = [IsAdmin]

    def patch(self, request, id):
        serializer = ContactStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': 'Status is required (max 20 characters)', 'fields': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            Contact.objects.filter(id=id).update(status=serializer.validated_data['status'])
        except DatabaseError as e:
            logger.exception(f"Failed to update contact {id}")
            return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({'success': True})

    def delete(self, request, id):
        try:
            # Replies go with it (ON DELETE CASCADE)
            Contact.objects.filter(id=id).delete()
        except DatabaseError as e:
            logger.exception(f"Failed to delete contact {id}")
            return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(f"Contact {id} deleted")
        return Response({'success': True})


class ContactReplyView(APIView):
    """
    Email a reply to a contact and record it in the contact's history.

    POST /api/v1/admin/reply
    """

    permission_classes = [IsAdmin]
    mail_service = mail_service

    def post(self, request):
        serializer = ContactReplyCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': serializer.error_summary(), 'fields': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        data = serializer.validated_data

        try:
            contact = Contact.objects.get(id=data['id'])
            email_sent = send_reply_email(
                data['email'], data['subject'], data['message'], self.mail_service
            )
            contact.record_reply(data['message'])
        except Contact.DoesNotExist:
            logger.error(f"Reply error: contact {data['id']} not found")
            return Response(
                {'error': f"Failed to send reply: contact {data['id']} not found"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        except INFRASTRUCTURE_ERRORS as e:
            logger.exception("Reply error")
            return Response(
                {'error': f'Failed to send reply: {e}'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response({
            'success': True,
            'message': 'Reply sent successfully',
            'email_sent': email_sent
        })
