"""
Tests for the contact form and the admin contact endpoints
"""
import smtplib

import pytest
from django.core import mail
from django.core.management import call_command
from django.db import DatabaseError, OperationalError
from rest_framework import status

from contact.models import Contact, Reply
from contact.notifications import send_reply_email, send_staff_notification
from contact.serializers import ContactSubmitSerializer
from contact.views import ContactReplyView, ContactSubmitView
from core.mail_service import MailService

pytestmark = pytest.mark.django_db


@pytest.fixture
def mail_service(monkeypatch):
    """Fresh mail service wired into both views that send email."""
    service = MailService()
    monkeypatch.setattr(ContactSubmitView, 'mail_service', service)
    monkeypatch.setattr(ContactReplyView, 'mail_service', service)
    return service


@pytest.fixture
def form_data():
    return {
        'name': 'Kofi Boateng',
        'email': 'kofi@example.com',
        'phone': '0244123456',
        'subject': 'Tenancy dispute',
        'message': 'My landlord is refusing to return my deposit.'
    }


class TestContactFormSubmission:
    """Test POST /api/v1/contact."""

    def test_submit_valid_contact_form(self, api_client, mail_service, form_data):
        response = api_client.post('/api/v1/contact', form_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True
        assert response.data['message'] == 'Contact form submitted successfully'
        assert response.data['email_sent'] is True
        assert response.data['data']['status'] == 'new'
        assert response.data['data']['id'] == Contact.objects.get().id

    def test_phone_is_optional(self, api_client, mail_service, form_data):
        del form_data['phone']

        response = api_client.post('/api/v1/contact', form_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['data']['phone'] is None

    @pytest.mark.parametrize('field', ['name', 'email', 'subject', 'message'])
    def test_missing_required_field(self, api_client, mail_service, form_data, field):
        del form_data[field]

        response = api_client.post('/api/v1/contact', form_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert response.data['error'] == 'Name, email, subject, and message are required'
        assert Contact.objects.count() == 0
        assert len(mail.outbox) == 0

    def test_empty_required_field(self, api_client, mail_service, form_data):
        form_data['subject'] = ''

        response = api_client.post('/api/v1/contact', form_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Name, email, subject, and message are required'

    @pytest.mark.parametrize('email', ['invalid-email', 'a@b', 'a b@example.com', 'x@@example.com'])
    def test_invalid_email(self, api_client, mail_service, form_data, email):
        form_data['email'] = email

        response = api_client.post('/api/v1/contact', form_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Invalid email address'
        assert Contact.objects.count() == 0

    def test_text_is_stored_exactly_as_sent(self, api_client, admin_client, mail_service, form_data):
        form_data['name'] = '  Efua <b>Owusu</b> '
        form_data['message'] = 'Line one\n\n\tLine two <script>alert(1)</script>  '

        api_client.post('/api/v1/contact', form_data, format='json')
        listed = admin_client.get('/api/v1/admin/contacts').data[0]

        assert listed['name'] == form_data['name']
        assert listed['message'] == form_data['message']
        assert listed['email'] == form_data['email']
        assert listed['phone'] == form_data['phone']
        assert listed['subject'] == form_data['subject']


class TestContactNotification:
    """The firm's inbox is emailed about every submission."""

    def test_notification_is_sent_to_firm(self, api_client, mail_service, form_data):
        api_client.post('/api/v1/contact', form_data, format='json')

        assert len(mail.outbox) == 1
        sent = mail.outbox[0]
        assert sent.to == ['office@springlegal.test']
        assert sent.subject == 'New Contact Form Submission: Tenancy dispute'
        assert sent.reply_to == ['kofi@example.com']
        assert 'My landlord is refusing' in sent.alternatives[0][0]

    def test_notification_escapes_visitor_html(self, mail_service, form_data):
        form_data['message'] = '<img src=x onerror=alert(1)>'

        send_staff_notification(form_data, mail_service)

        html = mail.outbox[0].alternatives[0][0]
        assert '<img src=x' not in html
        assert '&lt;img src=x onerror=alert(1)&gt;' in html

    def test_missing_phone_shows_placeholder(self, mail_service, form_data):
        form_data['phone'] = None

        send_staff_notification(form_data, mail_service)

        assert 'Not provided' in mail.outbox[0].alternatives[0][0]

    def test_multiline_subject_is_accepted(self, api_client, mail_service, form_data):
        form_data['subject'] = 'Line one\nLine two'

        response = api_client.post('/api/v1/contact', form_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert Contact.objects.get().subject == 'Line one\nLine two'
        assert mail.outbox[0].subject == 'New Contact Form Submission: Line one Line two'

    def test_no_recipient_skips_email(self, api_client, mail_service, form_data, settings):
        settings.CONTACT_EMAIL_TO = ''

        response = api_client.post('/api/v1/contact', form_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['email_sent'] is False
        assert len(mail.outbox) == 0

    def test_disabled_mail_still_stores_contact(self, api_client, mail_service, form_data):
        mail_service.disable('SMTP_SERVER is not set')

        response = api_client.post('/api/v1/contact', form_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['email_sent'] is False
        assert Contact.objects.count() == 1
        assert len(mail.outbox) == 0

    def test_mail_failure_is_500_and_nothing_stored(self, api_client, mail_service, form_data, monkeypatch):
        def refuse(*args, **kwargs):
            raise smtplib.SMTPServerDisconnected('Connection unexpectedly closed')

        monkeypatch.setattr(mail_service, 'send_html', refuse)

        response = api_client.post('/api/v1/contact', form_data, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error'] == 'Internal server error'
        assert response.data['details'] == 'Connection unexpectedly closed'
        assert Contact.objects.count() == 0

    def test_database_firewall_error(self, api_client, mail_service, form_data, monkeypatch):
        def blocked(self, **kwargs):
            raise OperationalError('connection rejected: address not in allow_list')

        monkeypatch.setattr(ContactSubmitSerializer, 'save', blocked)

        response = api_client.post('/api/v1/contact', form_data, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error'] == 'Database Firewall Error'
        assert '0.0.0.0/0' in response.data['details']

    def test_other_database_error(self, api_client, mail_service, form_data, monkeypatch):
        def broken(self, **kwargs):
            raise OperationalError('server closed the connection')

        monkeypatch.setattr(ContactSubmitSerializer, 'save', broken)

        response = api_client.post('/api/v1/contact', form_data, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {
            'error': 'Internal server error',
            'details': 'server closed the connection'
        }


class TestContactListView:
    """Test GET /api/v1/admin/contacts."""

    def test_empty_list(self, admin_client):
        response = admin_client.get('/api/v1/admin/contacts')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []

    def test_newest_first(self, admin_client):
        first = Contact.objects.create(name='A', email='a@example.com', subject='s', message='m')
        second = Contact.objects.create(name='B', email='b@example.com', subject='s', message='m')
        third = Contact.objects.create(name='C', email='c@example.com', subject='s', message='m')

        response = admin_client.get('/api/v1/admin/contacts')

        assert [row['id'] for row in response.data] == [third.id, second.id, first.id]

    def test_row_fields(self, admin_client, sample_contact):
        row = admin_client.get('/api/v1/admin/contacts').data[0]

        assert set(row) == {
            'id', 'name', 'email', 'phone', 'subject', 'message', 'status', 'created_at'
        }
        assert row['status'] == 'new'


class TestContactHistoryView:
    """Test GET /api/v1/admin/contacts/:id/history."""

    def test_history_without_replies(self, admin_client, sample_contact):
        response = admin_client.get(f'/api/v1/admin/contacts/{sample_contact.id}/history')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['contact']['id'] == sample_contact.id
        assert response.data['replies'] == []

    def test_replies_oldest_first(self, admin_client, sample_contact):
        first = sample_contact.record_reply('First answer')
        second = sample_contact.record_reply('Follow-up')

        response = admin_client.get(f'/api/v1/admin/contacts/{sample_contact.id}/history')

        assert [r['id'] for r in response.data['replies']] == [first.id, second.id]
        assert response.data['replies'][0]['contact_id'] == sample_contact.id
        assert response.data['replies'][0]['message'] == 'First answer'

    def test_unknown_contact(self, admin_client):
        response = admin_client.get('/api/v1/admin/contacts/9999/history')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Contact not found'}


class TestContactStatusUpdate:
    """Test PATCH /api/v1/admin/contacts/:id."""

    def test_update_status(self, admin_client, sample_contact):
        response = admin_client.patch(
            f'/api/v1/admin/contacts/{sample_contact.id}',
            {'status': 'in-progress'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'success': True}
        sample_contact.refresh_from_db()
        assert sample_contact.status == 'in-progress'

    def test_unknown_contact_is_not_an_error(self, admin_client):
        response = admin_client.patch(
            '/api/v1/admin/contacts/9999', {'status': 'closed'}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert Contact.objects.count() == 0

    @pytest.mark.parametrize('payload', [{}, {'status': ''}, {'status': 'x' * 21}])
    def test_invalid_status(self, admin_client, sample_contact, payload):
        response = admin_client.patch(
            f'/api/v1/admin/contacts/{sample_contact.id}', payload, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        sample_contact.refresh_from_db()
        assert sample_contact.status == 'new'


class TestContactDelete:
    """Test DELETE /api/v1/admin/contacts/:id."""

    def test_delete_removes_contact_and_replies(self, admin_client, sample_contact):
        sample_contact.record_reply('We will call you tomorrow.')

        response = admin_client.delete(f'/api/v1/admin/contacts/{sample_contact.id}')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'success': True}
        assert Contact.objects.count() == 0
        assert Reply.objects.count() == 0

    def test_delete_unknown_contact(self, admin_client, sample_contact):
        response = admin_client.delete('/api/v1/admin/contacts/9999')

        assert response.status_code == status.HTTP_200_OK
        assert Contact.objects.count() == 1


class TestContactReply:
    """Test POST /api/v1/admin/reply."""

    def reply(self, client, contact, **overrides):
        payload = {
            'id': contact.id if contact else 9999,
            'email': 'ama@example.com',
            'subject': 'Re: Property purchase',
            'message': 'Thank you for reaching out.\nPlease call us on Monday.'
        }
        payload.update(overrides)
        return client.post('/api/v1/admin/reply', payload, format='json')

    def test_reply_sends_email_and_records_history(self, admin_client, mail_service, sample_contact):
        response = self.reply(admin_client, sample_contact)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'success': True,
            'message': 'Reply sent successfully',
            'email_sent': True
        }

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['ama@example.com']
        assert mail.outbox[0].subject == 'Re: Property purchase'
        assert 'Please call us on Monday.' in mail.outbox[0].alternatives[0][0]

        sample_contact.refresh_from_db()
        assert sample_contact.status == 'replied'
        assert list(sample_contact.replies.values_list('message', flat=True)) == [
            'Thank you for reaching out.\nPlease call us on Monday.'
        ]

    def test_reply_with_mail_disabled(self, admin_client, mail_service, sample_contact):
        mail_service.disable('SMTP_SERVER is not set')

        response = self.reply(admin_client, sample_contact)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email_sent'] is False
        assert sample_contact.replies.count() == 1

    def test_empty_message(self, admin_client, mail_service, sample_contact):
        response = self.reply(admin_client, sample_contact, message='')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Message is required'
        assert len(mail.outbox) == 0
        assert Reply.objects.count() == 0

    def test_whitespace_message_is_sent_as_is(self, admin_client, mail_service, sample_contact):
        response = self.reply(admin_client, sample_contact, message='   ')

        assert response.status_code == status.HTTP_200_OK
        assert len(mail.outbox) == 1
        assert list(sample_contact.replies.values_list('message', flat=True)) == ['   ']

    def test_multiline_subject(self, admin_client, mail_service, sample_contact):
        response = self.reply(admin_client, sample_contact, subject='Re: your question\nabout land')

        assert response.status_code == status.HTTP_200_OK
        assert mail.outbox[0].subject == 'Re: your question about land'
        assert sample_contact.replies.count() == 1

    def test_missing_message(self, admin_client, mail_service, sample_contact):
        payload = {'id': sample_contact.id, 'email': 'ama@example.com', 'subject': 'Re'}

        response = admin_client.post('/api/v1/admin/reply', payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Message is required'

    def test_missing_recipient_with_mail_disabled(self, admin_client, mail_service, sample_contact):
        mail_service.disable('SMTP_SERVER is not set')
        payload = {'id': sample_contact.id, 'subject': 'Re', 'message': 'Thanks'}

        response = admin_client.post('/api/v1/admin/reply', payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'email' in response.data['fields']
        assert Reply.objects.count() == 0

    def test_unknown_contact_sends_nothing(self, admin_client, mail_service):
        response = self.reply(admin_client, None)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error'].startswith('Failed to send reply: ')
        assert len(mail.outbox) == 0
        assert Reply.objects.count() == 0

    def test_mail_failure_records_nothing(self, admin_client, mail_service, sample_contact, monkeypatch):
        def refuse(*args, **kwargs):
            raise smtplib.SMTPRecipientsRefused({'ama@example.com': (550, b'No such user')})

        monkeypatch.setattr(mail_service, 'send_html', refuse)

        response = self.reply(admin_client, sample_contact)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error'].startswith('Failed to send reply: ')
        sample_contact.refresh_from_db()
        assert sample_contact.status == 'new'
        assert Reply.objects.count() == 0


class TestContactModels:
    """Test model behaviour."""

    def test_default_status(self, sample_contact):
        assert sample_contact.status == Contact.STATUS_NEW

    def test_record_reply(self, sample_contact):
        reply = sample_contact.record_reply('Noted.')

        assert reply.contact_id == sample_contact.id
        sample_contact.refresh_from_db()
        assert sample_contact.status == Contact.STATUS_REPLIED

    def test_record_reply_is_atomic(self, sample_contact, monkeypatch):
        def fail(*args, **kwargs):
            raise DatabaseError('disk full')

        monkeypatch.setattr(Contact, 'save', fail)

        with pytest.raises(DatabaseError):
            sample_contact.record_reply('Noted.')

        assert Reply.objects.count() == 0

    def test_str(self, sample_contact):
        assert str(sample_contact) == (
            'Ama Mensah <ama@example.com> - Property purchase (new)'
        )


class TestReplyEmail:

    def test_reply_html_escapes_and_keeps_line_breaks(self, mail_service):
        send_reply_email('a@example.com', 'Re', 'Hello <Ama>\nSee you', mail_service)

        html = mail.outbox[0].alternatives[0][0]
        assert 'Hello &lt;Ama&gt;<br>See you' in html
        assert mail.outbox[0].from_email == 'website@springlegal.test'


class TestManagementCommands:

    def test_check_db_lists_contacts(self, sample_contact, capsys):
        call_command('check_db')

        out = capsys.readouterr().out
        assert 'Found 1 records:' in out
        assert 'ama@example.com' in out

    def test_check_db_empty(self, capsys):
        call_command('check_db')

        assert 'Found 0 records:' in capsys.readouterr().out

    @pytest.mark.django_db(transaction=True)
    def test_initdb_is_repeatable(self, capsys):
        call_command('initdb', verbosity=0)
        call_command('initdb', verbosity=0)

        assert 'Database initialized' in capsys.readouterr().out
