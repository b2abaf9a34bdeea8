"""
Tests for admin login and the bearer-token guard.
"""
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.policies import InvalidAdminToken, SharedPasswordPolicy

pytestmark = pytest.mark.django_db

ADMIN_ROUTES = [
    ('get', '/api/v1/admin/contacts'),
    ('get', '/api/v1/admin/contacts/1/history'),
    ('patch', '/api/v1/admin/contacts/1'),
    ('delete', '/api/v1/admin/contacts/1'),
    ('post', '/api/v1/admin/reply'),
]


def call(client, method, url):
    return getattr(client, method)(url, {}, format='json')


class TestAdminLogin:
    """Test POST /api/v1/admin/login."""

    def test_correct_password_returns_token(self, api_client, settings):
        response = api_client.post(
            '/api/v1/admin/login',
            {'password': settings.ADMIN_PASSWORD},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['token']

    def test_wrong_password_is_rejected(self, api_client):
        response = api_client.post(
            '/api/v1/admin/login',
            {'password': 'guess'},
            format='json'
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data == {'success': False, 'message': 'Invalid password'}

    def test_missing_password_is_rejected(self, api_client):
        response = api_client.post('/api/v1/admin/login', {}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert 'token' not in response.data

    def test_token_carries_admin_role_and_two_hour_expiry(self, admin_token):
        token = AccessToken(admin_token)

        assert token['role'] == 'admin'
        remaining = token['exp'] - timezone.now().timestamp()
        assert timedelta(hours=1, minutes=59).total_seconds() < remaining
        assert remaining <= timedelta(hours=2).total_seconds()


class TestAdminGuard:
    """Every admin route requires a valid bearer token."""

    @pytest.mark.parametrize('method,url', ADMIN_ROUTES)
    def test_missing_token_returns_401(self, api_client, method, url):
        response = call(api_client, method, url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {'error': 'Access denied'}

    @pytest.mark.parametrize('method,url', ADMIN_ROUTES)
    def test_malformed_token_returns_403(self, method, url):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION='Bearer not-a-jwt')

        response = call(client, method, url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {'error': 'Invalid token'}

    def test_expired_token_returns_403(self):
        token = AccessToken()
        token['role'] = 'admin'
        token.set_exp(from_time=timezone.now() - timedelta(hours=3), lifetime=timedelta(hours=2))

        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        response = client.get('/api/v1/admin/contacts')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_token_without_admin_role_returns_403(self):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {AccessToken()}')

        response = client.get('/api/v1/admin/contacts')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_valid_token_is_accepted(self, admin_client):
        response = admin_client.get('/api/v1/admin/contacts')

        assert response.status_code == status.HTTP_200_OK

    def test_public_routes_ignore_bad_tokens(self):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION='Bearer garbage')

        assert client.get('/api/health').status_code == status.HTTP_200_OK
        assert client.post(
            '/api/v1/admin/login', {'password': 'x'}, format='json'
        ).status_code == status.HTTP_401_UNAUTHORIZED


class TestSharedPasswordPolicy:

    def test_verify_then_authenticate(self):
        policy = SharedPasswordPolicy()

        raw = policy.verify('correct-horse-battery-staple')
        user, token = policy.authenticate(raw)

        assert user.is_authenticated
        assert token['role'] == 'admin'

    def test_verify_wrong_password(self):
        assert SharedPasswordPolicy().verify('wrong') is None
        assert SharedPasswordPolicy().verify(None) is None

    def test_authenticate_rejects_garbage(self):
        with pytest.raises(InvalidAdminToken):
            SharedPasswordPolicy().authenticate('abc.def.ghi')

    def test_password_change_takes_effect(self, settings):
        settings.ADMIN_PASSWORD = 'rotated-password'

        assert SharedPasswordPolicy().verify('correct-horse-battery-staple') is None
        assert SharedPasswordPolicy().verify('rotated-password')

    def test_alternative_policy_is_injected(self, api_client, settings):
        settings.ADMIN_AUTH_POLICY = 'accounts.tests.DenyAllPolicy'

        response = api_client.post(
            '/api/v1/admin/login',
            {'password': settings.ADMIN_PASSWORD},
            format='json'
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class DenyAllPolicy(SharedPasswordPolicy):
    """Policy used to check that views resolve the configured policy."""

    def verify(self, password):
        return None
