"""
Shared pytest fixtures.
"""
import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from accounts.policies.base_policy import _load_policy
from contact.models import Contact


@pytest.fixture(autouse=True)
def clear_cache():
    """Clear cache before and after each test to prevent pollution."""
    cache.clear()
    _load_policy.cache_clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """API client for making requests."""
    return APIClient()


@pytest.fixture
def admin_token(api_client, settings):
    response = api_client.post(
        '/api/v1/admin/login',
        {'password': settings.ADMIN_PASSWORD},
        format='json'
    )
    assert response.status_code == 200
    return response.data['token']


@pytest.fixture
def admin_client(admin_token):
    """API client authenticated as the admin."""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {admin_token}')
    return client


@pytest.fixture
def sample_contact(db):
    return Contact.objects.create(
        name='Ama Mensah',
        email='ama@example.com',
        phone='+233 20 000 0001',
        subject='Property purchase',
        message='I would like advice on buying land in Accra.'
    )
