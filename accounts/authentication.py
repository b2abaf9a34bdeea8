"""
Admin Token Authentication

DRF authentication class for the admin panel's bearer tokens.

- no Authorization header: anonymous (admin routes answer 401)
- a token the policy rejects: 403, whatever the route
"""
from rest_framework import status
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import APIException

from .policies import InvalidAdminToken, get_admin_auth_policy


class AdminTokenRejected(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Invalid token'
    default_code = 'token_not_valid'


class AdminTokenAuthentication(BaseAuthentication):
    """
    Reads `Authorization: Bearer <token>` and hands the token to the
    configured admin policy.
    """

    keyword = 'Bearer'
    policy = None

    def get_policy(self):
        return self.policy or get_admin_auth_policy()

    def authenticate(self, request):
        parts = request.META.get('HTTP_AUTHORIZATION', '').split()
        if len(parts) < 2:
            return None

        try:
            return self.get_policy().authenticate(parts[1])
        except InvalidAdminToken:
            raise AdminTokenRejected()

    def authenticate_header(self, request):
        return self.keyword
