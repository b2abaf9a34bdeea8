"""
Shared Password Policy

One admin password for the whole panel. A correct password buys a
short-lived signed JWT with a fixed {"role": "admin"} claim. Nothing is
stored server-side: a token is valid exactly as long as its signature
checks out and it has not expired.
"""

from django.conf import settings
from django.utils.crypto import constant_time_compare
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.models import TokenUser
from rest_framework_simplejwt.tokens import AccessToken

from .base_policy import BasePolicy, InvalidAdminToken


class SharedPasswordPolicy(BasePolicy):
    """
    Settings:
        ADMIN_PASSWORD: the shared password
        ADMIN_TOKEN_LIFETIME: timedelta until an issued token expires
        SIMPLE_JWT['SIGNING_KEY']: secret the tokens are signed with
    """

    role = 'admin'

    def verify(self, password):
        if not password or not constant_time_compare(str(password), settings.ADMIN_PASSWORD):
            return None

        token = AccessToken()
        token.set_exp(lifetime=settings.ADMIN_TOKEN_LIFETIME)
        token['role'] = self.role
        return str(token)

    def authenticate(self, raw_token):
        try:
            token = AccessToken(raw_token)
        except TokenError as e:
            raise InvalidAdminToken(str(e)) from e

        if token.get('role') != self.role:
            raise InvalidAdminToken('Token does not carry the admin role')

        return TokenUser(token), token
