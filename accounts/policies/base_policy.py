"""
Base Admin Authentication Policy

A policy decides two things for the admin panel:
- verify(password): may this login attempt have a token?
- authenticate(raw_token): is this bearer token a valid admin session?

Views and the DRF authentication class only ever talk to the policy
configured in settings.ADMIN_AUTH_POLICY, so replacing the single shared
password with per-user accounts means writing a new policy class.
"""

from functools import lru_cache

from django.conf import settings
from django.utils.module_loading import import_string


class InvalidAdminToken(Exception):
    """Raised when a bearer token is malformed, expired, or not an admin claim."""
    pass


class BasePolicy:
    """
    Base class for admin authentication policies.
    """

    def verify(self, password):
        """
        Returns:
            str: a signed bearer token, or None when the password is wrong
        """
        raise NotImplementedError

    def authenticate(self, raw_token):
        """
        Returns:
            tuple: (user, token) for request.user / request.auth

        Raises:
            InvalidAdminToken: the token must be rejected
        """
        raise NotImplementedError


@lru_cache(maxsize=None)
def _load_policy(dotted_path):
    return import_string(dotted_path)()


def get_admin_auth_policy():
    """Return the process-wide instance of settings.ADMIN_AUTH_POLICY."""
    return _load_policy(settings.ADMIN_AUTH_POLICY)
