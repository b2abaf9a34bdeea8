"""
Admin Authentication Policies

Pluggable policies that decide who gets into the admin panel.
The active policy is named by settings.ADMIN_AUTH_POLICY.
"""

from .base_policy import BasePolicy, InvalidAdminToken, get_admin_auth_policy
from .shared_password_policy import SharedPasswordPolicy

__all__ = [
    'BasePolicy',
    'InvalidAdminToken',
    'SharedPasswordPolicy',
    'get_admin_auth_policy',
]
