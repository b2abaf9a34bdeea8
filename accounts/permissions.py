"""
Admin Permissions
"""
from rest_framework import permissions


class IsAdmin(permissions.BasePermission):
    """
    Any request carrying a valid admin token.

    There is a single admin role, so no further checks are made.
    """

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)
