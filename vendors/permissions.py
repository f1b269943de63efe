"""
Vendors — DRF Permission Classes

@file vendors/permissions.py
"""

from rest_framework.permissions import BasePermission


class IsActiveVendor(BasePermission):
    """Requires an authenticated, active vendor account."""

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and request.user.is_active
        )
