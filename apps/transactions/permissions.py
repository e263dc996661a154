"""
Custom permission classes for transactions app.

Any authenticated staff account (store attendant) may register purchases
and redemptions. Only managers (``is_staff``) may approve or reject them
and read the analytics.
"""
from rest_framework.permissions import BasePermission


class IsStoreManager(BasePermission):
    """
    Permission for manager-only operations.

    Usage:
        def get_permissions(self):
            if self.action in ['approve', 'reject']:
                return [IsAuthenticated(), IsStoreManager()]
            return super().get_permissions()
    """

    message = 'Only store managers can perform this action.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_staff)

    def has_object_permission(self, request, view, obj):
        return self.has_permission(request, view)
