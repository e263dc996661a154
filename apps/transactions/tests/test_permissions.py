"""
Tests for transactions permission classes.
"""
import pytest
from unittest.mock import Mock
from apps.transactions.permissions import IsStoreManager


@pytest.mark.django_db
class TestIsStoreManager:
    """Test IsStoreManager permission class."""

    def test_manager_allowed(self, store_manager):
        permission = IsStoreManager()

        request = Mock()
        request.user = store_manager

        assert permission.has_permission(request, Mock()) is True

    def test_attendant_denied(self, store_attendant):
        permission = IsStoreManager()

        request = Mock()
        request.user = store_attendant

        assert permission.has_permission(request, Mock()) is False

    def test_object_permission_follows_role(self, store_attendant, pending_purchase):
        """Approving a specific transaction needs the same role."""
        permission = IsStoreManager()

        request = Mock()
        request.user = store_attendant

        assert permission.has_object_permission(request, Mock(), pending_purchase) is False
