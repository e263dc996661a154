import pytest
from datetime import timedelta
from decimal import Decimal
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.customers.models import Customer
from apps.transactions.models import Transaction, TransactionType, TransactionStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def analytics_manager(db):
    """Create the manager who reads the dashboard."""
    return get_user_model().objects.create_user(
        username='manager',
        password='TestPass123!',
        is_staff=True,
    )


@pytest.fixture
def analytics_attendant(db):
    """Create an attendant, who may not read analytics."""
    return get_user_model().objects.create_user(
        username='attendant',
        password='TestPass123!',
    )


def _authenticate(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def manager_client(analytics_manager):
    """Return API client authenticated as manager."""
    return _authenticate(analytics_manager)


@pytest.fixture
def attendant_client(analytics_attendant):
    """Return API client authenticated as attendant."""
    return _authenticate(analytics_attendant)


# =============================================================================
# Loyalty data
# =============================================================================

def _record(customer, tx_type, amount, cashback='0.00', status=TransactionStatus.APPROVED, days_ago=0):
    return Transaction.objects.create(
        customer=customer,
        type=tx_type,
        amount=Decimal(amount),
        cashback_amount=Decimal(cashback),
        status=status,
        created_at=timezone.now() - timedelta(days=days_ago),
    )


@pytest.fixture
def loyalty_history(db):
    """
    Three customers:

    - regular: approved purchases of 100 and 200 in the last 2 days (active),
      plus a pending and a rejected purchase that must be ignored
    - redeemer: never purchased, one approved redemption of 5 (inactive)
    - lapsed: one approved purchase of 50, 20 days ago (inactive)
    """
    regular = Customer.objects.create(name='Regular', phone='85900000001', balance=Decimal('15.00'))
    redeemer = Customer.objects.create(name='Redeemer', phone='85900000002')
    lapsed = Customer.objects.create(name='Lapsed', phone='85900000003', balance=Decimal('2.50'))

    _record(regular, TransactionType.PURCHASE, '100.00', '5.00', days_ago=1)
    _record(regular, TransactionType.PURCHASE, '200.00', '10.00', days_ago=2)
    _record(regular, TransactionType.PURCHASE, '1000.00', '50.00', status=TransactionStatus.PENDING)
    _record(regular, TransactionType.PURCHASE, '900.00', '45.00', status=TransactionStatus.REJECTED)
    _record(redeemer, TransactionType.REDEMPTION, '5.00', days_ago=1)
    _record(lapsed, TransactionType.PURCHASE, '50.00', '2.50', days_ago=20)

    return {'regular': regular, 'redeemer': redeemer, 'lapsed': lapsed}
