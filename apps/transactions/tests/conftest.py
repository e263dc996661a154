import pytest
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.customers.models import Customer
from apps.transactions.models import Transaction, TransactionType, TransactionStatus


# Inside Loja 1 (about 2 m from its center)
IN_STORE = {'latitude': -3.8600, 'longitude': -38.6331}

# About 1 km north of both stores
OUT_OF_STORE = {'latitude': -3.8510, 'longitude': -38.6331}


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def store_attendant(db):
    """Create and return a store attendant."""
    return get_user_model().objects.create_user(
        username='attendant',
        password='TestPass123!',
    )


@pytest.fixture
def store_manager(db):
    """Create and return a store manager."""
    return get_user_model().objects.create_user(
        username='manager',
        password='TestPass123!',
        is_staff=True,
    )


def _authenticate(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def attendant_client(store_attendant):
    """Return API client authenticated as attendant."""
    return _authenticate(store_attendant)


@pytest.fixture
def manager_client(store_manager):
    """Return API client authenticated as manager."""
    return _authenticate(store_manager)


@pytest.fixture
def customer(db):
    """Create and return a customer with zero balance."""
    return Customer.objects.create(name='Maria Silva', phone='85999991234')


@pytest.fixture
def funded_customer(db):
    """Create and return a customer with 5.00 of balance."""
    return Customer.objects.create(
        name='João Souza',
        phone='85988887777',
        balance=Decimal('5.00'),
    )


@pytest.fixture
def pending_purchase(customer):
    """Pending purchase of 100.00 earning 5.00."""
    return Transaction.objects.create(
        customer=customer,
        type=TransactionType.PURCHASE,
        amount=Decimal('100.00'),
        cashback_amount=Decimal('5.00'),
        status=TransactionStatus.PENDING,
        store_id='store1',
    )


@pytest.fixture
def pending_redemption(funded_customer):
    """Pending redemption of the customer's whole balance."""
    return Transaction.objects.create(
        customer=funded_customer,
        type=TransactionType.REDEMPTION,
        amount=Decimal('5.00'),
        status=TransactionStatus.PENDING,
    )
