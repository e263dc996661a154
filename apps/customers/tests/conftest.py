import pytest
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.customers.models import Customer


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
def attendant_client(api_client, store_attendant):
    """Return API client authenticated as attendant."""
    refresh = RefreshToken.for_user(store_attendant)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def customer(db):
    """Create and return a customer with some balance."""
    return Customer.objects.create(
        name='Maria Silva',
        phone='85999991234',
        balance=Decimal('12.50'),
    )


@pytest.fixture
def nameless_customer(db):
    """Create and return a customer registered without a name."""
    return Customer.objects.create(phone='85988887777')
