import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.stores.locations import StoreLocation


# Loja 1 from the default settings
STORE1_LAT = -3.859981833155958
STORE1_LON = -38.63311136233465

# One meter of latitude, in degrees
METER_LAT = 1 / 111_195


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
def equator_stores():
    """Two stores on the equator about 55 m apart."""
    return (
        StoreLocation(id='west', name='West', address='', latitude=0.0, longitude=0.0, radius=100),
        StoreLocation(id='east', name='East', address='', latitude=0.0, longitude=0.0005, radius=100),
    )
