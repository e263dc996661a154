import pytest
from django.urls import reverse
from rest_framework import status

from .conftest import STORE1_LAT, STORE1_LON, METER_LAT


@pytest.mark.django_db
class TestStoreList:
    """Tests for GET /api/stores/"""

    def test_list_stores(self, attendant_client):
        url = reverse('stores:store-list')
        response = attendant_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [s['id'] for s in response.data] == ['store1', 'store2']
        assert response.data[0]['radius'] == 40

    def test_list_stores_unauthenticated(self, api_client):
        url = reverse('stores:store-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestValidateStoreLocation:
    """Tests for POST /api/stores/validate/"""

    def test_inside_store(self, attendant_client):
        url = reverse('stores:store-validate')
        response = attendant_client.post(url, {
            'latitude': STORE1_LAT + 10 * METER_LAT,
            'longitude': STORE1_LON,
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['store']['id'] == 'store1'
        assert response.data['distance_meters'] == pytest.approx(10, abs=0.5)

    def test_outside_every_store(self, attendant_client):
        url = reverse('stores:store-validate')
        response = attendant_client.post(url, {
            'latitude': STORE1_LAT + 100 * METER_LAT,
            'longitude': STORE1_LON,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'out_of_range'
        assert response.data['nearest_store'] == 'store1'

    def test_missing_location(self, attendant_client):
        url = reverse('stores:store-validate')
        response = attendant_client.post(url, {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_location'
