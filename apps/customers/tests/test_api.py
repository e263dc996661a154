import pytest
from datetime import timedelta
from decimal import Decimal
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from apps.customers.models import Customer
from apps.transactions.models import Transaction, TransactionType


@pytest.mark.django_db
class TestCustomerList:
    """Tests for GET /api/customers/"""

    def test_list_customers(self, attendant_client, customer, nameless_customer):
        url = reverse('customers:customer-list')
        response = attendant_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2

    def test_search_by_name(self, attendant_client, customer, nameless_customer):
        url = reverse('customers:customer-list')
        response = attendant_client.get(url, {'search': 'maria'})

        ids = [c['id'] for c in response.data['results']]
        assert ids == [str(customer.id)]

    def test_search_by_formatted_phone(self, attendant_client, customer, nameless_customer):
        url = reverse('customers:customer-list')
        response = attendant_client.get(url, {'search': '98888-7777'})

        ids = [c['id'] for c in response.data['results']]
        assert ids == [str(nameless_customer.id)]

    def test_list_unauthenticated(self, api_client):
        url = reverse('customers:customer-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestCustomerDetail:
    """Tests for GET /api/customers/{id}/"""

    def test_detail_includes_balance(self, attendant_client, customer):
        url = reverse('customers:customer-detail', kwargs={'pk': customer.id})
        response = attendant_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['balance'] == '12.50'
        assert response.data['display_name'] == 'Maria Silva'


@pytest.mark.django_db
class TestIdentifyCustomer:
    """Tests for POST /api/customers/identify/"""

    def test_first_interaction_registers(self, attendant_client):
        url = reverse('customers:customer-identify')
        response = attendant_client.post(url, {'phone': '(85) 96666-5555', 'name': 'Carlos'})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['phone'] == '85966665555'
        assert Customer.objects.filter(phone='85966665555').exists()

    def test_known_phone_returns_customer(self, attendant_client, customer):
        url = reverse('customers:customer-identify')
        response = attendant_client.post(url, {'phone': '85 99999 1234'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(customer.id)

    def test_invalid_phone(self, attendant_client):
        url = reverse('customers:customer-identify')
        response = attendant_client.post(url, {'phone': '1234'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_phone'


@pytest.mark.django_db
class TestCustomerTransactions:
    """Tests for GET /api/customers/{id}/transactions/"""

    def test_history_newest_first(self, attendant_client, customer):
        older = Transaction.objects.create(
            customer=customer, type=TransactionType.PURCHASE,
            amount=Decimal('40.00'), cashback_amount=Decimal('2.00'),
            created_at=timezone.now() - timedelta(hours=1),
        )
        newer = Transaction.objects.create(
            customer=customer, type=TransactionType.REDEMPTION, amount=Decimal('2.00'),
        )

        url = reverse('customers:customer-transactions', kwargs={'pk': customer.id})
        response = attendant_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        ids = [t['id'] for t in response.data['results']]
        assert ids == [str(newer.id), str(older.id)]
