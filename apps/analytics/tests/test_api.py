import pytest
from decimal import Decimal
from unittest.mock import patch
from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status

from apps.analytics.analytics import LoyaltyAnalytics
from apps.customers.models import Customer
from apps.transactions.models import Transaction, TransactionType, TransactionStatus


# =============================================================================
# Period Metrics
# =============================================================================

@pytest.mark.django_db
class TestPeriodMetrics:
    """Tests for GET /api/analytics/metrics/"""

    def test_last_7_days(self, manager_client, loyalty_history):
        url = reverse('analytics:period-metrics')
        response = manager_client.get(url, {'range': 'last7days'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_revenue'] == '300.00'
        assert response.data['total_cashback'] == '15.00'
        assert response.data['total_redemptions'] == '5.00'
        assert response.data['redemption_rate'] == '33.33'
        assert response.data['average_ticket'] == '150.00'
        assert response.data['total_transactions'] == 2
        assert response.data['total_customers'] == 3
        assert response.data['active_customers'] == 1
        assert response.data['inactive_customers'] == 2

    def test_redemption_rate_beyond_cashback_issued(self, manager_client):
        """Redeeming an old balance in a period that issued almost no cashback."""
        customer = Customer.objects.create(name='Saver', phone='85977776666')
        Transaction.objects.create(
            customer=customer, type=TransactionType.PURCHASE, amount=Decimal('0.20'),
            cashback_amount=Decimal('0.01'), status=TransactionStatus.APPROVED,
        )
        Transaction.objects.create(
            customer=customer, type=TransactionType.REDEMPTION, amount=Decimal('100.00'),
            status=TransactionStatus.APPROVED,
        )

        url = reverse('analytics:period-metrics')
        response = manager_client.get(url, {'range': 'today'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['redemption_rate'] == '1000000.00'

    def test_custom_range_missing_dates(self, manager_client):
        url = reverse('analytics:period-metrics')
        response = manager_client.get(url, {'range': 'custom'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_attendant_forbidden(self, attendant_client):
        url = reverse('analytics:period-metrics')
        response = attendant_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unauthenticated(self, api_client):
        url = reverse('analytics:period-metrics')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_data_unavailable(self, manager_client, loyalty_history):
        url = reverse('analytics:period-metrics')
        with patch.object(
            LoyaltyAnalytics, '_load_period_transactions', side_effect=DatabaseError('timeout')
        ):
            response = manager_client.get(url)

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data['code'] == 'data_unavailable'
        assert 'total_revenue' not in response.data


# =============================================================================
# Customer Views
# =============================================================================

@pytest.mark.django_db
class TestCustomerViews:
    """Tests for GET /api/analytics/customers/..."""

    def test_profiles(self, manager_client, loyalty_history):
        url = reverse('analytics:customer-profiles')
        response = manager_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [p['name'] for p in response.data] == ['Regular', 'Lapsed', 'Redeemer']
        assert response.data[0]['total_spent'] == '300.00'
        assert response.data[0]['status'] == 'active'

    def test_activity(self, manager_client, loyalty_history):
        url = reverse('analytics:customer-activity')
        response = manager_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data[1]['days_since_last_purchase'] == 20
        assert response.data[2]['last_purchase_at'] is None
        assert response.data[2]['status'] == 'inactive'

    def test_attendant_forbidden(self, attendant_client):
        url = reverse('analytics:customer-profiles')
        response = attendant_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Dashboard
# =============================================================================

@pytest.mark.django_db
class TestDashboard:
    """Tests for GET /api/analytics/dashboard/"""

    def test_dashboard(self, manager_client, loyalty_history):
        url = reverse('analytics:dashboard')
        response = manager_client.get(url, {'range': 'last30days'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['metrics']['total_revenue'] == '350.00'
        assert len(response.data['profiles']) == 3
        assert len(response.data['activity']) == 3

    def test_dashboard_empty(self, manager_client):
        url = reverse('analytics:dashboard')
        response = manager_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['metrics']['total_customers'] == 0
        assert response.data['metrics']['redemption_rate'] == '0.00'
        assert response.data['profiles'] == []
