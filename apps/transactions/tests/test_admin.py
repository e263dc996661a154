from decimal import Decimal

import pytest
from django.contrib import admin
from django.contrib.messages.storage.fallback import FallbackStorage
from django.test import RequestFactory

from apps.customers.models import Customer
from apps.transactions.admin import TransactionAdmin
from apps.transactions.models import Transaction, TransactionStatus


@pytest.fixture
def model_admin():
    return TransactionAdmin(Transaction, admin.site)


@pytest.fixture
def admin_request(store_manager):
    request = RequestFactory().post('/admin/transactions/transaction/')
    request.user = store_manager
    request.session = {}
    request._messages = FallbackStorage(request)
    return request


@pytest.fixture
def mixed_queryset(pending_purchase, pending_redemption):
    """An approvable purchase and a redemption the balance can no longer cover."""
    Customer.objects.filter(id=pending_redemption.customer_id).update(balance=Decimal('1.00'))
    return Transaction.objects.filter(id__in=[pending_purchase.id, pending_redemption.id])


def _messages(request):
    return [str(m) for m in request._messages]


@pytest.mark.django_db
class TestBulkActions:

    def test_approve_goes_through_ledger(
        self, model_admin, admin_request, mixed_queryset, pending_purchase, pending_redemption
    ):
        model_admin.approve_selected(admin_request, mixed_queryset)

        pending_purchase.refresh_from_db()
        pending_redemption.refresh_from_db()
        assert pending_purchase.status == TransactionStatus.APPROVED
        assert pending_purchase.reviewed_by == admin_request.user
        assert pending_redemption.status == TransactionStatus.PENDING

        assert Customer.objects.get(id=pending_purchase.customer_id).balance == Decimal('5.00')
        assert Customer.objects.get(id=pending_redemption.customer_id).balance == Decimal('1.00')

        messages = _messages(admin_request)
        assert 'Approved 1 transaction(s).' in messages
        assert any('Insufficient balance' in m for m in messages)

    def test_reject_leaves_balances(
        self, model_admin, admin_request, mixed_queryset, pending_purchase, pending_redemption
    ):
        model_admin.reject_selected(admin_request, mixed_queryset)

        assert set(mixed_queryset.values_list('status', flat=True)) == {TransactionStatus.REJECTED}
        assert Customer.objects.get(id=pending_purchase.customer_id).balance == Decimal('0.00')
        assert Customer.objects.get(id=pending_redemption.customer_id).balance == Decimal('1.00')
        assert _messages(admin_request) == ['Rejected 2 transaction(s).']

    def test_terminal_transactions_are_skipped(
        self, model_admin, admin_request, pending_purchase
    ):
        queryset = Transaction.objects.filter(id=pending_purchase.id)
        model_admin.approve_selected(admin_request, queryset)
        model_admin.reject_selected(admin_request, queryset)

        pending_purchase.refresh_from_db()
        assert pending_purchase.status == TransactionStatus.APPROVED
        assert 'Rejected 0 transaction(s).' in _messages(admin_request)
