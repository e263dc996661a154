from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.customers.exceptions import CustomerNotFoundError
from .models import Transaction
from .permissions import IsStoreManager
from .serializers import (
    TransactionSerializer,
    TransactionListSerializer,
    TransactionFilterSerializer,
    PurchaseCreateInputSerializer,
    RedemptionCreateInputSerializer,
    LedgerErrorSerializer,
)
from .services import (
    create_purchase,
    create_redemption,
    approve_transaction,
    reject_transaction,
    get_pending_transactions,
)
from .services.exceptions import (
    LedgerServiceError,
    InvalidAmountError,
    InvalidTransitionError,
    InsufficientBalanceError,
    TransactionNotFoundError,
    GeofenceRejectedError,
)


ERROR_STATUS = {
    InvalidAmountError: status.HTTP_400_BAD_REQUEST,
    GeofenceRejectedError: status.HTTP_400_BAD_REQUEST,
    CustomerNotFoundError: status.HTTP_404_NOT_FOUND,
    TransactionNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    InsufficientBalanceError: status.HTTP_409_CONFLICT,
}


def ledger_error_response(error):
    """Translate a ledger/customer domain error into an API response."""
    payload = {'error': str(error), 'code': error.code}

    if isinstance(error, InsufficientBalanceError):
        payload['balance'] = error.balance
        payload['requested'] = error.requested
    elif isinstance(error, InvalidTransitionError):
        payload['current_status'] = error.current_status

    http_status = ERROR_STATUS.get(type(error), status.HTTP_400_BAD_REQUEST)
    return Response(payload, status=http_status)


class TransactionPagination(PageNumberPagination):
    """Custom pagination for transactions."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class TransactionViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for the cashback ledger.

    list: Get transactions (filterable by type/status/customer/date)
    retrieve: Get a specific transaction
    purchases: Register a purchase (geofenced)
    redemptions: Request a redemption
    pending: Approval queue, oldest first
    approve: Approve a pending transaction (managers)
    reject: Reject a pending transaction (managers)
    """

    queryset = Transaction.objects.select_related('customer', 'reviewed_by')
    serializer_class = TransactionSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = TransactionPagination
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_permissions(self):
        """Reviewing is manager-only."""
        if self.action in ['approve', 'reject']:
            return [IsAuthenticated(), IsStoreManager()]
        return super().get_permissions()

    def get_queryset(self):
        """Filter transactions using input serializer validation."""
        queryset = super().get_queryset()

        if self.action != 'list':
            return queryset

        filter_serializer = TransactionFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'type' in params:
            queryset = queryset.filter(type=params['type'])
        if 'status' in params:
            queryset = queryset.filter(status=params['status'])
        if 'customer' in params:
            queryset = queryset.filter(customer_id=params['customer'])
        if 'date_from' in params:
            queryset = queryset.filter(created_at__date__gte=params['date_from'])
        if 'date_to' in params:
            queryset = queryset.filter(created_at__date__lte=params['date_to'])

        return queryset

    def get_serializer_class(self):
        if self.action in ['list', 'pending']:
            return TransactionListSerializer
        return TransactionSerializer

    @extend_schema(
        request=PurchaseCreateInputSerializer,
        responses={201: TransactionSerializer, 400: LedgerErrorSerializer, 404: LedgerErrorSerializer},
        description="Register a purchase. The reported location must be inside a store's radius.",
    )
    @action(detail=False, methods=['post'])
    def purchases(self, request):
        """
        Register a pending purchase.

        POST /api/transactions/purchases/
        Body: {"customer": "<uuid>", "amount": "100.00", "latitude": -3.86, "longitude": -38.63}
        """
        input_serializer = PurchaseCreateInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        try:
            purchase = create_purchase(
                customer_id=data['customer'],
                amount=data['amount'],
                latitude=data.get('latitude'),
                longitude=data.get('longitude'),
            )
        except (LedgerServiceError, CustomerNotFoundError) as e:
            return ledger_error_response(e)

        return Response(TransactionSerializer(purchase).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=RedemptionCreateInputSerializer,
        responses={201: TransactionSerializer, 404: LedgerErrorSerializer, 409: LedgerErrorSerializer},
        description="Request a redemption of the customer's cashback balance.",
    )
    @action(detail=False, methods=['post'])
    def redemptions(self, request):
        """
        Request a pending redemption.

        POST /api/transactions/redemptions/
        Body: {"customer": "<uuid>", "amount": "5.00"}
        """
        input_serializer = RedemptionCreateInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        try:
            redemption = create_redemption(
                customer_id=data['customer'],
                amount=data['amount'],
            )
        except (LedgerServiceError, CustomerNotFoundError) as e:
            return ledger_error_response(e)

        return Response(TransactionSerializer(redemption).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'])
    def pending(self, request):
        """
        Approval queue, oldest first.

        GET /api/transactions/pending/
        """
        queryset = get_pending_transactions()
        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = TransactionListSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        return Response(TransactionListSerializer(queryset, many=True).data)

    @extend_schema(
        request=None,
        responses={200: TransactionSerializer, 404: LedgerErrorSerializer, 409: LedgerErrorSerializer},
    )
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """
        Approve a pending transaction and update the customer balance.

        POST /api/transactions/{id}/approve/
        """
        try:
            tx = approve_transaction(transaction_id=pk, reviewed_by=request.user)
        except LedgerServiceError as e:
            return ledger_error_response(e)

        return Response(TransactionSerializer(tx).data)

    @extend_schema(
        request=None,
        responses={200: TransactionSerializer, 404: LedgerErrorSerializer, 409: LedgerErrorSerializer},
    )
    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        """
        Reject a pending transaction.

        POST /api/transactions/{id}/reject/
        """
        try:
            tx = reject_transaction(transaction_id=pk, reviewed_by=request.user)
        except LedgerServiceError as e:
            return ledger_error_response(e)

        return Response(TransactionSerializer(tx).data)
