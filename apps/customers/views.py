import re

from django.db.models import Q
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .exceptions import InvalidPhoneError
from .models import Customer
from .serializers import (
    CustomerSerializer,
    CustomerFilterSerializer,
    IdentifyCustomerInputSerializer,
)
from .services import identify_customer


class CustomerPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class CustomerViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for loyalty customers.

    list: Get customers (searchable by name or phone)
    retrieve: Get a customer with current balance
    identify: Find a customer by phone, registering on first interaction
    transactions: A customer's transaction history
    """

    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = CustomerPagination
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_queryset(self):
        queryset = super().get_queryset()

        if self.action != 'list':
            return queryset

        filter_serializer = CustomerFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        search = filter_serializer.validated_data.get('search', '').strip()

        if search:
            criteria = Q(name__icontains=search)
            digits = re.sub(r'\D', '', search)
            if digits:
                criteria |= Q(phone__contains=digits)
            queryset = queryset.filter(criteria)

        return queryset

    @extend_schema(
        request=IdentifyCustomerInputSerializer,
        responses={200: CustomerSerializer, 201: CustomerSerializer},
        description="Find a customer by phone number, creating it on first interaction.",
    )
    @action(detail=False, methods=['post'])
    def identify(self, request):
        """
        Identify a customer by phone.

        POST /api/customers/identify/
        Body: {"phone": "(85) 99999-1234", "name": "optional"}
        """
        input_serializer = IdentifyCustomerInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            customer, created = identify_customer(**input_serializer.validated_data)
        except InvalidPhoneError as e:
            return Response(
                {'error': str(e), 'code': e.code},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(
            CustomerSerializer(customer).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )

    @action(detail=True, methods=['get'])
    def transactions(self, request, pk=None):
        """
        Get the customer's transactions, newest first.

        GET /api/customers/{id}/transactions/
        """
        from apps.transactions.serializers import TransactionListSerializer

        customer = self.get_object()
        queryset = customer.transactions.select_related('customer').order_by('-created_at')

        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = TransactionListSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        return Response(TransactionListSerializer(queryset, many=True).data)
