from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.transactions.permissions import IsStoreManager
from .analytics import LoyaltyAnalytics
from .exceptions import DataUnavailableError
from .periods import interval_bounds
from .serializers import (
    # Input serializers
    PeriodQuerySerializer,
    # Response serializers
    PeriodMetricsSerializer,
    CustomerMetricsSerializer,
    DashboardResponseSerializer,
    ErrorSerializer,
)

PERIOD_PARAMETERS = [
    OpenApiParameter(
        'range', OpenApiTypes.STR,
        description='today, yesterday, last7days, last30days, thisMonth, lastMonth or custom'
    ),
    OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date for custom (YYYY-MM-DD)'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date for custom (YYYY-MM-DD)'),
]


def _unavailable(error):
    return Response(
        {'error': str(error), 'code': error.code},
        status=status.HTTP_503_SERVICE_UNAVAILABLE
    )


def _period_bounds(request):
    query_serializer = PeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data
    return interval_bounds(params['first_day'], params['last_day'])


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={
        200: PeriodMetricsSerializer,
        400: ErrorSerializer,
        503: ErrorSerializer,
    },
    description="Revenue, cashback, redemptions and customer tiers for a period.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStoreManager])
def period_metrics(request):
    """Aggregate metrics for the requested range - thin HTTP handler."""
    start, end = _period_bounds(request)

    try:
        metrics = LoyaltyAnalytics.period_metrics(start, end)
    except DataUnavailableError as e:
        return _unavailable(e)

    return Response(PeriodMetricsSerializer(metrics).data)


@extend_schema(
    responses={200: CustomerMetricsSerializer(many=True), 503: ErrorSerializer},
    description="Customers ranked by total spent.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStoreManager])
def customer_profiles(request):
    try:
        profiles = LoyaltyAnalytics.customer_profiles()
    except DataUnavailableError as e:
        return _unavailable(e)

    return Response(CustomerMetricsSerializer(profiles, many=True).data)


@extend_schema(
    responses={200: CustomerMetricsSerializer(many=True), 503: ErrorSerializer},
    description="Customers by most recent purchase, with activity tier.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStoreManager])
def customer_activity(request):
    try:
        activity = LoyaltyAnalytics.customer_activity()
    except DataUnavailableError as e:
        return _unavailable(e)

    return Response(CustomerMetricsSerializer(activity, many=True).data)


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={
        200: DashboardResponseSerializer,
        400: ErrorSerializer,
        503: ErrorSerializer,
    },
    description="Period metrics with the profile and activity views, for the dashboard and report export.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStoreManager])
def dashboard(request):
    """
    Manager dashboard data.

    GET /api/analytics/dashboard/?range=last7days
    """
    start, end = _period_bounds(request)

    try:
        data = LoyaltyAnalytics.dashboard(start, end)
    except DataUnavailableError as e:
        return _unavailable(e)

    return Response(DashboardResponseSerializer(data).data)
