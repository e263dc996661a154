"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    PeriodQuerySerializer - Validates the reporting range

Response Serializers:
    PeriodMetricsSerializer - Aggregate metrics for a period
    CustomerMetricsSerializer - One customer's profile/activity row
    DashboardResponseSerializer - Metrics plus both customer views
"""

from django.utils import timezone
from rest_framework import serializers

from .exceptions import InvalidDateRangeError
from .periods import DateRange, resolve_date_range
from .segmentation import ActivityStatus


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class PeriodQuerySerializer(serializers.Serializer):
    """
    Validate the reporting range query parameters.

    Used by: period_metrics, dashboard

    Query Parameters:
        range (str): today, yesterday, last7days, last30days, thisMonth,
            lastMonth or custom (default today)
        start_date (date): First day, required for custom
        end_date (date): Last day, required for custom

    The validated data gains ``first_day`` and ``last_day``, resolved
    against today's date in the project time zone.
    """

    range = serializers.ChoiceField(
        choices=DateRange.CHOICES,
        default=DateRange.TODAY,
        help_text='Reporting range preset'
    )
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        try:
            first_day, last_day = resolve_date_range(
                attrs['range'],
                today=timezone.localdate(),
                start_date=attrs.get('start_date'),
                end_date=attrs.get('end_date'),
            )
        except InvalidDateRangeError as e:
            raise serializers.ValidationError({'start_date': str(e)})

        attrs['first_day'] = first_day
        attrs['last_day'] = last_day
        return attrs


# =============================================================================
# Response Serializers (API Documentation & Output)
# =============================================================================

class PeriodMetricsSerializer(serializers.Serializer):
    """Aggregate business metrics for a period. Only approved transactions count."""

    period_start = serializers.DateTimeField()
    period_end = serializers.DateTimeField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_cashback = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_redemptions = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_transactions = serializers.IntegerField()
    average_ticket = serializers.DecimalField(max_digits=14, decimal_places=2)
    redemption_rate = serializers.DecimalField(
        max_digits=None, decimal_places=2,
        help_text='Redemptions as a percentage of cashback issued'
    )
    total_customers = serializers.IntegerField()
    active_customers = serializers.IntegerField()
    at_risk_customers = serializers.IntegerField()
    inactive_customers = serializers.IntegerField()


class CustomerMetricsSerializer(serializers.Serializer):
    """A customer's purchase history summary and activity tier."""

    customer_id = serializers.UUIDField()
    name = serializers.CharField()
    phone = serializers.CharField()
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_purchases = serializers.IntegerField()
    total_spent = serializers.DecimalField(max_digits=14, decimal_places=2)
    average_ticket = serializers.DecimalField(max_digits=14, decimal_places=2)
    cashback_accrued = serializers.DecimalField(max_digits=14, decimal_places=2)
    last_purchase_at = serializers.DateTimeField(allow_null=True)
    days_since_last_purchase = serializers.IntegerField(allow_null=True)
    status = serializers.ChoiceField(choices=ActivityStatus.choices)


class DashboardResponseSerializer(serializers.Serializer):
    """Everything the manager dashboard renders, in one payload."""

    metrics = PeriodMetricsSerializer()
    profiles = CustomerMetricsSerializer(many=True)
    activity = CustomerMetricsSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    """Error response."""

    error = serializers.CharField()
    code = serializers.CharField()
