from rest_framework import serializers
from apps.customers.models import Customer
from .models import Transaction, TransactionType, TransactionStatus


# =============================================================================
# Input Serializers
# =============================================================================

class TransactionFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for transaction filtering.

    Query Parameters:
        type (str): purchase or redemption
        status (str): pending, approved or rejected
        customer (UUID): Filter by customer ID
        date_from (date): Transactions created on or after this date
        date_to (date): Transactions created on or before this date
    """

    type = serializers.ChoiceField(choices=TransactionType.choices, required=False)
    status = serializers.ChoiceField(choices=TransactionStatus.choices, required=False)
    customer = serializers.UUIDField(required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'date_to': 'End date must be after start date'
            })

        return attrs


class PurchaseCreateInputSerializer(serializers.Serializer):
    """
    Validate input for registering a purchase.

    Fields:
        customer (UUID): Customer making the purchase
        amount (Decimal): Purchase amount
        latitude (float): Reported device latitude
        longitude (float): Reported device longitude
    """

    customer = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    latitude = serializers.FloatField(required=False, allow_null=True)
    longitude = serializers.FloatField(required=False, allow_null=True)


class RedemptionCreateInputSerializer(serializers.Serializer):
    """
    Validate input for requesting a redemption.

    Fields:
        customer (UUID): Customer redeeming balance
        amount (Decimal): Amount to redeem
    """

    customer = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)


# =============================================================================
# Output Serializers
# =============================================================================

class CustomerMinimalSerializer(serializers.ModelSerializer):
    """Minimal customer info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = Customer
        fields = ['id', 'name', 'phone', 'display_name', 'balance']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class TransactionSerializer(serializers.ModelSerializer):
    """Main serializer for transactions."""

    customer = CustomerMinimalSerializer(read_only=True)
    reviewed_by = serializers.SerializerMethodField()

    class Meta:
        model = Transaction
        fields = [
            'id',
            'customer',
            'type',
            'amount',
            'cashback_amount',
            'status',
            'store_id',
            'latitude',
            'longitude',
            'distance_meters',
            'reviewed_by',
            'reviewed_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_reviewed_by(self, obj):
        if obj.reviewed_by is None:
            return None
        return obj.reviewed_by.get_username()


class TransactionListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for transaction lists."""

    customer_id = serializers.UUIDField(read_only=True)
    customer_name = serializers.CharField(source='customer.get_display_name', read_only=True)

    class Meta:
        model = Transaction
        fields = [
            'id',
            'customer_id',
            'customer_name',
            'type',
            'amount',
            'cashback_amount',
            'status',
            'store_id',
            'created_at',
        ]
        read_only_fields = fields


class LedgerErrorSerializer(serializers.Serializer):
    """Error body for refused ledger operations."""

    error = serializers.CharField()
    code = serializers.CharField()
