from rest_framework import serializers
from .models import Customer


class CustomerFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for customer search.

    Query Parameters:
        search (str): Matches name (case-insensitive) or phone digits
    """

    search = serializers.CharField(max_length=100, required=False, allow_blank=True)


class IdentifyCustomerInputSerializer(serializers.Serializer):
    """
    Validate input for identifying (or registering) a customer.

    Fields:
        phone (str): Phone number, any formatting
        name (str): Optional name, stored only for new customers
    """

    phone = serializers.CharField(max_length=30)
    name = serializers.CharField(max_length=200, required=False, allow_blank=True)


class CustomerSerializer(serializers.ModelSerializer):
    """Serializer for customers with current balance."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = Customer
        fields = [
            'id',
            'name',
            'phone',
            'display_name',
            'balance',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()
