from rest_framework import serializers


# =============================================================================
# Input Serializers
# =============================================================================

class LocationInputSerializer(serializers.Serializer):
    """
    Reported device coordinates.

    Both fields are optional at this layer; missing values are reported by
    the geofence as an invalid location rather than a generic field error.
    """

    latitude = serializers.FloatField(required=False, allow_null=True)
    longitude = serializers.FloatField(required=False, allow_null=True)


# =============================================================================
# Output Serializers
# =============================================================================

class StoreLocationSerializer(serializers.Serializer):
    """Serializer for configured store locations."""

    id = serializers.CharField()
    name = serializers.CharField()
    address = serializers.CharField()
    latitude = serializers.FloatField()
    longitude = serializers.FloatField()
    radius = serializers.FloatField()


class GeofenceMatchSerializer(serializers.Serializer):
    """Result of a successful location check."""

    store = StoreLocationSerializer()
    distance_meters = serializers.FloatField()


class GeofenceErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
    code = serializers.CharField()
    nearest_store = serializers.CharField(required=False)
    distance_meters = serializers.FloatField(required=False)
