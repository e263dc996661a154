from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema

from .exceptions import GeofenceError, OutOfRangeError
from .geofence import validate_location
from .locations import get_store_locations
from .serializers import (
    LocationInputSerializer,
    StoreLocationSerializer,
    GeofenceMatchSerializer,
    GeofenceErrorSerializer,
)


def geofence_error_payload(error: GeofenceError) -> dict:
    """Build the error body for a failed geofence check."""
    payload = {'error': str(error), 'code': error.code}
    if isinstance(error, OutOfRangeError) and error.nearest_store is not None:
        payload['nearest_store'] = error.nearest_store.id
        payload['distance_meters'] = round(error.distance_meters, 1)
    return payload


@extend_schema(
    responses={200: StoreLocationSerializer(many=True)},
    description="List the stores where purchases can be registered.",
    tags=['stores'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def store_list(request):
    """List configured stores."""
    stores = [store.as_dict() for store in get_store_locations()]
    return Response(StoreLocationSerializer(stores, many=True).data)


@extend_schema(
    request=LocationInputSerializer,
    responses={
        200: GeofenceMatchSerializer,
        400: GeofenceErrorSerializer,
    },
    description="Check whether a coordinate is inside any store's radius (dry run of the purchase check).",
    tags=['stores'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def validate_store_location(request):
    """Validate device coordinates against store geofences - thin HTTP handler."""
    input_serializer = LocationInputSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)
    params = input_serializer.validated_data

    try:
        match = validate_location(params.get('latitude'), params.get('longitude'))
    except GeofenceError as e:
        return Response(geofence_error_payload(e), status=status.HTTP_400_BAD_REQUEST)

    return Response(GeofenceMatchSerializer({
        'store': match.store.as_dict(),
        'distance_meters': round(match.distance_meters, 1),
    }).data)
