"""
Geofence Module
================

Decides whether a reported device coordinate lies inside the radius of a
known store.

Distances are great-circle distances computed with the haversine formula on
a spherical Earth of radius 6,371,000 meters. A point is accepted by a store
when its distance to the store center is less than or equal to the store's
radius. When several stores accept the point, the nearest one wins; exact
distance ties go to the lexicographically lowest store id.

Example:
    Validating a purchase location::

        from apps.stores.geofence import validate_location

        match = validate_location(-3.85999, -38.63311)
        print(f"{match.store.name} ({match.distance_meters:.1f} m)")
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional

from .exceptions import InvalidLocationError, OutOfRangeError
from .locations import StoreLocation, get_store_locations

logger = logging.getLogger(__name__)

EARTH_RADIUS_METERS = 6_371_000


@dataclass(frozen=True)
class GeofenceMatch:
    """The store that accepted a coordinate and how far from its center it was."""

    store: StoreLocation
    distance_meters: float

    @property
    def store_id(self) -> str:
        return self.store.id


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance in meters between two (latitude, longitude) points.

    Args:
        lat1, lon1: First point in decimal degrees.
        lat2, lon2: Second point in decimal degrees.

    Returns:
        Distance in meters (0.0 for identical points).
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    # Rounding can push a slightly above 1 for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c


def _coerce_coordinate(value, name: str, limit: float) -> float:
    if value is None or isinstance(value, bool):
        raise InvalidLocationError(f"{name.capitalize()} is required")

    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidLocationError(f"{name.capitalize()} must be a number")

    if not math.isfinite(number):
        raise InvalidLocationError(f"{name.capitalize()} must be a finite number")
    if not -limit <= number <= limit:
        raise InvalidLocationError(f"{name.capitalize()} must be between -{limit:g} and {limit:g}")

    return number


def validate_location(
    latitude,
    longitude,
    stores: Optional[Iterable[StoreLocation]] = None,
) -> GeofenceMatch:
    """
    Match a reported coordinate against the configured stores.

    Coordinates are validated before any distance is computed, so a missing
    or non-finite value never turns into a "zero distance" match.

    Args:
        latitude: Reported latitude in decimal degrees.
        longitude: Reported longitude in decimal degrees.
        stores: Stores to check. Defaults to the configured store list.

    Returns:
        GeofenceMatch for the nearest store whose radius contains the point.

    Raises:
        InvalidLocationError: If a coordinate is missing, non-numeric,
            non-finite or outside the valid degree range.
        OutOfRangeError: If no store radius contains the point.
    """
    lat = _coerce_coordinate(latitude, 'latitude', 90)
    lon = _coerce_coordinate(longitude, 'longitude', 180)

    if stores is None:
        stores = get_store_locations()

    measured = [
        (haversine_distance(lat, lon, store.latitude, store.longitude), store)
        for store in stores
    ]
    if not measured:
        logger.warning("Geofence check with no stores configured")
        raise OutOfRangeError()

    candidates = [(distance, store) for distance, store in measured if distance <= store.radius]
    if not candidates:
        nearest_distance, nearest = min(measured, key=lambda item: (item[0], item[1].id))
        logger.info(
            "Location (%.6f, %.6f) outside every store; nearest %s at %.1f m (radius %.0f m)",
            lat, lon, nearest.id, nearest_distance, nearest.radius,
        )
        raise OutOfRangeError(nearest_store=nearest, distance_meters=nearest_distance)

    distance, store = min(candidates, key=lambda item: (item[0], item[1].id))
    return GeofenceMatch(store=store, distance_meters=distance)
