"""Store reference data loaded from settings."""

import math
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


@dataclass(frozen=True)
class StoreLocation:
    """A physical store and the radius (meters) around it where purchases are accepted."""

    id: str
    name: str
    address: str
    latitude: float
    longitude: float
    radius: float

    def as_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'address': self.address,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'radius': self.radius,
        }


REQUIRED_KEYS = ('id', 'name', 'latitude', 'longitude', 'radius')


def _build_location(entry: dict) -> StoreLocation:
    missing = [key for key in REQUIRED_KEYS if key not in entry]
    if missing:
        raise ImproperlyConfigured(
            f"Store location {entry.get('id', '?')!r} is missing keys: {', '.join(missing)}"
        )

    try:
        latitude = float(entry['latitude'])
        longitude = float(entry['longitude'])
        radius = float(entry['radius'])
    except (TypeError, ValueError):
        raise ImproperlyConfigured(
            f"Store location {entry['id']!r} has non-numeric coordinates or radius"
        )

    if not all(math.isfinite(v) for v in (latitude, longitude, radius)):
        raise ImproperlyConfigured(f"Store location {entry['id']!r} has non-finite values")
    if radius <= 0:
        raise ImproperlyConfigured(f"Store location {entry['id']!r} must have a positive radius")

    return StoreLocation(
        id=str(entry['id']),
        name=entry['name'],
        address=entry.get('address', ''),
        latitude=latitude,
        longitude=longitude,
        radius=radius,
    )


def get_store_locations() -> tuple[StoreLocation, ...]:
    """
    Return the configured stores as immutable value objects.

    Raises:
        ImproperlyConfigured: If an entry is incomplete, non-numeric,
            has a non-positive radius, or reuses another store's id.
    """
    entries = settings.LOYALTY.get('STORE_LOCATIONS', [])
    locations = tuple(_build_location(entry) for entry in entries)

    ids = [location.id for location in locations]
    if len(ids) != len(set(ids)):
        raise ImproperlyConfigured('Store location ids must be unique')

    return locations


def get_store_location(store_id: str) -> Optional[StoreLocation]:
    """Look up a configured store by id, or None."""
    for location in get_store_locations():
        if location.id == store_id:
            return location
    return None
