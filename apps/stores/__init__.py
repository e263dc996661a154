"""
Stores App - Physical Store Reference Data and Geofencing

Stores are static configuration (``settings.LOYALTY['STORE_LOCATIONS']``),
not database rows. A purchase may only be registered when the device that
reports it is inside the radius of one of these stores.

Architecture:
- Locations: StoreLocation value objects loaded from settings
- Geofence: haversine distance and nearest-store matching
- Views: read-only store list and a dry-run location check
"""
