"""
Domain exceptions for stores app.

Exception Hierarchy:
    GeofenceError (base)
    ├── InvalidLocationError
    └── OutOfRangeError
"""


class GeofenceError(Exception):
    """
    Base exception for geofence validation failures.

    Every subclass carries a stable ``code`` so HTTP handlers can report a
    machine-readable reason next to the user-facing message.
    """

    code = 'geofence_error'
    default_message = 'Location could not be validated.'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class InvalidLocationError(GeofenceError):
    """
    Raised when the reported coordinates are missing or malformed.

    Example:
        raise InvalidLocationError("Latitude must be a finite number")
    """

    code = 'invalid_location'
    default_message = 'Location is missing or invalid. Enable location services and try again.'


class OutOfRangeError(GeofenceError):
    """
    Raised when no store radius contains the reported point.

    Carries the nearest store and its distance when any store is configured,
    which is useful for the attendant ("you are 120 m from Loja 1").
    """

    code = 'out_of_range'
    default_message = 'You must be inside one of our stores to register a purchase.'

    def __init__(self, message=None, nearest_store=None, distance_meters=None):
        super().__init__(message)
        self.nearest_store = nearest_store
        self.distance_meters = distance_meters
