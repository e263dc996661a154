"""
Domain exceptions for analytics app.

Raised by the analytics services layer and translated to HTTP responses
by the views.

Exception Hierarchy:
    AnalyticsServiceError (base)
    ├── InvalidDateRangeError
    └── DataUnavailableError

Usage:
    from apps.analytics.exceptions import DataUnavailableError

    try:
        metrics = LoyaltyAnalytics.period_metrics(start, end)
    except DataUnavailableError as e:
        return Response({'error': str(e), 'code': e.code}, status=503)
"""


class AnalyticsServiceError(Exception):
    """
    Base exception for all analytics service errors.

    Attributes:
        code: Stable machine-readable identifier for API clients.
    """

    code = 'analytics_error'
    default_message = 'Analytics request failed.'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class InvalidDateRangeError(AnalyticsServiceError):
    """
    Raised when a reporting range cannot be resolved.

    Example:
        raise InvalidDateRangeError("Start date must be before end date")
    """

    code = 'invalid_date_range'
    default_message = 'Invalid date range.'


class DataUnavailableError(AnalyticsServiceError):
    """
    Raised when transactions or customers cannot be loaded.

    No partial metrics are returned alongside it.
    """

    code = 'data_unavailable'
    default_message = 'Analytics data is temporarily unavailable. Try again later.'
