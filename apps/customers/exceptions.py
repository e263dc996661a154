"""Domain exceptions for customers app."""


class CustomerServiceError(Exception):
    """Base exception for all customer service errors."""

    code = 'customer_error'


class InvalidPhoneError(CustomerServiceError):
    """Phone number is missing or has the wrong number of digits."""

    code = 'invalid_phone'


class CustomerNotFoundError(CustomerServiceError):
    """Customer does not exist."""

    code = 'customer_not_found'
