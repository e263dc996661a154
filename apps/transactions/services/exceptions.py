"""
Domain exceptions for the transaction ledger.

Every failure leaves the transaction and the customer balance exactly as
they were before the call. Each exception carries a stable ``code`` and a
message that can be shown to the attendant as-is.

Exception Hierarchy:
    LedgerServiceError (base)
    ├── InvalidAmountError
    ├── InvalidTransitionError
    ├── InsufficientBalanceError
    ├── TransactionNotFoundError
    └── GeofenceRejectedError
"""


class LedgerServiceError(Exception):
    """Base exception for all ledger service errors."""

    code = 'ledger_error'


class InvalidAmountError(LedgerServiceError):
    """Transaction amount must be greater than zero."""

    code = 'invalid_amount'


class InvalidTransitionError(LedgerServiceError):
    """
    Raised when a transaction is asked to leave a terminal status.

    Example:
        raise InvalidTransitionError("Transaction is already approved")
    """

    code = 'invalid_transition'

    def __init__(self, message=None, current_status=None):
        super().__init__(message or f"Transaction is already {current_status}")
        self.current_status = current_status


class InsufficientBalanceError(LedgerServiceError):
    """
    Raised when a redemption would drive the customer balance negative.

    Carries both amounts so the caller can tell the customer how much is
    actually available.
    """

    code = 'insufficient_balance'

    def __init__(self, message=None, balance=None, requested=None):
        super().__init__(
            message or f"Insufficient balance: {balance} available, {requested} requested"
        )
        self.balance = balance
        self.requested = requested


class TransactionNotFoundError(LedgerServiceError):
    """Transaction does not exist."""

    code = 'transaction_not_found'


class GeofenceRejectedError(LedgerServiceError):
    """
    Purchase refused because its location failed the geofence check.

    The original ``apps.stores.exceptions.GeofenceError`` is kept in
    ``reason`` and its code is reused, so callers see ``invalid_location`` or
    ``out_of_range`` rather than a generic ledger error.
    """

    def __init__(self, reason):
        super().__init__(str(reason))
        self.reason = reason
        self.code = reason.code
