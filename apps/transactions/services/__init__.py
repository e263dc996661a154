"""
Transactions services - Business logic layer.

This package contains the cashback ledger:
- Purchase and redemption creation
- Approval / rejection state machine
- Balance arithmetic (pure, no database access)
"""

from .ledger import (
    create_purchase,
    create_redemption,
    approve_transaction,
    reject_transaction,
    get_transaction,
    get_pending_transactions,
    get_cashback_rate,
)

from .balance import (
    BalanceChange,
    calculate_cashback,
    compute_balance_change,
)

from .exceptions import (
    LedgerServiceError,
    InvalidAmountError,
    InvalidTransitionError,
    InsufficientBalanceError,
    TransactionNotFoundError,
    GeofenceRejectedError,
)

__all__ = [
    # Ledger
    'create_purchase',
    'create_redemption',
    'approve_transaction',
    'reject_transaction',
    'get_transaction',
    'get_pending_transactions',
    'get_cashback_rate',
    # Balance arithmetic
    'BalanceChange',
    'calculate_cashback',
    'compute_balance_change',
    # Exceptions
    'LedgerServiceError',
    'InvalidAmountError',
    'InvalidTransitionError',
    'InsufficientBalanceError',
    'TransactionNotFoundError',
    'GeofenceRejectedError',
]
