"""
Transaction ledger service - creation and review of purchases and redemptions.

State machine::

    pending ──approve──▶ approved   (terminal)
       │
       └────reject────▶ rejected   (terminal)

The customer balance changes only when a transaction becomes ``approved``:
purchases credit their ``cashback_amount``, redemptions debit their
``amount``. Approval runs in one database transaction that

1. locks the transaction and customer rows (``select_for_update``),
2. computes the new balance with the pure ``compute_balance_change``,
3. writes it with a guarded ``UPDATE`` (``balance >= amount`` for debits),
4. flips the status with a guarded ``UPDATE`` (``status = 'pending'``).

Step 3 keeps the read-check-write indivisible even on backends that ignore
row locks: of two concurrent redemptions that together overdraw the balance,
exactly one update matches and the other fails with
``InsufficientBalanceError``.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.customers.models import Customer
from apps.customers.services import get_customer
from apps.stores.exceptions import GeofenceError
from apps.stores.geofence import validate_location

from ..models import Transaction, TransactionType, TransactionStatus
from .balance import calculate_cashback, compute_balance_change
from .exceptions import (
    InvalidAmountError,
    InvalidTransitionError,
    InsufficientBalanceError,
    TransactionNotFoundError,
    GeofenceRejectedError,
)

logger = logging.getLogger(__name__)


def get_cashback_rate() -> Decimal:
    """Configured cashback rate (``LOYALTY['CASHBACK_RATE']``)."""
    return Decimal(str(settings.LOYALTY.get('CASHBACK_RATE', '0.05')))


def _validate_amount(amount) -> Decimal:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError("Amount must be a number")

    if not value.is_finite() or value <= 0:
        raise InvalidAmountError("Amount must be greater than zero")
    return value


def get_transaction(*, transaction_id: UUID) -> Transaction:
    """
    Get transaction by ID.

    Raises:
        TransactionNotFoundError: If transaction doesn't exist
    """
    try:
        return Transaction.objects.select_related('customer').get(id=transaction_id)
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError(f"Transaction {transaction_id} not found")


def create_purchase(
    *,
    customer_id: UUID,
    amount,
    latitude,
    longitude,
    cashback_rate: Optional[Decimal] = None,
    stores=None,
) -> Transaction:
    """
    Register a purchase made at a store, pending approval.

    This operation:
    1. Validates the amount (> 0)
    2. Validates the reported location against the store geofences
    3. Computes cashback_amount = amount x cashback rate
    4. Creates the transaction as ``pending`` (balance untouched)

    Args:
        customer_id: UUID of the customer
        amount: Purchase amount
        latitude: Reported device latitude
        longitude: Reported device longitude
        cashback_rate: Override for the configured rate
        stores: Override for the configured store list

    Returns:
        Created Transaction instance

    Raises:
        InvalidAmountError: If amount is not positive
        CustomerNotFoundError: If customer doesn't exist
        GeofenceRejectedError: If location is invalid or outside every store
    """
    amount = _validate_amount(amount)
    customer = get_customer(customer_id=customer_id)

    try:
        match = validate_location(latitude, longitude, stores=stores)
    except GeofenceError as e:
        logger.warning(
            "Purchase refused for customer %s: %s (%s)", customer.id, e.code, e
        )
        raise GeofenceRejectedError(e) from e

    rate = cashback_rate if cashback_rate is not None else get_cashback_rate()

    purchase = Transaction.objects.create(
        customer=customer,
        type=TransactionType.PURCHASE,
        amount=amount,
        cashback_amount=calculate_cashback(amount, rate),
        status=TransactionStatus.PENDING,
        store_id=match.store_id,
        latitude=float(latitude),
        longitude=float(longitude),
        distance_meters=round(match.distance_meters, 2),
    )

    logger.info(
        "Purchase %s created for customer %s: amount=%s cashback=%s store=%s",
        purchase.id, customer.id, purchase.amount, purchase.cashback_amount, match.store_id,
    )
    return purchase


def create_redemption(*, customer_id: UUID, amount) -> Transaction:
    """
    Request a redemption of accumulated balance, pending approval.

    The balance is checked here as a courtesy to the customer and checked
    again at approval time, where it is authoritative.

    Args:
        customer_id: UUID of the customer
        amount: Amount to redeem

    Returns:
        Created Transaction instance

    Raises:
        InvalidAmountError: If amount is not positive
        CustomerNotFoundError: If customer doesn't exist
        InsufficientBalanceError: If amount exceeds the current balance
    """
    amount = _validate_amount(amount)
    customer = get_customer(customer_id=customer_id)

    if amount > customer.balance:
        logger.warning(
            "Redemption refused for customer %s: requested %s, balance %s",
            customer.id, amount, customer.balance,
        )
        raise InsufficientBalanceError(balance=customer.balance, requested=amount)

    redemption = Transaction.objects.create(
        customer=customer,
        type=TransactionType.REDEMPTION,
        amount=amount,
        status=TransactionStatus.PENDING,
    )

    logger.info(
        "Redemption %s created for customer %s: amount=%s",
        redemption.id, customer.id, redemption.amount,
    )
    return redemption


def _lock_pending_transaction(transaction_id: UUID) -> Transaction:
    try:
        tx = Transaction.objects.select_for_update().get(id=transaction_id)
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError(f"Transaction {transaction_id} not found")

    if tx.status != TransactionStatus.PENDING:
        logger.warning(
            "Refused transition for transaction %s: already %s", tx.id, tx.status
        )
        raise InvalidTransitionError(current_status=tx.status)
    return tx


def _set_status(tx: Transaction, new_status: str, reviewed_by) -> None:
    reviewed_at = timezone.now()
    updated = Transaction.objects.filter(
        id=tx.id,
        status=TransactionStatus.PENDING,
    ).update(
        status=new_status,
        reviewed_by=reviewed_by,
        reviewed_at=reviewed_at,
        updated_at=reviewed_at,
    )
    if updated != 1:
        # Another reviewer finished it between our read and write
        current = Transaction.objects.values_list('status', flat=True).get(id=tx.id)
        raise InvalidTransitionError(current_status=current)

    tx.status = new_status
    tx.reviewed_by = reviewed_by
    tx.reviewed_at = reviewed_at
    tx.updated_at = reviewed_at


def _apply_to_balance(tx: Transaction, customer: Customer) -> Decimal:
    """Write the balance change for ``tx``; returns the stored balance."""
    if tx.type == TransactionType.PURCHASE:
        amount = tx.cashback_amount
    else:
        amount = tx.amount

    change = compute_balance_change(customer.balance, amount, tx.type)

    rows = Customer.objects.filter(id=customer.id)
    if tx.type == TransactionType.REDEMPTION:
        rows = rows.filter(balance__gte=amount)

    updated = rows.update(
        balance=F('balance') + change.delta,
        updated_at=timezone.now(),
    )
    customer.refresh_from_db(fields=['balance', 'updated_at'])

    if updated != 1:
        raise InsufficientBalanceError(balance=customer.balance, requested=amount)
    return customer.balance


def approve_transaction(*, transaction_id: UUID, reviewed_by=None) -> Transaction:
    """
    Approve a pending transaction and apply it to the customer balance.

    Purchases credit their cashback_amount. Redemptions re-check the
    balance under lock and debit their amount.

    Args:
        transaction_id: UUID of the transaction
        reviewed_by: User approving it (optional)

    Returns:
        Updated Transaction instance (customer balance refreshed)

    Raises:
        TransactionNotFoundError: If transaction doesn't exist
        InvalidTransitionError: If transaction is already approved or rejected
        InsufficientBalanceError: If a redemption would overdraw the balance;
            the transaction stays pending for manual resolution
    """
    try:
        with transaction.atomic():
            tx = _lock_pending_transaction(transaction_id)
            customer = Customer.objects.select_for_update().get(id=tx.customer_id)

            balance = _apply_to_balance(tx, customer)
            _set_status(tx, TransactionStatus.APPROVED, reviewed_by)
            tx.customer = customer
    except InsufficientBalanceError as e:
        logger.warning(
            "Approval refused for transaction %s: requested %s, balance %s",
            transaction_id, e.requested, e.balance,
        )
        raise

    logger.info(
        "Transaction %s approved (%s, customer %s): balance now %s",
        tx.id, tx.type, customer.id, balance,
    )
    return tx


@transaction.atomic
def reject_transaction(*, transaction_id: UUID, reviewed_by=None) -> Transaction:
    """
    Reject a pending transaction. The balance is never touched.

    Raises:
        TransactionNotFoundError: If transaction doesn't exist
        InvalidTransitionError: If transaction is already approved or rejected
    """
    tx = _lock_pending_transaction(transaction_id)
    _set_status(tx, TransactionStatus.REJECTED, reviewed_by)

    logger.info("Transaction %s rejected (%s, customer %s)", tx.id, tx.type, tx.customer_id)
    return tx


def get_pending_transactions():
    """Approval queue, oldest first."""
    return (
        Transaction.objects
        .filter(status=TransactionStatus.PENDING)
        .select_related('customer')
        .order_by('created_at')
    )
