"""Pure balance arithmetic for the ledger. No database access here."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from ..models import TransactionType
from .exceptions import InsufficientBalanceError

CENT = Decimal('0.01')


@dataclass(frozen=True)
class BalanceChange:
    """Outcome of applying one approved transaction to a balance."""

    previous_balance: Decimal
    new_balance: Decimal

    @property
    def delta(self) -> Decimal:
        return self.new_balance - self.previous_balance


def calculate_cashback(amount: Decimal, rate: Decimal) -> Decimal:
    """
    Cashback earned on a purchase, rounded half-up to the cent.

    Example:
        >>> calculate_cashback(Decimal('100.00'), Decimal('0.05'))
        Decimal('5.00')
    """
    return (Decimal(amount) * Decimal(rate)).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_balance_change(
    current_balance: Decimal,
    amount: Decimal,
    transaction_type: str,
) -> BalanceChange:
    """
    Apply a transaction to a balance.

    Args:
        current_balance: Balance read under the customer lock.
        amount: Credit for a purchase (its cashback_amount) or debit for a
            redemption (its amount).
        transaction_type: TransactionType value.

    Returns:
        BalanceChange with the balance before and after.

    Raises:
        InsufficientBalanceError: If a redemption exceeds the balance.
        ValueError: If transaction_type is unknown.
    """
    if transaction_type == TransactionType.PURCHASE:
        return BalanceChange(current_balance, current_balance + amount)

    if transaction_type == TransactionType.REDEMPTION:
        if amount > current_balance:
            raise InsufficientBalanceError(balance=current_balance, requested=amount)
        return BalanceChange(current_balance, current_balance - amount)

    raise ValueError(f"Unknown transaction type: {transaction_type}")
