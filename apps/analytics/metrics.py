"""
Metrics Module
===============

Pure computations behind the loyalty dashboard. Nothing here touches the
database: inputs are plain sequences of transactions and customers (model
instances or any objects with the same attributes), so every function is
deterministic for a given ``now`` and can be tested in isolation.

Transactions need: ``customer_id``, ``type``, ``status``, ``amount``,
``cashback_amount`` and ``created_at``. Customers need ``id``, ``name``,
``phone`` and ``balance``.

Only ``approved`` transactions ever count.

Example:
    Building a dashboard by hand::

        from apps.analytics.metrics import (
            compute_all_customer_metrics,
            compute_period_metrics,
        )

        customer_metrics = compute_all_customer_metrics(customers, history, now)
        period = compute_period_metrics(
            period_transactions, customers, customer_metrics, start, end
        )
        print(f"Revenue: {period.total_revenue}, rate {period.redemption_rate}%")
"""

from collections import defaultdict
from dataclasses import dataclass, asdict
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence

from apps.transactions.models import TransactionType, TransactionStatus
from .segmentation import ActivityStatus, classify_activity, days_since

ZERO = Decimal('0.00')
CENT = Decimal('0.01')
HUNDRED = Decimal('100')

# Sort floor for customers who never purchased
EPOCH = datetime(1970, 1, 1, tzinfo=dt_timezone.utc)


@dataclass(frozen=True)
class CustomerMetrics:
    """Per-customer view over approved purchase history. Never persisted."""

    customer_id: object
    name: str
    phone: str
    balance: Decimal
    total_purchases: int
    total_spent: Decimal
    cashback_accrued: Decimal
    last_purchase_at: Optional[datetime]
    days_since_last_purchase: Optional[int]
    status: str

    @property
    def average_ticket(self) -> Decimal:
        if not self.total_purchases:
            return ZERO
        return _cents(self.total_spent / self.total_purchases)

    def as_dict(self) -> dict:
        data = asdict(self)
        data['average_ticket'] = self.average_ticket
        return data


@dataclass(frozen=True)
class PeriodMetrics:
    """Aggregate business metrics for a date interval. Never persisted."""

    period_start: datetime
    period_end: datetime
    total_revenue: Decimal
    total_cashback: Decimal
    total_redemptions: Decimal
    total_transactions: int
    average_ticket: Decimal
    redemption_rate: Decimal
    total_customers: int
    active_customers: int
    at_risk_customers: int
    inactive_customers: int

    def as_dict(self) -> dict:
        return asdict(self)


def _cents(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def _is_approved(tx, transaction_type: str) -> bool:
    return tx.type == transaction_type and tx.status == TransactionStatus.APPROVED


def compute_customer_metrics(customer, transactions: Iterable, now: datetime) -> CustomerMetrics:
    """
    Compute one customer's metrics from their transaction history.

    Transactions belonging to other customers, non-purchases and anything
    not approved are ignored, so the full transaction list can be passed.

    Args:
        customer: Customer (needs id, name, phone, balance).
        transactions: Transactions to consider.
        now: Time of the query, used for segmentation.

    Returns:
        CustomerMetrics for the customer.
    """
    purchases = [
        tx for tx in transactions
        if tx.customer_id == customer.id and _is_approved(tx, TransactionType.PURCHASE)
    ]

    last_purchase_at = max((tx.created_at for tx in purchases), default=None)

    return CustomerMetrics(
        customer_id=customer.id,
        name=customer.name or '',
        phone=customer.phone,
        balance=customer.balance,
        total_purchases=len(purchases),
        total_spent=sum((tx.amount for tx in purchases), ZERO),
        cashback_accrued=sum((tx.cashback_amount for tx in purchases), ZERO),
        last_purchase_at=last_purchase_at,
        days_since_last_purchase=days_since(last_purchase_at, now),
        status=classify_activity(last_purchase_at, now),
    )


def compute_all_customer_metrics(
    customers: Iterable,
    transactions: Iterable,
    now: datetime,
) -> list[CustomerMetrics]:
    """Metrics for every customer, in customer order. Groups the history once."""
    by_customer = defaultdict(list)
    for tx in transactions:
        by_customer[tx.customer_id].append(tx)

    return [
        compute_customer_metrics(customer, by_customer.get(customer.id, ()), now)
        for customer in customers
    ]


def compute_period_metrics(
    transactions: Iterable,
    customers: Sequence,
    customer_metrics: Iterable[CustomerMetrics],
    period_start: datetime,
    period_end: datetime,
) -> PeriodMetrics:
    """
    Fold a period's transactions and the customer tiers into PeriodMetrics.

    Args:
        transactions: Transactions created inside [period_start, period_end].
        customers: The full customer set.
        customer_metrics: Metrics for the full customer set (full history,
            not period-scoped).
        period_start: Inclusive start of the interval.
        period_end: Inclusive end of the interval.

    Returns:
        PeriodMetrics. average_ticket and redemption_rate are 0 when their
        denominators are 0.
    """
    transactions = list(transactions)
    purchases = [tx for tx in transactions if _is_approved(tx, TransactionType.PURCHASE)]
    redemptions = [tx for tx in transactions if _is_approved(tx, TransactionType.REDEMPTION)]

    total_revenue = sum((tx.amount for tx in purchases), ZERO)
    total_cashback = sum((tx.cashback_amount for tx in purchases), ZERO)
    total_redemptions = sum((tx.amount for tx in redemptions), ZERO)

    average_ticket = _cents(total_revenue / len(purchases)) if purchases else ZERO
    redemption_rate = (
        _cents(total_redemptions / total_cashback * HUNDRED) if total_cashback else ZERO
    )

    tiers = defaultdict(int)
    for metrics in customer_metrics:
        tiers[metrics.status] += 1

    return PeriodMetrics(
        period_start=period_start,
        period_end=period_end,
        total_revenue=total_revenue,
        total_cashback=total_cashback,
        total_redemptions=total_redemptions,
        total_transactions=len(purchases),
        average_ticket=average_ticket,
        redemption_rate=redemption_rate,
        total_customers=len(customers),
        active_customers=tiers[ActivityStatus.ACTIVE],
        at_risk_customers=tiers[ActivityStatus.AT_RISK],
        inactive_customers=tiers[ActivityStatus.INACTIVE],
    )


def sort_by_total_spent(customer_metrics: Iterable[CustomerMetrics]) -> list[CustomerMetrics]:
    """Profile view: biggest spenders first."""
    return sorted(
        customer_metrics,
        key=lambda m: (-m.total_spent, m.name.lower(), str(m.customer_id)),
    )


def sort_by_recent_activity(customer_metrics: Iterable[CustomerMetrics]) -> list[CustomerMetrics]:
    """Activity view: most recent purchase first, never-purchased last."""
    ordered = sorted(customer_metrics, key=lambda m: (m.name.lower(), str(m.customer_id)))
    return sorted(ordered, key=lambda m: m.last_purchase_at or EPOCH, reverse=True)
