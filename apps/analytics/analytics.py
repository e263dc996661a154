"""
Analytics Module
=================

Database-backed entry points for the loyalty dashboard. Each method loads
the customers and approved transactions it needs, then hands them to the
pure functions in :mod:`apps.analytics.metrics`.

Classes:
    LoyaltyAnalytics: Static methods for dashboard queries.

Example:
    Metrics for the current month::

        from apps.analytics.analytics import LoyaltyAnalytics
        from apps.analytics.periods import interval_bounds

        start, end = interval_bounds(date(2025, 1, 1), date(2025, 1, 31))
        metrics = LoyaltyAnalytics.period_metrics(start, end)
        print(f"Revenue: {metrics.total_revenue}")

Note:
    This module is read-only. Loading is all-or-nothing: any database
    failure surfaces as DataUnavailableError before a single metric is
    computed.
"""

import logging

from django.db import DatabaseError
from django.utils import timezone

from apps.customers.models import Customer
from apps.transactions.models import Transaction, TransactionStatus, TransactionType
from .exceptions import DataUnavailableError
from .metrics import (
    compute_all_customer_metrics,
    compute_period_metrics,
    sort_by_recent_activity,
    sort_by_total_spent,
)

logger = logging.getLogger(__name__)


class LoyaltyAnalytics:
    """
    Queries behind the manager dashboard.

    Methods:
        period_metrics: PeriodMetrics for an interval.
        customer_profiles: Customers by total spent, descending.
        customer_activity: Customers by most recent purchase.
        dashboard: All three at once, sharing one load.
    """

    @staticmethod
    def _load_customers():
        return list(Customer.objects.order_by('created_at'))

    @staticmethod
    def _load_purchase_history():
        return list(
            Transaction.objects.filter(
                type=TransactionType.PURCHASE,
                status=TransactionStatus.APPROVED,
            ).only('id', 'customer_id', 'type', 'status', 'amount', 'cashback_amount', 'created_at')
        )

    @staticmethod
    def _load_period_transactions(start, end):
        return list(
            Transaction.objects.filter(
                status=TransactionStatus.APPROVED,
                created_at__gte=start,
                created_at__lte=end,
            )
        )

    @staticmethod
    def _load(start=None, end=None):
        """Fetch everything up front; None for the period part when unbounded."""
        try:
            customers = LoyaltyAnalytics._load_customers()
            history = LoyaltyAnalytics._load_purchase_history()
            period_transactions = (
                LoyaltyAnalytics._load_period_transactions(start, end)
                if start is not None else None
            )
        except DatabaseError as e:
            logger.exception("Failed to load analytics data")
            raise DataUnavailableError() from e

        return customers, history, period_transactions

    @staticmethod
    def period_metrics(start, end, now=None):
        """
        Aggregate metrics for [start, end].

        Revenue, cashback, redemptions and ticket figures come from
        transactions inside the interval; tier counts come from each
        customer's full history as of ``now``.

        Raises:
            DataUnavailableError: The data could not be loaded.
        """
        now = now or timezone.now()
        customers, history, period_transactions = LoyaltyAnalytics._load(start, end)
        customer_metrics = compute_all_customer_metrics(customers, history, now)
        return compute_period_metrics(period_transactions, customers, customer_metrics, start, end)

    @staticmethod
    def customer_profiles(now=None):
        """Per-customer metrics sorted by total spent, descending."""
        now = now or timezone.now()
        customers, history, _ = LoyaltyAnalytics._load()
        return sort_by_total_spent(compute_all_customer_metrics(customers, history, now))

    @staticmethod
    def customer_activity(now=None):
        """Per-customer metrics, most recent purchase first, never-purchased last."""
        now = now or timezone.now()
        customers, history, _ = LoyaltyAnalytics._load()
        return sort_by_recent_activity(compute_all_customer_metrics(customers, history, now))

    @staticmethod
    def dashboard(start, end, now=None):
        """
        Everything the manager dashboard and report export need.

        Returns:
            dict with ``metrics`` (PeriodMetrics), ``profiles`` and
            ``activity`` (lists of CustomerMetrics).
        """
        now = now or timezone.now()
        customers, history, period_transactions = LoyaltyAnalytics._load(start, end)
        customer_metrics = compute_all_customer_metrics(customers, history, now)

        logger.debug(
            "Dashboard for %s..%s: %d customers, %d period transactions",
            start, end, len(customers), len(period_transactions),
        )

        return {
            'metrics': compute_period_metrics(
                period_transactions, customers, customer_metrics, start, end
            ),
            'profiles': sort_by_total_spent(customer_metrics),
            'activity': sort_by_recent_activity(customer_metrics),
        }
