"""
Customer activity segmentation.

A customer's tier depends only on how many whole days have passed since
their most recent approved purchase, measured at query time::

    days <= ACTIVE_DAYS (3)      -> active
    days <= AT_RISK_DAYS (7)     -> at_risk
    otherwise, or never bought   -> inactive

Both bounds are inclusive. Tiers are recomputed on every request and never
stored, because the answer changes as "now" moves.
"""

from datetime import datetime, timedelta
from typing import Optional, Sequence

from django.conf import settings
from django.db import models

ONE_DAY = timedelta(days=1)


class ActivityStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    AT_RISK = 'at_risk', 'At risk'
    INACTIVE = 'inactive', 'Inactive'


def get_activity_thresholds() -> tuple[tuple[int, str], ...]:
    """Ordered (max_days, status) pairs from ``LOYALTY`` settings."""
    loyalty = settings.LOYALTY
    return (
        (loyalty.get('ACTIVE_DAYS', 3), ActivityStatus.ACTIVE),
        (loyalty.get('AT_RISK_DAYS', 7), ActivityStatus.AT_RISK),
    )


def days_since(moment: Optional[datetime], now: datetime) -> Optional[int]:
    """Whole days elapsed from ``moment`` to ``now`` (floor), or None."""
    if moment is None:
        return None
    return (now - moment) // ONE_DAY


def classify_activity(
    last_purchase_at: Optional[datetime],
    now: datetime,
    thresholds: Optional[Sequence[tuple[int, str]]] = None,
) -> str:
    """
    Classify a customer by recency of their last approved purchase.

    Args:
        last_purchase_at: Most recent approved purchase, or None if never.
        now: Time of the query.
        thresholds: Ordered (max_days, status) pairs; defaults to settings.

    Returns:
        ActivityStatus value.
    """
    days = days_since(last_purchase_at, now)
    if days is None:
        return ActivityStatus.INACTIVE

    for max_days, activity_status in thresholds or get_activity_thresholds():
        if days <= max_days:
            return activity_status
    return ActivityStatus.INACTIVE
