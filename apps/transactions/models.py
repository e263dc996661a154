from django.conf import settings
from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid


class TransactionType(models.TextChoices):
    PURCHASE = 'purchase', 'Purchase'
    REDEMPTION = 'redemption', 'Redemption'


class TransactionStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class Transaction(models.Model):
    """Purchase (earns cashback) or redemption (spends balance) awaiting or past review."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    customer = models.ForeignKey(
        'customers.Customer',
        on_delete=models.PROTECT,
        related_name='transactions'
    )

    type = models.CharField(max_length=20, choices=TransactionType.choices)

    # Financial details
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    # Purchases only; fixed at creation from the configured rate
    cashback_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )

    status = models.CharField(
        max_length=20,
        choices=TransactionStatus.choices,
        default=TransactionStatus.PENDING
    )

    # Location reported at creation (purchases only)
    store_id = models.CharField(max_length=50, blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    distance_meters = models.FloatField(null=True, blank=True)

    # Review
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_transactions'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'transactions'
        indexes = [
            models.Index(fields=['customer', 'type', 'status'], name='tx_customer_type_status_idx'),
            models.Index(fields=['status', 'created_at'], name='tx_status_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.get_type_display()} {self.amount} ({self.status})"
