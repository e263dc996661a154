from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class Customer(models.Model):
    """Loyalty program member with a cashback balance."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200, blank=True)
    # Digits only, see services.normalize_phone
    phone = models.CharField(max_length=20, unique=True)

    # Cashback currency units; mutated only by approved transactions
    balance = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customers'
        indexes = [
            models.Index(fields=['phone'], name='customers_phone_idx'),
            models.Index(fields=['created_at'], name='customers_created_at_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(balance__gte=0),
                name='customer_balance_non_negative',
            ),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.get_display_name()} - {self.balance}"

    def get_display_name(self):
        """Return name or the phone number."""
        return self.name or self.phone
