"""Customer lookup and registration."""

import logging
import re
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError

from .exceptions import InvalidPhoneError, CustomerNotFoundError
from .models import Customer

logger = logging.getLogger(__name__)

MIN_PHONE_DIGITS = 10
MAX_PHONE_DIGITS = 13


def normalize_phone(phone: str) -> str:
    """
    Strip formatting from a phone number.

    Args:
        phone: Raw phone input, e.g. '(85) 99999-1234' or '+55 85 99999 1234'

    Returns:
        Digits only, e.g. '85999991234'

    Raises:
        InvalidPhoneError: If the number has too few or too many digits
    """
    digits = re.sub(r'\D', '', phone or '')
    if not MIN_PHONE_DIGITS <= len(digits) <= MAX_PHONE_DIGITS:
        raise InvalidPhoneError(
            f"Phone number must have between {MIN_PHONE_DIGITS} and {MAX_PHONE_DIGITS} digits"
        )
    return digits


def identify_customer(*, phone: str, name: Optional[str] = None) -> tuple[Customer, bool]:
    """
    Return the customer for a phone number, creating it on first interaction.

    A name is only stored when the customer has none yet; an existing name
    is never overwritten by this lookup.

    Args:
        phone: Customer phone number (any formatting)
        name: Optional display name

    Returns:
        Tuple of (Customer, created)

    Raises:
        InvalidPhoneError: If phone is invalid
    """
    digits = normalize_phone(phone)
    name = (name or '').strip()

    try:
        with transaction.atomic():
            customer, created = Customer.objects.get_or_create(
                phone=digits,
                defaults={'name': name},
            )
    except IntegrityError:
        # Lost a creation race with another request for the same phone
        customer, created = Customer.objects.get(phone=digits), False

    if created:
        logger.info("Registered customer %s", customer.id)
    elif name and not customer.name:
        customer.name = name
        customer.save(update_fields=['name', 'updated_at'])

    return customer, created


def get_customer(*, customer_id: UUID) -> Customer:
    """
    Get customer by ID.

    Raises:
        CustomerNotFoundError: If customer doesn't exist
    """
    try:
        return Customer.objects.get(id=customer_id)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError(f"Customer {customer_id} not found")
