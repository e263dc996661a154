from decimal import Decimal

import pytest

from apps.transactions.models import TransactionType
from apps.transactions.services.balance import calculate_cashback, compute_balance_change
from apps.transactions.services.exceptions import InsufficientBalanceError


class TestCalculateCashback:

    @pytest.mark.parametrize('amount, expected', [
        (Decimal('100.00'), Decimal('5.00')),
        (Decimal('19.90'), Decimal('1.00')),   # 0.995 rounds half up
        (Decimal('0.01'), Decimal('0.00')),
        (Decimal('33.33'), Decimal('1.67')),
    ])
    def test_five_percent(self, amount, expected):
        assert calculate_cashback(amount, Decimal('0.05')) == expected


class TestComputeBalanceChange:

    def test_purchase_credits(self):
        change = compute_balance_change(Decimal('2.00'), Decimal('5.00'), TransactionType.PURCHASE)

        assert change.new_balance == Decimal('7.00')
        assert change.delta == Decimal('5.00')

    def test_redemption_debits(self):
        change = compute_balance_change(Decimal('7.00'), Decimal('5.00'), TransactionType.REDEMPTION)

        assert change.new_balance == Decimal('2.00')
        assert change.delta == Decimal('-5.00')

    def test_redemption_of_whole_balance(self):
        change = compute_balance_change(Decimal('5.00'), Decimal('5.00'), TransactionType.REDEMPTION)
        assert change.new_balance == Decimal('0.00')

    def test_redemption_over_balance(self):
        with pytest.raises(InsufficientBalanceError) as exc_info:
            compute_balance_change(Decimal('4.99'), Decimal('5.00'), TransactionType.REDEMPTION)

        assert exc_info.value.code == 'insufficient_balance'
        assert exc_info.value.balance == Decimal('4.99')
        assert exc_info.value.requested == Decimal('5.00')

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            compute_balance_change(Decimal('1.00'), Decimal('1.00'), 'refund')
