"""
Unit tests for the payment ledger and wallets.
"""

import pytest
from decimal import Decimal

from skilllink.domain.models.base import ValidationError, BusinessRuleViolation
from skilllink.domain.models.payment import (
    Payment,
    PaymentType,
    PaymentStatus,
    Wallet,
    positive_amount,
)


class TestPositiveAmount:
    """Test cases for amount parsing."""

    def test_parses_strings(self):
        assert positive_amount("12.50") == Decimal("12.50")

    def test_missing(self):
        with pytest.raises(ValidationError, match="amount is required"):
            positive_amount(None)

    def test_not_a_number(self):
        with pytest.raises(ValidationError, match="amount must be a number"):
            positive_amount("abc")

    @pytest.mark.parametrize("value", [0, -5, "-0.01"])
    def test_must_be_positive(self, value):
        with pytest.raises(ValidationError, match="amount must be greater than 0"):
            positive_amount(value)


class TestPayment:
    """Test cases for ledger rows."""

    def test_earning(self):
        payment = Payment.earning(1, 2, 10, Decimal("400"))

        assert payment.type == PaymentType.EARNING
        assert payment.status == PaymentStatus.COMPLETED
        assert payment.employer_id == 1
        assert payment.worker_id == 2
        assert payment.project_id == 10
        assert payment.currency == "NGN"

    def test_deposit(self):
        payment = Payment.deposit(1, Decimal("1000"))

        assert payment.type == PaymentType.DEPOSIT
        assert payment.worker_id is None
        assert payment.note == "Wallet deposit"

    def test_withdrawal_is_pending(self):
        """Withdrawals wait for payout."""
        payment = Payment.withdrawal(2, Decimal("50"))

        assert payment.status == PaymentStatus.PENDING
        assert payment.note == "Withdrawal request"

    def test_earning_requires_worker(self):
        with pytest.raises(ValidationError, match="worker is required for earning"):
            Payment(type="earning", amount=10, employer_id=1)

    def test_deposit_requires_employer(self):
        with pytest.raises(ValidationError, match="employer is required for deposit"):
            Payment(type="deposit", amount=10)

    def test_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            Payment.deposit(1, Decimal("0"))

    def test_paid_event_carries_parties(self):
        payment = Payment.earning(1, 2, 10, Decimal("400"))
        payment.id = 5

        event = payment.paid_event("Kitchen remodel")

        assert event.employer_id == 1
        assert event.worker_id == 2
        assert event.amount == Decimal("400")


class TestWallet:
    """Test cases for materialized balances."""

    def test_credit_then_debit(self):
        wallet = Wallet(user_id=1)

        wallet.credit(Decimal("1000"))
        wallet.debit(Decimal("400"))

        assert wallet.balance == Decimal("600")

    def test_debit_beyond_balance(self):
        """Overdrafts are rejected and the balance is untouched."""
        wallet = Wallet(user_id=1, balance=Decimal("100"))

        with pytest.raises(BusinessRuleViolation, match="Insufficient employer balance"):
            wallet.debit(Decimal("100.01"), "Insufficient employer balance")
        assert wallet.balance == Decimal("100")

    def test_debit_exact_balance(self):
        wallet = Wallet(user_id=1, balance=Decimal("100"))

        wallet.debit(Decimal("100"))

        assert wallet.balance == Decimal("0")

    def test_available_never_negative(self):
        wallet = Wallet(user_id=1, balance=Decimal("-5"))

        assert wallet.available == Decimal("0")
