"""
Payment domain model.
Payments form an append-only ledger; Wallet holds the materialized balance
that each ledger insert moves in the same transaction.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Any

from skilllink.domain.models.base import (
    AggregateRoot,
    BaseEntity,
    ValidationError,
    BusinessRuleViolation,
    to_decimal,
)
from skilllink.domain.events.payment_events import WorkerPaid, WithdrawalRequested


class PaymentType(str, Enum):
    EARNING = "earning"
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


def positive_amount(value: Any) -> Decimal:
    """Parse an amount that must be strictly greater than zero."""
    if value is None:
        raise ValidationError("amount is required", "amount")
    amount = to_decimal(value)
    if amount <= 0:
        raise ValidationError("amount must be greater than 0", "amount")
    return amount


@dataclass
class Payment(BaseEntity):
    """Ledger row."""

    type: PaymentType
    amount: Decimal
    status: PaymentStatus = PaymentStatus.COMPLETED
    worker_id: Optional[int] = None
    employer_id: Optional[int] = None
    project_id: Optional[int] = None
    currency: str = "NGN"
    note: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        self.type = PaymentType(self.type)
        self.status = PaymentStatus(self.status)
        self.amount = to_decimal(self.amount)
        self.validate()

    def validate(self) -> None:
        if self.amount <= 0:
            raise ValidationError("amount must be greater than 0", "amount")
        if self.type in (PaymentType.EARNING, PaymentType.WITHDRAWAL) and self.worker_id is None:
            raise ValidationError(f"worker is required for {self.type.value}", "worker_id")
        if self.type in (PaymentType.EARNING, PaymentType.DEPOSIT) and self.employer_id is None:
            raise ValidationError(f"employer is required for {self.type.value}", "employer_id")

    @classmethod
    def earning(cls, employer_id: int, worker_id: int, project_id: int, amount: Decimal,
                currency: str = "NGN") -> "Payment":
        return cls(
            type=PaymentType.EARNING,
            amount=amount,
            employer_id=employer_id,
            worker_id=worker_id,
            project_id=project_id,
            currency=currency,
            note="Employer payment",
        )

    @classmethod
    def deposit(cls, employer_id: int, amount: Decimal, currency: str = "NGN") -> "Payment":
        return cls(
            type=PaymentType.DEPOSIT,
            amount=amount,
            employer_id=employer_id,
            currency=currency,
            note="Wallet deposit",
        )

    @classmethod
    def withdrawal(cls, worker_id: int, amount: Decimal, note: Optional[str] = None,
                   currency: str = "NGN") -> "Payment":
        return cls(
            type=PaymentType.WITHDRAWAL,
            status=PaymentStatus.PENDING,
            amount=amount,
            worker_id=worker_id,
            currency=currency,
            note=note or "Withdrawal request",
        )

    def paid_event(self, project_title: str) -> WorkerPaid:
        return WorkerPaid(
            self.id, self.project_id, project_title, self.employer_id, self.worker_id, self.amount
        )

    def withdrawal_event(self) -> WithdrawalRequested:
        return WithdrawalRequested(self.id, self.worker_id, self.amount, self.note)


@dataclass
class Wallet(AggregateRoot):
    """
    Materialized balance for one user.
    `version` is checked on write; a stale wallet fails the commit.
    """

    user_id: int
    balance: Decimal = Decimal("0")

    def __post_init__(self):
        super().__post_init__()
        self.balance = to_decimal(self.balance, "balance")

    @property
    def available(self) -> Decimal:
        return max(self.balance, Decimal("0"))

    def credit(self, amount: Decimal) -> None:
        self.balance += amount
        self.mark_as_updated()

    def debit(self, amount: Decimal, message: str = "Insufficient balance") -> None:
        if amount > self.balance:
            raise BusinessRuleViolation(message)
        self.balance -= amount
        self.mark_as_updated()
