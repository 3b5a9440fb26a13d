"""
Payment DTOs for the application layer.
"""

from typing import Optional

from skilllink.domain.models.payment import Payment
from .base_dto import RequestDTO, ResponseDTO, BaseDTO


class DepositRequestDTO(RequestDTO):
    amount: Optional[float] = None


class PayWorkerRequestDTO(RequestDTO):
    amount: Optional[float] = None
    event_id: Optional[int] = None


class WithdrawalRequestDTO(RequestDTO):
    amount: Optional[float] = None
    note: Optional[str] = None


class PaymentResponseDTO(ResponseDTO):
    type: str
    status: str
    amount: float
    currency: str
    worker_id: Optional[int] = None
    employer_id: Optional[int] = None
    project_id: Optional[int] = None
    note: Optional[str] = None

    @classmethod
    def from_domain(cls, payment: Payment) -> "PaymentResponseDTO":
        return cls(
            id=payment.id,
            type=payment.type.value,
            status=payment.status.value,
            amount=float(payment.amount),
            currency=payment.currency,
            worker_id=payment.worker_id,
            employer_id=payment.employer_id,
            project_id=payment.project_id,
            note=payment.note,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )


class EmployerOverviewDTO(BaseDTO):
    account_balance: float
    total_spent: float
    pending_payments: float


class WorkerOverviewDTO(BaseDTO):
    available_balance: float
    total_earnings: float
    pending_withdrawals: float
    total_withdrawn: float
