"""
Payment ledger domain events.
"""

from decimal import Decimal
from typing import Optional

from skilllink.domain.events.base import DomainEvent


class WorkerPaid(DomainEvent):
    """Employer released funds to the project assignee."""

    def __init__(self, payment_id: int, project_id: int, project_title: str,
                 employer_id: int, worker_id: int, amount: Decimal):
        super().__init__()
        self.payment_id = payment_id
        self.project_id = project_id
        self.project_title = project_title
        self.employer_id = employer_id
        self.worker_id = worker_id
        self.amount = amount

    @property
    def event_name(self) -> str:
        return "payment.worker_paid"


class WithdrawalRequested(DomainEvent):

    def __init__(self, payment_id: int, worker_id: int, amount: Decimal, note: Optional[str] = None):
        super().__init__()
        self.payment_id = payment_id
        self.worker_id = worker_id
        self.amount = amount
        self.note = note

    @property
    def event_name(self) -> str:
        return "payment.withdrawal_requested"
