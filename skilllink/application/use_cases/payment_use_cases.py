"""
Payment use cases.
Every ledger insert moves the matching wallet balance in the same commit;
a stale wallet surfaces as a concurrency conflict instead of an overdraft.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from skilllink.config import settings
from skilllink.application.use_cases.base_use_case import CommandUseCase, PaginatedQueryUseCase, QueryUseCase
from skilllink.application.dto.base_dto import PaginationDTO
from skilllink.application.dto.payment_dto import (
    DepositRequestDTO,
    PayWorkerRequestDTO,
    WithdrawalRequestDTO,
    PaymentResponseDTO,
    EmployerOverviewDTO,
    WorkerOverviewDTO,
)
from skilllink.domain.models.base import AuthorizationError, EntityNotFoundError, ValidationError
from skilllink.domain.models.payment import Payment, PaymentType, PaymentStatus, positive_amount


logger = logging.getLogger(__name__)


HISTORY_PAGE_SIZE = 10


class EmployerPaymentsOverviewUseCase(QueryUseCase):
    """`{accountBalance, totalSpent, pendingPayments}` for an employer."""

    async def execute(self, user_id: int) -> EmployerOverviewDTO:
        wallet = self.uow.payments.get_wallet(user_id)
        total_spent = self.uow.payments.total(
            employer_id=user_id, payment_type=PaymentType.EARNING, status=PaymentStatus.COMPLETED
        )
        pending = sum(
            (event.amount for event in self.uow.projects.unresolved_payment_requests(user_id)),
            Decimal("0"),
        )
        return EmployerOverviewDTO(
            account_balance=float(wallet.available),
            total_spent=float(total_spent),
            pending_payments=float(pending),
        )


class WorkerPaymentsOverviewUseCase(QueryUseCase):

    async def execute(self, user_id: int) -> WorkerOverviewDTO:
        payments = self.uow.payments
        wallet = payments.get_wallet(user_id)
        return WorkerOverviewDTO(
            available_balance=float(wallet.available),
            total_earnings=float(payments.total(worker_id=user_id, payment_type=PaymentType.EARNING)),
            pending_withdrawals=float(payments.total(
                worker_id=user_id, payment_type=PaymentType.WITHDRAWAL, status=PaymentStatus.PENDING
            )),
            total_withdrawn=float(payments.total(
                worker_id=user_id, payment_type=PaymentType.WITHDRAWAL, status=PaymentStatus.COMPLETED
            )),
        )


class _PaymentsHistoryUseCase(PaginatedQueryUseCase):
    """Ledger page with project titles and counterpart names resolved."""

    default_page_size = HISTORY_PAGE_SIZE

    def _project_titles(self, payments: List[Payment]) -> Dict[int, str]:
        titles = {}
        for project_id in {p.project_id for p in payments if p.project_id is not None}:
            project = self.uow.projects.get_by_id(project_id)
            if project:
                titles[project_id] = project.title
        return titles

    def _party_names(self, user_ids) -> Dict[int, str]:
        return {uid: user.display_name for uid, user in self._users_by_id(user_ids).items()}


class EmployerPaymentsHistoryUseCase(_PaymentsHistoryUseCase):
    """Earnings the employer has sent, newest first."""

    async def execute(self, user_id: int, page: Optional[int] = None,
                      limit: Optional[int] = None) -> Tuple[List[Dict[str, Any]], PaginationDTO]:
        page, limit = self._page(page, limit)
        payments, total = self.uow.payments.list(
            page, limit, employer_id=user_id, payment_type=PaymentType.EARNING
        )
        titles = self._project_titles(payments)
        workers = self._party_names(p.worker_id for p in payments)
        history = [
            {
                "id": p.id,
                "date": p.created_at,
                "worker": workers.get(p.worker_id, "Worker"),
                "project": titles.get(p.project_id) or p.note or "-",
                "amount": float(p.amount),
                "status": p.status.value,
            }
            for p in payments
        ]
        return history, PaginationDTO(page=page, limit=limit, total=total)


class WorkerPaymentsHistoryUseCase(_PaymentsHistoryUseCase):
    """Earnings and withdrawals of a worker, newest first."""

    async def execute(self, user_id: int, page: Optional[int] = None,
                      limit: Optional[int] = None) -> Tuple[List[Dict[str, Any]], PaginationDTO]:
        page, limit = self._page(page, limit)
        payments, total = self.uow.payments.list(page, limit, worker_id=user_id)
        titles = self._project_titles(payments)
        employers = self._party_names(p.employer_id for p in payments)
        history = [
            {
                "id": p.id,
                "date": p.created_at,
                "type": p.type.value,
                "employer": employers.get(p.employer_id) if p.employer_id else None,
                "project": titles.get(p.project_id) or p.note or "-",
                "amount": float(p.amount),
                "status": p.status.value,
            }
            for p in payments
        ]
        return history, PaginationDTO(page=page, limit=limit, total=total)


class PayWorkerUseCase(CommandUseCase):
    """
    Employer releases funds to the project assignee.
    When `eventId` names an open payment request on the project, the
    request is closed with a `paid` resolution linking the payment.
    """

    async def execute(self, user_id: int, project_id: int, request: PayWorkerRequestDTO) -> PaymentResponseDTO:
        project = self.uow.projects.get_by_id(project_id)
        if not project:
            raise EntityNotFoundError("Project")
        if not project.is_creator(user_id):
            raise AuthorizationError("Only project creator can pay")
        if project.assigned_to is None:
            raise ValidationError("No worker assigned")
        if not request.amount or request.amount <= 0:
            raise ValidationError("Amount is required", "amount")
        amount = positive_amount(request.amount)

        employer_wallet = self.uow.payments.get_wallet(user_id)
        employer_wallet.debit(amount, "Insufficient employer balance")
        worker_wallet = self.uow.payments.get_wallet(project.assigned_to)
        worker_wallet.credit(amount)

        payment = self.uow.payments.add(Payment.earning(
            user_id, project.assigned_to, project.id, amount, project.currency
        ))
        self.uow.payments.save_wallet(employer_wallet)
        self.uow.payments.save_wallet(worker_wallet)

        if request.event_id:
            payment_request = self.uow.projects.get_event(request.event_id)
            if payment_request is not None:
                resolution = project.resolve_payment_request(payment_request, user_id, payment.id, amount)
                if resolution is not None:
                    self.uow.projects.add_resolution(resolution)

        self.collect(payment.paid_event(project.title))
        await self._commit()

        logger.info(f"Employer {user_id} paid {amount} to worker {project.assigned_to} on project {project.id}")
        return PaymentResponseDTO.from_domain(payment)


class DepositUseCase(CommandUseCase):

    async def execute(self, user_id: int, request: DepositRequestDTO) -> PaymentResponseDTO:
        employer = self._load_user(user_id)
        employer.require_employer("Only employers can deposit funds")
        if not request.amount or request.amount <= 0:
            raise ValidationError("Amount is required", "amount")
        amount = positive_amount(request.amount)

        wallet = self.uow.payments.get_wallet(user_id)
        wallet.credit(amount)
        deposit = self.uow.payments.add(Payment.deposit(user_id, amount, settings.default_currency))
        self.uow.payments.save_wallet(wallet)
        await self._commit()

        logger.info(f"Employer {user_id} deposited {amount}")
        return PaymentResponseDTO.from_domain(deposit)


class RequestWithdrawalUseCase(CommandUseCase):
    """Pending withdrawal; the amount leaves the worker's balance right away."""

    async def execute(self, user_id: int, request: WithdrawalRequestDTO) -> PaymentResponseDTO:
        worker = self._load_user(user_id)
        worker.require_worker("Only skilled workers can request withdrawals")
        amount = positive_amount(request.amount)

        wallet = self.uow.payments.get_wallet(user_id)
        wallet.debit(amount, "Insufficient balance")
        withdrawal = self.uow.payments.add(
            Payment.withdrawal(user_id, amount, request.note, settings.default_currency)
        )
        self.uow.payments.save_wallet(wallet)
        self.collect(withdrawal.withdrawal_event())
        await self._commit()

        logger.info(f"Worker {user_id} requested withdrawal of {amount}")
        return PaymentResponseDTO.from_domain(withdrawal)
