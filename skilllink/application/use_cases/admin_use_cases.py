"""
Admin back-office use cases.
Read-only listings of users, jobs and payments with `{data, meta}` paging.
"""

from typing import List, Optional, Tuple

from skilllink.config import settings
from skilllink.application.use_cases.base_use_case import PaginatedQueryUseCase, QueryUseCase
from skilllink.application.dto.base_dto import PaginationDTO
from skilllink.application.dto.job_dto import JobResponseDTO
from skilllink.application.dto.payment_dto import PaymentResponseDTO
from skilllink.application.dto.user_dto import UserResponseDTO
from skilllink.domain.models.base import EntityNotFoundError, ValidationError
from skilllink.domain.models.payment import PaymentType
from skilllink.domain.models.user import AccountType


class _AdminListUseCase(PaginatedQueryUseCase):
    default_page_size = settings.admin_page_size


class AdminListUsersUseCase(_AdminListUseCase):

    async def execute(self, page: Optional[int] = None, limit: Optional[int] = None,
                      q: Optional[str] = None,
                      account_type: Optional[str] = None) -> Tuple[List[UserResponseDTO], PaginationDTO]:
        if account_type and account_type not in {a.value for a in AccountType}:
            raise ValidationError(f"Invalid account type: {account_type}", "account_type")
        page, limit = self._page(page, limit)
        users, total = self.uow.users.list_users(page, limit, q=q or None, account_type=account_type or None)
        return [UserResponseDTO.from_domain(u) for u in users], PaginationDTO(page=page, limit=limit, total=total)


class AdminGetUserUseCase(QueryUseCase):

    async def execute(self, user_id: int) -> UserResponseDTO:
        return UserResponseDTO.from_domain(self._load_user(user_id))


class AdminListJobsUseCase(_AdminListUseCase):
    """All jobs, newest first; `q` matches the title."""

    async def execute(self, page: Optional[int] = None, limit: Optional[int] = None,
                      q: Optional[str] = None) -> Tuple[List[JobResponseDTO], PaginationDTO]:
        page, limit = self._page(page, limit)
        jobs, total = self.uow.jobs.list_all(page, limit, q=q or None)
        employers = self._users_by_id(j.employer_id for j in jobs)
        items = [JobResponseDTO.from_domain(j, employers.get(j.employer_id)) for j in jobs]
        return items, PaginationDTO(page=page, limit=limit, total=total)


class AdminGetJobUseCase(QueryUseCase):

    async def execute(self, job_id: int) -> JobResponseDTO:
        job = self.uow.jobs.get_by_id(job_id)
        if not job:
            raise EntityNotFoundError("Job")
        return JobResponseDTO.from_domain(job, self.uow.users.get_by_id(job.employer_id))


class AdminListPaymentsUseCase(_AdminListUseCase):

    async def execute(self, page: Optional[int] = None, limit: Optional[int] = None,
                      payment_type: Optional[str] = None) -> Tuple[List[PaymentResponseDTO], PaginationDTO]:
        if payment_type:
            try:
                payment_type = PaymentType(payment_type)
            except ValueError:
                raise ValidationError(f"Invalid payment type: {payment_type}", "type")
        page, limit = self._page(page, limit)
        payments, total = self.uow.payments.list(page, limit, payment_type=payment_type or None)
        return [PaymentResponseDTO.from_domain(p) for p in payments], PaginationDTO(page=page, limit=limit, total=total)


class AdminGetPaymentUseCase(QueryUseCase):

    async def execute(self, payment_id: int) -> PaymentResponseDTO:
        payment = self.uow.payments.get_by_id(payment_id)
        if not payment:
            raise EntityNotFoundError("Payment")
        return PaymentResponseDTO.from_domain(payment)
