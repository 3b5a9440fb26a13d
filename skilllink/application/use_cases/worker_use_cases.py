"""
Worker-facing use cases.
Public discovery plus the authenticated worker's job lists and dashboard.
"""

import logging
from datetime import datetime, date, time
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from skilllink.application.use_cases.base_use_case import PaginatedQueryUseCase, QueryUseCase
from skilllink.application.use_cases.invite_use_cases import _InviteAccess
from skilllink.application.dto.base_dto import PaginationDTO
from skilllink.application.dto.invite_dto import InviteResponseDTO
from skilllink.application.dto.user_dto import WorkerCardDTO, UserResponseDTO
from skilllink.domain.models.base import EntityNotFoundError, split_list
from skilllink.domain.models.invite import Invite, InviteType, InviteStatus
from skilllink.domain.models.job import Job
from skilllink.domain.models.payment import PaymentType
from skilllink.domain.models.project import ProjectStatus, MilestoneStatus
from skilllink.domain.repositories.user_repository import WorkerSearchFilters


logger = logging.getLogger(__name__)


WORKER_SEARCH_PAGE_SIZE = 10
ACTIVE_JOB_STATUSES = (InviteStatus.ACCEPTED.value, InviteStatus.APPROVED.value)
COMPLETED_JOB_STATUSES = (InviteStatus.COMPLETED.value,)

DASHBOARD_RECENT_JOBS = 5
DASHBOARD_MESSAGES = 5
DASHBOARD_EARNING_MONTHS = 6


class SearchWorkersUseCase(PaginatedQueryUseCase):
    """Public worker search, highest rating first."""

    default_page_size = WORKER_SEARCH_PAGE_SIZE

    async def execute(self, page: Optional[int] = None, limit: Optional[int] = None,
                      q: Optional[str] = None, skills: Optional[str] = None,
                      location: Optional[str] = None, min_rate: Optional[float] = None,
                      max_rate: Optional[float] = None, availability: Optional[str] = None,
                      min_rating: Optional[float] = None) -> Tuple[List[WorkerCardDTO], PaginationDTO]:
        page, limit = self._page(page, limit)
        filters = WorkerSearchFilters(
            q=q or None,
            skills=split_list(skills),
            location=location or None,
            min_rate=min_rate,
            max_rate=max_rate,
            availability=availability or None,
            min_rating=min_rating,
        )
        workers, total = self.uow.users.search_workers(filters, page, limit)
        return [WorkerCardDTO.from_domain(w) for w in workers], PaginationDTO(page=page, limit=limit, total=total)


class WorkerFilterMetaUseCase(QueryUseCase):
    """Distinct filter values for the public search form."""

    async def execute(self) -> Dict[str, Any]:
        return self.uow.users.worker_filter_meta()


class GetWorkerProfileUseCase(QueryUseCase):

    async def execute(self, worker_id: int) -> UserResponseDTO:
        worker = self.uow.users.get_by_id(worker_id)
        if not worker or not worker.is_worker or not worker.is_active:
            raise EntityNotFoundError("Worker")
        return UserResponseDTO.from_domain(worker)


def _matches_text(job: Optional[Job], needle: Optional[str], by_category: bool = False) -> bool:
    if not needle:
        return True
    if job is None:
        return False
    needle = needle.strip().lower()
    if by_category:
        haystack = [*job.required_skills, job.timeline or ""]
    else:
        haystack = [job.title or "", job.description or ""]
    return any(needle in value.lower() for value in haystack)


def _start_of(day: Optional[date]) -> Optional[datetime]:
    if day is None:
        return None
    if isinstance(day, datetime):
        return day
    return datetime.combine(day, time.min)


class _WorkerJobsUseCase(_InviteAccess, PaginatedQueryUseCase):
    """
    The worker's side of the invite ledger, filtered in memory by job text.
    `q` matches title and description; `category` matches skills and timeline.
    """

    invite_type: Optional[InviteType] = None
    statuses: Tuple[str, ...] = ()

    async def execute(self, user_id: int, q: Optional[str] = None, category: Optional[str] = None,
                      date_from: Optional[date] = None, page: Optional[int] = None,
                      limit: Optional[int] = None) -> Tuple[List[InviteResponseDTO], PaginationDTO]:
        self._load_user(user_id)
        page, limit = self._page(page, limit)
        invites = self.uow.invites.list(
            worker_id=user_id,
            invite_type=self.invite_type,
            statuses=list(self.statuses) or None,
            created_from=_start_of(date_from),
        )
        jobs = self.uow.jobs.get_many({i.job_id for i in invites})
        matching: List[Invite] = [
            invite for invite in invites
            if _matches_text(jobs.get(invite.job_id), q)
            and _matches_text(jobs.get(invite.job_id), category, by_category=True)
        ]
        start = (page - 1) * limit
        page_items = matching[start:start + limit]
        return self._to_dtos(page_items), PaginationDTO(page=page, limit=limit, total=len(matching))


class ListWorkerInvitationsUseCase(_WorkerJobsUseCase):
    """Employer invites addressed to the worker."""

    invite_type = InviteType.INVITE


class ListWorkerActiveJobsUseCase(_WorkerJobsUseCase):
    statuses = ACTIVE_JOB_STATUSES


class ListWorkerCompletedJobsUseCase(_WorkerJobsUseCase):
    statuses = COMPLETED_JOB_STATUSES


class WorkerDashboardUseCase(QueryUseCase):
    """Summary counters and recent activity for the signed-in worker."""

    async def execute(self, user_id: int) -> Dict[str, Any]:
        self._load_user(user_id)
        projects = self.uow.projects.list_by_assignee(user_id)
        active = [p for p in projects if p.status == ProjectStatus.ACTIVE]
        completed = [p for p in projects if p.status == ProjectStatus.COMPLETED]
        rating, _ = self.uow.reviews.stats_for(user_id)
        total_earnings = self.uow.payments.total(worker_id=user_id, payment_type=PaymentType.EARNING)

        employers = self._users_by_id(p.created_by for p in projects)
        titles = {p.id: p.title for p in projects}

        recent_jobs = [
            {
                "id": p.id,
                "title": p.title,
                "category": p.category,
                "status": p.status.value,
                "progress": p.progress,
                "budget": float(p.budget),
                "currency": p.currency,
                "deadline": p.deadline,
                "employer": employers[p.created_by].display_name if p.created_by in employers else None,
            }
            for p in projects[:DASHBOARD_RECENT_JOBS]
        ]

        messages = self.uow.projects.latest_messages_for(user_id, DASHBOARD_MESSAGES)
        senders = self._users_by_id(m.sender_id for m in messages)
        latest_messages = [
            {
                "id": m.id,
                "projectId": m.project_id,
                "projectTitle": titles.get(m.project_id),
                "sender": senders[m.sender_id].display_name if m.sender_id in senders else None,
                "text": m.text,
                "createdAt": m.created_at,
            }
            for m in messages
        ]

        ongoing_jobs = [
            {
                "id": p.id,
                "title": p.title,
                "progress": p.progress,
                "deadline": p.deadline,
                "milestones": {
                    "total": len(p.milestones),
                    "approved": sum(1 for m in p.milestones if m.status == MilestoneStatus.APPROVED),
                },
            }
            for p in active
        ]

        return {
            "summary": {
                "activeProjects": len(active),
                "completedProjects": len(completed),
                "currentRating": rating,
                "totalEarnings": float(total_earnings),
            },
            "recentJobs": recent_jobs,
            "latestMessages": latest_messages,
            "ongoingJobs": ongoing_jobs,
            "earningsReview": self._earnings_by_month(user_id),
        }

    def _earnings_by_month(self, user_id: int) -> List[Dict[str, Any]]:
        """Earning totals for the most recent months that had any, oldest first."""
        earnings, _ = self.uow.payments.list(1, 100, worker_id=user_id, payment_type=PaymentType.EARNING)
        months: Dict[str, Decimal] = {}
        for payment in earnings:
            key = payment.created_at.strftime("%Y-%m")
            months[key] = months.get(key, Decimal("0")) + payment.amount
        recent = sorted(months.items())[-DASHBOARD_EARNING_MONTHS:]
        return [{"month": month, "amount": float(amount)} for month, amount in recent]
