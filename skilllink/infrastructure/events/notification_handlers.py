"""
Event handlers for in-app and email notifications.
Converts domain events into notifications for the other party.
"""

import logging
from typing import Optional

from skilllink.domain.events.base import EventHandler, DomainEvent
from skilllink.domain.events.invite_events import (
    InviteCreated,
    InviteAccepted,
    InviteDeclined,
    InviteApproved,
    ApplicationSubmitted,
    ApplicationApproved,
    ApplicationDeclined,
)
from skilllink.domain.events.project_events import (
    ProjectLifecycleEvent,
    ProjectAssigned,
    ProjectCompleted,
    MilestoneSubmitted,
    MilestoneApproved,
    ProjectMessagePosted,
    SubmissionAdded,
    PaymentRequested,
    DeadlineExtended,
    DeadlineExtensionRequested,
    DeadlineExtensionApproved,
    SupportRequested,
)
from skilllink.domain.events.payment_events import WorkerPaid, WithdrawalRequested
from skilllink.domain.models.notification import NotificationType
from skilllink.domain.models.review import ReviewCreated
from skilllink.domain.repositories.unit_of_work import UnitOfWork
from skilllink.domain.services.notification_service import NotificationService


logger = logging.getLogger(__name__)


class NotificationHandler(EventHandler):
    """
    Base handler that writes notifications through the request's unit of work.
    Each notification is committed on its own so one failure cannot undo another.
    """

    event_types: tuple = ()

    def __init__(self, uow: UnitOfWork, notification_service: NotificationService):
        self.uow = uow
        self.notification_service = notification_service

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(event, self.event_types)

    async def _notify(
        self,
        user_id: Optional[int],
        message: str,
        title: str,
        type: NotificationType,
        link: Optional[str] = None,
        email: bool = False,
        **meta,
    ) -> None:
        if user_id is None:
            return
        try:
            await self.notification_service.notify(
                user_id=user_id,
                message=message,
                title=title,
                type=type,
                link=link,
                meta=meta,
                email=email,
            )
            self.uow.commit()
        except Exception:
            self.uow.rollback()
            raise


class InviteNotificationHandler(NotificationHandler):
    """Handler for the invite and application ledger."""

    event_types = (
        InviteCreated, InviteAccepted, InviteDeclined, InviteApproved,
        ApplicationSubmitted, ApplicationApproved, ApplicationDeclined,
    )

    async def handle(self, event: DomainEvent) -> None:
        link = f"/invites/{event.invite_id}"
        meta = {"invite_id": event.invite_id, "job_id": event.job_id}

        if isinstance(event, InviteCreated):
            await self._notify(
                event.worker_id, f"You have been invited to \"{event.job_title}\"",
                "New job invitation", NotificationType.INVITE, link, email=True, **meta,
            )
        elif isinstance(event, InviteAccepted):
            await self._notify(
                event.employer_id, f"Your invite for \"{event.job_title}\" was accepted",
                "Invite accepted", NotificationType.INVITE, f"/projects/{event.project_id}",
                email=True, project_id=event.project_id, **meta,
            )
        elif isinstance(event, InviteDeclined):
            await self._notify(
                event.employer_id, f"Your invite for \"{event.job_title}\" was declined",
                "Invite declined", NotificationType.INVITE, link, **meta,
            )
        elif isinstance(event, InviteApproved):
            await self._notify(
                event.worker_id, f"Your engagement on \"{event.job_title}\" was approved",
                "Invite approved", NotificationType.INVITE, link, **meta,
            )
        elif isinstance(event, ApplicationSubmitted):
            await self._notify(
                event.employer_id, f"New application for \"{event.job_title}\"",
                "New application", NotificationType.APPLICATION, link, **meta,
            )
        elif isinstance(event, ApplicationApproved):
            await self._notify(
                event.worker_id, f"Your application for \"{event.job_title}\" was approved",
                "Application approved", NotificationType.APPLICATION, link, email=True, **meta,
            )
        elif isinstance(event, ApplicationDeclined):
            await self._notify(
                event.worker_id, f"Your application for \"{event.job_title}\" was declined",
                "Application declined", NotificationType.APPLICATION, link, **meta,
            )


class ProjectNotificationHandler(NotificationHandler):
    """Handler for project lifecycle events."""

    event_types = (ProjectLifecycleEvent,)

    async def handle(self, event: DomainEvent) -> None:
        link = f"/projects/{event.project_id}"
        title = event.project_title
        project = NotificationType.PROJECT

        if isinstance(event, ProjectAssigned):
            await self._notify(
                event.worker_id, f"You have been assigned to \"{title}\"",
                "New project assignment", project, link, email=True, project_id=event.project_id,
            )
        elif isinstance(event, ProjectCompleted):
            for user_id in (event.employer_id, event.worker_id):
                await self._notify(
                    user_id, f"\"{title}\" has been marked completed. You can now leave a review.",
                    "Project completed", project, link, email=True, project_id=event.project_id,
                )
        elif isinstance(event, MilestoneApproved):
            await self._notify(
                event.worker_id, f"Milestone \"{event.milestone_title}\" on \"{title}\" was approved",
                "Milestone approved", project, link,
                project_id=event.project_id, milestone_id=event.milestone_id,
            )
        elif isinstance(event, MilestoneSubmitted):
            await self._notify(
                event.employer_id, f"Milestone \"{event.milestone_title}\" on \"{title}\" was submitted for review",
                "Milestone submitted", project, link,
                project_id=event.project_id, milestone_id=event.milestone_id,
            )
        elif isinstance(event, ProjectMessagePosted):
            recipient = event.worker_id if event.sender_id == event.employer_id else event.employer_id
            await self._notify(
                recipient, event.text[:140], f"New message on \"{title}\"", project,
                f"{link}/messages", project_id=event.project_id,
            )
        elif isinstance(event, SubmissionAdded):
            recipient = event.worker_id if event.uploader_id == event.employer_id else event.employer_id
            await self._notify(
                recipient, f"New file \"{event.filename}\" shared on \"{title}\"", "New submission",
                project, f"{link}/submissions", project_id=event.project_id,
            )
        elif isinstance(event, PaymentRequested):
            await self._notify(
                event.employer_id, f"Payment of {event.amount} requested on \"{title}\"",
                "Payment requested", NotificationType.PAYMENT, link, email=True,
                project_id=event.project_id, amount=float(event.amount),
            )
        elif isinstance(event, DeadlineExtensionApproved):
            await self._notify(
                event.worker_id, f"Your deadline extension on \"{title}\" was approved",
                "Deadline extension approved", project, link,
                project_id=event.project_id, deadline=event.deadline.isoformat(),
            )
        elif isinstance(event, DeadlineExtensionRequested):
            await self._notify(
                event.employer_id, f"A deadline extension was requested on \"{title}\"",
                "Deadline extension requested", project, link,
                project_id=event.project_id, proposed_date=event.deadline.isoformat(),
            )
        elif isinstance(event, DeadlineExtended):
            await self._notify(
                event.worker_id, f"The deadline on \"{title}\" was extended",
                "Deadline extended", project, link,
                project_id=event.project_id, deadline=event.deadline.isoformat(),
            )
        elif isinstance(event, SupportRequested):
            await self._notify(
                event.requester_id, f"Your support request for \"{title}\" was received",
                "Support request received", NotificationType.SYSTEM, link, project_id=event.project_id,
            )


class PaymentNotificationHandler(NotificationHandler):

    event_types = (WorkerPaid, WithdrawalRequested)

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, WorkerPaid):
            await self._notify(
                event.worker_id, f"You received {event.amount} for \"{event.project_title}\"",
                "Payment received", NotificationType.PAYMENT, "/payments", email=True,
                payment_id=event.payment_id, project_id=event.project_id,
            )
        elif isinstance(event, WithdrawalRequested):
            await self._notify(
                event.worker_id, f"Your withdrawal of {event.amount} is pending",
                "Withdrawal requested", NotificationType.PAYMENT, "/payments",
                payment_id=event.payment_id,
            )


class ReviewNotificationHandler(NotificationHandler):

    event_types = (ReviewCreated,)

    async def handle(self, event: DomainEvent) -> None:
        await self._notify(
            event.reviewee_id, f"You received a {event.rating}-star review for \"{event.project_title}\"",
            "New review", NotificationType.REVIEW, "/reviews",
            review_id=event.review_id, project_id=event.project_id,
        )
