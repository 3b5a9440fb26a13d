"""
Employer dashboard use case.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List

from skilllink.application.use_cases.base_use_case import QueryUseCase
from skilllink.domain.models.invite import InviteType, ApplicationStatus
from skilllink.domain.models.project import ProjectStatus, MilestoneStatus


DASHBOARD_PROJECT_CAP = 100
DASHBOARD_ACTIVE_CARDS = 5
DASHBOARD_PENDING_ACTIONS = 6
DASHBOARD_APPLICATIONS = 6
MESSAGE_WINDOW = timedelta(days=7)


class EmployerDashboardUseCase(QueryUseCase):
    """
    Counters and short lists for the employer home screen.
    Pending actions are submitted milestones awaiting approval and payment
    requests that have not been paid.
    """

    async def execute(self, user_id: int) -> Dict[str, Any]:
        self._load_user(user_id)
        projects = self.uow.projects.list_by_creator(user_id)[:DASHBOARD_PROJECT_CAP]
        active = [p for p in projects if p.status == ProjectStatus.ACTIVE]
        workers = self._users_by_id(p.assigned_to for p in projects)

        pending_actions: List[Dict[str, Any]] = []
        for project in projects:
            for milestone in project.milestones:
                if milestone.status == MilestoneStatus.SUBMITTED:
                    pending_actions.append({
                        "type": "approve_milestone",
                        "projectId": project.id,
                        "milestoneId": milestone.id,
                        "label": "Approved Milestone",
                    })
        for event in self.uow.projects.unresolved_payment_requests(user_id):
            pending_actions.append({
                "type": "release_payment",
                "projectId": event.project_id,
                "eventId": event.id,
                "amount": float(event.amount),
                "label": "Released Payment",
            })

        new_proposals = self.uow.invites.count(
            employer_id=user_id,
            invite_type=InviteType.APPLICATION,
            statuses=[ApplicationStatus.APPLIED.value],
        )
        messages = self.uow.projects.count_messages_since(user_id, datetime.utcnow() - MESSAGE_WINDOW)

        active_cards = [
            {
                "id": p.id,
                "title": p.title,
                "worker": workers[p.assigned_to].display_name if p.assigned_to in workers else "TBD",
                "deadline": p.deadline,
                "progress": p.progress or 0,
            }
            for p in active[:DASHBOARD_ACTIVE_CARDS]
        ]

        applications = self.uow.invites.list(
            employer_id=user_id, invite_type=InviteType.APPLICATION, limit=DASHBOARD_APPLICATIONS
        )
        applicants = self._users_by_id(a.worker_id for a in applications)
        recent_applications = [
            {
                "id": a.id,
                "worker": applicants[a.worker_id].display_name if a.worker_id in applicants else "Worker",
                "date": a.created_at,
            }
            for a in applications
        ]

        return {
            "summary": {
                "activeJobs": len(active),
                "pendingAction": len(pending_actions),
                "newProposals": new_proposals,
                "messages": messages,
            },
            "activeJobs": active_cards,
            "pendingActions": pending_actions[:DASHBOARD_PENDING_ACTIONS],
            "recentApplications": recent_applications,
        }
