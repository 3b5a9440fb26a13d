"""
Invite mapper for converting between domain entities and database models.
"""

from skilllink.domain.models.invite import Invite
from skilllink.infrastructure.db.models import InviteModel


class InviteMapper:
    """Maps between Invite domain entity and InviteModel database model."""

    def domain_to_model(self, invite: Invite) -> InviteModel:
        return InviteModel(
            id=invite.id,
            employer_id=invite.employer_id,
            worker_id=invite.worker_id,
            job_id=invite.job_id,
            type=invite.type.value,
            status=invite.status.value,
            message=invite.message,
            created_at=invite.created_at,
            updated_at=invite.updated_at,
            version=invite.version
        )

    def model_to_domain(self, model: InviteModel) -> Invite:
        return Invite(
            id=model.id,
            employer_id=model.employer_id,
            worker_id=model.worker_id,
            job_id=model.job_id,
            type=model.type,
            status=model.status,
            message=model.message,
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version or 1,
        )
