"""
Unit tests for the Invite domain model and its transition table.
"""

import pytest

from skilllink.domain.models.base import ValidationError, AuthorizationError
from skilllink.domain.models.invite import (
    Invite,
    InviteType,
    InviteStatus,
    ApplicationStatus,
    InviteAction,
    TRANSITIONS,
    next_status,
)


EMPLOYER, WORKER, JOB = 1, 2, 3


class TestInviteTransitions:
    """Test cases for invite status changes."""

    def test_new_invite_is_pending(self):
        """Employer invites start pending."""
        invite = Invite.new_invite(EMPLOYER, WORKER, JOB, "Join us")

        assert invite.type == InviteType.INVITE
        assert invite.status == InviteStatus.PENDING
        assert invite.message == "Join us"

    def test_accept_moves_pending_invite_to_approved(self):
        """Worker acceptance approves the invite directly."""
        invite = Invite.new_invite(EMPLOYER, WORKER, JOB)

        assert invite.respond(WORKER, InviteAction.ACCEPT) == InviteStatus.APPROVED
        assert invite.status == InviteStatus.APPROVED

    def test_decline_pending_invite(self):
        """Worker can decline a pending invite."""
        invite = Invite.new_invite(EMPLOYER, WORKER, JOB)

        invite.respond(WORKER, InviteAction.DECLINE)

        assert invite.status == InviteStatus.DECLINED

    def test_cannot_respond_twice(self):
        """A responded invite is no longer pending."""
        invite = Invite.new_invite(EMPLOYER, WORKER, JOB)
        invite.respond(WORKER, InviteAction.ACCEPT)

        with pytest.raises(ValidationError, match="Invite is not pending"):
            invite.respond(WORKER, InviteAction.DECLINE)

    def test_only_invited_worker_can_respond(self):
        """Another worker cannot accept someone else's invite."""
        invite = Invite.new_invite(EMPLOYER, WORKER, JOB)

        with pytest.raises(AuthorizationError):
            invite.respond(99, InviteAction.ACCEPT)
        assert invite.status == InviteStatus.PENDING

    def test_application_cannot_be_accepted_by_worker(self):
        """Applications are reviewed by the employer, not answered by the worker."""
        application = Invite.new_application(EMPLOYER, WORKER, JOB)

        with pytest.raises(ValidationError):
            application.respond(WORKER, InviteAction.ACCEPT)

    def test_employer_approves_application(self):
        """Applied applications can be approved by the job owner."""
        application = Invite.new_application(EMPLOYER, WORKER, JOB)

        assert application.approve(EMPLOYER) == ApplicationStatus.APPROVED

    def test_other_employer_cannot_approve(self):
        """Only the owning employer approves."""
        application = Invite.new_application(EMPLOYER, WORKER, JOB)

        with pytest.raises(AuthorizationError):
            application.approve(42)

    def test_approved_application_cannot_be_declined(self):
        """Declining is only allowed from applied."""
        application = Invite.new_application(EMPLOYER, WORKER, JOB)
        application.approve(EMPLOYER)

        with pytest.raises(ValidationError, match="Cannot decline application with status 'approved'"):
            application.decline_application(EMPLOYER)

    def test_employer_cannot_decline_an_invite(self):
        """The application decline path rejects invites."""
        invite = Invite.new_invite(EMPLOYER, WORKER, JOB)

        with pytest.raises(ValidationError, match="Only applications"):
            invite.decline_application(EMPLOYER)

    def test_pending_invite_cannot_be_approved(self):
        """Employer approval of an invite needs a worker acceptance first."""
        invite = Invite.new_invite(EMPLOYER, WORKER, JOB)

        with pytest.raises(ValidationError, match="Cannot approve invite with status 'pending'"):
            invite.approve(EMPLOYER)

    def test_legacy_accepted_invite_can_be_approved(self):
        """Rows stored as accepted still move to approved."""
        invite = Invite(
            employer_id=EMPLOYER, worker_id=WORKER, job_id=JOB,
            type=InviteType.INVITE, status="accepted",
        )

        assert invite.approve(EMPLOYER) == InviteStatus.APPROVED


class TestInviteCompletion:
    """Test cases for completing engagements."""

    def test_complete_approved_invite(self):
        """Approved invites complete with the project."""
        invite = Invite.new_invite(EMPLOYER, WORKER, JOB)
        invite.respond(WORKER, InviteAction.ACCEPT)

        assert invite.complete() is True
        assert invite.status == InviteStatus.COMPLETED

    def test_complete_approved_application(self):
        application = Invite.new_application(EMPLOYER, WORKER, JOB)
        application.approve(EMPLOYER)

        assert application.complete() is True
        assert application.status == ApplicationStatus.COMPLETED

    def test_complete_is_noop_for_open_records(self):
        """Pending invites and applied applications are left alone."""
        invite = Invite.new_invite(EMPLOYER, WORKER, JOB)
        application = Invite.new_application(EMPLOYER, WORKER, JOB)

        assert invite.complete() is False
        assert application.complete() is False
        assert invite.status == InviteStatus.PENDING
        assert application.status == ApplicationStatus.APPLIED


class TestStatusVocabulary:
    """Test cases for the per-type status vocabularies."""

    def test_application_rejects_invite_only_status(self):
        """`pending` is not an application status."""
        with pytest.raises(ValidationError, match="Invalid application status: pending"):
            Invite(
                employer_id=EMPLOYER, worker_id=WORKER, job_id=JOB,
                type=InviteType.APPLICATION, status="pending",
            )

    def test_invite_rejects_application_only_status(self):
        with pytest.raises(ValidationError, match="Invalid invite status: applied"):
            Invite(
                employer_id=EMPLOYER, worker_id=WORKER, job_id=JOB,
                type="invite", status="applied",
            )

    def test_transition_targets_stay_in_vocabulary(self):
        """Every target status belongs to the source type's enum."""
        for (invite_type, _, _), target in TRANSITIONS.items():
            expected = InviteStatus if invite_type == InviteType.INVITE else ApplicationStatus
            assert isinstance(target, expected)

    def test_unknown_transition_raises(self):
        with pytest.raises(ValidationError, match="Cannot complete application with status 'applied'"):
            next_status(InviteType.APPLICATION, ApplicationStatus.APPLIED, InviteAction.COMPLETE)

    def test_party_check(self):
        """Only the employer and the worker may view the record."""
        invite = Invite.new_invite(EMPLOYER, WORKER, JOB)

        invite.ensure_party(EMPLOYER)
        invite.ensure_party(WORKER)
        with pytest.raises(AuthorizationError):
            invite.ensure_party(77)
