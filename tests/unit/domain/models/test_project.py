"""
Unit tests for the Project aggregate.
"""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from skilllink.domain.models.base import (
    ValidationError,
    AuthorizationError,
    EntityNotFoundError,
    ConcurrencyConflictError,
)
from skilllink.domain.models.project import (
    Project,
    ProjectStatus,
    ProjectEvent,
    ProjectEventType,
    MilestoneStatus,
    EventResolution,
    ResolutionKind,
)
from skilllink.domain.events.project_events import (
    ProjectAssigned,
    ProjectCompleted,
    MilestoneSubmitted,
    MilestoneApproved,
    PaymentRequested,
)


EMPLOYER, WORKER, OUTSIDER = 1, 2, 3


def make_project(**overrides) -> Project:
    """Persisted-looking project with one milestone and no pending events."""
    data = dict(
        created_by=EMPLOYER,
        title="Kitchen remodel",
        budget=500,
        assigned_to=WORKER,
        job_id=5,
        milestones=[{"title": "Design"}],
    )
    data.update(overrides)
    project = Project.create(**data)
    project.id = 10
    for index, milestone in enumerate(project.milestones, start=100):
        milestone.id = index
        milestone.project_id = project.id
    project.pull_events()
    return project


class TestProjectCreation:
    """Test cases for project creation."""

    def test_create_defaults(self):
        """Budget, currency, progress and status defaults."""
        project = Project.create(created_by=EMPLOYER, title="Fence repair")

        assert project.budget == Decimal("0")
        assert project.currency == "NGN"
        assert project.progress == 0
        assert project.status == ProjectStatus.ACTIVE
        assert project.assigned_to is None
        assert project.version == 1

    def test_create_requires_title(self):
        with pytest.raises(ValidationError, match="title is required"):
            Project.create(created_by=EMPLOYER, title="")

    def test_negative_budget_rejected(self):
        with pytest.raises(ValidationError, match="budget cannot be negative"):
            Project.create(created_by=EMPLOYER, title="Fence", budget=-1)

    def test_aware_deadline_stored_as_naive_utc(self):
        """Deadlines are normalized to naive UTC."""
        deadline = datetime(2030, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=1)))

        project = Project.create(created_by=EMPLOYER, title="Fence", deadline=deadline)

        assert project.deadline == datetime(2030, 1, 1, 11, 0)

    def test_announce_assignment(self):
        """Assigned projects announce the assignee."""
        project = make_project()

        project.announce_assignment()

        events = project.pull_events()
        assert len(events) == 1
        assert isinstance(events[0], ProjectAssigned)


class TestProjectUpdate:
    """Test cases for creator updates and status changes."""

    def test_only_creator_updates(self):
        project = make_project()

        with pytest.raises(AuthorizationError, match="Not authorized"):
            project.apply_update(WORKER, {"title": "Hijacked"})

    def test_unknown_fields_ignored(self):
        """Keys outside the whitelist never reach the aggregate."""
        project = make_project()

        project.apply_update(EMPLOYER, {"created_by": OUTSIDER, "title": "Renamed"})

        assert project.created_by == EMPLOYER
        assert project.title == "Renamed"

    def test_completion_sets_progress_and_emits_event(self):
        project = make_project()

        completed_now = project.apply_update(EMPLOYER, {"status": "completed"})

        assert completed_now is True
        assert project.status == ProjectStatus.COMPLETED
        assert project.progress == 100
        assert any(isinstance(e, ProjectCompleted) for e in project.pull_events())

    def test_repeating_completed_is_not_a_new_completion(self):
        project = make_project()
        project.apply_update(EMPLOYER, {"status": "completed"})

        assert project.apply_update(EMPLOYER, {"status": "completed"}) is False

    def test_completed_project_cannot_reactivate(self):
        project = make_project()
        project.apply_update(EMPLOYER, {"status": "completed"})

        with pytest.raises(ValidationError, match="Cannot move project from 'completed' to 'active'"):
            project.apply_update(EMPLOYER, {"status": "active"})

    def test_invalid_status(self):
        project = make_project()

        with pytest.raises(ValidationError, match="Invalid status"):
            project.apply_update(EMPLOYER, {"status": "paused"})

    def test_progress_bounds(self):
        project = make_project()

        with pytest.raises(ValidationError, match="progress must be between 0 and 100"):
            project.apply_update(EMPLOYER, {"progress": 120})

    def test_reassignment_announced(self):
        """A new assignee triggers an assignment event."""
        project = make_project(assigned_to=None)

        project.apply_update(EMPLOYER, {"assigned_to": WORKER})

        assert any(isinstance(e, ProjectAssigned) for e in project.pull_events())


class TestMilestones:
    """Test cases for role-gated milestone edits."""

    def test_worker_submits_milestone(self):
        project = make_project()

        milestone = project.update_milestone(100, WORKER, {"status": "submitted"})

        assert milestone.status == MilestoneStatus.SUBMITTED
        assert any(isinstance(e, MilestoneSubmitted) for e in project.pull_events())

    def test_worker_cannot_approve(self):
        project = make_project()

        with pytest.raises(AuthorizationError, match="Workers can only set milestones to in_progress or submitted"):
            project.update_milestone(100, WORKER, {"status": "approved"})

    def test_worker_cannot_edit_other_fields(self):
        project = make_project()

        with pytest.raises(AuthorizationError, match="Workers can only update milestone status"):
            project.update_milestone(100, WORKER, {"title": "Something else"})

    def test_outsider_rejected(self):
        project = make_project()

        with pytest.raises(AuthorizationError, match="Not authorized to update milestones on this project"):
            project.update_milestone(100, OUTSIDER, {"status": "in_progress"})

    def test_creator_approves_and_edits(self):
        project = make_project()

        milestone = project.update_milestone(100, EMPLOYER, {"status": "approved", "title": "Final design"})

        assert milestone.status == MilestoneStatus.APPROVED
        assert milestone.title == "Final design"
        assert any(isinstance(e, MilestoneApproved) for e in project.pull_events())

    def test_unknown_milestone(self):
        project = make_project()

        with pytest.raises(EntityNotFoundError):
            project.update_milestone(999, EMPLOYER, {"status": "approved"})


class TestSharedStreams:
    """Test cases for messages and submissions."""

    def test_post_message_trims_text(self):
        project = make_project()

        message = project.post_message(WORKER, "  On my way  ")

        assert message.text == "On my way"
        assert message.sender_id == WORKER

    def test_outsider_cannot_message(self):
        project = make_project()

        with pytest.raises(AuthorizationError):
            project.post_message(OUTSIDER, "Hello")

    def test_empty_message_rejected(self):
        project = make_project()

        with pytest.raises(ValidationError, match="text is required"):
            project.post_message(EMPLOYER, "   ")

    def test_submission_filename_defaults_to_url_segment(self):
        project = make_project()

        submission = project.add_submission(WORKER, "https://files.example.com/docs/report.pdf")

        assert submission.filename == "report.pdf"

    def test_submission_requires_url(self):
        project = make_project()

        with pytest.raises(ValidationError, match="url is required"):
            project.add_submission(WORKER, None)


class TestQuickActions:
    """Test cases for the project event log actions."""

    def test_request_payment(self):
        project = make_project()

        event = project.request_payment(WORKER, 250, "First half")

        assert event.type == ProjectEventType.PAYMENT_REQUEST
        assert event.data["amount"] == 250.0
        assert event.data["currency"] == "NGN"
        assert any(isinstance(e, PaymentRequested) for e in project.pull_events())

    def test_only_assignee_requests_payment(self):
        project = make_project()

        with pytest.raises(AuthorizationError, match="Only the assigned worker can request payment"):
            project.request_payment(EMPLOYER, 100)

    def test_payment_amount_must_be_positive(self):
        project = make_project()

        with pytest.raises(ValidationError, match="amount must be greater than 0"):
            project.request_payment(WORKER, 0)

    def test_extend_deadline(self):
        project = make_project()
        new_deadline = datetime(2031, 6, 1)

        event = project.extend_deadline(EMPLOYER, new_deadline, "Rain delays")

        assert project.deadline == new_deadline
        assert event.data["previousDeadline"] is None
        assert event.data["newDeadline"] == new_deadline.isoformat()

    def test_extend_deadline_requires_date(self):
        project = make_project()

        with pytest.raises(ValidationError, match="newDeadline is required"):
            project.extend_deadline(EMPLOYER, None)

    def test_extension_request_leaves_deadline(self):
        """A worker proposal does not move the deadline."""
        project = make_project(deadline=datetime(2030, 1, 1))

        event = project.request_deadline_extension(WORKER, datetime(2030, 2, 1), "Parts backordered")

        assert project.deadline == datetime(2030, 1, 1)
        assert event.data == {
            "proposedDate": datetime(2030, 2, 1).isoformat(),
            "reason": "Parts backordered",
            "requested": True,
        }

    def test_approve_extension_applies_proposed_date(self):
        project = make_project(deadline=datetime(2030, 1, 1))
        request = project.request_deadline_extension(WORKER, datetime(2030, 2, 1))
        request.id = 50

        resolution, confirmation = project.approve_deadline_extension(EMPLOYER, request)

        assert project.deadline == datetime(2030, 2, 1)
        assert resolution.kind == ResolutionKind.APPROVED
        assert resolution.data["approved"] is True
        assert confirmation.related_event_id == 50
        assert confirmation.data["approvedEventId"] == 50

    def test_approve_extension_with_override(self):
        project = make_project()
        request = project.request_deadline_extension(WORKER, datetime(2030, 2, 1))
        request.id = 50

        project.approve_deadline_extension(EMPLOYER, request, datetime(2030, 3, 1))

        assert project.deadline == datetime(2030, 3, 1)

    def test_extension_approved_once(self):
        project = make_project()
        request = project.request_deadline_extension(WORKER, datetime(2030, 2, 1))
        request.id = 50
        resolution, _ = project.approve_deadline_extension(EMPLOYER, request)
        request.resolution = resolution

        with pytest.raises(ConcurrencyConflictError, match="already approved"):
            project.approve_deadline_extension(EMPLOYER, request)

    def test_direct_extension_is_not_a_request(self):
        """The employer's own extension cannot be approved, even with an override date."""
        project = make_project()
        direct = project.extend_deadline(EMPLOYER, datetime(2030, 2, 1))
        direct.id = 60
        project.pull_events()

        with pytest.raises(EntityNotFoundError):
            project.approve_deadline_extension(EMPLOYER, direct, datetime(2030, 3, 1))

        assert project.deadline == datetime(2030, 2, 1)
        assert project.pull_events() == []

    def test_confirmation_is_not_a_request(self):
        project = make_project()
        request = project.request_deadline_extension(WORKER, datetime(2030, 2, 1))
        request.id = 50
        _, confirmation = project.approve_deadline_extension(EMPLOYER, request)
        confirmation.id = 51

        with pytest.raises(EntityNotFoundError):
            project.approve_deadline_extension(EMPLOYER, confirmation, datetime(2030, 4, 1))

    def test_request_without_proposed_date(self):
        """A request whose payload lost its date needs an override."""
        project = make_project()
        request = project.request_deadline_extension(WORKER, datetime(2030, 2, 1))
        request.id = 50
        request.data.pop("proposedDate")

        with pytest.raises(ValidationError, match="No proposed date to apply"):
            project.approve_deadline_extension(EMPLOYER, request)

    def test_worker_cannot_approve_extension(self):
        project = make_project()
        request = project.request_deadline_extension(WORKER, datetime(2030, 2, 1))
        request.id = 50

        with pytest.raises(AuthorizationError):
            project.approve_deadline_extension(WORKER, request)

    def test_contact_support(self):
        project = make_project()

        event = project.contact_support(WORKER, "Employer is unresponsive")

        assert event.type == ProjectEventType.SUPPORT
        assert event.data == {"status": "open"}


class TestEventResolution:
    """Test cases for resolving logged events."""

    def test_payload_merges_resolution(self):
        """The original data is kept; the resolution adds to the view."""
        event = ProjectEvent(
            project_id=10, type="payment_request", created_by=WORKER, data={"amount": 100.0}, id=70
        )
        event.resolution = EventResolution(
            event_id=70, kind=ResolutionKind.PAID, resolved_by=EMPLOYER, data={"paid": True}
        )

        assert event.data == {"amount": 100.0}
        assert event.payload == {"amount": 100.0, "paid": True}
        assert event.is_resolved

    def test_resolve_payment_request(self):
        project = make_project()
        request = project.request_payment(WORKER, 100)
        request.id = 70

        resolution = project.resolve_payment_request(request, EMPLOYER, payment_id=9, amount=Decimal("100"))

        assert resolution.data["paid"] is True
        assert resolution.data["paymentId"] == 9
        assert resolution.data["paidAmount"] == 100.0

    def test_resolve_ignores_other_event_types(self):
        project = make_project()
        support = project.contact_support(WORKER, "Help")
        support.id = 71

        assert project.resolve_payment_request(support, EMPLOYER, 9, Decimal("1")) is None

    def test_resolve_twice_conflicts(self):
        project = make_project()
        request = project.request_payment(WORKER, 100)
        request.id = 70
        request.resolution = project.resolve_payment_request(request, EMPLOYER, 9, Decimal("100"))

        with pytest.raises(ConcurrencyConflictError, match="already paid"):
            project.resolve_payment_request(request, EMPLOYER, 10, Decimal("100"))

    def test_amount_ignores_garbage(self):
        event = ProjectEvent(project_id=10, type="payment_request", created_by=WORKER, data={"amount": "abc"})

        assert event.amount == Decimal("0")
