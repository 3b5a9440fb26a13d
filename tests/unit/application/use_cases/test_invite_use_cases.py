"""
Unit tests for invite use cases and the command base class.
"""

import pytest
from decimal import Decimal
from unittest.mock import Mock, AsyncMock

from skilllink.application.dto.job_dto import ApplyToJobRequestDTO
from skilllink.application.use_cases.base_use_case import CommandUseCase
from skilllink.application.use_cases.invite_use_cases import AcceptInviteUseCase, ApplyToJobUseCase
from skilllink.domain.events.invite_events import InviteAccepted, ApplicationSubmitted
from skilllink.domain.events.project_events import ProjectAssigned
from skilllink.domain.models.base import AuthorizationError, DuplicateEntityError, ValidationError
from skilllink.domain.models.invite import Invite
from skilllink.domain.models.job import Job, BudgetRange
from skilllink.domain.models.user import User, AccountType
from skilllink.infrastructure.pagination import normalize_page


EMPLOYER, WORKER = 1, 2


def make_job(**overrides) -> Job:
    data = dict(
        id=5, employer_id=EMPLOYER, title="Rewire office", description="Two floors",
        budget_range=BudgetRange(min=Decimal("100"), max=Decimal("500")), timeline="2 weeks",
    )
    data.update(overrides)
    return Job(**data)


def assign_id(entity_id):
    def save(entity):
        if entity.id is None:
            entity.id = entity_id
        return entity
    return save


@pytest.fixture
def uow():
    uow = Mock()
    uow.jobs.get_many.return_value = {}
    uow.users.get_many.return_value = {}
    return uow


class TestCommandUseCase:
    """Test cases for commit-then-publish."""

    @pytest.mark.asyncio
    async def test_events_published_after_commit(self, uow):
        dispatcher = AsyncMock()
        dispatcher.dispatch_all.side_effect = lambda events: uow.commit.assert_called_once()
        use_case = CommandUseCase(uow, dispatcher)
        use_case.collect(ApplicationSubmitted(1, 5, "Job", EMPLOYER, WORKER), None)

        await use_case._commit()

        dispatcher.dispatch_all.assert_awaited_once()
        assert use_case.events == []

    @pytest.mark.asyncio
    async def test_nothing_published_without_dispatcher(self, uow):
        use_case = CommandUseCase(uow)
        use_case.collect(ApplicationSubmitted(1, 5, "Job", EMPLOYER, WORKER))

        await use_case._commit()

        uow.commit.assert_called_once()

    def test_collect_pulls_aggregate_events(self, uow):
        job = make_job()
        job.add_event(ApplicationSubmitted(1, 5, "Job", EMPLOYER, WORKER))
        use_case = CommandUseCase(uow)

        use_case.collect(job)

        assert len(use_case.events) == 1
        assert job.pull_events() == []


class TestAcceptInvite:
    """Test cases for AcceptInviteUseCase."""

    @pytest.mark.asyncio
    async def test_accept_opens_project(self, uow):
        invite = Invite.new_invite(EMPLOYER, WORKER, 5)
        invite.id = 7
        job = make_job()
        uow.invites.get_by_id.return_value = invite
        uow.jobs.get_by_id.return_value = job
        uow.projects.save.side_effect = assign_id(10)
        dispatcher = AsyncMock()

        invite_dto, project_dto = await AcceptInviteUseCase(uow, dispatcher).execute(WORKER, 7)

        assert invite_dto.status == "approved"
        assert project_dto.id == 10
        assert project_dto.budget == 500.0
        assert project_dto.category == "2 weeks"
        assert job.is_active is False
        uow.jobs.save.assert_called_once_with(job)
        uow.commit.assert_called_once()

        events = dispatcher.dispatch_all.await_args.args[0]
        assert {type(e) for e in events} == {InviteAccepted, ProjectAssigned}

    @pytest.mark.asyncio
    async def test_wrong_worker(self, uow):
        invite = Invite.new_invite(EMPLOYER, WORKER, 5)
        invite.id = 7
        uow.invites.get_by_id.return_value = invite

        with pytest.raises(AuthorizationError):
            await AcceptInviteUseCase(uow).execute(99, 7)

        uow.commit.assert_not_called()


class TestApplyToJob:
    """Test cases for ApplyToJobUseCase."""

    @pytest.fixture
    def worker(self):
        return User(id=WORKER, email="w@example.com", firstname="Tunde", lastname="Bello",
                    account_type=AccountType.SKILLED_WORKER)

    @pytest.mark.asyncio
    async def test_apply(self, uow, worker):
        uow.users.get_by_id.return_value = worker
        uow.jobs.get_by_id.return_value = make_job()
        uow.invites.find_open_application.return_value = None
        uow.invites.save.side_effect = assign_id(3)

        application = await ApplyToJobUseCase(uow).execute(WORKER, 5, ApplyToJobRequestDTO(message="Hi"))

        assert application.id == 3
        assert application.type == "application"
        assert application.status == "applied"

    @pytest.mark.asyncio
    async def test_open_application_blocks(self, uow, worker):
        uow.users.get_by_id.return_value = worker
        uow.jobs.get_by_id.return_value = make_job()
        uow.invites.find_open_application.return_value = Invite.new_application(EMPLOYER, WORKER, 5)

        with pytest.raises(DuplicateEntityError, match="already applied"):
            await ApplyToJobUseCase(uow).execute(WORKER, 5, ApplyToJobRequestDTO())

    @pytest.mark.asyncio
    async def test_closed_job(self, uow, worker):
        uow.users.get_by_id.return_value = worker
        uow.jobs.get_by_id.return_value = make_job(is_active=False)

        with pytest.raises(ValidationError, match="not accepting applications"):
            await ApplyToJobUseCase(uow).execute(WORKER, 5, ApplyToJobRequestDTO())


class TestNormalizePage:
    """Test cases for page clamping."""

    @pytest.mark.parametrize("page, limit, expected", [
        (None, None, (1, 20)),
        (0, 5, (1, 5)),
        (3, 500, (3, 100)),
    ])
    def test_clamps(self, page, limit, expected):
        assert normalize_page(page, limit, 20) == expected
