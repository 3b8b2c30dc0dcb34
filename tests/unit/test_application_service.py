"""Tests for ApplicationService: submitting and deciding project applications."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from src.marketplace.core.exceptions import (
    ApplicationsClosedError,
    DependencyFailureError,
    InvalidTransitionError,
    NotFoundError,
    UnauthorizedError,
)
from src.marketplace.models import (
    MemberRole,
    OrganizationMember,
    Partnership,
    PartnershipStatus,
    PartnershipType,
    ProjectStatus,
    RequestStatus,
)
from tests.factories import (
    OrganizationFactory,
    ProjectApplicationFactory,
    ProjectFactory,
    UserFactory,
    generate_uuid,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def organizer():
    return UserFactory.build(full_name="Olivia Organizer")


@pytest.fixture
def applicant():
    return UserFactory.build(full_name="Uma Applicant")


@pytest.fixture
def project(store, organizer):
    project = ProjectFactory.build(organizer_id=organizer.id)
    store.seed(organizer, project)
    return project


class TestSubmitApplication:
    async def test_creates_pending_application(self, marketplace, project, applicant):
        application = await marketplace.application_service.submit_application(
            project.id, applicant, PartnershipType.SKILLED, message="I can build things"
        )

        assert application.status == RequestStatus.PENDING.value
        assert application.partnership_type == "skilled"
        assert application.user_id == applicant.id
        assert await marketplace.applications.get_by_id(application.id) is application

    async def test_unknown_project(self, marketplace, applicant):
        with pytest.raises(NotFoundError):
            await marketplace.application_service.submit_application(
                generate_uuid(), applicant, PartnershipType.SKILLED
            )

    async def test_applications_disabled(self, marketplace, project, applicant):
        project.applications_enabled = False

        with pytest.raises(ApplicationsClosedError):
            await marketplace.application_service.submit_application(
                project.id, applicant, PartnershipType.SKILLED
            )
        assert marketplace.session.rollbacks == 1

    @pytest.mark.parametrize(
        "status",
        [ProjectStatus.DRAFT, ProjectStatus.PENDING_PUBLISH, ProjectStatus.COMPLETED],
    )
    async def test_project_not_open(self, marketplace, project, applicant, status):
        project.status = status.value

        with pytest.raises(ApplicationsClosedError):
            await marketplace.application_service.submit_application(
                project.id, applicant, PartnershipType.SKILLED
            )

    async def test_in_progress_project_accepts_applications(
        self, marketplace, project, applicant
    ):
        project.status = ProjectStatus.IN_PROGRESS.value

        application = await marketplace.application_service.submit_application(
            project.id, applicant, PartnershipType.VOLUNTEERING
        )

        assert application.status == RequestStatus.PENDING.value

    async def test_multiple_pending_applications_allowed(self, marketplace, project, applicant):
        service = marketplace.application_service

        first = await service.submit_application(project.id, applicant, PartnershipType.SKILLED)
        second = await service.submit_application(project.id, applicant, PartnershipType.MONETARY)

        pending = await marketplace.applications.list_for_project(
            project.id, status=RequestStatus.PENDING
        )
        assert {a.id for a in pending} == {first.id, second.id}

    async def test_on_behalf_of_organization_requires_membership(
        self, marketplace, store, project, applicant
    ):
        organization = OrganizationFactory.build(owner_id=generate_uuid())
        store.seed(organization)

        with pytest.raises(UnauthorizedError):
            await marketplace.application_service.submit_application(
                project.id,
                applicant,
                PartnershipType.MONETARY,
                organization_id=organization.id,
            )

    async def test_on_behalf_of_own_organization(self, marketplace, store, project, applicant):
        organization = OrganizationFactory.build(owner_id=applicant.id)
        store.seed(
            organization,
            OrganizationMember(
                organization_id=organization.id,
                user_id=applicant.id,
                role=MemberRole.OWNER.value,
            ),
        )

        application = await marketplace.application_service.submit_application(
            project.id, applicant, PartnershipType.MONETARY, organization_id=organization.id
        )

        assert application.organization_id == organization.id


class TestDecideApplication:
    async def test_approve_scenario(self, marketplace, project, organizer, applicant):
        """Apply, approve: one active partnership and one linked notification."""
        service = marketplace.application_service
        application = await service.submit_application(
            project.id, applicant, PartnershipType.SKILLED
        )

        decided = await service.decide_application(application.id, "approved", organizer)

        assert decided.status == RequestStatus.APPROVED.value
        assert decided.decided_by_user_id == organizer.id
        assert decided.decided_at is not None

        partnerships = marketplace.partnerships_for(project.id, applicant.id)
        assert len(partnerships) == 1
        assert partnerships[0].status == PartnershipStatus.ACTIVE.value
        assert partnerships[0].partnership_type == "skilled"

        notifications = marketplace.notifications_for(applicant.id)
        assert len(notifications) == 1
        assert notifications[0].title == "Application Approved"
        assert notifications[0].link == f"/projects/{project.id}"
        assert notifications[0].read is False

    async def test_reject(self, marketplace, store, project, organizer, applicant):
        application = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        store.seed(application)

        decided = await marketplace.application_service.decide_application(
            application.id, "rejected", organizer
        )

        assert decided.status == RequestStatus.REJECTED.value
        assert marketplace.partnerships_for(project.id, applicant.id) == []
        notifications = marketplace.notifications_for(applicant.id)
        assert [n.title for n in notifications] == ["Application Rejected"]
        assert notifications[0].link is None

    async def test_rejection_leaves_project_open(
        self, marketplace, store, project, organizer, applicant
    ):
        application = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        store.seed(application)

        await marketplace.application_service.decide_application(
            application.id, "rejected", organizer
        )

        assert project.status == ProjectStatus.PUBLISHED.value
        assert project.applications_enabled is True

    async def test_double_approve_is_idempotent(self, marketplace, store, project, organizer, applicant):
        application = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        store.seed(application)
        service = marketplace.application_service

        first = await service.decide_application(application.id, "approved", organizer)
        second = await service.decide_application(application.id, "approved", organizer)

        assert first is second
        assert len(marketplace.partnerships_for(project.id, applicant.id)) == 1
        assert len(marketplace.notifications_for(applicant.id)) == 1

    async def test_reject_after_approve_is_noop(
        self, marketplace, store, project, organizer, applicant
    ):
        application = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        store.seed(application)
        service = marketplace.application_service

        await service.decide_application(application.id, "approved", organizer)
        result = await service.decide_application(application.id, "rejected", organizer)

        assert result.status == RequestStatus.APPROVED.value
        assert len(marketplace.notifications_for(applicant.id)) == 1

    async def test_repeated_rejection_returns_unchanged(
        self, marketplace, store, project, organizer, applicant
    ):
        application = ProjectApplicationFactory.build(
            project_id=project.id, user_id=applicant.id, status=RequestStatus.REJECTED.value
        )
        store.seed(application)

        result = await marketplace.application_service.decide_application(
            application.id, "rejected", organizer
        )

        assert result is application
        assert result.decided_by_user_id is None
        assert marketplace.notifications_for(applicant.id) == []

    async def test_admin_may_decide(self, marketplace, store, project, applicant):
        application = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        store.seed(application)

        decided = await marketplace.application_service.decide_application(
            application.id, "approved", UserFactory.admin()
        )

        assert decided.status == RequestStatus.APPROVED.value

    async def test_other_user_cannot_decide(self, marketplace, store, project, applicant):
        application = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        store.seed(application)

        with pytest.raises(UnauthorizedError):
            await marketplace.application_service.decide_application(
                application.id, "approved", applicant
            )
        assert application.status == RequestStatus.PENDING.value
        assert marketplace.notifications_for(applicant.id) == []

    async def test_unknown_application(self, marketplace, organizer):
        with pytest.raises(NotFoundError):
            await marketplace.application_service.decide_application(
                generate_uuid(), "approved", organizer
            )

    async def test_invalid_decision(self, marketplace, store, project, organizer, applicant):
        application = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        store.seed(application)

        with pytest.raises(InvalidTransitionError):
            await marketplace.application_service.decide_application(
                application.id, "pending", organizer
            )

    async def test_reactivates_existing_partnership(
        self, marketplace, store, project, organizer, applicant
    ):
        legacy = Partnership(
            project_id=project.id,
            partner_id=applicant.id,
            partnership_type="skilled",
            status=PartnershipStatus.PENDING.value,
        )
        application = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        store.seed(legacy, application)

        await marketplace.application_service.decide_application(
            application.id, "approved", organizer
        )

        assert marketplace.partnerships_for(project.id, applicant.id) == [legacy]
        assert legacy.status == PartnershipStatus.ACTIVE.value

    async def test_database_failure_becomes_dependency_failure(
        self, marketplace, store, project, organizer, applicant
    ):
        application = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        store.seed(application)
        marketplace.session.fail_on_commit = OperationalError("COMMIT", {}, Exception("gone"))

        with pytest.raises(DependencyFailureError):
            await marketplace.application_service.decide_application(
                application.id, "approved", organizer
            )
        assert marketplace.session.rollbacks == 1
        assert marketplace.notifications_for(applicant.id) == []

    async def test_decision_stamps_one_timestamp(
        self, marketplace, store, project, organizer, applicant
    ):
        application = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        store.seed(application)

        result = await marketplace.application_service.decide_application(
            application.id, "rejected", organizer
        )

        assert result.decided_at is not None
        assert result.decided_at == result.updated_at

    async def test_locks_project_before_application(
        self, marketplace, store, project, organizer, applicant
    ):
        """Same lock order as project completion, so the two cannot deadlock."""
        application = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        store.seed(application)
        locks = []
        lock_project = marketplace.projects.get_for_update
        lock_application = marketplace.applications.get_for_update

        async def record_project(id):
            locks.append("project")
            return await lock_project(id)

        async def record_application(id):
            locks.append("application")
            return await lock_application(id)

        marketplace.projects.get_for_update = AsyncMock(side_effect=record_project)
        marketplace.applications.get_for_update = AsyncMock(side_effect=record_application)

        await marketplace.application_service.decide_application(
            application.id, "approved", organizer
        )

        assert locks[:2] == ["project", "application"]
        marketplace.projects.get_for_update.assert_any_await(project.id)

    async def test_decided_while_waiting_for_lock_is_noop(
        self, marketplace, store, project, organizer, applicant
    ):
        """The pending check runs on the row read under lock, not the first read."""
        application = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        store.seed(application)
        lock_project = marketplace.projects.get_for_update

        async def completed_meanwhile(id):
            application.status = RequestStatus.REJECTED.value
            return await lock_project(id)

        marketplace.projects.get_for_update = AsyncMock(side_effect=completed_meanwhile)

        result = await marketplace.application_service.decide_application(
            application.id, "approved", organizer
        )

        assert result.status == RequestStatus.REJECTED.value
        assert marketplace.partnerships_for(project.id, applicant.id) == []
        assert marketplace.notifications_for(applicant.id) == []

    async def test_notification_failure_does_not_undo_approval(
        self, marketplace, store, project, organizer, applicant
    ):
        application = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        store.seed(application)
        marketplace.notification_session.commit = AsyncMock(side_effect=RuntimeError("smtp down"))

        decided = await marketplace.application_service.decide_application(
            application.id, "approved", organizer
        )

        assert decided.status == RequestStatus.APPROVED.value
        assert len(marketplace.partnerships_for(project.id, applicant.id)) == 1
        assert marketplace.session.rollbacks == 0


class TestListApplications:
    async def test_organizer_lists_project_applications(
        self, marketplace, store, project, organizer, applicant
    ):
        older = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        newer = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        store.seed(older, newer)

        applications = await marketplace.application_service.list_for_project(
            project.id, organizer
        )

        assert [a.id for a in applications] == [newer.id, older.id]

    async def test_applicant_cannot_list_project_applications(
        self, marketplace, project, applicant
    ):
        with pytest.raises(UnauthorizedError):
            await marketplace.application_service.list_for_project(project.id, applicant)

    async def test_list_for_user(self, marketplace, store, project, applicant):
        mine = ProjectApplicationFactory.build(project_id=project.id, user_id=applicant.id)
        other = ProjectApplicationFactory.build(project_id=project.id, user_id=generate_uuid())
        store.seed(mine, other)

        applications = await marketplace.application_service.list_for_user(applicant)

        assert applications == [mine]
