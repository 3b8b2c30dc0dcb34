"""Repository queries and row locking against PostgreSQL."""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.marketplace.models import (
    Notification,
    Partnership,
    ProjectApplication,
    ProjectStatus,
    RequestStatus,
    SettingKey,
)
from src.marketplace.repositories import (
    NotificationRepository,
    PartnershipRepository,
    ProjectApplicationRepository,
    ProjectRepository,
    SystemSettingRepository,
)
from tests.factories import (
    NotificationFactory,
    PartnershipFactory,
    ProjectApplicationFactory,
    ProjectFactory,
    UserFactory,
)

pytestmark = pytest.mark.integration


async def _seed(session: AsyncSession, *entities) -> None:
    for entity in entities:
        session.add(entity)
        await session.flush()
    await session.commit()


async def test_pending_applications_for_update(db_session):
    organizer = UserFactory.build()
    project = ProjectFactory.build(organizer_id=organizer.id)
    applicants = [UserFactory.build() for _ in range(2)]
    pending = ProjectApplicationFactory.build(project_id=project.id, user_id=applicants[0].id)
    approved = ProjectApplicationFactory.approved(project_id=project.id, user_id=applicants[1].id)
    await _seed(db_session, organizer, *applicants, project, pending, approved)

    rows = await ProjectApplicationRepository(db_session).list_pending_for_update(project.id)

    assert [r.id for r in rows] == [pending.id]
    await db_session.rollback()


async def test_partnership_lookup_and_listing(db_session):
    organizer, partner = UserFactory.build(), UserFactory.build()
    project = ProjectFactory.build(organizer_id=organizer.id)
    partnership = PartnershipFactory.build(project_id=project.id, partner_id=partner.id)
    await _seed(db_session, organizer, partner, project, partnership)
    repo = PartnershipRepository(db_session)

    found = await repo.get_by_project_and_partner(project.id, partner.id, for_update=True)
    await db_session.commit()

    assert found.id == partnership.id
    assert [p.id for p in await repo.list_for_partner(partner.id)] == [partnership.id]
    assert [p.id for p in await repo.list_for_project(project.id)] == [partnership.id]


async def test_projects_paginate_newest_first(db_session):
    organizer = UserFactory.build()
    projects = [ProjectFactory.build(organizer_id=organizer.id) for _ in range(3)]
    await _seed(db_session, organizer, *projects)
    repo = ProjectRepository(db_session)

    first_page, cursor, has_more = await repo.list_by_organizer(organizer.id, limit=2)
    second_page, _, more_after = await repo.list_by_organizer(
        organizer.id, cursor=cursor, limit=2
    )

    assert has_more is True
    assert more_after is False
    assert len(first_page) == 2
    assert len(second_page) == 1
    assert {p.id for p in first_page + second_page} == {p.id for p in projects}


async def test_mark_all_read(db_session):
    user = UserFactory.build()
    notifications = [NotificationFactory.build(user_id=user.id) for _ in range(2)]
    await _seed(db_session, user, *notifications)

    changed = await NotificationRepository(db_session).mark_all_read(user.id)
    await db_session.commit()

    assert changed == 2
    result = await db_session.execute(select(Notification).where(Notification.read.is_(False)))
    assert result.scalars().all() == []


async def test_setting_upsert(db_session):
    repo = SystemSettingRepository(db_session)

    await repo.upsert(SettingKey.AUTO_APPROVE_PROJECTS.value, True)
    await repo.upsert(SettingKey.AUTO_APPROVE_PROJECTS.value, False)
    await db_session.commit()

    assert await repo.get_values() == {SettingKey.AUTO_APPROVE_PROJECTS.value: False}


async def test_concurrent_approvals_write_one_partnership(
    engine, db_session, application_service_factory
):
    """Two reviewers approving the same application at once produce one partnership."""
    organizer, partner = UserFactory.build(), UserFactory.build()
    project = ProjectFactory.build(organizer_id=organizer.id)
    application = ProjectApplicationFactory.build(project_id=project.id, user_id=partner.id)
    await _seed(db_session, organizer, partner, project, application)

    async def approve():
        async with (
            AsyncSession(engine, expire_on_commit=False) as session,
            AsyncSession(engine, expire_on_commit=False) as notification_session,
        ):
            service = application_service_factory(session, notification_session)
            return await service.decide_application(application.id, "approved", organizer)

    results = await asyncio.gather(approve(), approve())

    assert {r.status for r in results} == {RequestStatus.APPROVED.value}
    rows = (
        await db_session.execute(select(Partnership).where(Partnership.project_id == project.id))
    ).scalars().all()
    assert len(rows) == 1
    notifications = (
        await db_session.execute(select(Notification).where(Notification.user_id == partner.id))
    ).scalars().all()
    assert [n.title for n in notifications] == ["Application Approved"]


async def test_approval_racing_completion_does_not_deadlock(
    engine, db_session, application_service_factory, project_service_factory
):
    """Approving while the organizer completes the project settles either way, never blocks."""
    organizer, partner = UserFactory.build(), UserFactory.build()
    project = ProjectFactory.build(organizer_id=organizer.id)
    application = ProjectApplicationFactory.build(project_id=project.id, user_id=partner.id)
    await _seed(db_session, organizer, partner, project, application)

    async def approve():
        async with (
            AsyncSession(engine, expire_on_commit=False) as session,
            AsyncSession(engine, expire_on_commit=False) as notification_session,
        ):
            service = application_service_factory(session, notification_session)
            return await service.decide_application(application.id, "approved", organizer)

    async def complete():
        async with (
            AsyncSession(engine, expire_on_commit=False) as session,
            AsyncSession(engine, expire_on_commit=False) as notification_session,
        ):
            service = project_service_factory(session, notification_session)
            return await service.complete_project(project.id, organizer)

    _, completed = await asyncio.wait_for(asyncio.gather(approve(), complete()), timeout=10)

    assert completed.status == ProjectStatus.COMPLETED.value
    stored = (
        await db_session.execute(
            select(ProjectApplication)
            .where(ProjectApplication.id == application.id)
            .execution_options(populate_existing=True)
        )
    ).scalar_one()
    partnerships = (
        await db_session.execute(select(Partnership).where(Partnership.project_id == project.id))
    ).scalars().all()
    if stored.status == RequestStatus.APPROVED.value:
        assert len(partnerships) == 1
    else:
        assert stored.status == RequestStatus.REJECTED.value
        assert partnerships == []
