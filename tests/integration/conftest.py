"""Integration test fixtures for database operations.

These fixtures require a reachable PostgreSQL database (DATABASE_URL).
Tests are skipped when it cannot be reached.
"""

from collections.abc import AsyncGenerator, Callable

import pytest
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from src.marketplace import models  # noqa: F401 - registers tables on the metadata
from src.marketplace.core.config import get_settings
from src.marketplace.repositories import (
    NotificationRepository,
    OrganizationMemberRepository,
    OrganizationRepository,
    PartnershipRepository,
    ProjectApplicationRepository,
    ProjectRepository,
    UserRepository,
)
from src.marketplace.services import (
    ApplicationService,
    NotificationService,
    PartnershipMaterializer,
    PartnershipViewService,
    ProjectService,
)

pytestmark = pytest.mark.integration


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh schema per test, dropped afterwards."""
    test_engine = create_async_engine(get_settings().database_url, poolclass=NullPool)
    try:
        async with test_engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(SQLModel.metadata.drop_all)
            await conn.run_sync(SQLModel.metadata.create_all)
    except (DBAPIError, OSError) as e:
        await test_engine.dispose()
        pytest.skip(f"PostgreSQL not reachable: {e}")

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Async session for arranging and inspecting rows. Commit explicitly."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


def _notifier(notification_session: AsyncSession) -> NotificationService:
    return NotificationService(
        NotificationRepository(notification_session),
        notification_session,
        user_repo=UserRepository(notification_session),
    )


@pytest.fixture
def application_service_factory(
    engine: AsyncEngine,
) -> Callable[[AsyncSession, AsyncSession], ApplicationService]:
    """Build an ApplicationService the way the API does, on caller-owned sessions."""

    def build(session: AsyncSession, notification_session: AsyncSession) -> ApplicationService:
        project_repo = ProjectRepository(session)
        return ApplicationService(
            ProjectApplicationRepository(session),
            project_repo,
            OrganizationMemberRepository(session),
            PartnershipMaterializer(project_repo, PartnershipRepository(session)),
            _notifier(notification_session),
            session,
        )

    return build


@pytest.fixture
def project_service_factory(
    engine: AsyncEngine,
) -> Callable[[AsyncSession, AsyncSession], ProjectService]:
    """Build a ProjectService the way the API does, on caller-owned sessions."""

    def build(session: AsyncSession, notification_session: AsyncSession) -> ProjectService:
        project_repo = ProjectRepository(session)
        application_repo = ProjectApplicationRepository(session)
        return ProjectService(
            project_repo,
            OrganizationRepository(session),
            OrganizationMemberRepository(session),
            application_repo,
            PartnershipViewService(PartnershipRepository(session), application_repo, project_repo),
            _notifier(notification_session),
            session,
        )

    return build
