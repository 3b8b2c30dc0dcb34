"""Service factory dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.marketplace.api.dependencies.db import DBSession
from src.marketplace.api.dependencies.repositories import (
    ApplicationRepo,
    InterestRepo,
    JoinRequestRepo,
    MemberRepo,
    NotificationRepo,
    OrganizationRepo,
    PartnershipApplicationRepo,
    PartnershipRepo,
    ProjectRepo,
    SystemSettingRepo,
    UserRepo,
)
from src.marketplace.core.db.engine import get_engine
from src.marketplace.repositories import NotificationRepository, UserRepository
from src.marketplace.services import (
    AdminService,
    ApplicationService,
    JoinRequestService,
    NotificationService,
    OrganizationService,
    PartnershipApplicationService,
    PartnershipInterestService,
    PartnershipMaterializer,
    PartnershipViewService,
    Policy,
    PolicyResolver,
    ProjectService,
)


async def get_notifier() -> AsyncGenerator[NotificationService]:
    """Get the notification emitter with its own isolated session.

    Notifications commit independently from the business transaction, so a
    failed notification write can never undo a decision.
    """
    engine = get_engine()
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield NotificationService(
            NotificationRepository(session), session, user_repo=UserRepository(session)
        )


Notifier = Annotated[NotificationService, Depends(get_notifier)]


def get_notification_service(
    notification_repo: NotificationRepo, user_repo: UserRepo, session: DBSession
) -> NotificationService:
    """Get notification service on the request session (for the inbox endpoints)."""
    return NotificationService(notification_repo, session, user_repo=user_repo)


def get_policy_resolver(
    setting_repo: SystemSettingRepo, session: DBSession
) -> PolicyResolver:
    return PolicyResolver(setting_repo, session)


PolicyResolverDep = Annotated[PolicyResolver, Depends(get_policy_resolver)]


async def get_policy(resolver: PolicyResolverDep) -> Policy:
    """Resolve the approval policy once per request."""
    return await resolver.resolve()


def get_partnership_view_service(
    partnership_repo: PartnershipRepo,
    application_repo: ApplicationRepo,
    project_repo: ProjectRepo,
) -> PartnershipViewService:
    return PartnershipViewService(partnership_repo, application_repo, project_repo)


PartnershipViewServiceDep = Annotated[
    PartnershipViewService, Depends(get_partnership_view_service)
]


def get_application_service(
    application_repo: ApplicationRepo,
    project_repo: ProjectRepo,
    member_repo: MemberRepo,
    partnership_repo: PartnershipRepo,
    notifier: Notifier,
    session: DBSession,
) -> ApplicationService:
    materializer = PartnershipMaterializer(project_repo, partnership_repo)
    return ApplicationService(
        application_repo, project_repo, member_repo, materializer, notifier, session
    )


def get_join_request_service(
    join_request_repo: JoinRequestRepo,
    organization_repo: OrganizationRepo,
    member_repo: MemberRepo,
    notifier: Notifier,
    session: DBSession,
) -> JoinRequestService:
    return JoinRequestService(join_request_repo, organization_repo, member_repo, notifier, session)


def get_interest_service(
    interest_repo: InterestRepo,
    organization_repo: OrganizationRepo,
    session: DBSession,
) -> PartnershipInterestService:
    return PartnershipInterestService(interest_repo, organization_repo, session)


def get_partnership_application_service(
    application_repo: PartnershipApplicationRepo,
    interest_repo: InterestRepo,
    organization_repo: OrganizationRepo,
    project_repo: ProjectRepo,
    notifier: Notifier,
    session: DBSession,
) -> PartnershipApplicationService:
    return PartnershipApplicationService(
        application_repo, interest_repo, organization_repo, project_repo, notifier, session
    )


def get_project_service(
    project_repo: ProjectRepo,
    organization_repo: OrganizationRepo,
    member_repo: MemberRepo,
    application_repo: ApplicationRepo,
    partnership_views: PartnershipViewServiceDep,
    notifier: Notifier,
    session: DBSession,
) -> ProjectService:
    return ProjectService(
        project_repo,
        organization_repo,
        member_repo,
        application_repo,
        partnership_views,
        notifier,
        session,
    )


def get_organization_service(
    organization_repo: OrganizationRepo,
    member_repo: MemberRepo,
    notifier: Notifier,
    session: DBSession,
) -> OrganizationService:
    return OrganizationService(organization_repo, member_repo, notifier, session)


def get_admin_service(
    organization_repo: OrganizationRepo, project_repo: ProjectRepo
) -> AdminService:
    return AdminService(organization_repo, project_repo)


NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
PolicyDep = Annotated[Policy, Depends(get_policy)]
ApplicationServiceDep = Annotated[ApplicationService, Depends(get_application_service)]
JoinRequestServiceDep = Annotated[JoinRequestService, Depends(get_join_request_service)]
InterestServiceDep = Annotated[PartnershipInterestService, Depends(get_interest_service)]
PartnershipApplicationServiceDep = Annotated[
    PartnershipApplicationService, Depends(get_partnership_application_service)
]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
OrganizationServiceDep = Annotated[OrganizationService, Depends(get_organization_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
