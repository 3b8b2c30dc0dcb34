"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.marketplace.api.dependencies.db import DBSession
from src.marketplace.repositories import (
    JoinRequestRepository,
    NotificationRepository,
    OrganizationMemberRepository,
    OrganizationRepository,
    PartnershipApplicationRepository,
    PartnershipInterestRepository,
    PartnershipRepository,
    ProjectApplicationRepository,
    ProjectRepository,
    SystemSettingRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_organization_repository(session: DBSession) -> OrganizationRepository:
    return OrganizationRepository(session)


def get_member_repository(session: DBSession) -> OrganizationMemberRepository:
    return OrganizationMemberRepository(session)


def get_interest_repository(session: DBSession) -> PartnershipInterestRepository:
    return PartnershipInterestRepository(session)


def get_application_repository(session: DBSession) -> ProjectApplicationRepository:
    return ProjectApplicationRepository(session)


def get_join_request_repository(session: DBSession) -> JoinRequestRepository:
    return JoinRequestRepository(session)


def get_partnership_application_repository(
    session: DBSession,
) -> PartnershipApplicationRepository:
    return PartnershipApplicationRepository(session)


def get_partnership_repository(session: DBSession) -> PartnershipRepository:
    return PartnershipRepository(session)


def get_notification_repository(session: DBSession) -> NotificationRepository:
    """Notification repository on the request session (for reads and mark-read)."""
    return NotificationRepository(session)


def get_system_setting_repository(session: DBSession) -> SystemSettingRepository:
    return SystemSettingRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
OrganizationRepo = Annotated[OrganizationRepository, Depends(get_organization_repository)]
MemberRepo = Annotated[OrganizationMemberRepository, Depends(get_member_repository)]
InterestRepo = Annotated[PartnershipInterestRepository, Depends(get_interest_repository)]
ApplicationRepo = Annotated[ProjectApplicationRepository, Depends(get_application_repository)]
JoinRequestRepo = Annotated[JoinRequestRepository, Depends(get_join_request_repository)]
PartnershipApplicationRepo = Annotated[
    PartnershipApplicationRepository, Depends(get_partnership_application_repository)
]
PartnershipRepo = Annotated[PartnershipRepository, Depends(get_partnership_repository)]
NotificationRepo = Annotated[NotificationRepository, Depends(get_notification_repository)]
SystemSettingRepo = Annotated[SystemSettingRepository, Depends(get_system_setting_repository)]
