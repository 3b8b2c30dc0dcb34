"""Repository layer - data access abstraction.

Re-exports all repositories for convenience.
"""

from src.marketplace.repositories.base import BaseRepository
from src.marketplace.repositories.notification import NotificationRepository
from src.marketplace.repositories.organization import (
    OrganizationMemberRepository,
    OrganizationRepository,
    PartnershipInterestRepository,
)
from src.marketplace.repositories.partnership import PartnershipRepository
from src.marketplace.repositories.project import ProjectRepository
from src.marketplace.repositories.requests import (
    JoinRequestRepository,
    PartnershipApplicationRepository,
    ProjectApplicationRepository,
)
from src.marketplace.repositories.system_setting import SystemSettingRepository
from src.marketplace.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "JoinRequestRepository",
    "NotificationRepository",
    "OrganizationMemberRepository",
    "OrganizationRepository",
    "PartnershipApplicationRepository",
    "PartnershipInterestRepository",
    "PartnershipRepository",
    "ProjectApplicationRepository",
    "ProjectRepository",
    "SystemSettingRepository",
    "UserRepository",
]
