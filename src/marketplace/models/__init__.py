"""Model exports.

Import from here: `from src.marketplace.models import Project, Partnership`
"""

from src.marketplace.models.enums import (
    Decision,
    MemberRole,
    OrganizationStatus,
    PartnershipStatus,
    PartnershipType,
    ProjectStatus,
    RequestStatus,
    SettingKey,
)
from src.marketplace.models.notification import Notification
from src.marketplace.models.organization import (
    Organization,
    OrganizationMember,
    PartnershipInterest,
)
from src.marketplace.models.partnership import Partnership
from src.marketplace.models.project import Project
from src.marketplace.models.requests import (
    OrganizationJoinRequest,
    PartnershipApplication,
    ProjectApplication,
)
from src.marketplace.models.system_setting import SystemSetting
from src.marketplace.models.user import User

__all__ = [
    # Enums
    "Decision",
    "MemberRole",
    "OrganizationStatus",
    "PartnershipStatus",
    "PartnershipType",
    "ProjectStatus",
    "RequestStatus",
    "SettingKey",
    # Models
    "Notification",
    "Organization",
    "OrganizationJoinRequest",
    "OrganizationMember",
    "Partnership",
    "PartnershipApplication",
    "PartnershipInterest",
    "Project",
    "ProjectApplication",
    "SystemSetting",
    "User",
]
