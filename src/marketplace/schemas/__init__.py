from src.marketplace.schemas.admin import (
    PendingApprovalsResponse,
    SettingRead,
    SettingsResponse,
    SettingUpdate,
)
from src.marketplace.schemas.common import DecisionRequest
from src.marketplace.schemas.notification import MarkAllReadResponse, NotificationRead
from src.marketplace.schemas.organization import (
    InterestCreate,
    InterestRead,
    JoinRequestCreate,
    JoinRequestRead,
    OrganizationCreate,
    OrganizationRead,
    PartnershipApplicationCreate,
    PartnershipApplicationRead,
)
from src.marketplace.schemas.pagination import PaginatedResponse
from src.marketplace.schemas.partnership import (
    PartnershipListResponse,
    PartnershipRead,
    PartnershipView,
)
from src.marketplace.schemas.project import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationRead,
    ApplicationsToggle,
    ProjectCreate,
    ProjectRead,
)

__all__ = [
    # Admin
    "PendingApprovalsResponse",
    "SettingRead",
    "SettingsResponse",
    "SettingUpdate",
    # Decisions
    "DecisionRequest",
    # Notifications
    "MarkAllReadResponse",
    "NotificationRead",
    # Organizations
    "InterestCreate",
    "InterestRead",
    "JoinRequestCreate",
    "JoinRequestRead",
    "OrganizationCreate",
    "OrganizationRead",
    "PartnershipApplicationCreate",
    "PartnershipApplicationRead",
    # Pagination
    "PaginatedResponse",
    # Partnerships
    "PartnershipListResponse",
    "PartnershipRead",
    "PartnershipView",
    # Projects
    "ApplicationCreate",
    "ApplicationListResponse",
    "ApplicationRead",
    "ApplicationsToggle",
    "ProjectCreate",
    "ProjectRead",
]
