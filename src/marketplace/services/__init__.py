from src.marketplace.services.admin_service import AdminService
from src.marketplace.services.application_service import ApplicationService
from src.marketplace.services.join_request_service import JoinRequestService
from src.marketplace.services.notification_service import NotificationService
from src.marketplace.services.organization_service import OrganizationService
from src.marketplace.services.partnership_application_service import (
    PartnershipApplicationService,
    PartnershipInterestService,
)
from src.marketplace.services.partnership_service import (
    PartnershipMaterializer,
    PartnershipViewService,
)
from src.marketplace.services.policy_service import Policy, PolicyResolver
from src.marketplace.services.project_service import ProjectService

__all__ = [
    "AdminService",
    "ApplicationService",
    "JoinRequestService",
    "NotificationService",
    "OrganizationService",
    "PartnershipApplicationService",
    "PartnershipInterestService",
    "PartnershipMaterializer",
    "PartnershipViewService",
    "Policy",
    "PolicyResolver",
    "ProjectService",
]
