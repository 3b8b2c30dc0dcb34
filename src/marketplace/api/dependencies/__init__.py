"""FastAPI dependency injection definitions.

Re-exports all dependencies so routers import from one place.
"""

# Auth
from src.marketplace.api.dependencies.auth import (
    AdminUser,
    CurrentUser,
    get_current_user,
    require_admin,
)

# Database
from src.marketplace.api.dependencies.db import DBSession, get_db_session

# Repositories
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

# Services
from src.marketplace.api.dependencies.services import (
    AdminServiceDep,
    ApplicationServiceDep,
    InterestServiceDep,
    JoinRequestServiceDep,
    NotificationServiceDep,
    Notifier,
    OrganizationServiceDep,
    PartnershipApplicationServiceDep,
    PartnershipViewServiceDep,
    PolicyDep,
    PolicyResolverDep,
    ProjectServiceDep,
    get_notifier,
    get_policy,
    get_policy_resolver,
)

__all__ = [
    # Auth
    "AdminUser",
    "CurrentUser",
    "get_current_user",
    "require_admin",
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "ApplicationRepo",
    "InterestRepo",
    "JoinRequestRepo",
    "MemberRepo",
    "NotificationRepo",
    "OrganizationRepo",
    "PartnershipApplicationRepo",
    "PartnershipRepo",
    "ProjectRepo",
    "SystemSettingRepo",
    "UserRepo",
    # Services
    "AdminServiceDep",
    "ApplicationServiceDep",
    "InterestServiceDep",
    "JoinRequestServiceDep",
    "NotificationServiceDep",
    "Notifier",
    "OrganizationServiceDep",
    "PartnershipApplicationServiceDep",
    "PartnershipViewServiceDep",
    "PolicyDep",
    "PolicyResolverDep",
    "ProjectServiceDep",
    "get_notifier",
    "get_policy",
    "get_policy_resolver",
]
