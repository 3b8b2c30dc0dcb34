"""Shared enums for models."""

from enum import Enum


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    DRAFT = "draft"
    PENDING_PUBLISH = "pending_publish"
    PUBLISHED = "published"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class OrganizationStatus(str, Enum):
    """Organization approval status."""

    PENDING_APPROVAL = "pending_approval"
    ACTIVE = "active"
    REJECTED = "rejected"


class RequestStatus(str, Enum):
    """Status of an application or join request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Decision(str, Enum):
    """Outcome an owner or admin can choose for a pending request."""

    APPROVED = "approved"
    REJECTED = "rejected"


class PartnershipStatus(str, Enum):
    """Status of a durable partnership record."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    REJECTED = "rejected"


class PartnershipType(str, Enum):
    """Kind of contribution a partner offers."""

    MONETARY = "monetary"
    KNOWLEDGE = "knowledge"
    SKILLED = "skilled"
    VOLUNTEERING = "volunteering"


class MemberRole(str, Enum):
    """User role within an organization."""

    OWNER = "owner"
    MEMBER = "member"


class SettingKey(str, Enum):
    """Keys of the system-wide policy settings."""

    AUTO_APPROVE_ORGANIZATIONS = "auto_approve_organizations"
    AUTO_APPROVE_PROJECTS = "auto_approve_projects"
    REQUIRE_PROJECT_APPROVAL = "require_project_approval"
