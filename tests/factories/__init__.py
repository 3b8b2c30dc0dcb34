"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.marketplace import (
    JoinRequestFactory,
    NotificationFactory,
    OrganizationFactory,
    PartnershipApplicationFactory,
    PartnershipFactory,
    PartnershipInterestFactory,
    ProjectApplicationFactory,
    ProjectFactory,
)
from tests.factories.user import UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # User
    "UserFactory",
    # Marketplace
    "JoinRequestFactory",
    "NotificationFactory",
    "OrganizationFactory",
    "PartnershipApplicationFactory",
    "PartnershipFactory",
    "PartnershipInterestFactory",
    "ProjectApplicationFactory",
    "ProjectFactory",
]
