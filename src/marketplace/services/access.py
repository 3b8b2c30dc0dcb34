"""Authorization checks shared by the lifecycle services."""

from uuid import UUID

from src.marketplace.core.exceptions import UnauthorizedError
from src.marketplace.models import User


def ensure_admin(actor: User) -> None:
    """Require platform admin rights."""
    if not actor.is_admin:
        raise UnauthorizedError("Admin role required for this operation")


def ensure_owner_or_admin(actor: User, owner_id: UUID, resource: str) -> None:
    """Require the actor to own the resource or be a platform admin."""
    if actor.id != owner_id and not actor.is_admin:
        raise UnauthorizedError(f"Only the {resource} owner or an admin can do this")
