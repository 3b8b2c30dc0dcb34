"""Notification emitter - user-directed in-app notifications."""

import contextlib
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.marketplace.core.config import get_settings
from src.marketplace.core.exceptions import NotFoundError, UnauthorizedError
from src.marketplace.core.logging import get_logger
from src.marketplace.core.notifications import send_notification_email
from src.marketplace.models import Notification, User
from src.marketplace.repositories import NotificationRepository, UserRepository

logger = get_logger(__name__)


def project_link(project_id: UUID) -> str:
    return f"/projects/{project_id}"


def project_edit_link(project_id: UUID) -> str:
    return f"/projects/{project_id}/edit"


def organization_link(organization_id: UUID) -> str:
    return f"/organizations/{organization_id}"


class NotificationService:
    """Service for emitting and reading notifications.

    Fire-and-forget design: emitting is best effort. The decision that caused
    a notification is already committed, so failures here are logged and
    swallowed. Give this service its own session when it runs next to a
    business transaction, so its rollback cannot touch that transaction.
    """

    def __init__(
        self,
        notification_repo: NotificationRepository,
        session: AsyncSession,
        user_repo: UserRepository | None = None,
    ):
        self.notification_repo = notification_repo
        self.session = session
        self.user_repo = user_repo

    async def notify(
        self,
        user_id: UUID,
        title: str,
        message: str,
        link: str | None = None,
    ) -> Notification | None:
        """Write one notification for a recipient.

        Returns:
            The created Notification, or None if it could not be stored
        """
        try:
            notification = Notification(user_id=user_id, title=title, message=message, link=link)
            self.notification_repo.add(notification)
            await self.session.commit()
        except Exception as e:
            logger.warning(
                "Failed to emit notification",
                recipient=str(user_id),
                title=title,
                error=str(e),
            )
            with contextlib.suppress(Exception):
                await self.session.rollback()
            return None

        logger.debug("Notification emitted", recipient=str(user_id), title=title)
        await self._mirror_by_email([user_id], title, message, link)
        return notification

    async def notify_many(
        self,
        user_ids: Iterable[UUID],
        title: str,
        message: str,
        link: str | None = None,
    ) -> int:
        """Write the same notification for several recipients (each once).

        Returns:
            Number of notifications written (0 if storing failed)
        """
        recipients = list(dict.fromkeys(user_ids))
        if not recipients:
            return 0

        try:
            for user_id in recipients:
                self.notification_repo.add(
                    Notification(user_id=user_id, title=title, message=message, link=link)
                )
            await self.session.commit()
        except Exception as e:
            logger.warning(
                "Failed to emit notifications",
                recipients=len(recipients),
                title=title,
                error=str(e),
            )
            with contextlib.suppress(Exception):
                await self.session.rollback()
            return 0

        logger.debug("Notifications emitted", recipients=len(recipients), title=title)
        await self._mirror_by_email(recipients, title, message, link)
        return len(recipients)

    async def _mirror_by_email(
        self, user_ids: list[UUID], title: str, message: str, link: str | None
    ) -> None:
        settings = get_settings()
        if not settings.notification_emails_enabled or self.user_repo is None:
            return
        try:
            users = await self.user_repo.get_many(user_ids)
        except Exception as e:
            logger.warning("Could not load recipients for email", error=str(e))
            return
        for user in users.values():
            send_notification_email(user.email, user.full_name, title, message, link)

    async def list_for_user(
        self,
        user_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
        unread_only: bool = False,
    ) -> tuple[list[Notification], str | None, bool]:
        """List a user's notifications, newest first."""
        return await self.notification_repo.list_for_user(
            user_id, cursor=cursor, limit=limit, unread_only=unread_only
        )

    async def mark_read(self, notification_id: UUID, actor: User) -> Notification:
        """Mark one notification read. Only its recipient may do this."""
        notification = await self.notification_repo.get_by_id(notification_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        if notification.user_id != actor.id:
            raise UnauthorizedError("Notifications can only be marked read by their recipient")
        if not notification.read:
            notification.read = True
            await self.session.commit()
        return notification

    async def mark_all_read(self, actor: User) -> int:
        """Mark all of the actor's notifications read. Returns how many changed."""
        changed = await self.notification_repo.mark_all_read(actor.id)
        await self.session.commit()
        return changed
