"""Notification inbox endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from src.marketplace.api.dependencies import CurrentUser, NotificationServiceDep
from src.marketplace.schemas import (
    MarkAllReadResponse,
    NotificationRead,
    PaginatedResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get(
    "",
    response_model=PaginatedResponse[NotificationRead],
    summary="List my notifications",
)
async def list_notifications(
    user: CurrentUser,
    notification_service: NotificationServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
    unread_only: Annotated[bool, Query(description="Only unread notifications")] = False,
) -> PaginatedResponse[NotificationRead]:
    notifications, next_cursor, has_more = await notification_service.list_for_user(
        user.id, cursor=cursor, limit=limit, unread_only=unread_only
    )
    return PaginatedResponse(
        items=[NotificationRead.model_validate(n) for n in notifications],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post(
    "/read-all",
    response_model=MarkAllReadResponse,
    summary="Mark all notifications read",
)
async def mark_all_read(
    user: CurrentUser,
    notification_service: NotificationServiceDep,
) -> MarkAllReadResponse:
    updated = await notification_service.mark_all_read(user)
    return MarkAllReadResponse(updated=updated)


@router.post(
    "/{notification_id}/read",
    response_model=NotificationRead,
    summary="Mark notification read",
    responses={
        403: {"description": "Not the recipient"},
        404: {"description": "Notification not found"},
    },
)
async def mark_read(
    notification_id: UUID,
    user: CurrentUser,
    notification_service: NotificationServiceDep,
) -> NotificationRead:
    notification = await notification_service.mark_read(notification_id, user)
    return NotificationRead.model_validate(notification)
