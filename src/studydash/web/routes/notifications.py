"""Notification endpoints."""

from fastapi import APIRouter, Depends

from studydash.store.repository import DashboardRepository
from studydash.web.dependencies import get_repository, get_user_id
from studydash.web.schemas import (
    MarkAllReadResponse,
    NotificationResponse,
    UnreadCountResponse,
)

router = APIRouter(prefix="/api/user/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    repo: DashboardRepository = Depends(get_repository),
    user_id: int = Depends(get_user_id),
) -> list[NotificationResponse]:
    """Notifications of the user, newest first."""
    return [NotificationResponse.model_validate(n) for n in repo.get_notifications(user_id)]


@router.get("/unread/count", response_model=UnreadCountResponse)
async def count_unread_notifications(
    repo: DashboardRepository = Depends(get_repository),
    user_id: int = Depends(get_user_id),
) -> UnreadCountResponse:
    return UnreadCountResponse(count=repo.get_unread_notification_count(user_id))


@router.patch("/read-all", response_model=MarkAllReadResponse)
async def mark_all_notifications_read(
    repo: DashboardRepository = Depends(get_repository),
    user_id: int = Depends(get_user_id),
) -> MarkAllReadResponse:
    """Mark every unread notification as read."""
    return MarkAllReadResponse(updated=repo.mark_all_notifications_as_read(user_id))


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: int,
    repo: DashboardRepository = Depends(get_repository),
) -> NotificationResponse:
    """Mark one notification as read. Unknown ids give 404."""
    notification = repo.mark_notification_as_read(notification_id)
    return NotificationResponse.model_validate(notification)
