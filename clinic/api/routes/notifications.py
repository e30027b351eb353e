from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.api.deps import get_current_user, get_session
from clinic.models.notification import Notification, NotificationPublic
from clinic.models.user import User
from clinic.services.auth_service import inbox_ids
from clinic.services.email_service import send_notification_email
from clinic.services.notification_service import (
    list_notifications,
    mark_notification_read,
    resolve_recipient,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


async def schedule_notification_emails(
    background_tasks: BackgroundTasks,
    session: AsyncSession,
    notifications: list[Notification],
) -> None:
    """Queue an email copy of each notification whose target has an address."""
    for notification in notifications:
        recipient = await resolve_recipient(session, notification)
        if not recipient:
            continue
        to_email, name = recipient
        background_tasks.add_task(
            send_notification_email,
            to_email=to_email,
            recipient_name=name,
            notification_type=notification.type,
            message=notification.message,
        )


@router.get("", response_model=list[NotificationPublic])
async def my_notifications(
    unread_only: bool = Query(False),
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> list[NotificationPublic]:
    notifications = await list_notifications(session, inbox_ids(current_user), unread_only=unread_only)
    return [NotificationPublic.model_validate(n) for n in notifications]


@router.post("/{notification_id}/read", response_model=NotificationPublic)
async def read_notification(
    notification_id: str,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> NotificationPublic:
    notification = await mark_notification_read(session, notification_id, inbox_ids(current_user))
    return NotificationPublic.model_validate(notification)
