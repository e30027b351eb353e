from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.models.notification import Notification, NotificationType
from clinic.models.user import User
from clinic.services.exceptions import NotFound


async def notify(
    session: AsyncSession, user_id: str, type_: NotificationType, message: str
) -> Notification:
    notification = Notification(user_id=user_id, type=type_, message=message)
    session.add(notification)
    await session.flush()
    return notification


async def list_notifications(
    session: AsyncSession, user_ids: Iterable[str], unread_only: bool = False
) -> list[Notification]:
    q = (
        select(Notification)
        .where(Notification.user_id.in_(list(user_ids)))
        .order_by(Notification.created_at.desc())
    )
    if unread_only:
        q = q.where(Notification.read == False)  # noqa: E712
    result = await session.execute(q)
    return list(result.scalars().all())


async def mark_notification_read(
    session: AsyncSession, notification_id: str, user_ids: Iterable[str]
) -> Notification:
    result = await session.execute(
        select(Notification).where(
            Notification.id == notification_id,
            Notification.user_id.in_(list(user_ids)),
        )
    )
    notification = result.scalar_one_or_none()
    if not notification:
        raise NotFound("Notification not found")
    notification.read = True
    session.add(notification)
    await session.flush()
    return notification


async def resolve_recipient(session: AsyncSession, notification: Notification) -> tuple[str, str | None] | None:
    """Returns (email, name) for the notification target, or None when it has no address."""
    if "@" in notification.user_id:
        return notification.user_id, None
    result = await session.execute(select(User).where(User.id == notification.user_id))
    user = result.scalar_one_or_none()
    if not user:
        return None
    return user.email, user.name
