from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from sqlmodel import Field, SQLModel


def _utc_naive_now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class NotificationType(str, Enum):
    appointment_requested = "appointment_requested"
    appointment_approved = "appointment_approved"
    appointment_declined = "appointment_declined"


class Notification(SQLModel, table=True):
    __tablename__ = "notifications"
    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True)
    # A user id, or a shared inbox id such as the reception address
    user_id: str = Field(index=True)
    type: NotificationType
    message: str
    read: bool = False
    created_at: datetime = Field(default_factory=_utc_naive_now, index=True)


class NotificationPublic(SQLModel):
    id: str
    user_id: str
    type: NotificationType
    message: str
    read: bool
    created_at: datetime
