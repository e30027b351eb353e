from datetime import UTC, date, datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel


def _utc_naive_now() -> datetime:
    """Naive UTC for TIMESTAMP WITHOUT TIME ZONE columns."""
    return datetime.now(UTC).replace(tzinfo=None)


class AppointmentStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    declined = "declined"
    completed = "completed"


# Statuses that hold a slot; declined/completed release it
ACTIVE_STATUSES = (AppointmentStatus.pending, AppointmentStatus.approved)


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    __table_args__ = (
        # At most one active appointment per (date, slot)
        Index(
            "uq_appointments_active_slot",
            "appointment_date",
            "time_slot",
            unique=True,
            sqlite_where=text("status IN ('pending', 'approved')"),
            postgresql_where=text("status IN ('pending', 'approved')"),
        ),
    )
    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True)
    patient_id: str = Field(index=True)
    physiotherapist_id: str = Field(index=True)
    appointment_date: date = Field(index=True)
    time_slot: str
    status: AppointmentStatus = Field(default=AppointmentStatus.pending)
    created_at: datetime = Field(default_factory=_utc_naive_now)
    approved_at: datetime | None = None
    declined_at: datetime | None = None
    completed_at: datetime | None = None


class AppointmentCreate(SQLModel):
    patient_id: str
    physiotherapist_id: str
    appointment_date: date
    time_slot: str


class AppointmentPublic(SQLModel):
    id: str
    patient_id: str
    physiotherapist_id: str
    appointment_date: date
    time_slot: str
    status: AppointmentStatus
    created_at: datetime
    approved_at: datetime | None = None
    declined_at: datetime | None = None
    completed_at: datetime | None = None


class AppointmentOverview(AppointmentPublic):
    patient_name: str
    physiotherapist_name: str
