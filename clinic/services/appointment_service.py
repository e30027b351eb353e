import logging
from datetime import UTC, date, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.config import settings
from clinic.models.appointment import (
    Appointment,
    AppointmentCreate,
    AppointmentOverview,
    AppointmentStatus,
)
from clinic.models.notification import Notification, NotificationType
from clinic.models.patient import Patient
from clinic.models.physiotherapist import Physiotherapist
from clinic.services.exceptions import (
    InvalidSlot,
    InvalidTransition,
    NotAssigned,
    NotFound,
    SlotConflict,
    ValidationFailed,
)
from clinic.services.notification_service import notify
from clinic.services.patient_service import UNKNOWN
from clinic.services.slot_service import is_slot_booked, is_slot_offered, slot_sort_key

logger = logging.getLogger(__name__)

# Allowed status changes; anything else is rejected
TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.pending: frozenset({AppointmentStatus.approved, AppointmentStatus.declined}),
    AppointmentStatus.approved: frozenset({AppointmentStatus.completed}),
    AppointmentStatus.declined: frozenset(),
    AppointmentStatus.completed: frozenset(),
}


def _utc_naive_now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def _display_date(d: date) -> str:
    return f"{d.month}/{d.day}/{d.year}"


async def get_appointment(session: AsyncSession, appointment_id: str) -> Appointment:
    result = await session.execute(select(Appointment).where(Appointment.id == appointment_id))
    appointment = result.scalar_one_or_none()
    if not appointment:
        raise NotFound(f"Appointment {appointment_id} not found")
    return appointment


async def create_appointment(
    session: AsyncSession, data: AppointmentCreate
) -> tuple[Appointment, list[Notification]]:
    """Book a pending appointment and notify the physiotherapist.

    The availability re-check and the insert happen in the same session; the
    partial unique index on (appointment_date, time_slot) rejects a racing
    insert that slipped past the check.
    """
    if not data.patient_id or not data.physiotherapist_id:
        raise ValidationFailed("Both a patient and a physiotherapist are required")
    patient = await session.get(Patient, data.patient_id)
    if not patient:
        raise NotFound(f"Patient {data.patient_id} not found")
    physio = await session.get(Physiotherapist, data.physiotherapist_id)
    if not physio:
        raise NotFound(f"Physiotherapist {data.physiotherapist_id} not found")
    if not is_slot_offered(data.appointment_date, data.time_slot):
        raise InvalidSlot(
            f"{data.time_slot!r} is not a bookable slot on {data.appointment_date.isoformat()}"
        )
    if await is_slot_booked(session, data.appointment_date, data.time_slot):
        raise SlotConflict("This time slot is already booked")

    appointment = Appointment(
        patient_id=data.patient_id,
        physiotherapist_id=data.physiotherapist_id,
        appointment_date=data.appointment_date,
        time_slot=data.time_slot,
        status=AppointmentStatus.pending,
    )
    session.add(appointment)
    try:
        await session.flush()
    except IntegrityError as e:
        await session.rollback()
        raise SlotConflict("This time slot is already booked") from e

    notification = await notify(
        session,
        physio.id,
        NotificationType.appointment_requested,
        f"New appointment scheduled for {patient.name} on {_display_date(appointment.appointment_date)} "
        f"at {appointment.time_slot}. Please review and approve.",
    )
    logger.info(
        "Appointment %s booked: patient=%s physiotherapist=%s %s %s",
        appointment.id,
        patient.id,
        physio.id,
        appointment.appointment_date,
        appointment.time_slot,
    )
    return appointment, [notification]


async def _transition(
    session: AsyncSession,
    appointment_id: str,
    physiotherapist_id: str,
    target: AppointmentStatus,
) -> Appointment:
    appointment = await get_appointment(session, appointment_id)
    if appointment.physiotherapist_id != physiotherapist_id:
        raise NotAssigned("Only the assigned physiotherapist can update this appointment")
    if target not in TRANSITIONS[appointment.status]:
        raise InvalidTransition(
            f"Cannot move appointment from {appointment.status.value} to {target.value}"
        )
    appointment.status = target
    now = _utc_naive_now()
    if target == AppointmentStatus.approved:
        appointment.approved_at = now
    elif target == AppointmentStatus.declined:
        appointment.declined_at = now
    elif target == AppointmentStatus.completed:
        appointment.completed_at = now
    session.add(appointment)
    await session.flush()
    logger.info("Appointment %s is now %s", appointment.id, target.value)
    return appointment


async def _physiotherapist_name(session: AsyncSession, physiotherapist_id: str) -> str:
    physio = await session.get(Physiotherapist, physiotherapist_id)
    return physio.name if physio else UNKNOWN


async def approve_appointment(
    session: AsyncSession, appointment_id: str, physiotherapist_id: str
) -> tuple[Appointment, list[Notification]]:
    """Approve a pending appointment; notify the patient, then reception."""
    appointment = await _transition(
        session, appointment_id, physiotherapist_id, AppointmentStatus.approved
    )
    when = f"{appointment.appointment_date.isoformat()} at {appointment.time_slot}"
    physio_name = await _physiotherapist_name(session, physiotherapist_id)
    notifications = [
        # Patient message leaves out the physiotherapist
        await notify(
            session,
            appointment.patient_id,
            NotificationType.appointment_approved,
            f"Your appointment on {when} has been approved.",
        ),
        await notify(
            session,
            settings.reception_inbox_id,
            NotificationType.appointment_approved,
            f"{physio_name} approved appointment for patient on {when}.",
        ),
    ]
    return appointment, notifications


async def decline_appointment(
    session: AsyncSession, appointment_id: str, physiotherapist_id: str
) -> tuple[Appointment, list[Notification]]:
    """Decline a pending appointment, which frees its slot."""
    appointment = await _transition(
        session, appointment_id, physiotherapist_id, AppointmentStatus.declined
    )
    when = f"{appointment.appointment_date.isoformat()} at {appointment.time_slot}"
    physio_name = await _physiotherapist_name(session, physiotherapist_id)
    notifications = [
        await notify(
            session,
            appointment.patient_id,
            NotificationType.appointment_declined,
            f"Your appointment on {when} has been declined. Reception will contact you to reschedule.",
        ),
        await notify(
            session,
            settings.reception_inbox_id,
            NotificationType.appointment_declined,
            f"{physio_name} declined appointment for patient on {when}.",
        ),
    ]
    return appointment, notifications


async def complete_appointment(
    session: AsyncSession, appointment_id: str, physiotherapist_id: str
) -> Appointment:
    return await _transition(
        session, appointment_id, physiotherapist_id, AppointmentStatus.completed
    )


async def list_appointments(
    session: AsyncSession,
    *,
    patient_id: str | None = None,
    physiotherapist_id: str | None = None,
    status: AppointmentStatus | None = None,
    on_date: date | None = None,
) -> list[Appointment]:
    q = select(Appointment)
    if patient_id:
        q = q.where(Appointment.patient_id == patient_id)
    if physiotherapist_id:
        q = q.where(Appointment.physiotherapist_id == physiotherapist_id)
    if status:
        q = q.where(Appointment.status == status)
    if on_date:
        q = q.where(Appointment.appointment_date == on_date)
    result = await session.execute(q)
    # Labels are not chronological as strings ("10:30" < "7:00")
    return sorted(
        result.scalars().all(),
        key=lambda a: (a.appointment_date, slot_sort_key(a.time_slot)),
    )


async def list_appointment_overview(
    session: AsyncSession, on_date: date | None = None
) -> list[AppointmentOverview]:
    """Appointments with patient and physiotherapist names; dangling ids show as "Unknown"."""
    appointments = await list_appointments(session, on_date=on_date)
    patients = {p.id: p.name for p in (await session.execute(select(Patient))).scalars().all()}
    physios = {
        p.id: p.name for p in (await session.execute(select(Physiotherapist))).scalars().all()
    }
    return [
        AppointmentOverview(
            **a.model_dump(),
            patient_name=patients.get(a.patient_id, UNKNOWN),
            physiotherapist_name=physios.get(a.physiotherapist_id, UNKNOWN),
        )
        for a in appointments
    ]
