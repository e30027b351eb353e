import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.config import settings
from clinic.models.notification import Notification, NotificationType
from clinic.models.patient import Patient, PatientPublic, PatientReplace
from clinic.models.physiotherapist import Physiotherapist
from clinic.services.exceptions import NotFound
from clinic.services.notification_service import notify

logger = logging.getLogger(__name__)

UNASSIGNED = "Unassigned"
UNKNOWN = "Unknown"


def calculate_age(date_of_birth: date, today: date | None = None) -> int:
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


async def list_patients(
    session: AsyncSession, physiotherapist_id: str | None = None
) -> list[Patient]:
    q = select(Patient).order_by(Patient.name)
    if physiotherapist_id:
        q = q.where(Patient.assigned_physiotherapist_id == physiotherapist_id)
    result = await session.execute(q)
    return list(result.scalars().all())


async def get_patient(session: AsyncSession, patient_id: str) -> Patient | None:
    result = await session.execute(select(Patient).where(Patient.id == patient_id))
    return result.scalar_one_or_none()


async def replace_patient(
    session: AsyncSession, patient_id: str, data: PatientReplace
) -> Patient:
    """Replace every field of the stored record; nothing is merged."""
    patient = await get_patient(session, patient_id)
    if not patient:
        raise NotFound(f"Patient {patient_id} not found")
    for field, value in data.model_dump().items():
        setattr(patient, field, value)
    session.add(patient)
    await session.flush()
    await session.refresh(patient)
    logger.info("Patient %s record replaced", patient_id)
    return patient


async def assigned_physiotherapist_name(session: AsyncSession, patient: Patient) -> str:
    if not patient.assigned_physiotherapist_id:
        return UNASSIGNED
    result = await session.execute(
        select(Physiotherapist.name).where(Physiotherapist.id == patient.assigned_physiotherapist_id)
    )
    name = result.scalar_one_or_none()
    return name or UNKNOWN


async def patient_to_public(
    session: AsyncSession, patient: Patient, today: date | None = None
) -> PatientPublic:
    return PatientPublic(
        **patient.model_dump(),
        age=calculate_age(patient.date_of_birth, today),
        assigned_physiotherapist_name=await assigned_physiotherapist_name(session, patient),
    )


async def request_appointment(session: AsyncSession, patient_id: str) -> Notification:
    """Patient asks reception to book a visit; reception schedules it later."""
    patient = await get_patient(session, patient_id)
    if not patient:
        raise NotFound(f"Patient {patient_id} not found")
    return await notify(
        session,
        settings.reception_inbox_id,
        NotificationType.appointment_requested,
        f"{patient.name} has requested a new appointment",
    )
