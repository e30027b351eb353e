from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.api.deps import STAFF_ROLES, get_current_user, get_session, require_roles
from clinic.api.routes.notifications import schedule_notification_emails
from clinic.models.notification import NotificationPublic
from clinic.models.patient import PatientPublic, PatientReplace
from clinic.models.user import User, UserRole
from clinic.services.patient_service import (
    get_patient,
    list_patients,
    patient_to_public,
    replace_patient,
    request_appointment,
)

router = APIRouter(prefix="/patients", tags=["patients"])

# Roles that may browse patient records
CLINICAL_ROLES = (UserRole.physiotherapist, *STAFF_ROLES)


@router.get("", response_model=list[PatientPublic])
async def all_patients(
    physiotherapist_id: str | None = Query(None),
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_roles(*CLINICAL_ROLES)),
) -> list[PatientPublic]:
    patients = await list_patients(session, physiotherapist_id=physiotherapist_id)
    return [await patient_to_public(session, p) for p in patients]


@router.post(
    "/me/appointment-requests",
    response_model=NotificationPublic,
    status_code=status.HTTP_202_ACCEPTED,
)
async def ask_for_appointment(
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_roles(UserRole.patient)),
) -> NotificationPublic:
    """Ask reception to book a visit; reception picks the slot."""
    notification = await request_appointment(session, current_user.id)
    await schedule_notification_emails(background_tasks, session, [notification])
    return NotificationPublic.model_validate(notification)


@router.get("/{patient_id}", response_model=PatientPublic)
async def one_patient(
    patient_id: str,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> PatientPublic:
    if current_user.role == UserRole.patient and current_user.id != patient_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Patients can only view their own record")
    patient = await get_patient(session, patient_id)
    if not patient:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found")
    return await patient_to_public(session, patient)


@router.put("/{patient_id}", response_model=PatientPublic)
async def update_patient(
    patient_id: str,
    body: PatientReplace,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_roles(UserRole.physiotherapist)),
) -> PatientPublic:
    """Replace the whole record; send every field, including unchanged ones."""
    patient = await replace_patient(session, patient_id, body)
    return await patient_to_public(session, patient)
