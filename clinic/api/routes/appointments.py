from datetime import date

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.api.deps import STAFF_ROLES, get_current_user, get_session, require_roles
from clinic.api.routes.notifications import schedule_notification_emails
from clinic.api.schemas.appointment import AppointmentChangeResponse, BookAppointmentRequest
from clinic.models.appointment import (
    Appointment,
    AppointmentCreate,
    AppointmentOverview,
    AppointmentPublic,
    AppointmentStatus,
)
from clinic.models.notification import Notification, NotificationPublic
from clinic.models.user import User, UserRole
from clinic.services.appointment_service import (
    approve_appointment,
    complete_appointment,
    create_appointment,
    decline_appointment,
    list_appointment_overview,
    list_appointments,
)

router = APIRouter(prefix="/appointments", tags=["appointments"])


def _change_response(
    appointment: Appointment, notifications: list[Notification]
) -> AppointmentChangeResponse:
    return AppointmentChangeResponse(
        appointment=AppointmentPublic.model_validate(appointment),
        notifications=[NotificationPublic.model_validate(n) for n in notifications],
    )


@router.post("", response_model=AppointmentChangeResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    body: BookAppointmentRequest,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_roles(UserRole.receptionist)),
) -> AppointmentChangeResponse:
    data = AppointmentCreate(
        patient_id=body.patient_id,
        physiotherapist_id=body.physiotherapist_id,
        appointment_date=body.date,
        time_slot=body.time_slot,
    )
    appointment, notifications = await create_appointment(session, data)
    await schedule_notification_emails(background_tasks, session, notifications)
    return _change_response(appointment, notifications)


@router.get("", response_model=list[AppointmentPublic])
async def list_visible_appointments(
    status_param: AppointmentStatus | None = Query(None, alias="status"),
    date_param: date | None = Query(None, alias="date"),
    physiotherapist_id: str | None = Query(None),
    patient_id: str | None = Query(None),
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> list[AppointmentPublic]:
    """Patients and physiotherapists only ever see their own appointments."""
    if current_user.role == UserRole.patient:
        patient_id = current_user.id
    elif current_user.role == UserRole.physiotherapist:
        physiotherapist_id = current_user.id
    appointments = await list_appointments(
        session,
        patient_id=patient_id,
        physiotherapist_id=physiotherapist_id,
        status=status_param,
        on_date=date_param,
    )
    return [AppointmentPublic.model_validate(a) for a in appointments]


@router.get("/overview", response_model=list[AppointmentOverview], dependencies=[Depends(require_roles(*STAFF_ROLES))])
async def appointment_overview(
    date_param: date | None = Query(None, alias="date"),
    session: AsyncSession = Depends(get_session),
) -> list[AppointmentOverview]:
    return await list_appointment_overview(session, on_date=date_param)


@router.post("/{appointment_id}/approve", response_model=AppointmentChangeResponse)
async def approve(
    appointment_id: str,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_roles(UserRole.physiotherapist)),
) -> AppointmentChangeResponse:
    appointment, notifications = await approve_appointment(session, appointment_id, current_user.id)
    await schedule_notification_emails(background_tasks, session, notifications)
    return _change_response(appointment, notifications)


@router.post("/{appointment_id}/decline", response_model=AppointmentChangeResponse)
async def decline(
    appointment_id: str,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_roles(UserRole.physiotherapist)),
) -> AppointmentChangeResponse:
    appointment, notifications = await decline_appointment(session, appointment_id, current_user.id)
    await schedule_notification_emails(background_tasks, session, notifications)
    return _change_response(appointment, notifications)


@router.post("/{appointment_id}/complete", response_model=AppointmentPublic)
async def complete(
    appointment_id: str,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_roles(UserRole.physiotherapist)),
) -> AppointmentPublic:
    appointment = await complete_appointment(session, appointment_id, current_user.id)
    return AppointmentPublic.model_validate(appointment)
