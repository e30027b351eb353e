from datetime import date
from pydantic import BaseModel

from clinic.models.appointment import AppointmentPublic
from clinic.models.notification import NotificationPublic


class BookAppointmentRequest(BaseModel):
    patient_id: str
    physiotherapist_id: str
    date: date
    time_slot: str


class AppointmentChangeResponse(BaseModel):
    appointment: AppointmentPublic
    notifications: list[NotificationPublic]
