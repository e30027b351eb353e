from clinic.models.user import User, UserPublic, UserRole
from clinic.models.patient import Patient, PatientPublic, PatientReplace, Sex
from clinic.models.physiotherapist import (
    Physiotherapist,
    PhysiotherapistCreate,
    PhysiotherapistPublic,
)
from clinic.models.appointment import (
    ACTIVE_STATUSES,
    Appointment,
    AppointmentCreate,
    AppointmentOverview,
    AppointmentPublic,
    AppointmentStatus,
)
from clinic.models.notification import Notification, NotificationPublic, NotificationType

__all__ = [
    "User",
    "UserPublic",
    "UserRole",
    "Patient",
    "PatientPublic",
    "PatientReplace",
    "Sex",
    "Physiotherapist",
    "PhysiotherapistCreate",
    "PhysiotherapistPublic",
    "ACTIVE_STATUSES",
    "Appointment",
    "AppointmentCreate",
    "AppointmentOverview",
    "AppointmentPublic",
    "AppointmentStatus",
    "Notification",
    "NotificationPublic",
    "NotificationType",
]
