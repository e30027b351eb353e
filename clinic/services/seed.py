"""Demo records loaded into the in-memory database at startup."""
import logging
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.security import hash_password
from clinic.models.appointment import Appointment, AppointmentStatus
from clinic.models.patient import Patient, Sex
from clinic.models.physiotherapist import Physiotherapist
from clinic.models.user import User, UserRole

logger = logging.getLogger(__name__)

DEMO_PHYSIOTHERAPISTS = [
    ("2", "Dr. Sarah Wilson", "physio1@clinic.com", "Sports Medicine"),
    ("3", "Dr. Mike Johnson", "physio2@clinic.com", "Orthopedics"),
    ("4", "Dr. Emily Davis", "physio3@clinic.com", "Neurological"),
    ("5", "Dr. James Brown", "physio4@clinic.com", "Pediatric"),
    ("6", "Dr. Lisa Garcia", "physio5@clinic.com", "Geriatric"),
]

# (id, name, email, role, password)
DEMO_USERS = [
    ("1", "John Patient", "patient@clinic.com", UserRole.patient, "patient123"),
    *[
        (pid, name, email, UserRole.physiotherapist, "physio123")
        for pid, name, email, _ in DEMO_PHYSIOTHERAPISTS
    ],
    ("7", "Mary Reception", "reception@clinic.com", UserRole.receptionist, "reception123"),
    ("8", "Admin User", "admin@clinic.com", UserRole.admin, "admin123"),
]


def _demo_patients() -> list[Patient]:
    return [
        Patient(
            id="1",
            name="John Patient",
            sex=Sex.male,
            date_of_birth=date(1985, 5, 15),
            phone_number="+1234567890",
            complaint="Lower back pain for 3 months, worsens with sitting",
            home_program="Daily walking 30 minutes, core strengthening exercises",
            comments="Patient shows good compliance with exercises",
            assigned_physiotherapist_id="2",
        ),
        Patient(
            id="9",
            name="Sarah Williams",
            sex=Sex.female,
            date_of_birth=date(1990, 8, 22),
            phone_number="+1987654321",
            complaint="Right shoulder pain after sports injury",
            assigned_physiotherapist_id="3",
        ),
        Patient(
            id="10",
            name="Michael Brown",
            sex=Sex.male,
            date_of_birth=date(1978, 12, 10),
            phone_number="+1122334455",
            complaint="Knee pain and stiffness, difficulty with stairs",
            assigned_physiotherapist_id="4",
        ),
    ]


async def seed_demo_data(session: AsyncSession) -> bool:
    """Insert demo accounts and records once. Returns False if users already exist."""
    existing = await session.execute(select(User.id).limit(1))
    if existing.first() is not None:
        return False
    for uid, name, email, role, password in DEMO_USERS:
        session.add(
            User(id=uid, name=name, email=email, role=role, hashed_password=hash_password(password))
        )
    for pid, name, email, specialization in DEMO_PHYSIOTHERAPISTS:
        session.add(Physiotherapist(id=pid, name=name, email=email, specialization=specialization))
    session.add_all(_demo_patients())
    session.add(
        Appointment(
            id="1",
            patient_id="1",
            physiotherapist_id="2",
            appointment_date=date(2024, 1, 15),
            time_slot="9:00 AM - 10:30 AM",
            status=AppointmentStatus.approved,
            created_at=datetime(2024, 1, 10, 10, 0, 0),
            approved_at=datetime(2024, 1, 10, 14, 0, 0),
        )
    )
    await session.flush()
    logger.info("Seeded %d demo users and %d physiotherapists", len(DEMO_USERS), len(DEMO_PHYSIOTHERAPISTS))
    return True
