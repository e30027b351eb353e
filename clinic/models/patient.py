from datetime import date
from enum import Enum
from uuid import uuid4

from sqlmodel import Field, SQLModel


class Sex(str, Enum):
    male = "Male"
    female = "Female"
    other = "Other"


class PatientBase(SQLModel):
    name: str
    sex: Sex
    date_of_birth: date
    phone_number: str
    complaint: str
    home_program: str | None = None
    comments: str | None = None
    # Weak reference: no foreign key, the physiotherapist may be removed
    assigned_physiotherapist_id: str | None = Field(default=None, index=True)


class Patient(PatientBase, table=True):
    __tablename__ = "patients"
    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True)


class PatientReplace(PatientBase):
    """Complete patient record minus the id; replaces every stored field."""


class PatientPublic(PatientBase):
    id: str
    age: int
    assigned_physiotherapist_name: str
