from enum import Enum

from sqlmodel import Field, SQLModel


class UserRole(str, Enum):
    patient = "patient"
    physiotherapist = "physiotherapist"
    receptionist = "receptionist"
    admin = "admin"


class UserBase(SQLModel):
    name: str
    email: str = Field(unique=True, index=True)
    role: UserRole


class User(UserBase, table=True):
    __tablename__ = "users"
    id: str = Field(primary_key=True)
    hashed_password: str


class UserPublic(SQLModel):
    id: str
    name: str
    email: str
    role: UserRole
