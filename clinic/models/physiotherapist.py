from uuid import uuid4

from sqlmodel import Field, SQLModel


class PhysiotherapistBase(SQLModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1, unique=True, index=True)
    specialization: str | None = None


class Physiotherapist(PhysiotherapistBase, table=True):
    __tablename__ = "physiotherapists"
    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True)


class PhysiotherapistCreate(PhysiotherapistBase):
    # Initial password for the login account created alongside the record
    password: str = Field(min_length=8)


class PhysiotherapistPublic(PhysiotherapistBase):
    id: str
