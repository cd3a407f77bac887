"""
Appointment Model Module

Appointments belong to exactly one Client. Only the owning tailor mutates them;
the tailor and the linked client can both see them.
"""
from enum import Enum
from typing import Optional, TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship, AutoString
import uuid
from datetime import datetime

from tailorbook.core.timeutils import utcnow
from tailorbook.db.types import UTCDateTime

if TYPE_CHECKING:
    from tailorbook.models.client import Client


class AppointmentStatus(str, Enum):
    scheduled = "scheduled"
    completed = "completed"
    canceled = "canceled"


class AppointmentBase(SQLModel):
    title: str = Field(nullable=False)
    date: datetime = Field(nullable=False, index=True, sa_type=UTCDateTime)
    location: Optional[str] = None
    notes: Optional[str] = None
    status: AppointmentStatus = Field(default=AppointmentStatus.scheduled, sa_type=AutoString)


class Appointment(AppointmentBase, table=True):
    __tablename__ = "appointments"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    client_id: str = Field(foreign_key="clients.id", index=True, nullable=False)

    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)

    client: Optional["Client"] = Relationship(back_populates="appointments")
