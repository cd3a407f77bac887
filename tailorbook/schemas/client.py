from datetime import datetime
from pydantic import EmailStr, Field
from typing import Optional

from tailorbook.models.appointment import AppointmentStatus
from tailorbook.schemas.base import CamelModel


class ClientCreate(CamelModel):
    name: str = Field(min_length=2)
    email: EmailStr
    password: Optional[str] = Field(default=None, min_length=8)
    store_name: Optional[str] = None
    notes: Optional[str] = None


class ClientUpdate(CamelModel):
    store_name: Optional[str] = None
    notes: Optional[str] = None


class ClientUserSummary(CamelModel):
    id: str
    name: str = ""
    email: str = ""


class NextAppointment(CamelModel):
    id: str
    date: datetime
    status: AppointmentStatus


class ClientSummary(CamelModel):
    id: str
    tailor_id: Optional[str] = None
    store_name: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    client_user: Optional[ClientUserSummary] = None
    last_measurement_update: Optional[datetime] = None
    next_appointment: Optional[NextAppointment] = None


class ClientCreated(CamelModel):
    client: ClientSummary
    temporary_password: Optional[str] = None
