from datetime import datetime
from pydantic import Field, model_validator
from typing import Optional

from tailorbook.models.appointment import AppointmentStatus
from tailorbook.schemas.base import CamelModel


class AppointmentCreate(CamelModel):
    client_id: str
    title: str = Field(min_length=1)
    date: datetime
    location: Optional[str] = None
    notes: Optional[str] = None


class AppointmentUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    date: Optional[datetime] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[AppointmentStatus] = None

    @model_validator(mode="after")
    def require_a_field(self):
        if not self.changes():
            raise ValueError("At least one field must be provided")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class AppointmentRead(CamelModel):
    id: str
    client_id: str
    title: str
    date: datetime
    location: Optional[str] = None
    notes: Optional[str] = None
    status: AppointmentStatus
    created_at: datetime
    updated_at: datetime
