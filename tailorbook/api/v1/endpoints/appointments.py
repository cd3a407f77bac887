"""
Appointment Endpoints Module

Tailors schedule and edit appointments for their clients; the tailor and the
linked client can list them.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from tailorbook.api import deps
from tailorbook.db.session import get_db
from tailorbook.schemas.appointment import AppointmentCreate, AppointmentRead, AppointmentUpdate
from tailorbook.services import appointments
from tailorbook.services.identity import Identity, TailorIdentity

router = APIRouter()


@router.post("", response_model=AppointmentRead, status_code=status.HTTP_201_CREATED)
def create_appointment(
    appointment_in: AppointmentCreate,
    db: Session = Depends(get_db),
    tailor: TailorIdentity = Depends(deps.get_current_tailor),
):
    """Schedule an appointment for one of the tailor's clients."""
    return appointments.create_appointment(
        db,
        tailor,
        client_id=appointment_in.client_id,
        title=appointment_in.title,
        date=appointment_in.date,
        location=appointment_in.location,
        notes=appointment_in.notes,
    )


@router.get("/{client_id}", response_model=List[AppointmentRead])
def list_appointments(
    client_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(deps.get_current_identity),
):
    """List a client's appointments, earliest first."""
    return appointments.list_appointments(db, identity, client_id)


@router.put("/{appointment_id}", response_model=AppointmentRead)
def update_appointment(
    appointment_id: str,
    appointment_in: AppointmentUpdate,
    db: Session = Depends(get_db),
    tailor: TailorIdentity = Depends(deps.get_current_tailor),
):
    """
    Update an appointment. At least one field must be provided.

    Raises:
        404: If the appointment doesn't exist or belongs to another tailor's client
    """
    return appointments.update_appointment(db, tailor, appointment_id, appointment_in.changes())
