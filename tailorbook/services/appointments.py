"""Appointment scheduling: tailors book and edit, tailor and client both read."""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import Session, select

from tailorbook.core.errors import NotFound
from tailorbook.core.timeutils import as_utc, utcnow
from tailorbook.models.appointment import Appointment, AppointmentStatus
from tailorbook.services.access import Capability, require_tailor, resolve_client_access
from tailorbook.services.identity import Identity

logger = logging.getLogger(__name__)


def create_appointment(
    db: Session,
    identity: Identity,
    *,
    client_id: str,
    title: str,
    date: datetime,
    location: Optional[str] = None,
    notes: Optional[str] = None,
) -> Appointment:
    tailor = require_tailor(identity, "Only tailors can schedule appointments")
    resolve_client_access(db, tailor, client_id, Capability.WRITE_AS_TAILOR)

    appointment = Appointment(
        client_id=client_id,
        title=title,
        date=as_utc(date),
        location=location,
        notes=notes,
        status=AppointmentStatus.scheduled,
    )
    db.add(appointment)
    db.commit()
    db.refresh(appointment)
    logger.info("Appointment %s scheduled for client %s", appointment.id, client_id)
    return appointment


def update_appointment(db: Session, identity: Identity, appointment_id: str, changes: Dict[str, Any]) -> Appointment:
    """
    Apply ``changes`` to an appointment. Ownership is checked against the
    appointment's own client, not anything the caller claims.
    """
    tailor = require_tailor(identity, "Only tailors can update appointments")

    appointment = db.get(Appointment, appointment_id)
    if appointment is None:
        raise NotFound("Appointment not found")

    resolve_client_access(db, tailor, appointment.client_id, Capability.WRITE_AS_TAILOR)

    for field, value in changes.items():
        if field == "date":
            value = as_utc(value)
        setattr(appointment, field, value)
    appointment.updated_at = utcnow()

    db.add(appointment)
    db.commit()
    db.refresh(appointment)
    return appointment


def list_appointments(db: Session, identity: Identity, client_id: str) -> List[Appointment]:
    resolve_client_access(db, identity, client_id, Capability.READ)
    statement = (
        select(Appointment)
        .where(Appointment.client_id == client_id)
        .order_by(Appointment.date.asc())
    )
    return list(db.exec(statement).all())
