"""Client directory: listing, reading and editing client profiles."""
import logging
from typing import Dict, List, Optional, Union

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from tailorbook.core.errors import NotFound
from tailorbook.core.timeutils import as_utc, utcnow
from tailorbook.models.appointment import AppointmentStatus
from tailorbook.models.client import Client
from tailorbook.schemas.client import (
    ClientSummary,
    ClientUserSummary,
    NextAppointment,
)
from tailorbook.services.access import Capability, resolve_client_access
from tailorbook.services.identity import ClientIdentity, Identity, TailorIdentity

logger = logging.getLogger(__name__)

PROFILE_NOT_FOUND = "Client profile not found"


def _with_related(statement):
    return statement.options(
        selectinload(Client.measurement),
        selectinload(Client.appointments),
    )


def build_summary(client: Client) -> ClientSummary:
    """Project a client row onto what the mobile client lists and shows."""
    now = utcnow()
    upcoming = sorted(
        (
            appointment
            for appointment in client.appointments
            if appointment.status == AppointmentStatus.scheduled and as_utc(appointment.date) > now
        ),
        key=lambda appointment: appointment.date,
    )
    next_appointment = None
    if upcoming:
        next_appointment = NextAppointment(
            id=upcoming[0].id, date=upcoming[0].date, status=upcoming[0].status
        )

    client_user = None
    if client.client_user is not None:
        client_user = ClientUserSummary(
            id=client.client_user.id,
            name=client.client_user.name or "",
            email=client.client_user.email or "",
        )

    return ClientSummary(
        id=client.id,
        tailor_id=client.tailor_id,
        store_name=client.store_name,
        notes=client.notes,
        created_at=client.created_at,
        updated_at=client.updated_at,
        client_user=client_user,
        last_measurement_update=client.measurement.updated_at if client.measurement else None,
        next_appointment=next_appointment,
    )


def load_client(db: Session, client_id: str) -> Client:
    client = db.exec(_with_related(select(Client).where(Client.id == client_id))).first()
    if client is None:
        raise NotFound(PROFILE_NOT_FOUND)
    return client


def find_client_for_user(db: Session, user_id: str) -> Optional[Client]:
    return db.exec(select(Client).where(Client.client_user_id == user_id)).first()


def list_clients(db: Session, identity: Identity) -> Union[List[ClientSummary], ClientSummary]:
    """
    Tailors get every client they own, most recently updated first.
    A client-role user gets their own profile. Anonymous users have none.
    """
    if isinstance(identity, TailorIdentity):
        statement = _with_related(
            select(Client)
            .where(Client.tailor_id == identity.user_id)
            .order_by(Client.updated_at.desc())
        )
        return [build_summary(client) for client in db.exec(statement).all()]

    if isinstance(identity, ClientIdentity):
        client = db.exec(
            _with_related(select(Client).where(Client.client_user_id == identity.user_id))
        ).first()
        if client is not None:
            return build_summary(client)

    raise NotFound(PROFILE_NOT_FOUND)


def get_client(db: Session, identity: Identity, client_id: str) -> ClientSummary:
    resolve_client_access(db, identity, client_id, Capability.READ)
    return build_summary(load_client(db, client_id))


def update_client(db: Session, identity: Identity, client_id: str, changes: Dict) -> ClientSummary:
    """Apply a partial update of the free-text fields. Owner tailor or linked client."""
    client = resolve_client_access(db, identity, client_id, Capability.READ)

    for field, value in changes.items():
        setattr(client, field, value)
    client.updated_at = utcnow()

    db.add(client)
    db.commit()
    logger.info("Client %s updated by %s", client_id, identity.user_id)
    return build_summary(load_client(db, client_id))
