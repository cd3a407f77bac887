"""
Client Endpoints Module

Client profiles are owned by one tailor and optionally linked to one client
account. Tailors list and add clients; the owning tailor and the linked
client can both read and edit a profile.
"""
from typing import List, Union

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from tailorbook.api import deps
from tailorbook.core.config import Settings
from tailorbook.db.session import get_db
from tailorbook.schemas.client import ClientCreate, ClientCreated, ClientSummary, ClientUpdate
from tailorbook.services import clients
from tailorbook.services.identity import Identity, TailorIdentity
from tailorbook.services.provisioning import provision_client

router = APIRouter()


@router.get("", response_model=Union[List[ClientSummary], ClientSummary])
def list_clients(
    db: Session = Depends(get_db),
    identity: Identity = Depends(deps.get_current_identity),
):
    """
    Tailors get all of their clients, most recently updated first.
    Client accounts get their own profile as a single object.

    Raises:
        404: If the caller has no client profile (e.g. anonymous users)
    """
    return clients.list_clients(db, identity)


@router.post("", response_model=ClientCreated, status_code=status.HTTP_201_CREATED)
def create_client(
    client_in: ClientCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(deps.get_settings),
    tailor: TailorIdentity = Depends(deps.get_current_tailor),
):
    """
    Add a client by email.

    A new email gets a new client account; when no password is supplied a
    temporary one is generated and returned once in ``temporaryPassword``.
    An existing client account is linked to the calling tailor.

    Raises:
        403: If the caller is not a tailor
        409: If the email belongs to a tailor or to another tailor's client
    """
    summary, temporary_password = provision_client(
        db,
        tailor,
        settings,
        email=client_in.email,
        name=client_in.name,
        password=client_in.password,
        store_name=client_in.store_name,
        notes=client_in.notes,
    )
    return ClientCreated(client=summary, temporary_password=temporary_password)


@router.get("/{client_id}", response_model=ClientSummary)
def read_client(
    client_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(deps.get_current_identity),
):
    """
    Get a client profile. Clients owned by someone else are reported as missing.
    """
    return clients.get_client(db, identity, client_id)


@router.put("/{client_id}", response_model=ClientSummary)
def update_client(
    client_id: str,
    client_in: ClientUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(deps.get_current_identity),
):
    """
    Update store name and notes. Only provided fields are changed.
    """
    return clients.update_client(db, identity, client_id, client_in.model_dump(exclude_unset=True))
