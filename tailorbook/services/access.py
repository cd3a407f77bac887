"""
Client Access Resolution

Decides whether an identity may touch a Client record. Ownership is the
``tailor_id`` / ``client_user_id`` linkage on the client row. A client that
exists but belongs to someone else is reported exactly like a missing one, so
callers can never probe another tailor's client list.
"""
from enum import Enum

from sqlmodel import Session

from tailorbook.core.errors import Forbidden, NotAuthenticated, NotFound
from tailorbook.models.client import Client
from tailorbook.services.identity import (
    AnonymousIdentity,
    ClientIdentity,
    Identity,
    TailorIdentity,
)

CLIENT_NOT_FOUND = "Client not found"


class Capability(str, Enum):
    READ = "read"
    WRITE_AS_TAILOR = "write-as-tailor"


def _owns(identity: Identity, client: Client) -> bool:
    if isinstance(identity, TailorIdentity):
        return client.tailor_id == identity.user_id
    if isinstance(identity, ClientIdentity):
        return client.client_user_id == identity.user_id
    return False


def resolve_client_access(
    db: Session,
    identity: Identity,
    client_id: str,
    capability: Capability = Capability.READ,
) -> Client:
    """
    Return the client if ``identity`` holds ``capability`` over it.

    READ is granted to the owning tailor and to the linked client user.
    WRITE_AS_TAILOR is granted to the owning tailor only.

    Raises:
        NotAuthenticated: the identity is anonymous
        Forbidden: the identity's role can never hold the capability
        NotFound: no such client, or the identity does not own it
    """
    if isinstance(identity, AnonymousIdentity):
        raise NotAuthenticated("This action requires authentication")

    if capability is Capability.WRITE_AS_TAILOR and not isinstance(identity, TailorIdentity):
        raise Forbidden("This action is restricted to tailors")

    client = db.get(Client, client_id)
    if client is None or not _owns(identity, client):
        raise NotFound(CLIENT_NOT_FOUND)
    return client


def require_tailor(identity: Identity, message: str = "This action is restricted to tailors") -> TailorIdentity:
    # Role gate for tailor-only operations; anonymous identities fail the same way
    if not isinstance(identity, TailorIdentity):
        raise Forbidden(message)
    return identity
