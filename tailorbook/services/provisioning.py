"""
Client Provisioning

A tailor adds a client by email. Depending on who already owns that email the
tailor either gets a brand new client account, links an existing client
account, or is refused.
"""
import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from tailorbook.core.config import Settings
from tailorbook.core.errors import Conflict
from tailorbook.core.security import generate_temporary_password, get_password_hash
from tailorbook.core.timeutils import utcnow
from tailorbook.models.client import Client
from tailorbook.models.user import User, UserRole
from tailorbook.schemas.client import ClientSummary
from tailorbook.services.access import require_tailor
from tailorbook.services.clients import build_summary, find_client_for_user, load_client
from tailorbook.services.identity import Identity

logger = logging.getLogger(__name__)


def _commit(db: Session, message: str) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        # A concurrent request created the same account or profile first
        db.rollback()
        logger.warning("Provisioning lost a concurrent write: %s", message)
        raise Conflict(message) from exc


def provision_client(
    db: Session,
    identity: Identity,
    settings: Settings,
    *,
    email: str,
    name: str,
    password: Optional[str] = None,
    store_name: Optional[str] = None,
    notes: Optional[str] = None,
) -> Tuple[ClientSummary, Optional[str]]:
    """
    Create or link the client profile for ``email`` under the requesting tailor.

    Returns the client summary and, only when no password was supplied for a
    new account, the generated temporary password.

    Raises:
        Forbidden: the identity is not a tailor
        Conflict: the email belongs to a tailor, or its client profile is
            already assigned to another tailor (or is unassigned and claiming
            is disabled), or a concurrent request created the account or
            profile first
    """
    tailor = require_tailor(identity, "Only tailors can create clients")
    temporary_password = None

    user = db.exec(select(User).where(User.email == email)).first()

    if user is None:
        password_to_use = password
        if password_to_use is None:
            temporary_password = generate_temporary_password(settings.TEMPORARY_PASSWORD_LENGTH)
            password_to_use = temporary_password

        user = User(
            email=email,
            name=name,
            password=get_password_hash(password_to_use),
            role=UserRole.CLIENT,
        )
        client = Client(
            tailor_id=tailor.user_id,
            client_user_id=user.id,
            store_name=store_name,
            notes=notes,
        )
        db.add(user)
        db.add(client)
        _commit(db, "Email already registered")
        logger.info("Tailor %s created client account %s", tailor.user_id, user.id)
        return build_summary(load_client(db, client.id)), temporary_password

    if user.role != UserRole.CLIENT:
        raise Conflict("Email belongs to a non-client user")

    client = find_client_for_user(db, user.id)

    if client is not None and client.tailor_id and client.tailor_id != tailor.user_id:
        logger.warning(
            "Tailor %s tried to add client %s owned by another tailor", tailor.user_id, user.id
        )
        raise Conflict("Client is already assigned to a different tailor")

    if client is not None and client.tailor_id is None:
        if not settings.ALLOW_CLAIM_UNASSIGNED_CLIENTS:
            raise Conflict("Client is not assigned to a tailor and cannot be claimed")
        logger.info("Tailor %s claimed unassigned client profile %s", tailor.user_id, client.id)

    if client is None:
        client = Client(client_user_id=user.id)

    # Re-provisioning overwrites the free-text fields, omitted ones included
    client.tailor_id = tailor.user_id
    client.store_name = store_name
    client.notes = notes
    client.updated_at = utcnow()

    db.add(client)
    _commit(db, "Client profile was created concurrently, retry the request")
    logger.info("Tailor %s linked existing client account %s", tailor.user_id, user.id)
    return build_summary(load_client(db, client.id)), None
