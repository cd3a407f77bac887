"""
Accounts

Registration, login, anonymous device identities and profile edits. Every
successful sign-in returns a token whose claims describe the identity.
"""
import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from tailorbook.core.config import Settings
from tailorbook.core.errors import BadRequest, Conflict, Forbidden, NotAuthenticated, NotFound
from tailorbook.core.security import create_access_token, get_password_hash, verify_password
from tailorbook.models.client import Client
from tailorbook.models.user import User, UserRole
from tailorbook.services.identity import Identity, identity_for_user, is_anonymous

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
EMAIL_TAKEN = "Email already registered"


def issue_token(user: User, settings: Settings) -> str:
    identity = identity_for_user(user)
    return create_access_token(identity.claims(), settings, long_lived=is_anonymous(identity))


def register(
    db: Session,
    settings: Settings,
    *,
    name: str,
    email: str,
    password: str,
    role: UserRole,
) -> Tuple[str, User]:
    """Create a tailor or client account. Client accounts start with an unassigned profile."""
    if db.exec(select(User).where(User.email == email)).first():
        raise Conflict(EMAIL_TAKEN)

    user = User(
        name=name,
        email=email,
        password=get_password_hash(password),
        role=role,
        is_anonymous=False,
    )
    db.add(user)
    if role == UserRole.CLIENT:
        db.add(Client(client_user_id=user.id))
    try:
        db.commit()
    except IntegrityError as exc:
        # A concurrent registration took the email after our check
        db.rollback()
        raise Conflict(EMAIL_TAKEN) from exc
    db.refresh(user)

    logger.info("Registered %s account %s", role.value, user.id)
    return issue_token(user, settings), user


def login(db: Session, settings: Settings, *, email: str, password: str) -> Tuple[str, User]:
    user = db.exec(select(User).where(User.email == email)).first()

    # One message for every failure so callers cannot tell which part was wrong
    if user is None or not user.password or not verify_password(password, user.password):
        raise NotAuthenticated(INVALID_CREDENTIALS)
    if not user.is_registered:
        raise NotAuthenticated(INVALID_CREDENTIALS)

    return issue_token(user, settings), user


def create_anonymous(db: Session, settings: Settings) -> Tuple[str, User]:
    user = User(is_anonymous=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created anonymous identity %s", user.id)
    return issue_token(user, settings), user


def update_profile(
    db: Session,
    identity: Identity,
    changes: dict,
) -> User:
    """
    Update first name, last name and email of the calling user.

    Empty strings clear a name field. The display name follows first/last name.
    Role and anonymity are untouched: an anonymous user becomes a registered
    one only by registering, so it cannot take an email here. A registered
    user cannot drop the email it signs in with.
    """
    user = db.get(User, identity.user_id)
    if user is None:
        raise NotFound("User not found")

    email: Optional[str] = changes.get("email")
    if email and is_anonymous(identity):
        raise Forbidden("Register an account to set an email")
    if "email" in changes and not email and user.is_registered:
        raise BadRequest("A registered account must keep an email")
    if email:
        existing = db.exec(select(User).where(User.email == email)).first()
        if existing is not None and existing.id != user.id:
            raise Conflict(EMAIL_TAKEN)

    for field in ("first_name", "last_name", "email"):
        if field in changes:
            setattr(user, field, changes[field] or None)

    first_name, last_name = changes.get("first_name"), changes.get("last_name")
    if first_name or last_name:
        user.name = " ".join(part for part in (first_name, last_name) if part)

    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise Conflict(EMAIL_TAKEN) from exc
    db.refresh(user)
    return user
