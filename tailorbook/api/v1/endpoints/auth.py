"""
Authentication Endpoints Module

Registration, login, anonymous device identities and profile updates. The
mobile client keeps the returned bearer token and sends it on every other
request.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from tailorbook.api import deps
from tailorbook.core.config import Settings
from tailorbook.db.session import get_db
from tailorbook.models.user import UserRole
from tailorbook.schemas.auth import (
    AuthResponse,
    ProfileResponse,
    ProfileUpdate,
    UserLogin,
    UserPublic,
    UserRegister,
)
from tailorbook.services import accounts
from tailorbook.services.identity import Identity

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserRegister,
    db: Session = Depends(get_db),
    settings: Settings = Depends(deps.get_settings),
):
    """
    Register a new tailor or client account.

    Client accounts get an empty client profile that a tailor can later claim
    by adding the client's email.

    Raises:
        409: If a user with this email already exists
    """
    token, user = accounts.register(
        db,
        settings,
        name=user_in.name,
        email=user_in.email,
        password=user_in.password,
        role=UserRole(user_in.role),
    )
    return AuthResponse(token=token, user=UserPublic.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(deps.get_settings),
):
    """
    Authenticate with email and password and issue a 7-day access token.

    Raises:
        401: If credentials are invalid
    """
    token, user = accounts.login(db, settings, email=credentials.email, password=credentials.password)
    return AuthResponse(token=token, user=UserPublic.model_validate(user))


@router.post("/anonymous", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def create_anonymous(
    db: Session = Depends(get_db),
    settings: Settings = Depends(deps.get_settings),
):
    """
    Create a device-local anonymous identity.

    The token is long-lived (one year) since the device is the only place the
    identity exists.
    """
    token, user = accounts.create_anonymous(db, settings)
    return AuthResponse(token=token, user=UserPublic.model_validate(user))


@router.patch("/update-profile", response_model=ProfileResponse)
def update_profile(
    profile_in: ProfileUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(deps.get_current_identity),
):
    """
    Update the caller's first name, last name and email.

    Only provided fields are updated; an empty string clears a name field.

    Raises:
        403: If an anonymous caller tries to set an email
        409: If the email belongs to another user
        422: If the email is malformed, or a registered caller tries to remove it
    """
    user = accounts.update_profile(db, identity, profile_in.model_dump(exclude_unset=True))
    return ProfileResponse(user=UserPublic.model_validate(user))
