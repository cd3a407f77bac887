"""
API Dependencies Module

FastAPI dependency functions that expose the application settings and turn
the request's bearer token into an Identity.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tailorbook.core.config import Settings
from tailorbook.core.errors import Forbidden, NotAuthenticated
from tailorbook.core.security import decode_access_token
from tailorbook.services.identity import Identity, TailorIdentity, identity_from_claims

# auto_error=False so a missing header becomes our own 401 rather than FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_identity(
    settings: Settings = Depends(get_settings),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    """
    Dependency that validates the bearer token and returns the identity it names.

    Raises:
        NotAuthenticated: no token, or the token is invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise NotAuthenticated("Authentication required")

    claims = decode_access_token(credentials.credentials, settings)
    return identity_from_claims(claims)


def get_current_tailor(
    identity: Identity = Depends(get_current_identity),
) -> TailorIdentity:
    """
    Dependency that requires the tailor role, checked before the request body
    is acted on.
    """
    if not isinstance(identity, TailorIdentity):
        raise Forbidden("Insufficient permissions")
    return identity
