"""
Security Helpers Module

Password hashing (bcrypt via passlib) and JWT access tokens (python-jose).
Token claims carry the user id in ``sub`` plus either ``role`` or ``anon``.
"""
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt
from passlib.context import CryptContext

from tailorbook.core.config import Settings
from tailorbook.core.errors import NotAuthenticated

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TEMPORARY_PASSWORD_ALPHABET = string.ascii_lowercase + string.digits
TEMPORARY_PASSWORD_RANDOM_CHARS = 10
TEMPORARY_PASSWORD_FILLER = "a"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def generate_temporary_password(length: int = 12) -> str:
    """
    Generate a temporary password for a client added by a tailor.

    Ten random lowercase alphanumeric characters, padded with a filler
    character up to ``length``. Good enough for a first login that the
    client is expected to change, not a hardened credential.
    """
    random_part = "".join(
        secrets.choice(TEMPORARY_PASSWORD_ALPHABET)
        for _ in range(TEMPORARY_PASSWORD_RANDOM_CHARS)
    )
    return random_part.ljust(length, TEMPORARY_PASSWORD_FILLER)


def create_access_token(claims: Dict[str, Any], settings: Settings, long_lived: bool = False) -> str:
    """
    Sign an access token for the given claims.

    Anonymous device identities get the long-lived expiry so the device keeps
    its identity; everyone else gets the standard one.
    """
    minutes = settings.ANONYMOUS_TOKEN_EXPIRE_MINUTES if long_lived else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode = {**claims, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as exc:
        raise NotAuthenticated("Invalid or expired token") from exc
