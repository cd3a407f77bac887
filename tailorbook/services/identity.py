"""
Identity Model

The authenticated principal attached to every request. It is one of three
variants; there is no way to express a registered identity without a role.
"""
from dataclasses import dataclass
from typing import Any, Dict, Union

from tailorbook.core.errors import NotAuthenticated
from tailorbook.models.user import User, UserRole


@dataclass(frozen=True)
class TailorIdentity:
    user_id: str

    def claims(self) -> Dict[str, Any]:
        return {"sub": self.user_id, "role": UserRole.TAILOR.value}


@dataclass(frozen=True)
class ClientIdentity:
    user_id: str

    def claims(self) -> Dict[str, Any]:
        return {"sub": self.user_id, "role": UserRole.CLIENT.value}


@dataclass(frozen=True)
class AnonymousIdentity:
    user_id: str

    def claims(self) -> Dict[str, Any]:
        return {"sub": self.user_id, "anon": True}


Identity = Union[TailorIdentity, ClientIdentity, AnonymousIdentity]


def identity_from_claims(claims: Dict[str, Any]) -> Identity:
    """Build an identity from verified token claims."""
    user_id = claims.get("sub")
    if not user_id:
        raise NotAuthenticated("Token missing subject")

    if claims.get("anon"):
        return AnonymousIdentity(user_id=user_id)

    role = claims.get("role")
    if role == UserRole.TAILOR.value:
        return TailorIdentity(user_id=user_id)
    if role == UserRole.CLIENT.value:
        return ClientIdentity(user_id=user_id)
    raise NotAuthenticated("Token carries no usable role")


def identity_for_user(user: User) -> Identity:
    if user.is_anonymous or user.role is None:
        return AnonymousIdentity(user_id=user.id)
    if user.role == UserRole.TAILOR:
        return TailorIdentity(user_id=user.id)
    return ClientIdentity(user_id=user.id)


def is_anonymous(identity: Identity) -> bool:
    return isinstance(identity, AnonymousIdentity)
