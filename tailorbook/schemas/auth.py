from pydantic import EmailStr, Field
from typing import Literal, Optional

from tailorbook.models.user import UserRole
from tailorbook.schemas.base import CamelModel


class UserRegister(CamelModel):
    name: str = Field(min_length=2)
    email: EmailStr
    password: str = Field(min_length=8)
    role: Literal["tailor", "client"]


class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class ProfileUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None


# Properties to return to client
class UserPublic(CamelModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None
    is_anonymous: bool = False
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class AuthResponse(CamelModel):
    token: str
    user: UserPublic


class ProfileResponse(CamelModel):
    user: UserPublic
