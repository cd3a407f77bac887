"""
User Model Module

This module defines the User model and UserRole enumeration. A user row backs
every identity: tailors and clients register with email/password, anonymous
device users get a bare row with neither.
"""
from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field, AutoString
import uuid
from datetime import datetime

from tailorbook.core.timeutils import utcnow
from tailorbook.db.types import UTCDateTime


class UserRole(str, Enum):
    """
    Roles a registered user can hold.

    - TAILOR: manages clients, appointments and billable time
    - CLIENT: sees and edits their own tailoring profile and measurements

    Anonymous users hold no role at all.
    """
    TAILOR = "tailor"
    CLIENT = "client"


class User(SQLModel, table=True):
    """
    User model representing every principal that can hold a token.

    Attributes:
        id: Unique identifier (UUID) automatically generated for each user
        email: Login email, unique; None for anonymous users
        password: Hashed password (bcrypt); None for anonymous users
        name: Display name, derived from first/last name on profile update
        first_name, last_name: Optional profile details
        role: TAILOR or CLIENT for registered users, None for anonymous ones
        is_anonymous: True for device-local users created without credentials
        created_at: Creation timestamp (UTC)
    """
    __tablename__ = "users"

    # Primary key - auto-generated UUID for global uniqueness
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    # Authentication fields
    email: Optional[str] = Field(default=None, unique=True, index=True)
    password: Optional[str] = None  # Hashed password (bcrypt)

    # Profile information
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    # Authorization
    role: Optional[UserRole] = Field(default=None, sa_type=AutoString)
    is_anonymous: bool = Field(default=False)

    # Audit timestamp
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)

    @property
    def is_registered(self) -> bool:
        return not self.is_anonymous and self.role is not None
