"""
Client Model Module

A Client is a tailoring relationship: one tailor on one side, and optionally a
registered client user on the other. It is not the same thing as a user with
the client role; a tailor may keep a Client without the person ever logging in.
"""
from typing import List, Optional, TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship
import uuid
from datetime import datetime

from tailorbook.core.timeutils import utcnow
from tailorbook.db.types import UTCDateTime

if TYPE_CHECKING:
    from tailorbook.models.appointment import Appointment
    from tailorbook.models.measurement import Measurement
    from tailorbook.models.user import User


class Client(SQLModel, table=True):
    """
    Client model representing a tailor/client relationship.

    Attributes:
        id: Unique identifier (UUID) generated at provisioning time
        tailor_id: Owning tailor; None only while a self-registered client is unassigned
        client_user_id: Linked client-role user, if the client has an account (unique)
        store_name: Free text, editable by the owning tailor or linked client
        notes: Free text, editable by the owning tailor or linked client
        created_at, updated_at: Audit timestamps; updated_at orders the tailor's list
    """
    __tablename__ = "clients"

    # Primary key - auto-generated UUID for global uniqueness
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    # Ownership
    tailor_id: Optional[str] = Field(default=None, foreign_key="users.id", index=True)
    client_user_id: Optional[str] = Field(default=None, foreign_key="users.id", unique=True)

    # Free-text details
    store_name: Optional[str] = None
    notes: Optional[str] = None

    # Audit timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)

    # Two foreign keys point at users, so the linked account needs an explicit join column
    client_user: Optional["User"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[Client.client_user_id]", "lazy": "selectin"}
    )
    measurement: Optional["Measurement"] = Relationship(
        back_populates="client", sa_relationship_kwargs={"uselist": False}
    )
    appointments: List["Appointment"] = Relationship(back_populates="client")
