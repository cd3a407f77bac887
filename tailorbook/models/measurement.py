"""
Measurement Model Module

One current measurement snapshot, replaced in place on every upsert. A row is
keyed by exactly one of ``client_id`` (tailor-managed relationship) or
``user_id`` (anonymous self-service); both keys are unique so the store itself
rejects a second row for the same owner.
"""
from typing import Optional, TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship
import uuid
from datetime import datetime

from tailorbook.core.timeutils import utcnow
from tailorbook.db.types import UTCDateTime

if TYPE_CHECKING:
    from tailorbook.models.client import Client

# Numeric body measurements, in the tailor's unit of choice
NUMERIC_FIELDS = (
    "chest",
    "overarm",
    "waist",
    "hip_seat",
    "neck",
    "arm",
    "pant_outseam",
    "pant_inseam",
    "coat_inseam",
    "height",
    "weight",
)

SIZE_FIELDS = (
    "coat_size",
    "pant_size",
    "dress_shirt_size",
    "shoe_size",
)

MERGEABLE_FIELDS = NUMERIC_FIELDS + SIZE_FIELDS + ("material_preference", "date_taken")


class MeasurementBase(SQLModel):
    chest: Optional[float] = None
    overarm: Optional[float] = None
    waist: Optional[float] = None
    hip_seat: Optional[float] = None
    neck: Optional[float] = None
    arm: Optional[float] = None
    pant_outseam: Optional[float] = None
    pant_inseam: Optional[float] = None
    coat_inseam: Optional[float] = None
    height: Optional[float] = None
    weight: Optional[float] = None

    coat_size: Optional[str] = None
    pant_size: Optional[str] = None
    dress_shirt_size: Optional[str] = None
    shoe_size: Optional[str] = None

    material_preference: Optional[str] = None
    date_taken: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


class Measurement(MeasurementBase, table=True):
    __tablename__ = "measurements"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    # Exactly one of these is set
    client_id: Optional[str] = Field(default=None, foreign_key="clients.id", unique=True)
    user_id: Optional[str] = Field(default=None, foreign_key="users.id", unique=True)

    # Identity that last wrote the record
    updated_by_id: Optional[str] = Field(default=None, foreign_key="users.id")

    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)

    client: Optional["Client"] = Relationship(back_populates="measurement")
