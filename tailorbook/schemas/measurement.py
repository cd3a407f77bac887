from datetime import datetime
from pydantic import Field
from typing import Optional

from tailorbook.schemas.base import CamelModel

# Body measurements must be positive when given
Length = Optional[float]


class MeasurementUpsert(CamelModel):
    """
    Partial measurement write. Exactly the fields present in the request are
    merged into the stored record; ``client_id`` / ``user_id`` pick the record.
    """
    client_id: Optional[str] = None
    user_id: Optional[str] = None

    chest: Length = Field(default=None, gt=0)
    overarm: Length = Field(default=None, gt=0)
    waist: Length = Field(default=None, gt=0)
    hip_seat: Length = Field(default=None, gt=0)
    neck: Length = Field(default=None, gt=0)
    arm: Length = Field(default=None, gt=0)
    pant_outseam: Length = Field(default=None, gt=0)
    pant_inseam: Length = Field(default=None, gt=0)
    coat_inseam: Length = Field(default=None, gt=0)
    height: Length = Field(default=None, gt=0)
    weight: Length = Field(default=None, gt=0)

    coat_size: Optional[str] = None
    pant_size: Optional[str] = None
    dress_shirt_size: Optional[str] = None
    shoe_size: Optional[str] = None
    material_preference: Optional[str] = None

    date_taken: Optional[datetime] = None

    def changes(self) -> dict:
        """Fields explicitly sent with a value, minus the record selectors."""
        return self.model_dump(exclude_unset=True, exclude_none=True, exclude={"client_id", "user_id"})


class MeasurementRead(CamelModel):
    id: str
    client_id: Optional[str] = None
    user_id: Optional[str] = None

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

    date_taken: datetime
    updated_by_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
