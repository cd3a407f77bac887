"""
Timer Model Module

Billable time a tailor logs against a client. A timer is open while
``end_time`` is NULL; at most one open timer may exist per (client, tailor).
"""
from typing import Optional
from sqlalchemy import Index, text
from sqlmodel import SQLModel, Field
import uuid
from datetime import datetime

from tailorbook.db.types import UTCDateTime


class Timer(SQLModel, table=True):
    """
    Attributes:
        id: Unique identifier (UUID)
        client_id: Client the time is billed to
        tailor_id: Tailor who logged the time
        start_time: When the timer was started (UTC)
        end_time: When the timer was stopped; None while running
        duration: Whole minutes between start and end, never below 1; set on stop
        description: Optional free text describing the work
    """
    __tablename__ = "timers"
    __table_args__ = (
        # Partial unique index: one running timer per client and tailor.
        # MySQL has no partial indexes, so there the pre-check query is the only guard.
        Index(
            "uq_timers_open_per_client_tailor",
            "client_id",
            "tailor_id",
            unique=True,
            sqlite_where=text("end_time IS NULL"),
            postgresql_where=text("end_time IS NULL"),
        ).ddl_if(dialect=("sqlite", "postgresql")),
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    client_id: str = Field(foreign_key="clients.id", index=True, nullable=False)
    tailor_id: str = Field(foreign_key="users.id", index=True, nullable=False)

    start_time: datetime = Field(nullable=False, sa_type=UTCDateTime)
    end_time: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)
    duration: Optional[int] = None  # minutes
    description: Optional[str] = None
