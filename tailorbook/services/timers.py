"""
Timer Lifecycle

Billable time per (client, tailor): ``none -> running -> closed``. A closed
timer is final, after which a new one may start for the same pair.
"""
import logging
import math
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from tailorbook.core.errors import Conflict, Forbidden, NotFound
from tailorbook.core.timeutils import as_utc, utcnow
from tailorbook.models.timer import Timer
from tailorbook.services.access import Capability, require_tailor, resolve_client_access
from tailorbook.services.identity import Identity, TailorIdentity

logger = logging.getLogger(__name__)

ACTIVE_TIMER_EXISTS = "An active timer already exists for this client"


def compute_duration(start_time: datetime, end_time: datetime) -> int:
    """Whole minutes between start and end, rounded half up, never less than 1."""
    minutes = (as_utc(end_time) - as_utc(start_time)).total_seconds() / 60
    return max(1, math.floor(minutes + 0.5))


def start_timer(db: Session, identity: Identity, client_id: str, description: Optional[str] = None) -> Timer:
    tailor = require_tailor(identity, "Only tailors can start timers")
    resolve_client_access(db, tailor, client_id, Capability.WRITE_AS_TAILOR)

    active = db.exec(
        select(Timer).where(
            Timer.client_id == client_id,
            Timer.tailor_id == tailor.user_id,
            Timer.end_time.is_(None),
        )
    ).first()
    if active is not None:
        raise Conflict(ACTIVE_TIMER_EXISTS)

    timer = Timer(
        client_id=client_id,
        tailor_id=tailor.user_id,
        start_time=utcnow(),
        description=description,
    )
    db.add(timer)
    try:
        db.commit()
    except IntegrityError as exc:
        # The open-timer index caught a concurrent start
        db.rollback()
        raise Conflict(ACTIVE_TIMER_EXISTS) from exc
    db.refresh(timer)
    logger.info("Timer %s started by %s for client %s", timer.id, tailor.user_id, client_id)
    return timer


def stop_timer(db: Session, identity: Identity, timer_id: str, end_time: Optional[datetime] = None) -> Timer:
    tailor = require_tailor(identity, "Only tailors can stop timers")

    timer = db.get(Timer, timer_id)
    if timer is None:
        raise NotFound("Timer not found")
    if timer.tailor_id != tailor.user_id:
        raise Forbidden("You do not have access to this timer")
    if timer.end_time is not None:
        raise Conflict("Timer is already stopped")

    resolved_end = as_utc(end_time) or utcnow()
    timer.end_time = resolved_end
    timer.duration = compute_duration(timer.start_time, resolved_end)

    db.add(timer)
    db.commit()
    db.refresh(timer)
    logger.info("Timer %s stopped after %s minute(s)", timer.id, timer.duration)
    return timer


def list_timers(db: Session, identity: Identity, client_id: str) -> List[Timer]:
    """
    Timers for a client, newest first. A tailor sees only the timers they
    logged; the linked client sees every timer on their profile.
    """
    resolve_client_access(db, identity, client_id, Capability.READ)

    statement = select(Timer).where(Timer.client_id == client_id)
    if isinstance(identity, TailorIdentity):
        statement = statement.where(Timer.tailor_id == identity.user_id)
    return list(db.exec(statement.order_by(Timer.start_time.desc())).all())
