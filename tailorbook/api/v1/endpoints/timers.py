"""
Timer Endpoints Module

Tailors start and stop billable-time timers against their clients. Only one
timer per client can run at a time for a given tailor.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from tailorbook.api import deps
from tailorbook.db.session import get_db
from tailorbook.schemas.timer import TimerRead, TimerStart, TimerStop
from tailorbook.services import timers
from tailorbook.services.identity import Identity, TailorIdentity

router = APIRouter()


@router.post("/start", response_model=TimerRead, status_code=status.HTTP_201_CREATED)
def start_timer(
    timer_in: TimerStart,
    db: Session = Depends(get_db),
    tailor: TailorIdentity = Depends(deps.get_current_tailor),
):
    """
    Start a timer for a client.

    Raises:
        409: If a timer is already running for this client
    """
    return timers.start_timer(db, tailor, timer_in.client_id, timer_in.description)


@router.post("/stop", response_model=TimerRead)
def stop_timer(
    timer_in: TimerStop,
    db: Session = Depends(get_db),
    tailor: TailorIdentity = Depends(deps.get_current_tailor),
):
    """
    Stop a running timer. The duration is recorded in whole minutes, at least one.

    Raises:
        403: If the timer belongs to another tailor
        404: If the timer doesn't exist
        409: If the timer is already stopped
    """
    return timers.stop_timer(db, tailor, timer_in.timer_id, timer_in.end_time)


@router.get("/{client_id}", response_model=List[TimerRead])
def list_timers(
    client_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(deps.get_current_identity),
):
    """List a client's timers, newest first."""
    return timers.list_timers(db, identity, client_id)
