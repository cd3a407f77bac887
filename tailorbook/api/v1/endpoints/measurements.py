"""
Measurement Endpoints Module

One measurement snapshot per client profile, plus one per identity for
self-service (anonymous) users. Writes merge into the stored snapshot.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from tailorbook.api import deps
from tailorbook.db.session import get_db
from tailorbook.schemas.measurement import MeasurementRead, MeasurementUpsert
from tailorbook.services.identity import Identity
from tailorbook.services.measurements import get_measurement, upsert_measurement

router = APIRouter()


@router.post("", response_model=MeasurementRead, status_code=status.HTTP_201_CREATED)
def upsert_measurements(
    measurement_in: MeasurementUpsert,
    db: Session = Depends(get_db),
    identity: Identity = Depends(deps.get_current_identity),
):
    """
    Create or update a measurement snapshot.

    Send ``clientId`` to write a client's measurements (owning tailor or the
    linked client), or ``userId`` / nothing as an anonymous user to write your
    own. Omitted fields keep their stored values.
    """
    return upsert_measurement(db, identity, measurement_in)


@router.get("/me", response_model=MeasurementRead, responses={204: {"description": "No measurements yet"}})
def read_my_measurements(
    db: Session = Depends(get_db),
    identity: Identity = Depends(deps.get_current_identity),
):
    """Get the caller's own self-service measurements."""
    measurement = get_measurement(db, identity)
    if measurement is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return measurement


@router.get("/{client_id}", response_model=MeasurementRead, responses={204: {"description": "No measurements yet"}})
def read_client_measurements(
    client_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(deps.get_current_identity),
):
    """Get a client's measurements."""
    measurement = get_measurement(db, identity, client_id)
    if measurement is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return measurement
