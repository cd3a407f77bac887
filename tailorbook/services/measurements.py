"""
Measurement Merge Engine

A measurement write lands on one of two records:

* the client-scoped record (``client_id``) kept by a tailor relationship, which
  the owning tailor and the linked client may both write;
* the user-scoped record (``user_id``) an identity keeps for itself, which is
  what anonymous device users use.

Writes are partial merges: only fields sent with a value overwrite the stored
ones.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from tailorbook.core.errors import BadRequest, Conflict, Forbidden
from tailorbook.core.timeutils import as_utc, utcnow
from tailorbook.models.measurement import MERGEABLE_FIELDS, Measurement
from tailorbook.schemas.measurement import MeasurementUpsert
from tailorbook.services.access import Capability, resolve_client_access
from tailorbook.services.identity import AnonymousIdentity, Identity

logger = logging.getLogger(__name__)


def _merge(measurement: Measurement, changes: Dict[str, Any], identity: Identity) -> Measurement:
    for field, value in changes.items():
        if field not in MERGEABLE_FIELDS:
            continue
        if field == "date_taken":
            value = as_utc(value)
        setattr(measurement, field, value)
    measurement.updated_by_id = identity.user_id
    measurement.updated_at = utcnow()
    return measurement


def _save(db: Session, measurement: Measurement) -> Measurement:
    db.add(measurement)
    try:
        db.commit()
    except IntegrityError as exc:
        # A concurrent writer created the row between our lookup and insert
        db.rollback()
        raise Conflict("Measurement record was created concurrently, retry the request") from exc
    db.refresh(measurement)
    return measurement


def upsert_measurement(db: Session, identity: Identity, payload: MeasurementUpsert) -> Measurement:
    """
    Create or update the measurement record the payload targets.

    An anonymous identity, or any identity naming a ``user_id``, writes its
    own user-scoped record. Otherwise ``client_id`` selects a client-scoped
    record the identity must be able to read.

    Raises:
        Forbidden: ``user_id`` names another identity
        BadRequest: no record can be selected
        NotAuthenticated / NotFound: from client access resolution
    """
    changes = payload.changes()

    if isinstance(identity, AnonymousIdentity) or payload.user_id is not None:
        user_id = payload.user_id or identity.user_id
        if user_id != identity.user_id:
            raise Forbidden("You can only update your own measurements")

        measurement = db.exec(select(Measurement).where(Measurement.user_id == user_id)).first()
        if measurement is None:
            measurement = Measurement(user_id=user_id)
            logger.info("Creating self-service measurements for %s", user_id)
        return _save(db, _merge(measurement, changes, identity))

    if payload.client_id is None:
        raise BadRequest("Either clientId or userId is required")

    resolve_client_access(db, identity, payload.client_id, Capability.READ)

    lookup = select(Measurement).where(Measurement.client_id == payload.client_id)
    measurement = db.exec(lookup).first()
    if measurement is not None:
        return _save(db, _merge(measurement, changes, identity))

    logger.info("Creating measurements for client %s", payload.client_id)
    try:
        return _save(db, _merge(Measurement(client_id=payload.client_id), changes, identity))
    except Conflict:
        # Lost the insert race: the client record is keyed by client_id, so
        # merge into the row that won and let the last write win.
        measurement = db.exec(lookup).one()
        return _save(db, _merge(measurement, changes, identity))


def get_measurement(db: Session, identity: Identity, client_id: Optional[str] = None) -> Optional[Measurement]:
    """The client's record when ``client_id`` is given, else the identity's own record."""
    if client_id is not None:
        resolve_client_access(db, identity, client_id, Capability.READ)
        return db.exec(select(Measurement).where(Measurement.client_id == client_id)).first()
    return db.exec(select(Measurement).where(Measurement.user_id == identity.user_id)).first()
