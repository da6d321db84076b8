"""Payer names: the trip's roster of people sharing costs."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from tripsplit.database import get_db
from tripsplit.models import PayerName
from tripsplit.schemas import PayerNameCreate
from tripsplit.routers.trips import get_trip_or_404
from tripsplit.services.events import event_bus, ROSTER_CHANGED
from tripsplit.services.roster_cache import roster_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips/{trip_id}/payers", tags=["payers"])


def _load_names(db: Session, trip_id: str) -> list[str]:
    rows = db.query(PayerName).filter(PayerName.trip_id == trip_id).order_by(PayerName.id).all()
    return [r.name for r in rows]


def get_roster(db: Session, trip_id: str) -> list[str]:
    return roster_cache.get_or_load(trip_id, lambda: _load_names(db, trip_id))


@router.get("", response_model=list[str])
def list_payer_names(trip_id: str, db: Session = Depends(get_db)):
    get_trip_or_404(db, trip_id)
    return get_roster(db, trip_id)


@router.post("", response_model=list[str])
def add_payer_name(trip_id: str, data: PayerNameCreate, db: Session = Depends(get_db)):
    get_trip_or_404(db, trip_id)
    name = data.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Name cannot be empty")
    exists = (
        db.query(PayerName)
        .filter(PayerName.trip_id == trip_id, PayerName.name == name)
        .first()
    )
    if exists:
        raise HTTPException(status_code=400, detail="Name already exists")
    db.add(PayerName(trip_id=trip_id, name=name))
    db.commit()
    logger.info("Trip %s: added payer %s", trip_id, name)
    event_bus.publish(ROSTER_CHANGED, trip_id)
    return get_roster(db, trip_id)


@router.delete("/{name}", response_model=list[str])
def remove_payer_name(trip_id: str, name: str, db: Session = Depends(get_db)):
    get_trip_or_404(db, trip_id)
    row = (
        db.query(PayerName)
        .filter(PayerName.trip_id == trip_id, PayerName.name == name)
        .first()
    )
    if not row:
        raise HTTPException(status_code=404, detail="Name not found")
    db.delete(row)
    db.commit()
    logger.info("Trip %s: removed payer %s", trip_id, name)
    event_bus.publish(ROSTER_CHANGED, trip_id)
    return get_roster(db, trip_id)
