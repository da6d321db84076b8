"""Trips: create, list, get, soft-delete."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from tripsplit.database import get_db
from tripsplit.models import Trip
from tripsplit.schemas import TripCreate, TripResponse
from tripsplit.auth import require_admin
from tripsplit.services.events import event_bus, TRIP_CHANGED

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])


def get_trip_or_404(db: Session, trip_id: str) -> Trip:
    trip = db.query(Trip).filter(Trip.id == trip_id, Trip.is_active.is_(True)).first()
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")
    return trip


@router.get("", response_model=list[TripResponse])
def list_trips(db: Session = Depends(get_db)):
    trips = (
        db.query(Trip)
        .filter(Trip.is_active.is_(True))
        .order_by(Trip.created_at.desc())
        .all()
    )
    return [TripResponse.model_validate(t) for t in trips]


@router.post("", response_model=TripResponse)
def create_trip(data: TripCreate, db: Session = Depends(get_db)):
    name = data.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Trip name cannot be empty")
    trip = Trip(name=name)
    db.add(trip)
    db.commit()
    db.refresh(trip)
    logger.info("Created trip %s (%s)", trip.id, trip.name)
    return TripResponse.model_validate(trip)


@router.get("/{trip_id}", response_model=TripResponse)
def get_trip(trip_id: str, db: Session = Depends(get_db)):
    return TripResponse.model_validate(get_trip_or_404(db, trip_id))


@router.delete("/{trip_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_trip(trip_id: str, db: Session = Depends(get_db)):
    trip = get_trip_or_404(db, trip_id)
    trip.is_active = False
    db.commit()
    logger.info("Deleted trip %s", trip_id)
    event_bus.publish(TRIP_CHANGED, trip_id)
