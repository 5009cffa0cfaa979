"""Stop catalog endpoints."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.geo import GeoPoint, sort_by_distance
from app.db.session import get_db
from app.models.stop import Stop
from app.schemas.stop import (
    LAT_MAX,
    LAT_MIN,
    LNG_MAX,
    LNG_MIN,
    StopCreate,
    StopNearbyRead,
    StopRead,
    StopUpdate,
)
from app.services.vehicle_routes import delete_stop, recalculate_routes_for_stop

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stops", tags=["stops"])


def _get_stop_or_404(db: Session, stop_id: UUID) -> Stop:
    stop = db.query(Stop).filter(Stop.id == stop_id).first()
    if not stop:
        raise HTTPException(status_code=404, detail="Stop not found")
    return stop


def _ensure_unique_name(db: Session, name: str, exclude_id: Optional[UUID] = None) -> None:
    query = db.query(Stop).filter(Stop.name == name)
    if exclude_id is not None:
        query = query.filter(Stop.id != exclude_id)
    if query.first():
        raise HTTPException(status_code=400, detail="Stop with this name already exists")


@router.post("", response_model=StopRead, status_code=201)
def create_stop(stop: StopCreate, db: Session = Depends(get_db)):
    """Create a new stop."""
    _ensure_unique_name(db, stop.name)
    db_stop = Stop(**stop.model_dump())
    db.add(db_stop)
    db.commit()
    db.refresh(db_stop)
    logger.info("Created stop %s (%s)", db_stop.id, db_stop.name)
    return db_stop


@router.get("", response_model=list[StopRead])
def list_stops(
    search: Optional[str] = Query(None, description="Search by stop name"),
    db: Session = Depends(get_db),
):
    """List stops ordered by name, with optional name filter."""
    query = db.query(Stop)
    if search:
        query = query.filter(Stop.name.ilike(f"%{search}%"))
    return query.order_by(Stop.name).all()


@router.get("/nearby", response_model=list[StopNearbyRead])
def list_nearby_stops(
    lat: float = Query(..., ge=LAT_MIN, le=LAT_MAX, description="Latitude"),
    lng: float = Query(..., ge=LNG_MIN, le=LNG_MAX, description="Longitude"),
    limit: int = Query(settings.nearby_stops_default_limit, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Stops with coordinates, nearest to (lat, lng) first. Stops without a location are left out."""
    stops = (
        db.query(Stop)
        .filter(Stop.latitude.isnot(None), Stop.longitude.isnot(None))
        .all()
    )
    ranked = sort_by_distance(GeoPoint(latitude=lat, longitude=lng), stops, key=lambda s: s.geo_point)
    return [
        StopNearbyRead(**StopRead.model_validate(stop).model_dump(), distance_km=km)
        for stop, km in ranked[:limit]
    ]


@router.get("/{stop_id}", response_model=StopRead)
def get_stop(stop_id: UUID, db: Session = Depends(get_db)):
    """Get stop by ID."""
    return _get_stop_or_404(db, stop_id)


@router.patch("/{stop_id}", response_model=StopRead)
def update_stop(stop_id: UUID, body: StopUpdate, db: Session = Depends(get_db)):
    """
    Partially update a stop. Moving a stop (latitude/longitude change)
    recalculates every route that visits it.
    """
    stop = _get_stop_or_404(db, stop_id)
    changes = body.model_dump(exclude_unset=True)
    if "name" in changes:
        if changes["name"] is None:
            raise HTTPException(status_code=400, detail="Stop name cannot be empty")
        _ensure_unique_name(db, changes["name"], exclude_id=stop.id)

    moved = any(
        key in changes and changes[key] != getattr(stop, key)
        for key in ("latitude", "longitude")
    )
    for key, value in changes.items():
        setattr(stop, key, value)
    if moved:
        db.flush()
        recalculate_routes_for_stop(db, stop.id)
    db.commit()
    db.refresh(stop)
    return stop


@router.delete("/{stop_id}", status_code=204)
def remove_stop(stop_id: UUID, db: Session = Depends(get_db)):
    """Delete a stop; routes that visited it are renumbered and recalculated."""
    stop = _get_stop_or_404(db, stop_id)
    delete_stop(db, stop)
    db.commit()
    logger.info("Deleted stop %s", stop_id)
    return Response(status_code=204)
