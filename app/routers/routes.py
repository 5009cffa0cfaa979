"""Vehicle route endpoints: CRUD over ordered stops plus distance calculation."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.geo import GeoPoint, center_point
from app.db.session import get_db
from app.models.route_stop import RouteStop
from app.models.stop import Stop
from app.models.vehicle_route import VehicleRoute
from app.schemas.distance import RouteDistanceRequest, RouteDistanceResponse
from app.schemas.route import (
    RouteReorderRequest,
    RouteSortColumn,
    SortDirection,
    VehicleRouteCreate,
    VehicleRouteListResponse,
    VehicleRouteRead,
    VehicleRouteReadWithStops,
    VehicleRouteStats,
    VehicleRouteUpdate,
)
from app.schemas.stop import GeoPointRead
from app.services.route_distance import StopRef, build_entries, compute_route_distances
from app.services.vehicle_routes import (
    UnknownStopError,
    recalculate_route,
    reorder_route,
    replace_route_stops,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])

SORT_COLUMNS = {
    "name": VehicleRoute.name,
    "created_at": VehicleRoute.created_at,
    "total_distance": VehicleRoute.total_distance,
}


def _get_route_or_404(db: Session, route_id: UUID) -> VehicleRoute:
    route = db.query(VehicleRoute).filter(VehicleRoute.id == route_id).first()
    if not route:
        raise HTTPException(status_code=404, detail="Route not found")
    return route


def _route_with_stops(route: VehicleRoute) -> VehicleRouteReadWithStops:
    """Route detail response, including the geographic center of its located stops."""
    center = center_point(rs.stop.geo_point for rs in route.route_stops)
    return VehicleRouteReadWithStops.model_validate(route).model_copy(
        update={"center": GeoPointRead.from_point(center)}
    )


@router.post("/distance", response_model=RouteDistanceResponse)
def calculate_route_distance(body: RouteDistanceRequest) -> RouteDistanceResponse:
    """
    Compute leg, cumulative and total distances (km) for an ordered list of stops.
    Stateless and idempotent: nothing is read from or written to the database.
    Stops without coordinates contribute 0 km unless they carry manualDistanceOverride.
    """
    entries = build_entries(
        (
            StopRef(
                id=item.id,
                name=item.name or "",
                geo_point=GeoPoint(latitude=item.latitude, longitude=item.longitude),
            ),
            item.manual_distance_override,
        )
        for item in body.stops
    )
    result = compute_route_distances(entries)
    return RouteDistanceResponse(
        leg_distances=result.leg_distances,
        cumulative_distances=result.cumulative_distances,
        total_distance=result.total_distance,
        leg_sources=result.leg_sources,
    )


@router.post("", response_model=VehicleRouteReadWithStops, status_code=201)
def create_route(body: VehicleRouteCreate, db: Session = Depends(get_db)):
    """Create a route with its ordered stops; distances are computed and stored."""
    route = VehicleRoute(
        name=body.name,
        description=body.description,
        remarks=body.remarks,
        total_distance=0.0,
    )
    db.add(route)
    try:
        replace_route_stops(db, route, body.stops)
    except UnknownStopError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    db.commit()
    db.refresh(route)
    logger.info("Created route %s with %s stops, %s km", route.id, len(body.stops), route.total_distance)
    return _route_with_stops(route)


@router.get("", response_model=VehicleRouteListResponse)
def list_routes(
    search: Optional[str] = Query(None, description="Search name, description and remarks"),
    sort: RouteSortColumn = Query("created_at"),
    direction: SortDirection = Query("desc"),
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    db: Session = Depends(get_db),
):
    """List routes with search, sorting and pagination."""
    query = db.query(VehicleRoute)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                VehicleRoute.name.ilike(pattern),
                VehicleRoute.description.ilike(pattern),
                VehicleRoute.remarks.ilike(pattern),
            )
        )
    total = query.count()
    column = SORT_COLUMNS[sort]
    query = query.order_by(column.asc() if direction == "asc" else column.desc(), VehicleRoute.name)
    items = query.offset((page - 1) * per_page).limit(per_page).all()
    return VehicleRouteListResponse(
        items=[VehicleRouteRead.model_validate(route) for route in items],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/stats", response_model=VehicleRouteStats)
def route_stats(db: Session = Depends(get_db)):
    """Counts for the routes overview."""
    total = db.query(func.count(VehicleRoute.id)).scalar() or 0
    route_stop_count = db.query(func.count(RouteStop.id)).scalar() or 0
    routes_with_stops = db.query(func.count(func.distinct(RouteStop.vehicle_route_id))).scalar() or 0
    return VehicleRouteStats(
        total=total,
        total_stops=db.query(func.count(Stop.id)).scalar() or 0,
        routes_with_stops=routes_with_stops,
        avg_stops_per_route=round(route_stop_count / max(total, 1), 1),
    )


@router.get("/{route_id}", response_model=VehicleRouteReadWithStops)
def get_route(route_id: UUID, db: Session = Depends(get_db)):
    """Get a route with its ordered stops, per-stop distances and center point."""
    return _route_with_stops(_get_route_or_404(db, route_id))


@router.put("/{route_id}", response_model=VehicleRouteReadWithStops)
def update_route(route_id: UUID, body: VehicleRouteUpdate, db: Session = Depends(get_db)):
    """Replace route fields and its whole stop list; distances are recomputed."""
    route = _get_route_or_404(db, route_id)
    route.name = body.name
    route.description = body.description
    route.remarks = body.remarks
    try:
        replace_route_stops(db, route, body.stops)
    except UnknownStopError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    db.commit()
    db.refresh(route)
    logger.info("Updated route %s: %s stops, %s km", route.id, len(body.stops), route.total_distance)
    return _route_with_stops(route)


@router.post("/{route_id}/reorder", response_model=VehicleRouteReadWithStops)
def reorder_route_stops(route_id: UUID, body: RouteReorderRequest, db: Session = Depends(get_db)):
    """Move one stop to a new position; every leg is recomputed."""
    route = _get_route_or_404(db, route_id)
    try:
        reorder_route(route, body.from_position, body.to_position)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    db.commit()
    db.refresh(route)
    return _route_with_stops(route)


@router.post("/{route_id}/recalculate", response_model=VehicleRouteReadWithStops)
def recalculate_route_distances(route_id: UUID, db: Session = Depends(get_db)):
    """Recompute distances from the stops' current coordinates."""
    route = _get_route_or_404(db, route_id)
    recalculate_route(route)
    db.commit()
    db.refresh(route)
    return _route_with_stops(route)


@router.delete("/{route_id}", status_code=204)
def delete_route(route_id: UUID, db: Session = Depends(get_db)):
    """Delete a route; its route stops go with it."""
    route = _get_route_or_404(db, route_id)
    db.delete(route)
    db.commit()
    logger.info("Deleted route %s", route_id)
    return Response(status_code=204)
