"""
Persisted route maintenance: store ordered route stops and keep their
distance columns in sync with the route distance sequencer.

Every edit (replace stops, reorder, stop moved or deleted) recomputes the
whole route from scratch.
"""

import logging
from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.route_stop import RouteStop
from app.models.stop import Stop
from app.models.vehicle_route import VehicleRoute
from app.schemas.route import RouteStopInput
from app.services.route_distance import (
    RouteDistances,
    RouteStopEntry,
    StopRef,
    compute_route_distances,
    move_item,
)

logger = logging.getLogger(__name__)


class UnknownStopError(LookupError):
    """Raised when a route references stop ids that are not in the catalog."""

    def __init__(self, stop_ids: Iterable[UUID]):
        self.stop_ids = sorted(str(stop_id) for stop_id in stop_ids)
        super().__init__(f"Unknown stop id(s): {', '.join(self.stop_ids)}")


def stop_ref(stop: Stop) -> StopRef:
    return StopRef(id=stop.id, name=stop.name, geo_point=stop.geo_point)


def ordered_route_stops(route: VehicleRoute) -> list[RouteStop]:
    return sorted(route.route_stops, key=lambda rs: rs.stop_order)


def route_entries(rows: Sequence[RouteStop]) -> list[RouteStopEntry]:
    """Sequencer input for route stop rows, positions taken from list order."""
    return [
        RouteStopEntry(position=position, stop=stop_ref(row.stop), manual_distance_override=row.manual_distance)
        for position, row in enumerate(rows, start=1)
    ]


def apply_distances(route: VehicleRoute, rows: Sequence[RouteStop]) -> RouteDistances:
    """Renumber rows 1..n in list order and write leg, cumulative and total distances."""
    result = compute_route_distances(route_entries(rows))
    for position, (row, leg, cumulative) in enumerate(
        zip(rows, result.leg_distances, result.cumulative_distances), start=1
    ):
        row.stop_order = position
        row.distance_from_previous = leg
        row.cumulative_distance = cumulative
    route.total_distance = result.total_distance
    logger.debug("Route %s: %s stops, total %s km", route.id, len(rows), result.total_distance)
    return result


def replace_route_stops(db: Session, route: VehicleRoute, stops: Sequence[RouteStopInput]) -> RouteDistances:
    """
    Replace the route's stops with the given ordered list and compute distances.
    Raises UnknownStopError before touching the route if any stop id is missing.
    """
    wanted = {item.stop_id for item in stops}
    catalog: dict[UUID, Stop] = {}
    if wanted:
        catalog = {stop.id: stop for stop in db.query(Stop).filter(Stop.id.in_(list(wanted))).all()}
    missing = wanted - catalog.keys()
    if missing:
        raise UnknownStopError(missing)

    route.route_stops.clear()
    rows = [
        RouteStop(
            stop=catalog[item.stop_id],
            stop_order=position,
            arrival_time=item.arrival_time,
            departure_time=item.departure_time,
            manual_distance=item.manual_distance,
        )
        for position, item in enumerate(stops, start=1)
    ]
    route.route_stops.extend(rows)
    return apply_distances(route, rows)


def reorder_route(route: VehicleRoute, from_position: int, to_position: int) -> RouteDistances:
    """
    Move one stop within the route and recompute every leg.
    Raises ValueError for positions outside the route.
    """
    rows = move_item(ordered_route_stops(route), from_position, to_position)
    logger.info("Route %s: moved stop %s -> %s", route.id, from_position, to_position)
    return apply_distances(route, rows)


def recalculate_route(route: VehicleRoute) -> RouteDistances:
    return apply_distances(route, ordered_route_stops(route))


def recalculate_routes_for_stop(db: Session, stop_id: UUID) -> int:
    """Recompute every route that visits the stop. Returns the number of routes touched."""
    routes = (
        db.query(VehicleRoute)
        .join(RouteStop, RouteStop.vehicle_route_id == VehicleRoute.id)
        .filter(RouteStop.stop_id == stop_id)
        .distinct()
        .all()
    )
    for route in routes:
        recalculate_route(route)
    if routes:
        logger.info("Recalculated %s route(s) after change to stop %s", len(routes), stop_id)
    return len(routes)


def delete_stop(db: Session, stop: Stop) -> int:
    """
    Delete a catalog stop, drop it from every route that visits it and
    recompute those routes. Returns the number of routes touched.
    """
    route_ids = {rs.vehicle_route_id for rs in stop.route_stops}
    db.delete(stop)
    db.flush()
    # Route collections loaded before the flush still hold the deleted rows
    db.expire_all()
    routes = db.query(VehicleRoute).filter(VehicleRoute.id.in_(list(route_ids))).all() if route_ids else []
    for route in routes:
        recalculate_route(route)
    if routes:
        logger.info("Removed stop from %s route(s) and recalculated", len(routes))
    return len(routes)
