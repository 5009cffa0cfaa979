"""
Route distance sequencing.

Given an ordered list of route stops, compute the distance of every leg
(from the preceding stop), the running cumulative distance and the route
total. Pure and stateless: callers rebuild the entry list on every edit
(add, remove, reorder) and recompute from scratch.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Optional, Sequence, TypeVar

from app.core.geo import GeoPoint, distance_between, is_located, round_km

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Where a leg distance came from
LEG_ORIGIN = "origin"  # first stop, no predecessor
LEG_MANUAL = "manual"  # caller-supplied override
LEG_COMPUTED = "computed"  # Haversine between both endpoints
LEG_UNKNOWN = "unknown"  # an endpoint has no location; counted as 0


@dataclass(frozen=True)
class StopRef:
    """Read-only view of a catalog stop."""
    id: Any
    name: str = ""
    geo_point: Optional[GeoPoint] = None


@dataclass(frozen=True)
class RouteStopEntry:
    position: int  # 1-based
    stop: StopRef
    manual_distance_override: Optional[float] = None


@dataclass(frozen=True)
class RouteDistances:
    leg_distances: list[float] = field(default_factory=list)
    cumulative_distances: list[float] = field(default_factory=list)
    total_distance: float = 0.0
    leg_sources: list[str] = field(default_factory=list)


def _leg(previous: RouteStopEntry, current: RouteStopEntry) -> tuple[float, str]:
    if current.manual_distance_override is not None:
        return float(current.manual_distance_override), LEG_MANUAL
    a = previous.stop.geo_point
    b = current.stop.geo_point
    if is_located(a) and is_located(b):
        return distance_between(a, b), LEG_COMPUTED
    return 0.0, LEG_UNKNOWN


def compute_route_distances(entries: Sequence[RouteStopEntry]) -> RouteDistances:
    """
    Compute per-leg and cumulative distances (km) for an ordered route.

    Leg rule for every stop after the first: a manual override wins, else the
    Haversine distance when both endpoints are located, else 0. The running
    sum is re-rounded to 2 decimals after each leg. Never raises for missing
    coordinates and never mutates entries.
    """
    legs: list[float] = []
    cumulative: list[float] = []
    sources: list[str] = []

    running = 0.0
    for index, entry in enumerate(entries):
        if index == 0:
            legs.append(0.0)
            cumulative.append(0.0)
            sources.append(LEG_ORIGIN)
            continue
        leg, source = _leg(entries[index - 1], entry)
        if source == LEG_UNKNOWN:
            logger.debug(
                "No location for leg %s -> %s; counting 0 km",
                entries[index - 1].stop.id,
                entry.stop.id,
            )
        running = round_km(running + leg)
        legs.append(leg)
        cumulative.append(running)
        sources.append(source)

    total = cumulative[-1] if cumulative else 0.0
    return RouteDistances(
        leg_distances=legs,
        cumulative_distances=cumulative,
        total_distance=total,
        leg_sources=sources,
    )


def build_entries(items: Iterable[tuple[StopRef, Optional[float]]]) -> list[RouteStopEntry]:
    """Number (stop, override) pairs 1..n in the order given."""
    return [
        RouteStopEntry(position=position, stop=stop, manual_distance_override=override)
        for position, (stop, override) in enumerate(items, start=1)
    ]


def move_item(items: Sequence[T], from_position: int, to_position: int) -> list[T]:
    """
    Return a new list with the item at from_position moved to to_position
    (both 1-based); items in between shift by one.
    Raises ValueError for positions outside 1..len(items).
    """
    size = len(items)
    for name, value in (("from_position", from_position), ("to_position", to_position)):
        if not 1 <= value <= size:
            raise ValueError(f"{name} must be between 1 and {size}, got {value}")

    reordered = list(items)
    reordered.insert(to_position - 1, reordered.pop(from_position - 1))
    return reordered


def move_entry(
    entries: Sequence[RouteStopEntry],
    from_position: int,
    to_position: int,
) -> list[RouteStopEntry]:
    """move_item for route entries, with positions renumbered 1..n."""
    reordered = move_item(entries, from_position, to_position)
    return [replace(entry, position=position) for position, entry in enumerate(reordered, start=1)]
