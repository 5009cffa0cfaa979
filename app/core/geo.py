"""Geo utilities: great-circle distance (Haversine), rounding and point helpers."""

import math
from dataclasses import dataclass
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Callable, Iterable, Optional, TypeVar

EARTH_RADIUS_KM = 6371.0  # mean Earth radius
EQUATOR_LENGTH_KM = 40075.0

_ROUNDING_CONTEXT = Context(prec=400)

T = TypeVar("T")


@dataclass(frozen=True)
class GeoPoint:
    """Latitude/longitude in degrees. Either coordinate may be unknown."""
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def is_located(self) -> bool:
        return self.latitude is not None and self.longitude is not None


def is_located(point: Optional[GeoPoint]) -> bool:
    """True when point exists and carries both coordinates."""
    return point is not None and point.is_located


def round_km(value: float, places: int = 2) -> float:
    """
    Round half away from zero (2.345 -> 2.35), not banker's rounding.
    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    # floats reach ~1.8e308, so the quantized result can need 300+ digits
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP, context=_ROUNDING_CONTEXT))


def distance_between(a: GeoPoint, b: GeoPoint) -> float:
    """
    Compute great-circle distance between two located points in kilometers,
    rounded to 2 decimals. Uses the Haversine formula.

    Both points must carry latitude and longitude; coordinate ranges are not
    validated here.
    """
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    dphi = math.radians(b.latitude - a.latitude)
    dlambda = math.radians(b.longitude - a.longitude)

    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # h can overshoot 1.0 by an ulp near antipodes; asin would return NaN
    c = 2 * math.asin(min(1.0, math.sqrt(h)))
    return round_km(EARTH_RADIUS_KM * c)


def center_point(points: Iterable[Optional[GeoPoint]]) -> Optional[GeoPoint]:
    """
    Geographic mean of the located points (average of unit vectors on the sphere).
    Returns None when no point is located.
    """
    x = y = z = 0.0
    count = 0
    for point in points:
        if not is_located(point):
            continue
        lat = math.radians(point.latitude)
        lon = math.radians(point.longitude)
        x += math.cos(lat) * math.cos(lon)
        y += math.cos(lat) * math.sin(lon)
        z += math.sin(lat)
        count += 1
    if count == 0:
        return None
    x, y, z = x / count, y / count, z / count
    lon = math.atan2(y, x)
    lat = math.atan2(z, math.sqrt(x * x + y * y))
    return GeoPoint(latitude=round(math.degrees(lat), 6), longitude=round(math.degrees(lon), 6))


def sort_by_distance(
    origin: GeoPoint,
    items: Iterable[T],
    key: Callable[[T], Optional[GeoPoint]],
) -> list[tuple[T, float]]:
    """Pair each located item with its distance from origin, nearest first. Unlocated items are dropped."""
    ranked: list[tuple[T, float]] = []
    for item in items:
        point = key(item)
        if not is_located(point):
            continue
        ranked.append((item, distance_between(origin, point)))
    ranked.sort(key=lambda pair: pair[1])
    return ranked
