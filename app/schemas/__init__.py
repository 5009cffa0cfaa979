from app.schemas.stop import StopCreate, StopRead, StopUpdate, StopNearbyRead, GeoPointRead
from app.schemas.route import (
    RouteStopInput,
    RouteStopRead,
    VehicleRouteCreate,
    VehicleRouteUpdate,
    VehicleRouteRead,
    VehicleRouteReadWithStops,
    VehicleRouteListResponse,
    VehicleRouteStats,
    RouteReorderRequest,
)
from app.schemas.distance import DistanceStopInput, RouteDistanceRequest, RouteDistanceResponse

__all__ = [
    "StopCreate",
    "StopRead",
    "StopUpdate",
    "StopNearbyRead",
    "GeoPointRead",
    "RouteStopInput",
    "RouteStopRead",
    "VehicleRouteCreate",
    "VehicleRouteUpdate",
    "VehicleRouteRead",
    "VehicleRouteReadWithStops",
    "VehicleRouteListResponse",
    "VehicleRouteStats",
    "RouteReorderRequest",
    "DistanceStopInput",
    "RouteDistanceRequest",
    "RouteDistanceResponse",
]
