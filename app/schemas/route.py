from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID
from datetime import datetime, time
from typing import Literal, Optional

from app.core.geo import EQUATOR_LENGTH_KM
from app.schemas.stop import GeoPointRead, StopRead


class RouteStopInput(BaseModel):
    """One stop of a route as submitted by the route editor, in route order."""
    stop_id: UUID
    arrival_time: Optional[time] = None
    departure_time: Optional[time] = None
    manual_distance: Optional[float] = Field(
        None, ge=0, le=EQUATOR_LENGTH_KM, allow_inf_nan=False
    )  # km from the previous stop


class VehicleRouteBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    remarks: Optional[str] = None


class VehicleRouteCreate(VehicleRouteBase):
    stops: list[RouteStopInput] = []


class VehicleRouteUpdate(VehicleRouteCreate):
    """Full replacement (PUT): route fields and the whole ordered stop list."""


class RouteStopRead(BaseModel):
    id: UUID
    stop_id: UUID
    stop_order: int
    arrival_time: Optional[time] = None
    departure_time: Optional[time] = None
    manual_distance: Optional[float] = None
    distance_from_previous: float
    cumulative_distance: float
    stop: StopRead

    model_config = ConfigDict(from_attributes=True)


class VehicleRouteRead(VehicleRouteBase):
    id: UUID
    total_distance: float
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VehicleRouteReadWithStops(VehicleRouteRead):
    route_stops: list[RouteStopRead] = []
    center: Optional[GeoPointRead] = None

    model_config = ConfigDict(from_attributes=True)


class VehicleRouteListResponse(BaseModel):
    items: list[VehicleRouteRead]
    total: int
    page: int
    per_page: int


class VehicleRouteStats(BaseModel):
    total: int
    total_stops: int
    routes_with_stops: int
    avg_stops_per_route: float


class RouteReorderRequest(BaseModel):
    """Move the stop at from_position to to_position (1-based)."""
    from_position: int = Field(..., ge=1)
    to_position: int = Field(..., ge=1)


RouteSortColumn = Literal["name", "created_at", "total_distance"]
SortDirection = Literal["asc", "desc"]
