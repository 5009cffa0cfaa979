"""Schemas for the stateless route distance calculation (POST /routes/distance)."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.geo import EQUATOR_LENGTH_KM
from app.schemas.stop import LAT_MAX, LAT_MIN, LNG_MAX, LNG_MIN


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DistanceStopInput(_CamelModel):
    id: Union[int, str]
    name: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=LAT_MIN, le=LAT_MAX)
    longitude: Optional[float] = Field(None, ge=LNG_MIN, le=LNG_MAX)
    manual_distance_override: Optional[float] = Field(None, ge=0, le=EQUATOR_LENGTH_KM, allow_inf_nan=False)


class RouteDistanceRequest(_CamelModel):
    stops: list[DistanceStopInput]


class RouteDistanceResponse(_CamelModel):
    """
    Parallel lists, one element per submitted stop.
    leg_sources: origin (first stop), manual, computed, or unknown (a missing
    location; the leg counts as 0 km).
    """
    leg_distances: list[float]
    cumulative_distances: list[float]
    total_distance: float
    leg_sources: list[str]
