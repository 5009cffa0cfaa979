from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID
from datetime import datetime
from typing import Optional

from app.core.geo import GeoPoint

LAT_MIN, LAT_MAX = -90.0, 90.0
LNG_MIN, LNG_MAX = -180.0, 180.0


class StopBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=500)
    latitude: Optional[float] = Field(None, ge=LAT_MIN, le=LAT_MAX)
    longitude: Optional[float] = Field(None, ge=LNG_MIN, le=LNG_MAX)


class StopCreate(StopBase):
    pass


class StopUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=500)
    latitude: Optional[float] = Field(None, ge=LAT_MIN, le=LAT_MAX)
    longitude: Optional[float] = Field(None, ge=LNG_MIN, le=LNG_MAX)


class StopRead(StopBase):
    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StopNearbyRead(StopRead):
    """Stop with its distance from the query point."""
    distance_km: float


class GeoPointRead(BaseModel):
    latitude: float
    longitude: float

    @classmethod
    def from_point(cls, point: GeoPoint | None) -> "GeoPointRead | None":
        if point is None or not point.is_located:
            return None
        return cls(latitude=point.latitude, longitude=point.longitude)
