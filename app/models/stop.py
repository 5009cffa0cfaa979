import uuid
from sqlalchemy import Column, String, Text, Float, DateTime, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.core.geo import GeoPoint
from app.db.base import Base


class Stop(Base):
    __tablename__ = "stops"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)  # degrees, [-90, 90]
    longitude = Column(Float, nullable=True)  # degrees, [-180, 180]
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    route_stops = relationship("RouteStop", back_populates="stop", cascade="all, delete-orphan")

    @property
    def geo_point(self) -> GeoPoint | None:
        if self.latitude is None and self.longitude is None:
            return None
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)
