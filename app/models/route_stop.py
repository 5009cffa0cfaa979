import uuid
from sqlalchemy import Column, Integer, Float, Time, DateTime, ForeignKey, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.db.base import Base


class RouteStop(Base):
    __tablename__ = "route_stops"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    vehicle_route_id = Column(
        UUID(as_uuid=True), ForeignKey("vehicle_routes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    stop_id = Column(UUID(as_uuid=True), ForeignKey("stops.id", ondelete="CASCADE"), nullable=False, index=True)
    stop_order = Column(Integer, nullable=False)  # 1-based position in the route
    arrival_time = Column(Time, nullable=True)
    departure_time = Column(Time, nullable=True)
    manual_distance = Column(Float, nullable=True)  # km override for the leg into this stop
    distance_from_previous = Column(Float, nullable=False, default=0.0)  # km
    cumulative_distance = Column(Float, nullable=False, default=0.0)  # km from the first stop
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    vehicle_route = relationship("VehicleRoute", back_populates="route_stops")
    stop = relationship("Stop", back_populates="route_stops")
