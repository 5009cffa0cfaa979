import uuid
from sqlalchemy import Column, String, Text, Float, DateTime, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.db.base import Base


class VehicleRoute(Base):
    __tablename__ = "vehicle_routes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    remarks = Column(Text, nullable=True)
    total_distance = Column(Float, nullable=False, default=0.0)  # km, last cumulative distance
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    route_stops = relationship(
        "RouteStop",
        back_populates="vehicle_route",
        cascade="all, delete-orphan",
        order_by="RouteStop.stop_order",
    )
