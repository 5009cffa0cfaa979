"""stops, vehicle_routes and route_stops tables

Revision ID: a1c3e5f7b9d2
Revises:
Create Date: 2026-09-07

Stop catalog (name, description, optional latitude/longitude), vehicle routes,
and the ordered route_stops join table (stop_order is 1-based).
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = "a1c3e5f7b9d2"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "stops",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_stops_name", "stops", ["name"], unique=True)

    op.create_table(
        "vehicle_routes",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_vehicle_routes_name", "vehicle_routes", ["name"], unique=False)

    op.create_table(
        "route_stops",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("vehicle_route_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("stop_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("stop_order", sa.Integer(), nullable=False),
        sa.Column("arrival_time", sa.Time(), nullable=True),
        sa.Column("departure_time", sa.Time(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["vehicle_route_id"], ["vehicle_routes.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["stop_id"], ["stops.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_route_stops_vehicle_route_id", "route_stops", ["vehicle_route_id"], unique=False)
    op.create_index("ix_route_stops_stop_id", "route_stops", ["stop_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_route_stops_stop_id", table_name="route_stops")
    op.drop_index("ix_route_stops_vehicle_route_id", table_name="route_stops")
    op.drop_table("route_stops")
    op.drop_index("ix_vehicle_routes_name", table_name="vehicle_routes")
    op.drop_table("vehicle_routes")
    op.drop_index("ix_stops_name", table_name="stops")
    op.drop_table("stops")
