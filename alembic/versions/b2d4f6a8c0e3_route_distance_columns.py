"""route_stops and vehicle_routes: distance columns

Revision ID: b2d4f6a8c0e3
Revises: a1c3e5f7b9d2
Create Date: 2026-09-08

Adds kilometer distances computed by the route sequencer:
- route_stops.manual_distance (nullable): caller override for the leg into the stop
- route_stops.distance_from_previous, route_stops.cumulative_distance
- vehicle_routes.total_distance
Existing rows start at 0; run POST /routes/{id}/recalculate to backfill.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "b2d4f6a8c0e3"
down_revision: Union[str, None] = "a1c3e5f7b9d2"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("route_stops", sa.Column("manual_distance", sa.Float(), nullable=True))
    op.add_column(
        "route_stops",
        sa.Column("distance_from_previous", sa.Float(), server_default=sa.text("0"), nullable=False),
    )
    op.add_column(
        "route_stops",
        sa.Column("cumulative_distance", sa.Float(), server_default=sa.text("0"), nullable=False),
    )
    op.add_column(
        "vehicle_routes",
        sa.Column("total_distance", sa.Float(), server_default=sa.text("0"), nullable=False),
    )


def downgrade() -> None:
    op.drop_column("vehicle_routes", "total_distance")
    op.drop_column("route_stops", "cumulative_distance")
    op.drop_column("route_stops", "distance_from_previous")
    op.drop_column("route_stops", "manual_distance")
