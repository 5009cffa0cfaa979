from app.models.stop import Stop
from app.models.vehicle_route import VehicleRoute
from app.models.route_stop import RouteStop

__all__ = [
    "Stop",
    "VehicleRoute",
    "RouteStop",
]
