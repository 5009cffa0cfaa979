from datetime import time

from sqlalchemy.orm import Session

from app.models.route_stop import RouteStop
from app.models.stop import Stop
from app.models.vehicle_route import VehicleRoute
from app.schemas.route import RouteStopInput
from app.services.vehicle_routes import replace_route_stops

# (name, description, latitude, longitude) around Dhaka
SEED_STOPS = [
    ("Motijheel Hub", "Commercial district pickup point", 23.7330, 90.4172),
    ("Farmgate Junction", "Main junction near Tejgaon", 23.7580, 90.3897),
    ("Gulshan Circle 1", "Gulshan-1 roundabout", 23.7806, 90.4163),
    ("Banani Plaza", "Banani Road 11", 23.7937, 90.4066),
    ("Mohakhali Terminal", "Bus terminal, Mohakhali", 23.7776, 90.4005),
    ("Uttara Sector 7 Park", "Uttara residential pickup", 23.8700, 90.3960),
    ("Mirpur 10 Square", "Mirpur-10 roundabout", 23.8069, 90.3687),
    ("Dhanmondi 27 Stop", "Satmasjid Road", 23.7561, 90.3747),
    ("Tejgaon Industrial Depot", "Factory gate, location not surveyed yet", None, None),
]

# (name, description, remarks, [(stop name, arrival, departure, manual km)])
SEED_ROUTES = [
    (
        "Uttara - Motijheel Morning",
        "Morning staff shuttle from Uttara to Motijheel",
        None,
        [
            ("Uttara Sector 7 Park", time(7, 0), time(7, 5), None),
            ("Banani Plaza", time(7, 40), time(7, 45), None),
            ("Mohakhali Terminal", time(7, 55), time(8, 0), None),
            ("Farmgate Junction", time(8, 15), time(8, 20), None),
            ("Motijheel Hub", time(8, 45), None, None),
        ],
    ),
    (
        "Mirpur - Gulshan Loop",
        "Mirpur to Gulshan office loop",
        "Road distance used for the Mirpur - Mohakhali flyover leg",
        [
            ("Mirpur 10 Square", time(8, 0), time(8, 5), None),
            ("Mohakhali Terminal", time(8, 35), time(8, 40), 7.8),
            ("Gulshan Circle 1", time(8, 55), None, None),
        ],
    ),
    (
        "Factory Shift Change",
        "Dhanmondi to Tejgaon factory",
        None,
        [
            ("Dhanmondi 27 Stop", time(13, 30), time(13, 35), None),
            ("Farmgate Junction", time(13, 50), time(13, 55), None),
            ("Tejgaon Industrial Depot", time(14, 15), None, None),
        ],
    ),
]


def seed_db(db: Session) -> None:
    """Seed the database with sample stops and routes."""

    # Clear existing data (optional - comment out if you want to preserve data)
    db.query(RouteStop).delete()
    db.query(VehicleRoute).delete()
    db.query(Stop).delete()
    db.commit()

    # Create Stops
    stops_by_name = {}
    for name, description, latitude, longitude in SEED_STOPS:
        stop = Stop(name=name, description=description, latitude=latitude, longitude=longitude)
        db.add(stop)
        stops_by_name[name] = stop
    db.commit()
    for stop in stops_by_name.values():
        db.refresh(stop)

    # Create Routes; distances come from the route sequencer
    for name, description, remarks, legs in SEED_ROUTES:
        route = VehicleRoute(name=name, description=description, remarks=remarks, total_distance=0.0)
        db.add(route)
        replace_route_stops(
            db,
            route,
            [
                RouteStopInput(
                    stop_id=stops_by_name[stop_name].id,
                    arrival_time=arrival,
                    departure_time=departure,
                    manual_distance=manual,
                )
                for stop_name, arrival, departure, manual in legs
            ],
        )
    db.commit()

    print("Database seeded successfully!")
    print(f"- Created {len(SEED_STOPS)} stops")
    print(f"- Created {len(SEED_ROUTES)} routes")
    print(f"- Created {sum(len(legs) for *_, legs in SEED_ROUTES)} route stops")
