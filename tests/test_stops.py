import uuid

from fastapi import status

from app.core.geo import GeoPoint, distance_between


def test_create_stop(client):
    """Test creating a stop."""
    response = client.post(
        "/api/v1/stops",
        json={
            "name": "Motijheel Hub",
            "description": "Commercial district",
            "latitude": 23.7330,
            "longitude": 90.4172,
        },
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["name"] == "Motijheel Hub"
    assert data["latitude"] == 23.7330
    assert data["longitude"] == 90.4172
    assert "id" in data


def test_create_stop_without_location(client):
    """Stops may be created before their location is surveyed."""
    response = client.post("/api/v1/stops", json={"name": "Unsurveyed Depot"})
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["latitude"] is None
    assert data["longitude"] is None


def test_create_stop_duplicate_name(client, create_stop):
    create_stop("Farmgate Junction", 23.7580, 90.3897)
    response = client.post("/api/v1/stops", json={"name": "Farmgate Junction"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_create_stop_out_of_range_latitude(client):
    response = client.post("/api/v1/stops", json={"name": "Nowhere", "latitude": 91.0, "longitude": 0.0})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "detail" in response.json()


def test_list_stops_ordered_and_filtered(client, create_stop):
    create_stop("Uttara Park", 23.87, 90.396)
    create_stop("Banani Plaza", 23.7937, 90.4066)
    create_stop("Uttara Sector 4", 23.86, 90.40)

    response = client.get("/api/v1/stops")
    assert response.status_code == status.HTTP_200_OK
    assert [s["name"] for s in response.json()] == ["Banani Plaza", "Uttara Park", "Uttara Sector 4"]

    response = client.get("/api/v1/stops?search=uttara")
    assert [s["name"] for s in response.json()] == ["Uttara Park", "Uttara Sector 4"]


def test_nearby_stops(client, create_stop):
    """Nearest first, with distance; stops without a location are left out."""
    create_stop("Far", 0, 3)
    create_stop("Near", 0, 1)
    create_stop("No Location")
    create_stop("Middle", 0, 2)

    response = client.get("/api/v1/stops/nearby", params={"lat": 0, "lng": 0})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [s["name"] for s in data] == ["Near", "Middle", "Far"]
    assert data[0]["distance_km"] == 111.19

    response = client.get("/api/v1/stops/nearby", params={"lat": 0, "lng": 0, "limit": 1})
    assert [s["name"] for s in response.json()] == ["Near"]


def test_nearby_stops_rejects_invalid_coordinates(client):
    response = client.get("/api/v1/stops/nearby", params={"lat": 100, "lng": 0})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_get_stop(client, create_stop):
    stop = create_stop("Mohakhali Terminal", 23.7776, 90.4005)
    response = client.get(f"/api/v1/stops/{stop['id']}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Mohakhali Terminal"


def test_get_stop_not_found(client):
    response = client.get(f"/api/v1/stops/{uuid.uuid4()}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_update_stop_description(client, create_stop):
    stop = create_stop("Gulshan Circle 1", 23.7806, 90.4163)
    response = client.patch(f"/api/v1/stops/{stop['id']}", json={"description": "Roundabout"})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["description"] == "Roundabout"
    assert data["latitude"] == 23.7806


def test_update_stop_duplicate_name(client, create_stop):
    create_stop("Stop One")
    second = create_stop("Stop Two")
    response = client.patch(f"/api/v1/stops/{second['id']}", json={"name": "Stop One"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_moving_a_stop_recalculates_routes(client, create_stop):
    a = create_stop("A", 0, 0)
    b = create_stop("B", 0, 1)
    route = client.post(
        "/api/v1/routes",
        json={"name": "Equator", "stops": [{"stop_id": a["id"]}, {"stop_id": b["id"]}]},
    ).json()
    assert route["total_distance"] == 111.19

    response = client.patch(f"/api/v1/stops/{b['id']}", json={"longitude": 2.0})
    assert response.status_code == status.HTTP_200_OK

    route = client.get(f"/api/v1/routes/{route['id']}").json()
    expected = distance_between(GeoPoint(0, 0), GeoPoint(0, 2))
    assert route["route_stops"][1]["distance_from_previous"] == expected
    assert route["total_distance"] == expected


def test_delete_stop_removes_it_from_routes(client, create_stop):
    a = create_stop("A", 0, 0)
    b = create_stop("B", 0, 1)
    c = create_stop("C", 1, 1)
    route = client.post(
        "/api/v1/routes",
        json={
            "name": "Three stops",
            "stops": [{"stop_id": a["id"]}, {"stop_id": b["id"]}, {"stop_id": c["id"]}],
        },
    ).json()

    response = client.delete(f"/api/v1/stops/{b['id']}")
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/v1/stops/{b['id']}").status_code == status.HTTP_404_NOT_FOUND

    route = client.get(f"/api/v1/routes/{route['id']}").json()
    assert [rs["stop"]["name"] for rs in route["route_stops"]] == ["A", "C"]
    assert [rs["stop_order"] for rs in route["route_stops"]] == [1, 2]
    expected = distance_between(GeoPoint(0, 0), GeoPoint(1, 1))
    assert route["total_distance"] == expected


def test_delete_stop_not_found(client):
    response = client.delete(f"/api/v1/stops/{uuid.uuid4()}")
    assert response.status_code == status.HTTP_404_NOT_FOUND
