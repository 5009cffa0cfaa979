"""Tests for the stateless POST /api/v1/routes/distance endpoint."""

from fastapi import status


def test_distance_empty_route(client):
    response = client.post("/api/v1/routes/distance", json={"stops": []})
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "legDistances": [],
        "cumulativeDistances": [],
        "totalDistance": 0,
        "legSources": [],
    }


def test_distance_single_stop(client):
    response = client.post("/api/v1/routes/distance", json={"stops": [{"id": 1, "latitude": 23.81, "longitude": 90.41}]})
    data = response.json()
    assert data["legDistances"] == [0]
    assert data["cumulativeDistances"] == [0]
    assert data["totalDistance"] == 0


def test_distance_three_stops(client):
    response = client.post(
        "/api/v1/routes/distance",
        json={
            "stops": [
                {"id": "A", "latitude": 0, "longitude": 0},
                {"id": "B", "latitude": 0, "longitude": 1},
                {"id": "C", "latitude": 1, "longitude": 1},
            ]
        },
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["legDistances"] == [0, 111.19, 111.19]
    assert data["cumulativeDistances"] == [0, 111.19, 222.38]
    assert data["totalDistance"] == 222.38
    assert data["legSources"] == ["origin", "computed", "computed"]


def test_distance_manual_override_and_missing_location(client):
    response = client.post(
        "/api/v1/routes/distance",
        json={
            "stops": [
                {"id": 1, "latitude": 23.8103, "longitude": 90.4125},
                {"id": 2, "latitude": 23.8193, "longitude": 90.4125, "manualDistanceOverride": 5.5},
                {"id": 3},
            ]
        },
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["legDistances"] == [0, 5.5, 0]
    assert data["cumulativeDistances"] == [0, 5.5, 5.5]
    assert data["legSources"] == ["origin", "manual", "unknown"]


def test_distance_does_not_touch_the_database(client):
    client.post("/api/v1/routes/distance", json={"stops": [{"id": 1, "latitude": 0, "longitude": 0}]})
    assert client.get("/api/v1/routes").json()["total"] == 0
    assert client.get("/api/v1/stops").json() == []


def test_distance_is_idempotent(client):
    body = {"stops": [{"id": 1, "latitude": 0, "longitude": 0}, {"id": 2, "latitude": 0, "longitude": 1}]}
    first = client.post("/api/v1/routes/distance", json=body).json()
    second = client.post("/api/v1/routes/distance", json=body).json()
    assert first == second


def test_distance_rejects_non_array_stops(client):
    response = client.post("/api/v1/routes/distance", json={"stops": "A,B,C"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_distance_rejects_missing_body(client):
    response = client.post("/api/v1/routes/distance")
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_distance_rejects_wrong_types(client):
    response = client.post(
        "/api/v1/routes/distance",
        json={"stops": [{"id": 1, "latitude": "north", "longitude": 0}]},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_distance_rejects_negative_override(client):
    response = client.post(
        "/api/v1/routes/distance",
        json={"stops": [{"id": 1}, {"id": 2, "manualDistanceOverride": -3}]},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def _post_raw(client, url, body):
    """JSON encoders refuse Infinity, so send the raw text a lenient client would produce."""
    return client.post(url, content=body, headers={"Content-Type": "application/json"})


def test_distance_rejects_infinite_override(client):
    response = _post_raw(
        client,
        "/api/v1/routes/distance",
        '{"stops": [{"id": 1}, {"id": 2, "manualDistanceOverride": Infinity}]}',
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "detail" in response.json()


def test_distance_rejects_nan_override(client):
    response = _post_raw(
        client,
        "/api/v1/routes/distance",
        '{"stops": [{"id": 1}, {"id": 2, "manualDistanceOverride": NaN}]}',
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_distance_rejects_override_longer_than_the_equator(client):
    response = client.post(
        "/api/v1/routes/distance",
        json={"stops": [{"id": 1}, {"id": 2, "manualDistanceOverride": 1e308}]},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_distance_accepts_override_at_the_bound(client):
    response = client.post(
        "/api/v1/routes/distance",
        json={"stops": [{"id": 1}, {"id": 2, "manualDistanceOverride": 40075}]},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["totalDistance"] == 40075
