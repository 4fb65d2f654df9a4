import pytest
from sqlalchemy.exc import OperationalError

from eventboard.repositories import event_repository


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health endpoint"""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"


@pytest.mark.asyncio
async def test_event_create_update_flow(client):
    """Create an event, then patch a single field"""
    response = await client.post("/api/event", json={
        "title": "Trip",
        "startDate": 1691226000,
        "endDate": 1691830800
    })
    assert response.status_code == 201
    created = response.json()
    assert created["id"] == 1
    assert created["title"] == "Trip"
    assert created["description"] is None
    assert created["color"] is None
    assert created["startDate"] == 1691226000
    assert created["endDate"] == 1691830800
    assert isinstance(created["createdAt"], int)
    assert created["editedAt"] is None

    response = await client.put("/api/event/1", json={"color": "#ff0000"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "Trip"
    assert updated["color"] == "#ff0000"
    assert updated["createdAt"] == created["createdAt"]
    assert updated["editedAt"] > updated["createdAt"]

    response = await client.get("/api/event/1")
    assert response.status_code == 200
    assert response.json() == updated

    response = await client.get("/api/event")
    assert response.status_code == 200
    assert response.json() == [updated]


@pytest.mark.asyncio
async def test_put_distinguishes_null_from_absent(client):
    response = await client.post("/api/event", json={
        "title": "Trip",
        "description": "Seven days",
        "color": "#87d45d",
        "startDate": 1691226000,
        "endDate": 1691830800
    })
    event_id = response.json()["id"]

    response = await client.put(f"/api/event/{event_id}", json={"description": None})
    assert response.status_code == 200
    data = response.json()
    assert data["description"] is None
    assert data["color"] == "#87d45d"


@pytest.mark.asyncio
async def test_put_ignores_server_managed_fields(client):
    response = await client.post("/api/event", json={
        "title": "Trip", "startDate": 1, "endDate": 2
    })
    created = response.json()

    response = await client.put(f"/api/event/{created['id']}", json={
        "id": 99, "createdAt": 0, "editedAt": 0
    })
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == created["id"]
    assert data["createdAt"] == created["createdAt"]
    assert data["editedAt"] > created["createdAt"]


@pytest.mark.asyncio
async def test_missing_event_returns_404(client):
    response = await client.get("/api/event/999")
    assert response.status_code == 404
    assert response.json() == {"detail": "event not found"}

    response = await client.put("/api/event/999", json={"title": "Hike"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_is_idempotent(client):
    response = await client.post("/api/event", json={
        "title": "Trip", "startDate": 1, "endDate": 2
    })
    event_id = response.json()["id"]

    response = await client.delete(f"/api/event/{event_id}")
    assert response.status_code == 204

    response = await client.delete(f"/api/event/{event_id}")
    assert response.status_code == 204

    response = await client.get(f"/api/event/{event_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_user_flow(client):
    """Creating the same user twice conflicts"""
    response = await client.post("/api/user", json={"username": "alice"})
    assert response.status_code == 201
    assert response.content == b""

    response = await client.post("/api/user", json={"username": "alice"})
    assert response.status_code == 409
    assert response.json() == {"detail": "user already exists"}

    response = await client.get("/api/user/alice")
    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "alice"
    assert isinstance(data["createdAt"], int)

    response = await client.get("/api/user")
    assert response.status_code == 200
    assert [user["username"] for user in response.json()] == ["alice"]

    response = await client.get("/api/user/bob")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_validation_errors(client):
    """Test input validation"""
    # Missing required field
    response = await client.post("/api/event", json={"startDate": 1, "endDate": 2})
    assert response.status_code == 400

    # Empty title
    response = await client.post("/api/event", json={
        "title": "", "startDate": 1, "endDate": 2
    })
    assert response.status_code == 400
    assert response.json() == {"detail": "title may not be empty"}

    # Required column cannot be nulled
    response = await client.put("/api/event/1", json={"startDate": None})
    assert response.status_code == 400

    # Oversized username
    response = await client.post("/api/user", json={"username": "x" * 65})
    assert response.status_code == 400
    assert response.json() == {"detail": "username may not exceed 64 bytes"}

    # Not JSON at all
    response = await client.post(
        "/api/user", content=b"not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400

    # Non-numeric id
    response = await client.get("/api/event/abc")
    assert response.status_code == 400

    # Out-of-range coordinate
    response = await client.post("/api/event", json={
        "title": "Trip", "startDate": 1, "endDate": 2, "locationLat": 1e300
    })
    assert response.status_code == 400

    response = await client.get("/api/event")
    assert response.json() == []


@pytest.mark.asyncio
async def test_event_id_beyond_int64_is_bad_request(client):
    event_id = "99999999999999999999"

    response = await client.get(f"/api/event/{event_id}")
    assert response.status_code == 400

    response = await client.put(f"/api/event/{event_id}", json={"title": "Hike"})
    assert response.status_code == 400

    response = await client.delete(f"/api/event/{event_id}")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_storage_errors_do_not_leak(client, monkeypatch):
    def broken_select(*args, **kwargs):
        raise OperationalError("SELECT * FROM events", (), Exception("/srv/secret.db is locked"))

    monkeypatch.setattr(event_repository, "select", broken_select)

    response = await client.get("/api/event")
    assert response.status_code == 500
    assert response.json() == {"detail": "internal server error"}
    assert "secret" not in response.text
