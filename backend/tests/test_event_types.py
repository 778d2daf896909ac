"""Tests for the event type listing."""
from tests.conftest import create_event_type


def test_list_event_types_sorted(client, db):
    create_event_type(db, name="Workshop", color="bg-yellow-100")
    create_event_type(db, name="Community Cleanup", color="bg-blue-100")
    resp = client.get("/api/event-types/")
    assert resp.status_code == 200
    data = resp.json()
    assert [t["name"] for t in data] == ["Community Cleanup", "Workshop"]
    assert data[0]["color"] == "bg-blue-100"
    assert "id" in data[0]


def test_list_event_types_empty(client):
    resp = client.get("/api/event-types/")
    assert resp.status_code == 200
    assert resp.json() == []
