"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from sleep_tracker.main import create_app


@pytest.fixture
def client(memory_settings):
    app = create_app(memory_settings)
    with TestClient(app) as client:
        yield client


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_initial_tracker_state(client):
    state = client.get("/api/tracker").json()

    assert state["tonight"] is None
    assert state["start_button_visible"] is True
    assert state["stop_button_visible"] is False
    assert state["clear_button_visible"] is False
    assert state["nights_text"] == ""


def test_start_stop_rate_flow(client):
    state = client.post("/api/tracker/start").json()
    night_id = state["tonight"]["id"]
    assert state["tonight"]["in_progress"] is True
    assert state["stop_button_visible"] is True

    state = client.post("/api/tracker/stop").json()
    assert state["tonight"] is None
    assert state["navigate_to_sleep_quality"]["id"] == night_id

    consumed = client.post("/api/tracker/navigation/done").json()["consumed"]
    assert consumed["id"] == night_id
    assert client.post("/api/tracker/navigation/done").json()["consumed"] is None

    rated = client.post(f"/api/nights/{night_id}/quality", json={"quality": 5})
    assert rated.status_code == 200
    assert rated.json()["quality_rating"] == 5
    assert rated.json()["rated"] is True

    nights = client.get("/api/nights").json()
    assert [n["id"] for n in nights] == [night_id]
    assert client.get(f"/api/nights/{night_id}").json()["quality_rating"] == 5


def test_stop_without_tonight_is_noop(client):
    state = client.post("/api/tracker/stop").json()

    assert state["navigate_to_sleep_quality"] is None
    assert client.get("/api/nights").json() == []


def test_clear_shows_snackbar_once(client):
    client.post("/api/tracker/start")
    client.post("/api/tracker/stop")
    client.post("/api/tracker/start")

    state = client.post("/api/tracker/clear").json()

    assert state["show_snackbar"] is True
    assert state["clear_button_visible"] is False
    assert state["tonight"] is None
    assert client.get("/api/nights").json() == []
    assert client.post("/api/tracker/snackbar/done").json() == {"consumed": True}
    assert client.post("/api/tracker/snackbar/done").json() == {"consumed": None}


def test_unknown_night(client):
    assert client.get("/api/nights/123").status_code == 404
    assert client.post("/api/nights/123/quality", json={"quality": 2}).status_code == 404


def test_invalid_quality(client):
    night_id = client.post("/api/tracker/start").json()["tonight"]["id"]

    resp = client.post(f"/api/nights/{night_id}/quality", json={"quality": 7})

    assert resp.status_code == 422


def test_start_twice_conflicts(client):
    first = client.post("/api/tracker/start")
    assert first.status_code == 200

    second = client.post("/api/tracker/start")

    assert second.status_code == 409
    nights = client.get("/api/nights").json()
    assert [n["in_progress"] for n in nights] == [True]
    assert client.get("/api/tracker").json()["tonight"]["id"] == first.json()["tonight"]["id"]
