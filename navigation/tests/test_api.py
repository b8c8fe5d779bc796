"""
test_api.py - HTTP boundary of the rover server
"""

import logging

import pytest
from fastapi.testclient import TestClient

import main


@pytest.fixture
def client():
    main._session = None
    yield TestClient(main.app)
    main._session = None


@pytest.fixture
def session(client):
    response = client.post("/session", json={"face": "FRONT", "x": 5, "y": 5, "heading": "N", "seed": 3})
    assert response.status_code == 200
    return response.json()


def test_status(client):
    assert client.get("/status").json()["status"] == "ok"


def test_requires_session(client):
    assert client.get("/state").status_code == 404
    assert client.post("/command", json={"command": "FW"}).status_code == 404


def test_create_session(session):
    assert session["state"] == {"face": "FRONT", "x": 5, "y": 5, "heading": "N"}
    assert session["obstacle_count"] == session["target_count"] == 60


@pytest.mark.parametrize("body", [
    {"face": "SIDEWAYS"},
    {"heading": "Q"},
    {"x": 10},
    {"density": 2.0},
])
def test_bad_session_input(client, body):
    assert client.post("/session", json=body).status_code == 400


def test_obstacles_listing(client, session):
    all_obstacles = client.get("/obstacles").json()
    assert len(all_obstacles) == 60
    assert {"face": "FRONT", "x": 5, "y": 5} not in all_obstacles

    top = client.get("/obstacles", params={"face": "top"}).json()
    assert all(o["face"] == "TOP" for o in top)
    assert client.get("/obstacles", params={"face": "nope"}).status_code == 400


def test_turn_command(client, session):
    body = client.post("/command", json={"command": "tr"}).json()
    assert body == {
        "success": True,
        "blocked": False,
        "new_state": {"face": "FRONT", "x": 5, "y": 5, "heading": "E"},
    }
    assert client.get("/state").json()["state"]["heading"] == "E"


def test_unknown_command(client, session):
    assert client.post("/command", json={"command": "JUMP"}).status_code == 400
    assert client.post("/commands", json={"commands": "FW JUMP"}).status_code == 400


def test_command_sequence_matches_state(client, session):
    body = client.post("/commands", json={"commands": "TL TL TL TL"}).json()
    assert len(body["results"]) == 4
    assert body["blocked"] is False
    assert body["final_state"] == session["state"]


def test_animating_flag_blocks_commands(client, session):
    assert client.put("/animating", json={"value": True}).json()["is_animating"] is True
    assert client.post("/command", json={"command": "TL"}).status_code == 409
    assert client.post("/commands", json={"commands": "TL"}).status_code == 409

    client.put("/animating", json={"value": False})
    assert client.post("/command", json={"command": "TL"}).status_code == 200


def test_plan_and_drive(client):
    # No obstacles, so every cell is reachable
    start = {"face": "FRONT", "x": 5, "y": 5, "heading": "N"}
    client.post("/session", json={**start, "density": 0.0})

    plan = client.post("/plan", json={"face": "TOP", "x": 2, "y": 3}).json()
    assert plan["reachable"] is True

    # Planning does not move the rover
    assert client.get("/state").json()["state"] == start
    assert plan["path"][0] == start
    assert plan["cost"] >= len(plan["path"]) - 1

    driven = client.post("/commands", json={"commands": " ".join(plan["commands"])}).json()
    assert driven["blocked"] is False
    final = driven["final_state"]
    assert (final["face"], final["x"], final["y"]) == ("TOP", 2, 3)


def test_oversized_repeat_count(client, session):
    response = client.post("/commands", json={"commands": "FW" + "9" * 20})
    assert response.status_code == 400
    assert client.post("/commands", json={"commands": "FW1000"}).status_code == 400
    assert client.get("/state").json()["state"] == session["state"]


def test_unexpected_command_error_is_logged(client, session, monkeypatch, caplog):
    def explode(rover, movements):
        raise RuntimeError("wheel fell off")

    monkeypatch.setattr(main, "execute_commands", explode)
    with caplog.at_level(logging.ERROR, logger="main"):
        response = client.post("/commands", json={"commands": "FW"})
    assert response.status_code == 500
    assert "wheel fell off" in caplog.text


def test_plan_to_blocked_cell(client, session):
    obstacle = client.get("/obstacles").json()[0]
    plan = client.post("/plan", json={"face": obstacle["face"], "x": obstacle["x"], "y": obstacle["y"]})
    assert plan.status_code == 200
    assert plan.json()["reachable"] is False
