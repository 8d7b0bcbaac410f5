import importlib
import threading

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

import gravsandbox.main
from gravsandbox.config import SimulationConfig
from gravsandbox.constants import MAX_LAUNCH_SPEED
from gravsandbox.main import create_app, launch_velocity
from gravsandbox.vector import Vector3


@pytest.fixture
def client():
    return TestClient(create_app(SimulationConfig()))


def test_demo_then_state(client):
    resp = client.post("/api/demo")
    assert resp.status_code == 200
    state = client.get("/api/state").json()
    assert len(state["bodies"]) == 5
    assert state["bodies"][0]["type"] == "star"
    assert state["elapsed"] == 0.0


def test_add_body_and_step(client):
    client.post("/api/bodies", json={"type": "star", "position": [0, 0, 0]})
    resp = client.post(
        "/api/bodies", json={"type": "moon", "position": [200, 0], "velocity": [0, 0, 90]}
    )
    assert resp.status_code == 200
    assert resp.json()["position"] == [200.0, 0.0, 0.0]

    resp = client.post("/api/step", json={"frameDelta": 0.016, "timeScale": 1})
    body = resp.json()
    assert body["merges"] == []
    assert body["state"]["elapsed"] == pytest.approx(0.016)
    assert body["state"]["bodies"][1]["age"] == 1


def test_unknown_type_is_bad_request(client):
    resp = client.post("/api/bodies", json={"type": "comet", "position": [0, 0, 0]})
    assert resp.status_code == 400
    assert "comet" in resp.json()["detail"]


def test_step_reports_merges(client):
    client.post("/api/bodies", json={"type": "star", "position": [0, 0, 0]})
    client.post("/api/bodies", json={"type": "planet", "position": [5, 0, 0]})
    body = client.post("/api/step", json={"frameDelta": 0.016, "timeScale": 1}).json()
    assert len(body["state"]["bodies"]) == 1
    assert body["state"]["bodies"][0]["mass"] == 3400.0
    assert len(body["merges"]) == 1


def test_settings_pause_and_trail(client):
    client.post("/api/demo")
    state = client.patch("/api/settings", json={"paused": True, "G": 500, "maxTrailLength": 10}).json()
    assert state["paused"] is True
    assert state["G"] == 500.0
    assert state["maxTrailLength"] == 10
    body = client.post("/api/step", json={"frameDelta": 0.016}).json()
    assert body["state"]["elapsed"] == 0.0


def test_clear(client):
    client.post("/api/demo")
    client.post("/api/step", json={"frameDelta": 0.016})
    state = client.post("/api/clear").json()
    assert state["bodies"] == []
    assert state["elapsed"] == 0.0


def test_orbital_speed_endpoint(client):
    resp = client.get("/api/orbital-speed", params={"centralMass": 3000, "distance": 200})
    assert resp.json()["speed"] == pytest.approx(109.544, abs=1e-3)
    bad = client.get("/api/orbital-speed", params={"centralMass": 3000, "distance": 0})
    assert bad.status_code == 422


def test_diagnostics_endpoint(client):
    client.post("/api/demo")
    data = client.get("/api/diagnostics").json()
    assert data["bodyCount"] == 5
    assert data["totalEnergy"] < 0


def test_launch_velocity_scaled_and_clamped():
    v = launch_velocity(Vector3(0.0, 0.0, 0.0), Vector3(100.0, 0.0, 0.0))
    assert v.to_list() == pytest.approx([4.0, 0.0, 0.0])
    fast = launch_velocity(Vector3.zero(), Vector3(0.0, 0.0, 1e6))
    assert fast.mag == pytest.approx(MAX_LAUNCH_SPEED)


def test_launch_endpoint(client):
    resp = client.post("/api/launch", json={"type": "moon", "start": [10, 0, 0], "end": [110, 0, 0]})
    assert resp.status_code == 200
    assert resp.json()["velocity"] == pytest.approx([4.0, 0.0, 0.0])


def test_concurrent_step_and_add_requests(client):
    for i in range(40):
        client.post("/api/bodies", json={"type": "moon", "position": [100.0 * i, 0, 0]})

    step_codes = []

    def drive():
        for _ in range(50):
            resp = client.post("/api/step", json={"frameDelta": 0.016, "timeScale": 1})
            step_codes.append(resp.status_code)

    driver = threading.Thread(target=drive)
    driver.start()
    add_codes = [
        client.post(
            "/api/bodies", json={"type": "moon", "position": [100.0 * i, 0, 5000.0]}
        ).status_code
        for i in range(100)
    ]
    driver.join()

    assert set(step_codes) == {200}
    assert set(add_codes) == {200}
    assert len(client.get("/api/state").json()["bodies"]) == 140


def test_import_does_not_read_environment(monkeypatch):
    monkeypatch.setenv("GRAVSANDBOX_G", "fast")
    module = importlib.reload(gravsandbox.main)
    assert module.create_app(SimulationConfig()) is not None
    with pytest.raises(ValidationError):
        module.create_app()
