"""Tests for the HTTP control and observation surface."""

import pytest
from fastapi.testclient import TestClient
from ringsim.config import Config
from ringsim.main import app
from ringsim.services.simulation_service import SimulationService
from ringsim.services.singleton import get_simulation_service, reset_simulation_service


@pytest.fixture
def client(tmp_path):
    config = Config(
        RANDOM_SEED=3,
        TICK_LOG_FILE=str(tmp_path / "ticks.jsonl"),
        REPORT_FILE=str(tmp_path / "report"),
    )
    reset_simulation_service(SimulationService(config))
    yield TestClient(app)
    reset_simulation_service(None)


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_play_pause(client):
    response = client.post("/api/play")
    assert response.status_code == 200
    assert response.json()["status"] == "playing"

    response = client.post("/api/pause")
    assert response.json()["status"] == "paused"


def test_tick_advances_only_when_playing(client):
    response = client.post("/api/tick", json={"delta_time": 1.0})
    assert response.json()["tick"] == 0

    client.post("/api/play")
    response = client.post("/api/tick", json={"delta_time": 1.0})
    assert response.status_code == 200
    assert response.json()["tick"] == 1


def test_set_speed(client):
    response = client.post("/api/speed", json={"speed": 2.5})
    assert response.status_code == 200
    assert response.json()["speed"] == 2.5


@pytest.mark.parametrize("speed", ["0", "-1.0", "Infinity", "NaN"])
def test_set_speed_rejects_invalid_values(client, speed):
    response = client.post(
        "/api/speed",
        content=f'{{"speed": {speed}}}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422

    client.post("/api/play")
    response = client.post("/api/tick", json={"delta_time": 1.0})
    assert response.status_code == 200
    assert client.get("/api/snapshot").json()["speed"] == 1.0


def test_tick_rejects_non_finite_delta(client):
    client.post("/api/play")
    response = client.post(
        "/api/tick",
        content='{"delta_time": NaN}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
    assert client.get("/api/snapshot").json()["tick"] == 0


def test_set_scenario(client):
    response = client.post("/api/scenario", json={"scenario": "maintenance"})
    assert response.status_code == 200
    assert response.json()["scenario"] == "maintenance"

    gates = client.get("/api/gates", params={"city": "San Diego"}).json()["gates"]
    offline = [g for g in gates if g["disabled"]]
    assert len(offline) == 8
    assert all(g["status"] == "RED" for g in offline)


def test_reset(client):
    client.post("/api/run", json={"ticks": 5})
    response = client.post("/api/reset")
    assert response.status_code == 200
    assert response.json()["tick"] == 0
    assert response.json()["status"] == "paused"


def test_run_writes_logs_and_report(client, tmp_path):
    response = client.post(
        "/api/run", json={"ticks": 10, "delta_time": 1.0, "log_ticks": True, "write_report": True}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["ticks_run"] == 10
    assert body["tick"] == 10
    assert (tmp_path / "ticks.jsonl").exists()
    assert (tmp_path / "report.json").exists()


def test_run_validates_request(client):
    response = client.post("/api/run", json={"ticks": -1})
    assert response.status_code == 422


def test_snapshot(client):
    response = client.get("/api/snapshot", params={"event_limit": 5})
    assert response.status_code == 200
    body = response.json()
    assert len(body["aircraft"]) == 110
    assert len(body["gates"]) == 224
    assert len(body["pipelines"]) == 2
    assert body["scenario"] == "normal"


def test_aircraft_endpoints(client):
    body = client.get("/api/aircraft", params={"status": "in_pipeline"}).json()
    assert body["count"] == 20
    assert body["by_status"] == {"in_ring": 90, "in_pipeline": 20}

    first_id = get_simulation_service().simulation.world.aircraft[0].id
    response = client.get(f"/api/aircraft/{first_id}")
    assert response.status_code == 200
    assert response.json()["aircraft"]["status"] == "in_ring"

    assert client.get("/api/aircraft/AC-999").status_code == 404


def test_pipelines(client):
    pipelines = client.get("/api/pipelines").json()["pipelines"]
    assert {p["id"]: p["current_count"] for p in pipelines} == {"N-S": 10, "S-N": 10}


def test_events_newest_first(client):
    client.post("/api/play")
    client.post("/api/speed", json={"speed": 2})

    events = client.get("/api/events", params={"limit": 2}).json()["events"]
    assert [e["message"] for e in events] == ["Speed set to 2.0x", "Simulation started"]


def test_statistics(client):
    client.post("/api/run", json={"ticks": 20})
    body = client.get("/api/statistics").json()
    assert "landings" in body["statistics"]
    assert len(body["history"]) == 2


def test_demand(client):
    response = client.get("/api/demand", params={"hour": 17, "day": 0})
    assert response.status_code == 200
    body = response.json()
    assert body["spawn_rate_multiplier"] == pytest.approx(4.1)
    assert body["total_flights"] == sum(body["by_origin_destination"].values())

    assert client.get("/api/demand", params={"hour": 25, "day": 0}).status_code == 400
