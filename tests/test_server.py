import time

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from server import app as app_module
from server.app import ServerSettings, SimulationManager


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(app_module, "manager", SimulationManager(num_floors=10, elevator_count=2))
    with TestClient(app_module.app) as test_client:
        yield test_client


class TestStateEndpoints:

    def test_initial_state(self, client):
        state = client.get("/state").json()
        assert state["time_step"] == 0
        assert state["num_floors"] == 10
        assert len(state["elevators"]) == 2
        assert state["scheduler"] == "greedy"
        assert state["pending_request_count"] == 0

    def test_submit_then_tick(self, client):
        response = client.post("/requests", json={"origin": 5, "destination": 8})
        assert response.status_code == 200
        body = response.json()
        assert body["pending_request_count"] == 1
        assert body["request"]["origin"] == 5

        state = client.post("/tick", json={"count": 1}).json()
        assert state["time_step"] == 1
        assert state["total_requests_processed"] == 1
        assert state["elevators"][0]["targets"] == [5, 8]
        assert state["elevators"][0]["floor"] == 1

    @pytest.mark.parametrize(
        "payload,error",
        [({"origin": 4, "destination": 4}, "same_floor"), ({"origin": -1, "destination": 3}, "out_of_range")],
    )
    def test_rejected_request(self, client, payload, error):
        response = client.post("/requests", json=payload)
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == error
        assert client.get("/state").json()["pending_request_count"] == 0

    def test_tick_count_is_bounded(self, client):
        assert client.post("/tick", json={"count": 0}).status_code == 422

    def test_trace_lines(self, client):
        client.post("/tick", json={"count": 2})
        lines = client.get("/trace").json()["lines"]
        assert len(lines) == 4
        assert lines[0] == "t=1 Elevator 0 Floor=0 Dir=Idle Door=Closed QueueSize=0"


class TestReset:

    def test_reset_rebuilds_simulation(self, client):
        client.post("/tick", json={"count": 3})
        state = client.post("/reset", json={"num_floors": 8, "elevator_count": 3}).json()
        assert state["time_step"] == 0
        assert state["num_floors"] == 8
        assert len(state["elevators"]) == 3
        assert client.get("/trace").json()["lines"] == []

    def test_reset_validates_ranges(self, client):
        assert client.post("/reset", json={"num_floors": 30}).status_code == 422
        assert client.post("/reset", json={"elevator_count": 0}).status_code == 422


class TestStream:

    def test_websocket_receives_state(self, client):
        with client.websocket_connect("/ws/stream") as websocket:
            state = websocket.receive_json()
            assert state["time_step"] == 0


class TestAutoTick:

    def test_clock_advances_without_tick_calls(self, monkeypatch):
        settings = ServerSettings.from_env({"ELEVATOR_SIM_AUTO_TICK_INTERVAL": "0.01"})
        monkeypatch.setattr(app_module, "manager", SimulationManager.from_settings(settings))
        with TestClient(app_module.app) as client:
            deadline = time.monotonic() + 5.0
            time_step = 0
            while time_step < 3 and time.monotonic() < deadline:
                time.sleep(0.02)
                time_step = client.get("/state").json()["time_step"]
            assert time_step >= 3
        assert app_module.manager._task is None

    def test_disabled_by_default(self, client):
        time.sleep(0.05)
        assert client.get("/state").json()["time_step"] == 0
        assert app_module.manager._task is None


class TestServerSettings:

    def test_reads_prefixed_environment(self):
        settings = ServerSettings.from_env(
            {"ELEVATOR_SIM_NUM_FLOORS": "12", "ELEVATOR_SIM_AUTO_TICK_INTERVAL": "0.5", "NUM_FLOORS": "3"}
        )
        assert settings.num_floors == 12
        assert settings.elevator_count == 2
        assert settings.auto_tick_interval == 0.5

    def test_defaults_leave_auto_tick_off(self):
        settings = ServerSettings.from_env({})
        assert settings.auto_tick_interval is None
        manager = SimulationManager.from_settings(settings)
        assert manager.simulation.num_floors == 10

    @pytest.mark.parametrize(
        "name,value",
        [("ELEVATOR_SIM_AUTO_TICK_INTERVAL", "0"), ("ELEVATOR_SIM_NUM_FLOORS", "40"), ("ELEVATOR_SIM_ELEVATOR_COUNT", "x")],
    )
    def test_rejects_invalid_values(self, name, value):
        with pytest.raises(ValidationError):
            ServerSettings.from_env({name: value})
