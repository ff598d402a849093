"""Test the FastAPI endpoints."""
import asyncio

import pytest


@pytest.mark.asyncio
async def test_root(api_client):
    response = await api_client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


@pytest.mark.asyncio
async def test_state_before_start(api_client):
    """Battle endpoints refuse to answer before a battle exists."""
    response = await api_client.get("/battle/local/state")
    assert response.status_code == 400
    assert response.json()["detail"] == "Battle not started"


@pytest.mark.asyncio
async def test_start_battle(api_client):
    """Test starting a new battle."""
    response = await api_client.post("/battle/start", json={"seed": 123, "points": 60})
    assert response.status_code == 200
    assert response.json() == {"battle_id": "local", "state": "ROUND_IN_PROGRESS"}


@pytest.mark.asyncio
async def test_get_state(api_client):
    """Test getting battle state."""
    await api_client.post("/battle/start", json={"seed": 42, "points": 60})
    response = await api_client.get("/battle/local/state")

    assert response.status_code == 200
    data = response.json()
    assert data["state"] in ("ROUND_IN_PROGRESS", "DONE")
    assert len(data["units"]) == 10  # 5 archers a side
    assert all(u["unit_type"] == "Archer" for u in data["units"])


@pytest.mark.asyncio
async def test_get_events(api_client):
    """Test retrieving events."""
    await api_client.post("/battle/start", json={"seed": 42, "points": 60})
    # Wait for the first round to be logged
    for _ in range(500):
        response = await api_client.get("/battle/local/events?since=0")
        if response.json()["next_offset"] > 0:
            break
        await asyncio.sleep(0.01)

    assert response.status_code == 200
    data = response.json()
    assert data["next_offset"] == len(data["events"])
    assert data["events"]
    assert data["events"][0]["kind"] in ("Attack", "Idle")
    assert data["events"][0]["round"] == 1


@pytest.mark.asyncio
async def test_preset(api_client):
    response = await api_client.post("/preset", json={"points": 250, "seed": 3})
    assert response.status_code == 200
    data = response.json()
    assert 0 < data["total_cost"] <= 250
    assert len({(u["x"], u["y"]) for u in data["units"]}) == len(data["units"])


@pytest.mark.asyncio
async def test_preset_with_no_budget(api_client):
    response = await api_client.post("/preset", json={"points": 0})
    assert response.status_code == 200
    assert response.json() == {"total_cost": 0, "units": []}


@pytest.mark.asyncio
async def test_time_control(api_client):
    await api_client.post("/battle/start", json={"seed": 1, "points": 60})
    response = await api_client.post("/battle/local/time-control?time_compression=5000")
    assert response.status_code == 200
    assert response.json() == {"time_compression": 1000.0}

    response = await api_client.get("/battle/local/time-control")
    assert response.json() == {"time_compression": 1000.0}
