"""Integration tests for the dashboard read endpoints."""

import pytest


@pytest.mark.asyncio
async def test_root(sim_client):
    resp = await sim_client.get("/")
    assert resp.status_code == 200
    assert resp.json()["service"] == "statusboard"


@pytest.mark.asyncio
async def test_dashboard_snapshot_simulation(sim_client):
    resp = await sim_client.get("/dashboard")
    assert resp.status_code == 200
    data = resp.json()
    assert data["mode"] == "SIMULATION_MODE"
    assert data["global_status"] == "OFFLINE"
    assert data["admin"] is False
    assert [s["id"] for s in data["services"]] == ["1", "2", "3", "4", "5", "6"]
    assert data["events"][0]["text"] == "INITIALIZING SYSTEM MONITOR..."
    assert data["events"][-1]["severity"] == "WARN"


@pytest.mark.asyncio
async def test_dashboard_snapshot_after_poll(api_client, api_engine):
    await api_engine.refresh()

    resp = await api_client.get("/dashboard")
    assert resp.status_code == 200
    data = resp.json()
    assert data["mode"] == "API_MODE"
    assert data["global_status"] == "OFFLINE"
    by_id = {s["id"]: s for s in data["services"]}
    assert by_id["1"]["status"] == "OPERATIONAL"
    assert by_id["1"]["region"] == "US"
    assert by_id["3"]["latency"] == 0


@pytest.mark.asyncio
async def test_services_endpoint(sim_client):
    resp = await sim_client.get("/dashboard/services")
    assert resp.status_code == 200
    services = resp.json()
    assert len(services) == 6
    assert set(services[0]) == {"id", "name", "status", "latency", "uptime", "region"}


@pytest.mark.asyncio
async def test_status_endpoint(sim_client):
    resp = await sim_client.get("/dashboard/status")
    assert resp.status_code == 200
    assert resp.json() == {"status": "OFFLINE", "mode": "SIMULATION_MODE", "service_count": 6}


@pytest.mark.asyncio
async def test_events_in_chinese(sim_client):
    resp = await sim_client.get("/dashboard/events", params={"lang": "zh"})
    assert resp.status_code == 200
    events = resp.json()
    assert events[0]["text"] == "正在初始化系统监控..."
    assert events[0]["message"]["en"] == "INITIALIZING SYSTEM MONITOR..."


@pytest.mark.asyncio
async def test_events_rejects_unknown_locale(sim_client):
    resp = await sim_client.get("/dashboard/events", params={"lang": "fr"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_health_before_scheduler_start(sim_client):
    resp = await sim_client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "starting"
    assert data["mode"] == "SIMULATION_MODE"


@pytest.mark.asyncio
async def test_health_while_running(sim_client, sim_engine):
    await sim_engine.start()
    resp = await sim_client.get("/health")
    assert resp.json()["status"] == "ok"
    assert resp.json()["scheduler_running"] is True
