import random

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from statusboard.services.telemetry.engine import DashboardEngine
from statusboard.services.telemetry.event_log import EventLog
from statusboard.services.telemetry.models import INITIAL_SERVICES
from statusboard.services.telemetry.registry import ServiceRegistry
from tests.mocks.fake_monitor_api import create_app as create_fake_monitor_api

CONFIG_URL = "http://fake-upstream/config.json"


@pytest.fixture
def fake_api():
    """Fresh in-process monitor backend; its state lives on ``fake_api.state.fake``."""
    return create_fake_monitor_api()


@pytest.fixture
def fake_state(fake_api):
    return fake_api.state.fake


@pytest_asyncio.fixture
async def upstream_http(fake_api):
    """httpx client routed to the fake backend via ASGITransport."""
    transport = ASGITransport(app=fake_api)
    async with AsyncClient(transport=transport, base_url="http://fake-upstream") as client:
        yield client


@pytest.fixture
def event_log():
    return EventLog(capacity=20)


@pytest.fixture
def registry():
    return ServiceRegistry(INITIAL_SERVICES)


@pytest_asyncio.fixture
async def api_engine(upstream_http):
    """Engine resolved against the fake backend (API mode), scheduler not started."""
    engine = DashboardEngine(
        config_source=CONFIG_URL,
        http_client=upstream_http,
        poll_interval=0.01,
        ambient_event_rate=0.0,
        rng=random.Random(7),
    )
    await engine.resolve()
    yield engine
    await engine.stop()


@pytest_asyncio.fixture
async def sim_engine(tmp_path):
    """Engine whose config file does not exist (simulation mode), scheduler not started."""
    engine = DashboardEngine(
        config_source=str(tmp_path / "missing-config.json"),
        simulation_interval=0.01,
        ambient_event_rate=0.0,
        rng=random.Random(7),
    )
    await engine.resolve()
    yield engine
    await engine.stop()


async def _client_for(engine):
    from statusboard.main import app

    app.state.engine = engine
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def api_client(api_engine):
    """HTTP client for the dashboard app backed by an API-mode engine."""
    client = await _client_for(api_engine)
    async with client:
        yield client


@pytest_asyncio.fixture
async def sim_client(sim_engine):
    """HTTP client for the dashboard app backed by a simulation-mode engine."""
    client = await _client_for(sim_engine)
    async with client:
        yield client
