import json

import pytest

from statusboard.core.exceptions import ConfigError
from statusboard.services.telemetry.config_loader import ConfigLoader, parse_config
from statusboard.services.telemetry.event_log import EventLog
from statusboard.services.telemetry.models import ApiMode, Severity, SimulationMode

CONFIG_URL = "http://fake-upstream/config.json"


class TestParseConfig:
    def test_api_base_trailing_slash_removed(self):
        cfg = parse_config({"apiBase": "https://x/api//", "readKey": "K1"})
        assert cfg.api_base == "https://x/api"
        assert cfg.read_key == "K1"

    def test_accepts_api_base_url_alias(self):
        cfg = parse_config({"apiBaseUrl": "https://x/api", "readKey": "K1"})
        assert cfg.api_base == "https://x/api"

    @pytest.mark.parametrize(
        "document",
        [
            {"apiBase": "https://x/api"},
            {"readKey": "K1"},
            {"apiBase": "", "readKey": "K1"},
            {"apiBase": "https://x/api", "readKey": "   "},
            {"apiBase": 42, "readKey": "K1"},
            {"apiBase": "/", "readKey": "K1"},
            {"apiBase": "not-a-url", "readKey": "K1"},
            {"apiBase": "http://[::1", "readKey": "K1"},
            {"apiBase": "ftp://x/api", "readKey": "K1"},
            {"apiBase": "https://x/api", "readKey": "clé"},
            ["not", "an", "object"],
            None,
        ],
    )
    def test_rejects_malformed(self, document):
        with pytest.raises(ConfigError):
            parse_config(document)


async def test_remote_config_selects_api_mode(upstream_http):
    log = EventLog()
    loader = ConfigLoader(CONFIG_URL, log, http_client=upstream_http)

    mode = await loader.load()

    assert isinstance(mode, ApiMode)
    assert mode.config.api_base == "http://fake-upstream/api"
    assert mode.config.read_key == "K1"
    assert len(log) == 1
    assert log.latest.severity == Severity.INFO
    assert log.latest.message.en == "REMOTE CONFIGURATION LOADED."


async def test_missing_remote_config_falls_back(upstream_http, fake_state):
    fake_state.config = None
    log = EventLog()
    loader = ConfigLoader(CONFIG_URL, log, http_client=upstream_http)

    mode = await loader.load()

    assert isinstance(mode, SimulationMode)
    assert len(log) == 1
    assert log.latest.severity == Severity.WARN
    assert "SIMULATION PROTOCOL" in log.latest.message.en


async def test_incomplete_remote_config_falls_back(upstream_http, fake_state):
    fake_state.config = {"apiBase": "http://fake-upstream/api"}
    loader = ConfigLoader(CONFIG_URL, EventLog(), http_client=upstream_http)
    assert isinstance(await loader.load(), SimulationMode)


async def test_unreachable_config_falls_back():
    log = EventLog()
    loader = ConfigLoader("http://127.0.0.1:9/config.json", log)
    assert isinstance(await loader.load(), SimulationMode)
    assert log.latest.severity == Severity.WARN


async def test_local_file_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"apiBaseUrl": "https://x/api/", "readKey": "K1"}))
    loader = ConfigLoader(str(path), EventLog())

    mode = await loader.load()

    assert isinstance(mode, ApiMode)
    assert mode.config.api_base == "https://x/api"


async def test_local_file_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    loader = ConfigLoader(str(path), EventLog())
    assert isinstance(await loader.load(), SimulationMode)


async def test_missing_local_file(tmp_path):
    loader = ConfigLoader(str(tmp_path / "nope.json"), EventLog())
    assert isinstance(await loader.load(), SimulationMode)


async def test_load_only_once(tmp_path):
    log = EventLog()
    loader = ConfigLoader(str(tmp_path / "nope.json"), log)
    await loader.load()

    with pytest.raises(ConfigError):
        await loader.load()
    assert len(log) == 1
    assert isinstance(loader.resolved, SimulationMode)


async def test_local_file_with_unusable_api_base(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"apiBase": "not-a-url", "readKey": "K1"}))
    log = EventLog()
    loader = ConfigLoader(str(path), log)

    assert isinstance(await loader.load(), SimulationMode)
    assert log.latest.severity == Severity.WARN
