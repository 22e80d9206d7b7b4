"""One-shot resolution of the remote backend configuration."""

import json
from pathlib import Path

import httpx
import structlog

from statusboard.core.exceptions import ConfigError
from statusboard.services.telemetry import messages
from statusboard.services.telemetry.event_log import EventLog
from statusboard.services.telemetry.models import (
    ApiMode,
    BackendConfig,
    ResolvedMode,
    Severity,
    SimulationMode,
)
from statusboard.services.telemetry.upstream import is_header_safe

logger = structlog.get_logger()


def parse_config(document: object) -> BackendConfig:
    """Validate a config document. Accepts ``apiBase`` or ``apiBaseUrl``."""
    if not isinstance(document, dict):
        raise ConfigError("Config document is not a JSON object.")

    api_base = document.get("apiBase") or document.get("apiBaseUrl")
    read_key = document.get("readKey")

    missing = [
        name
        for name, value in (("apiBase", api_base), ("readKey", read_key))
        if not isinstance(value, str) or not value.strip()
    ]
    if missing:
        raise ConfigError("Config document is missing required fields.", details={"missing": missing})

    api_base = api_base.strip().rstrip("/")
    if not api_base:
        raise ConfigError("Config apiBase is empty.", details={"missing": ["apiBase"]})
    try:
        url = httpx.URL(api_base)
    except httpx.InvalidURL as e:
        raise ConfigError(f"Config apiBase is not a valid URL: {e}", details={"invalid": ["apiBase"]})
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigError("Config apiBase must be an absolute http(s) URL.", details={"invalid": ["apiBase"]})

    read_key = read_key.strip()
    if not is_header_safe(read_key):
        raise ConfigError("Config readKey is not a valid header value.", details={"invalid": ["readKey"]})
    return BackendConfig(api_base=api_base, read_key=read_key)


class ConfigLoader:
    """Fetches the config document once and decides between API and simulation mode.

    A failure of any kind resolves to SimulationMode; it is never retried.
    """

    def __init__(self, source: str, event_log: EventLog, http_client: httpx.AsyncClient | None = None):
        self._source = source
        self._event_log = event_log
        self._client = http_client
        self._resolved: ResolvedMode | None = None

    @property
    def resolved(self) -> ResolvedMode | None:
        return self._resolved

    async def load(self) -> ResolvedMode:
        if self._resolved is not None:
            raise ConfigError("Configuration has already been resolved; restart to reload.")

        try:
            config = parse_config(await self._fetch())
        except ConfigError as e:
            logger.warning("config_unavailable", source=self._source, reason=e.message, **e.details)
            self._resolved = SimulationMode()
            self._event_log.append(messages.CONFIG_MISSING, Severity.WARN)
            return self._resolved

        logger.info("config_loaded", source=self._source, api_base=config.api_base)
        self._resolved = ApiMode(config=config)
        self._event_log.append(messages.CONFIG_LOADED, Severity.INFO)
        return self._resolved

    async def _fetch(self) -> object:
        if self._source.startswith(("http://", "https://")):
            return await self._fetch_remote()
        return self._read_local()

    async def _fetch_remote(self) -> object:
        client = self._client or httpx.AsyncClient()
        try:
            response = await client.get(self._source)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise ConfigError(f"Config source returned {e.response.status_code}.")
        except httpx.HTTPError as e:
            raise ConfigError(f"Cannot fetch config: {e}")
        except ValueError:
            raise ConfigError("Config source returned invalid JSON.")
        finally:
            if self._client is None:
                await client.aclose()

    def _read_local(self) -> object:
        path = Path(self._source)
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"Cannot read config file: {e}")
        except ValueError:
            raise ConfigError("Config file is not valid JSON.")
