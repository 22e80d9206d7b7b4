"""Domain records shared by the telemetry engine."""

from dataclasses import dataclass
from enum import Enum


class Status(str, Enum):
    OPERATIONAL = "OPERATIONAL"
    DEGRADED = "DEGRADED"
    OFFLINE = "OFFLINE"
    MAINTENANCE = "MAINTENANCE"


class Severity(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    CRIT = "CRIT"


class EngineMode(str, Enum):
    LOADING = "LOADING"
    API_MODE = "API_MODE"
    SIMULATION_MODE = "SIMULATION_MODE"


@dataclass(frozen=True)
class Service:
    """One monitored subsystem. Frozen: edits go through dataclasses.replace."""

    id: str
    name: str
    status: Status
    latency: int = 0  # ms, always 0 when OFFLINE
    uptime: float = 100.0  # percent
    region: str = "UNKNOWN"


@dataclass(frozen=True)
class ServiceDraft:
    """Admin-supplied fields for a create or update."""

    name: str
    region: str
    status: Status = Status.OPERATIONAL


@dataclass(frozen=True)
class LocalizedMessage:
    en: str
    zh: str

    def render(self, lang: str = "en") -> str:
        return self.zh if lang == "zh" else self.en


@dataclass(frozen=True)
class LogEntry:
    timestamp: str
    message: LocalizedMessage
    severity: Severity


@dataclass(frozen=True)
class BackendConfig:
    """Resolved remote backend connection parameters."""

    api_base: str
    read_key: str


@dataclass(frozen=True)
class ApiMode:
    config: BackendConfig

    @property
    def mode(self) -> EngineMode:
        return EngineMode.API_MODE


@dataclass(frozen=True)
class SimulationMode:
    @property
    def mode(self) -> EngineMode:
        return EngineMode.SIMULATION_MODE


ResolvedMode = ApiMode | SimulationMode


@dataclass(frozen=True)
class MutationResult:
    """Outcome of an admin create/update/delete."""

    ok: bool
    action: str  # "create", "update" or "delete"
    service_id: str | None = None
    error: str | None = None  # error code when ok is False
    message: str | None = None


# Seed collection shown until the first poll (API mode) or for the whole run (simulation)
INITIAL_SERVICES: tuple[Service, ...] = (
    Service(id="1", name="CORE_GATEWAY", status=Status.OPERATIONAL, latency=24, uptime=99.99, region="US-EAST"),
    Service(id="2", name="NEURAL_DB_SHARD_01", status=Status.OPERATIONAL, latency=12, uptime=99.95, region="US-WEST"),
    Service(id="3", name="AUTH_MATRIX", status=Status.DEGRADED, latency=154, uptime=98.50, region="EU-CENTRAL"),
    Service(id="4", name="QUANTUM_STORAGE", status=Status.OPERATIONAL, latency=45, uptime=99.99, region="ASIA-PAC"),
    Service(id="5", name="RENDER_FARM_ALPHA", status=Status.OFFLINE, latency=0, uptime=85.20, region="US-EAST"),
    Service(id="6", name="EVENT_STREAM_BUS", status=Status.OPERATIONAL, latency=8, uptime=99.99, region="GLOBAL"),
)
