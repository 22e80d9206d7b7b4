"""Dashboard engine: wires config, registry, log, scheduler and admin mutations."""

import random
from collections.abc import Callable

import httpx
import structlog

from statusboard.config import settings
from statusboard.services.telemetry import messages
from statusboard.services.telemetry.aggregator import aggregate_status
from statusboard.services.telemetry.config_loader import ConfigLoader
from statusboard.services.telemetry.event_log import EventLog
from statusboard.services.telemetry.models import (
    INITIAL_SERVICES,
    ApiMode,
    EngineMode,
    LogEntry,
    ResolvedMode,
    Service,
    Severity,
    Status,
)
from statusboard.services.telemetry.mutator import (
    AdminMutator,
    ApiMutationBackend,
    MutationBackend,
    SimulationMutationBackend,
)
from statusboard.services.telemetry.normalizer import parse_status_setting
from statusboard.services.telemetry.registry import ServiceRegistry
from statusboard.services.telemetry.scheduler import PollingScheduler
from statusboard.services.telemetry.upstream import UpstreamClient, is_header_safe

logger = structlog.get_logger()


class DashboardEngine:
    """Owns the engine lifecycle: ``start()`` resolves config and starts polling, ``stop()`` tears down."""

    def __init__(
        self,
        config_source: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        poll_interval: float | None = None,
        simulation_interval: float | None = None,
        ambient_event_rate: float | None = None,
        log_capacity: int | None = None,
        empty_status_default: Status | None = None,
        auth_scheme: str | None = None,
        rng: random.Random | None = None,
        id_factory: Callable[[], str] | None = None,
    ):
        self._config_source = config_source or settings.statusboard_config_url
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=settings.statusboard_http_connect_timeout,
                read=settings.statusboard_http_read_timeout,
                write=5.0,
                pool=5.0,
            )
        )
        self._poll_interval = poll_interval if poll_interval is not None else settings.statusboard_poll_interval
        self._simulation_interval = (
            simulation_interval if simulation_interval is not None else settings.statusboard_simulation_interval
        )
        self._ambient_event_rate = (
            ambient_event_rate if ambient_event_rate is not None else settings.statusboard_ambient_event_rate
        )
        self._empty_status_default = empty_status_default or parse_status_setting(
            settings.statusboard_empty_status_default
        )
        self._auth_scheme = auth_scheme if auth_scheme is not None else settings.statusboard_auth_scheme
        self._rng = rng or random.Random()
        self._id_factory = id_factory

        self.event_log = EventLog(capacity=log_capacity or settings.statusboard_log_capacity)
        self.event_log.append(messages.BOOT, Severity.INFO)
        self.registry = ServiceRegistry(INITIAL_SERVICES)
        self._last_global_status = aggregate_status(self.registry.services)
        self.registry.add_listener(self._on_registry_change)

        self._config_loader = ConfigLoader(self._config_source, self.event_log, http_client=self._client)
        self._resolved: ResolvedMode | None = None
        self._upstream: UpstreamClient | None = None
        self._scheduler: PollingScheduler | None = None
        self._admin_key: str | None = None

    # ── Lifecycle ────────────────────────────────────────────────────────────

    async def resolve(self) -> ResolvedMode:
        """Resolve config (once) and bind the scheduler to the chosen mode without starting it."""
        if self._resolved is not None:
            return self._resolved
        self._resolved = await self._config_loader.load()
        if isinstance(self._resolved, ApiMode):
            self._upstream = UpstreamClient(
                self._resolved.config.api_base,
                http_client=self._client,
                auth_scheme=self._auth_scheme,
            )
        self._scheduler = PollingScheduler(
            registry=self.registry,
            event_log=self.event_log,
            credential_provider=self._poll_credential,
            upstream=self._upstream,
            poll_interval=self._poll_interval,
            simulation_interval=self._simulation_interval,
            ambient_event_rate=self._ambient_event_rate,
            empty_status_default=self._empty_status_default,
            rng=self._rng,
        )
        self._scheduler.bind(self._resolved)
        return self._resolved

    async def start(self) -> None:
        """Resolve config and start the background scheduler."""
        await self.resolve()
        await self._scheduler.start()
        logger.info("dashboard_engine_started", mode=self.mode.value)

    async def refresh(self) -> None:
        """Run one scheduler cycle now (poll or fluctuate)."""
        await self.resolve()
        await self._scheduler.tick()

    async def stop(self) -> None:
        if self._scheduler is not None:
            await self._scheduler.stop()
        if self._owns_client:
            await self._client.aclose()
        logger.info("dashboard_engine_stopped")

    # ── Read surface ─────────────────────────────────────────────────────────

    @property
    def mode(self) -> EngineMode:
        if self._resolved is None:
            return EngineMode.LOADING
        return self._resolved.mode

    @property
    def scheduler(self) -> PollingScheduler | None:
        return self._scheduler

    @property
    def services(self) -> tuple[Service, ...]:
        return self.registry.services

    @property
    def events(self) -> tuple[LogEntry, ...]:
        return self.event_log.entries

    @property
    def global_status(self) -> Status:
        return aggregate_status(self.registry.services)

    # ── Admin session ────────────────────────────────────────────────────────

    @property
    def is_admin(self) -> bool:
        return self._admin_key is not None

    def login(self, key: str) -> bool:
        """Hold an admin credential. Blank keys and keys that cannot travel in a header are refused."""
        if not key or not key.strip() or not is_header_safe(key):
            return False
        self._admin_key = key
        self.event_log.append(messages.ADMIN_GRANTED, Severity.INFO)
        logger.info("admin_session_started")
        return True

    def logout(self) -> bool:
        if self._admin_key is None:
            return False
        self._admin_key = None
        self.event_log.append(messages.ADMIN_TERMINATED, Severity.INFO)
        logger.info("admin_session_ended")
        return True

    @property
    def admin(self) -> AdminMutator | None:
        """Admin entry points, or None when no session is held or config is unresolved."""
        if self._admin_key is None or self._resolved is None:
            return None
        return AdminMutator(self._mutation_backend(), self.event_log)

    def _mutation_backend(self) -> MutationBackend:
        if isinstance(self._resolved, ApiMode):
            return ApiMutationBackend(self._upstream, lambda: self._admin_key)
        return SimulationMutationBackend(self.registry, id_factory=self._id_factory)

    def _poll_credential(self) -> str:
        if self._admin_key:
            return self._admin_key
        return self._resolved.config.read_key

    def _on_registry_change(self, services: tuple[Service, ...]) -> None:
        status = aggregate_status(services)
        if status != self._last_global_status:
            logger.info(
                "global_status_changed",
                previous=self._last_global_status.value,
                current=status.value,
            )
            self._last_global_status = status
