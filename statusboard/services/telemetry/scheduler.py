"""Polling scheduler: drives the fetch-or-simulate cycle on a fixed cadence."""

import asyncio
import random
from collections.abc import Callable
from enum import Enum

import structlog

from statusboard.core.exceptions import PollError
from statusboard.services.telemetry import messages
from statusboard.services.telemetry.event_log import EventLog
from statusboard.services.telemetry.models import ApiMode, ResolvedMode, Severity, Status
from statusboard.services.telemetry.registry import ServiceRegistry
from statusboard.services.telemetry.upstream import UpstreamClient, service_from_record

logger = structlog.get_logger()

POLL_INTERVAL = 3.0  # seconds, API mode
SIMULATION_INTERVAL = 1.5  # seconds, simulation mode
AMBIENT_EVENT_RATE = 0.05


class SchedulerState(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    API_MODE = "API_MODE"
    SIMULATION_MODE = "SIMULATION_MODE"


class PollingScheduler:
    """Runs one tick immediately on start, then one per interval until stopped.

    The mode is fixed by the first ``start()``; reconnecting to a backend
    needs a new scheduler (in practice, a process restart).
    """

    def __init__(
        self,
        registry: ServiceRegistry,
        event_log: EventLog,
        credential_provider: Callable[[], str],
        upstream: UpstreamClient | None = None,
        poll_interval: float = POLL_INTERVAL,
        simulation_interval: float = SIMULATION_INTERVAL,
        ambient_event_rate: float = AMBIENT_EVENT_RATE,
        empty_status_default: Status = Status.DEGRADED,
        rng: random.Random | None = None,
    ):
        self._registry = registry
        self._event_log = event_log
        self._credential_provider = credential_provider
        self._upstream = upstream
        self._poll_interval = poll_interval
        self._simulation_interval = simulation_interval
        self._ambient_event_rate = ambient_event_rate
        self._empty_status_default = empty_status_default
        self._rng = rng or random.Random()
        self._state = SchedulerState.UNINITIALIZED
        self._task: asyncio.Task | None = None
        self._stopped = False
        self._tick_count = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def running(self) -> bool:
        return self._task is not None and not self._stopped

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def interval(self) -> float:
        if self._state == SchedulerState.API_MODE:
            return self._poll_interval
        return self._simulation_interval

    def bind(self, mode: ResolvedMode) -> None:
        """Fix the operating mode. Allowed exactly once."""
        if self._state != SchedulerState.UNINITIALIZED:
            raise RuntimeError(f"Scheduler mode already set to {self._state.value}")
        if isinstance(mode, ApiMode):
            if self._upstream is None:
                raise RuntimeError("API mode requires an upstream client")
            self._state = SchedulerState.API_MODE
        else:
            self._state = SchedulerState.SIMULATION_MODE
        logger.info("scheduler_mode_bound", mode=self._state.value)

    async def start(self, mode: ResolvedMode | None = None) -> None:
        """Bind the mode (if given) and start the background loop."""
        if mode is not None:
            self.bind(mode)
        if self._state == SchedulerState.UNINITIALIZED:
            raise RuntimeError("Scheduler started before a mode was bound")
        if self._stopped:
            raise RuntimeError("Scheduler cannot be restarted after stop")
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._run_loop())
        logger.info("scheduler_started", mode=self._state.value, interval=self.interval)

    async def stop(self) -> None:
        """Stop ticking. Safe to call more than once."""
        self._stopped = True
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("scheduler_stopped", ticks=self._tick_count)

    async def _run_loop(self) -> None:
        while not self._stopped:
            try:
                await self.tick()
                await asyncio.sleep(self.interval)
            except asyncio.CancelledError:
                break
            except Exception:
                logger.exception("scheduler_tick_error")
                if not self._stopped:
                    self._event_log.append_failure(messages.POLL_FAILED, Severity.CRIT)
                await asyncio.sleep(self.interval)

    async def tick(self) -> None:
        """Run one cycle: poll or fluctuate, then maybe emit an ambient event."""
        if self._stopped:
            return
        self._tick_count += 1

        if self._state == SchedulerState.API_MODE:
            await self._poll()
        elif self._state == SchedulerState.SIMULATION_MODE:
            self._registry.fluctuate(self._rng)
        else:
            raise RuntimeError("Scheduler ticked before a mode was bound")

        if self._stopped:
            return
        self._maybe_emit_ambient_event()

    async def _poll(self) -> None:
        credential = self._credential_provider()
        try:
            records = await self._upstream.list_monitors(credential)
            services = [
                service_from_record(record, self._empty_status_default, self._rng)
                for record in records
            ]
        except PollError as e:
            if self._stopped:
                return
            logger.warning("poll_failed", reason=e.message, **e.details)
            self._event_log.append_failure(messages.POLL_FAILED, Severity.CRIT)
            return

        if self._stopped:
            logger.debug("poll_result_discarded", services=len(services))
            return
        self._registry.replace_all(services)
        logger.debug("poll_applied", services=len(services))

    def _maybe_emit_ambient_event(self) -> None:
        if self._rng.random() >= self._ambient_event_rate:
            return
        message, severity = self._rng.choice(messages.AMBIENT_EVENTS)
        self._event_log.append(message, severity)
