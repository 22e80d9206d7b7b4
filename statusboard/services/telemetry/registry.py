"""In-memory collection of monitored services."""

import dataclasses
import random
from collections.abc import Callable, Iterable

import structlog

from statusboard.services.telemetry.models import Service, Status

logger = structlog.get_logger()

FLUCTUATION_RANGE = 10  # ms, latency moves by [-10, +9] per simulated tick
SPIKE_PROBABILITY = 0.05
SPIKE_MS = 100

RegistryListener = Callable[[tuple[Service, ...]], None]


class ServiceRegistry:
    """Holds at most one Service per id, in insertion order.

    Every mutation builds a new dict and swaps it in with a single
    assignment, so a reader always sees either the old or the new
    collection, never a mix.
    """

    def __init__(self, services: Iterable[Service] = ()):
        self._services: dict[str, Service] = {svc.id: svc for svc in services}
        self._listeners: list[RegistryListener] = []

    @property
    def services(self) -> tuple[Service, ...]:
        return tuple(self._services.values())

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(self._services)

    def __len__(self) -> int:
        return len(self._services)

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._services

    def get(self, service_id: str) -> Service | None:
        return self._services.get(service_id)

    def add_listener(self, listener: RegistryListener) -> None:
        """Register a callback invoked with the new snapshot after each change."""
        self._listeners.append(listener)

    def replace_all(self, services: Iterable[Service]) -> None:
        self._swap({svc.id: svc for svc in services})

    def upsert(self, service: Service) -> None:
        updated = dict(self._services)
        updated[service.id] = service
        self._swap(updated)

    def remove(self, service_id: str) -> bool:
        """Drop a service. Returns False (and changes nothing) for unknown ids."""
        if service_id not in self._services:
            return False
        self._swap({k: v for k, v in self._services.items() if k != service_id})
        return True

    def fluctuate(self, rng: random.Random | None = None) -> None:
        """Jitter latency of every reachable service to emulate live telemetry."""
        rng = rng or random
        updated = {}
        for svc_id, svc in self._services.items():
            if svc.status == Status.OFFLINE:
                updated[svc_id] = svc
                continue
            latency = max(0, svc.latency + rng.randint(-FLUCTUATION_RANGE, FLUCTUATION_RANGE - 1))
            if rng.random() < SPIKE_PROBABILITY:
                latency += SPIKE_MS
            updated[svc_id] = dataclasses.replace(svc, latency=latency)
        self._swap(updated)

    def _swap(self, services: dict[str, Service]) -> None:
        self._services = services
        snapshot = self.services
        for listener in self._listeners:
            try:
                listener(snapshot)
            except Exception:
                logger.exception("registry_listener_failed")
