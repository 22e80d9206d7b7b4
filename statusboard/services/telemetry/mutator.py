"""Admin create/update/delete against the remote API or the simulated registry."""

import dataclasses
import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable

import structlog

from statusboard.core.exceptions import AdminRequiredError, NotFoundError, StatusboardError
from statusboard.services.telemetry import messages
from statusboard.services.telemetry.event_log import EventLog
from statusboard.services.telemetry.models import (
    MutationResult,
    Service,
    ServiceDraft,
    Severity,
)
from statusboard.services.telemetry.registry import ServiceRegistry
from statusboard.services.telemetry.upstream import UpstreamClient

logger = structlog.get_logger()

SIMULATED_LATENCY = 10
SIMULATED_UPTIME = 100.0


class MutationBackend(ABC):
    """Where admin writes land. Failures are raised as StatusboardError subclasses."""

    @abstractmethod
    async def create(self, draft: ServiceDraft) -> str | None:
        """Create a service and return its id when known."""
        ...

    @abstractmethod
    async def update(self, service_id: str, draft: ServiceDraft) -> None:
        ...

    @abstractmethod
    async def delete(self, service_id: str) -> None:
        ...


class ApiMutationBackend(MutationBackend):
    """Writes go to the upstream API; the registry is left for the next poll to refresh."""

    def __init__(self, upstream: UpstreamClient, credential_provider: Callable[[], str | None]):
        self._upstream = upstream
        self._credential_provider = credential_provider

    def _credential(self) -> str:
        credential = self._credential_provider()
        if not credential:
            raise AdminRequiredError("Admin session ended before the write.")
        return credential

    async def create(self, draft: ServiceDraft) -> str | None:
        return await self._upstream.create_monitor(draft, self._credential())

    async def update(self, service_id: str, draft: ServiceDraft) -> None:
        await self._upstream.update_monitor(service_id, draft, self._credential())

    async def delete(self, service_id: str) -> None:
        await self._upstream.delete_monitor(service_id, self._credential())


class SimulationMutationBackend(MutationBackend):
    """Writes apply straight to the local registry. Nothing here can fail except unknown-id updates."""

    def __init__(self, registry: ServiceRegistry, id_factory: Callable[[], str] | None = None):
        self._registry = registry
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex[:12])

    def _new_id(self) -> str:
        taken = self._registry.ids
        service_id = self._id_factory()
        while service_id in taken:
            service_id = self._id_factory()
        return service_id

    async def create(self, draft: ServiceDraft) -> str:
        service = Service(
            id=self._new_id(),
            name=draft.name,
            status=draft.status,
            latency=SIMULATED_LATENCY,
            uptime=SIMULATED_UPTIME,
            region=draft.region,
        )
        self._registry.upsert(service)
        return service.id

    async def update(self, service_id: str, draft: ServiceDraft) -> None:
        current = self._registry.get(service_id)
        if current is None:
            raise NotFoundError(f"Service '{service_id}' not found.")
        self._registry.upsert(
            dataclasses.replace(current, name=draft.name, status=draft.status, region=draft.region)
        )

    async def delete(self, service_id: str) -> None:
        self._registry.remove(service_id)


class AdminMutator:
    """The admin entry points. Every call resolves to a MutationResult, never raises."""

    def __init__(self, backend: MutationBackend, event_log: EventLog):
        self._backend = backend
        self._event_log = event_log

    @property
    def backend(self) -> MutationBackend:
        return self._backend

    async def create(self, draft: ServiceDraft) -> MutationResult:
        try:
            service_id = await self._backend.create(draft)
        except StatusboardError as e:
            return self._failed("create", None, e)
        self._event_log.append(messages.SERVICE_DEPLOYED, Severity.INFO)
        logger.info("service_created", service_id=service_id, name=draft.name)
        return MutationResult(ok=True, action="create", service_id=service_id)

    async def update(self, service_id: str, draft: ServiceDraft) -> MutationResult:
        try:
            await self._backend.update(service_id, draft)
        except StatusboardError as e:
            return self._failed("update", service_id, e)
        self._event_log.append(messages.SERVICE_UPDATED, Severity.INFO)
        logger.info("service_updated", service_id=service_id)
        return MutationResult(ok=True, action="update", service_id=service_id)

    async def delete(self, service_id: str) -> MutationResult:
        try:
            await self._backend.delete(service_id)
        except StatusboardError as e:
            return self._failed("delete", service_id, e)
        self._event_log.append(messages.SERVICE_DECOMMISSIONED, Severity.WARN)
        logger.info("service_deleted", service_id=service_id)
        return MutationResult(ok=True, action="delete", service_id=service_id)

    def _failed(self, action: str, service_id: str | None, error: StatusboardError) -> MutationResult:
        logger.warning(
            "service_mutation_failed",
            action=action,
            service_id=service_id,
            code=error.code,
            reason=error.message,
        )
        return MutationResult(
            ok=False, action=action, service_id=service_id, error=error.code, message=error.message
        )
