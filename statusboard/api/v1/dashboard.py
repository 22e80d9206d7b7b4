from typing import Literal

from fastapi import APIRouter, Depends

from statusboard.dependencies import get_engine
from statusboard.schemas.dashboard import (
    DashboardResponse,
    GlobalStatusResponse,
    LocalizedText,
    LogEntryResponse,
    ServiceResponse,
)
from statusboard.services.telemetry.engine import DashboardEngine
from statusboard.services.telemetry.models import LogEntry, Service

router = APIRouter()

Lang = Literal["en", "zh"]


def _service_out(svc: Service) -> ServiceResponse:
    return ServiceResponse(
        id=svc.id,
        name=svc.name,
        status=svc.status.value,
        latency=svc.latency,
        uptime=svc.uptime,
        region=svc.region,
    )


def _entry_out(entry: LogEntry, lang: str) -> LogEntryResponse:
    return LogEntryResponse(
        timestamp=entry.timestamp,
        message=LocalizedText(en=entry.message.en, zh=entry.message.zh),
        text=entry.message.render(lang),
        severity=entry.severity.value,
    )


@router.get("/dashboard")
async def dashboard(
    lang: Lang = "en",
    engine: DashboardEngine = Depends(get_engine),
) -> DashboardResponse:
    """Everything the dashboard renders, read in one pass."""
    services = engine.services
    return DashboardResponse(
        mode=engine.mode.value,
        global_status=engine.global_status.value,
        admin=engine.is_admin,
        services=[_service_out(s) for s in services],
        events=[_entry_out(e, lang) for e in engine.events],
    )


@router.get("/dashboard/services")
async def list_services(engine: DashboardEngine = Depends(get_engine)) -> list[ServiceResponse]:
    return [_service_out(s) for s in engine.services]


@router.get("/dashboard/status")
async def global_status(engine: DashboardEngine = Depends(get_engine)) -> GlobalStatusResponse:
    return GlobalStatusResponse(
        status=engine.global_status.value,
        mode=engine.mode.value,
        service_count=len(engine.services),
    )


@router.get("/dashboard/events")
async def list_events(
    lang: Lang = "en",
    engine: DashboardEngine = Depends(get_engine),
) -> list[LogEntryResponse]:
    """Event log, oldest first."""
    return [_entry_out(e, lang) for e in engine.events]
