import time

from fastapi import APIRouter, Depends

from statusboard.dependencies import get_engine
from statusboard.schemas.health import HealthResponse
from statusboard.services.telemetry.engine import DashboardEngine

router = APIRouter()

_start_time = time.monotonic()


@router.get("/health")
async def health_check(engine: DashboardEngine = Depends(get_engine)) -> HealthResponse:
    """Process liveness. "ok" once config has resolved and the scheduler is ticking."""
    scheduler = engine.scheduler
    running = scheduler is not None and scheduler.running
    return HealthResponse(
        status="ok" if running else "starting",
        mode=engine.mode.value,
        scheduler_running=running,
        uptime_seconds=round(time.monotonic() - _start_time, 1),
    )
