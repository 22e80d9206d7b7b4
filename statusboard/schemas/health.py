from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str  # "ok" or "starting"
    mode: str
    scheduler_running: bool
    uptime_seconds: float = 0.0
    version: str = "0.1.0"
