from typing import Literal

from pydantic import BaseModel, Field

StatusValue = Literal["OPERATIONAL", "DEGRADED", "OFFLINE", "MAINTENANCE"]


class ServiceResponse(BaseModel):
    id: str
    name: str
    status: StatusValue
    latency: int
    uptime: float
    region: str


class LocalizedText(BaseModel):
    en: str
    zh: str


class LogEntryResponse(BaseModel):
    timestamp: str
    message: LocalizedText
    text: str  # message rendered in the requested locale
    severity: Literal["INFO", "WARN", "CRIT"]


class GlobalStatusResponse(BaseModel):
    status: StatusValue
    mode: Literal["LOADING", "API_MODE", "SIMULATION_MODE"]
    service_count: int


class DashboardResponse(BaseModel):
    mode: Literal["LOADING", "API_MODE", "SIMULATION_MODE"]
    global_status: StatusValue
    admin: bool
    services: list[ServiceResponse]
    events: list[LogEntryResponse]


class ServiceDraftRequest(BaseModel):
    name: str = Field(..., min_length=1)
    region: str = ""
    status: StatusValue = "OPERATIONAL"


class LoginRequest(BaseModel):
    key: str


class SessionResponse(BaseModel):
    admin: bool


class MutationResponse(BaseModel):
    ok: bool
    action: Literal["create", "update", "delete"]
    service_id: str | None = None
