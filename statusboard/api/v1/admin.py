from fastapi import APIRouter, Depends

from statusboard.core.exceptions import (
    AdminRequiredError,
    MutationError,
    NotFoundError,
    StatusboardError,
)
from statusboard.dependencies import get_engine, require_admin_mutator
from statusboard.schemas.dashboard import (
    LoginRequest,
    MutationResponse,
    ServiceDraftRequest,
    SessionResponse,
)
from statusboard.services.telemetry.engine import DashboardEngine
from statusboard.services.telemetry.models import MutationResult, ServiceDraft, Status
from statusboard.services.telemetry.mutator import AdminMutator

router = APIRouter()


def _draft(body: ServiceDraftRequest) -> ServiceDraft:
    return ServiceDraft(name=body.name, region=body.region, status=Status(body.status))


def _result_out(result: MutationResult) -> MutationResponse:
    if not result.ok:
        raise _error_for(result)
    return MutationResponse(ok=True, action=result.action, service_id=result.service_id)


def _error_for(result: MutationResult) -> StatusboardError:
    details = {"action": result.action}
    if result.service_id:
        details["service_id"] = result.service_id
    if result.error == "not_found":
        return NotFoundError(result.message or "Service not found.", details=details)
    if result.error == "admin_required":
        return AdminRequiredError(result.message or "An admin session is required.", details=details)
    return MutationError(result.message or "Upstream rejected the change.", details=details)


# ── Session ─────────────────────────────────────────────────────────────────


@router.post("/dashboard/admin/login")
async def login(body: LoginRequest, engine: DashboardEngine = Depends(get_engine)) -> SessionResponse:
    if not engine.login(body.key):
        raise StatusboardError(code="invalid_key", message="Admin key must be non-blank printable ASCII.", status=400)
    return SessionResponse(admin=True)


@router.post("/dashboard/admin/logout")
async def logout(engine: DashboardEngine = Depends(get_engine)) -> SessionResponse:
    engine.logout()
    return SessionResponse(admin=False)


# ── Service mutations ───────────────────────────────────────────────────────


@router.post("/dashboard/services", status_code=201)
async def create_service(
    body: ServiceDraftRequest,
    mutator: AdminMutator = Depends(require_admin_mutator),
) -> MutationResponse:
    return _result_out(await mutator.create(_draft(body)))


@router.put("/dashboard/services/{service_id}")
async def update_service(
    service_id: str,
    body: ServiceDraftRequest,
    mutator: AdminMutator = Depends(require_admin_mutator),
) -> MutationResponse:
    return _result_out(await mutator.update(service_id, _draft(body)))


@router.delete("/dashboard/services/{service_id}")
async def delete_service(
    service_id: str,
    mutator: AdminMutator = Depends(require_admin_mutator),
) -> MutationResponse:
    return _result_out(await mutator.delete(service_id))
