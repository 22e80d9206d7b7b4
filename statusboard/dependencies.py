from fastapi import Request

from statusboard.core.exceptions import AdminRequiredError
from statusboard.services.telemetry.engine import DashboardEngine
from statusboard.services.telemetry.mutator import AdminMutator


def get_engine(request: Request) -> DashboardEngine:
    """Return the dashboard engine stored on app state during lifespan."""
    return request.app.state.engine


def require_admin_mutator(request: Request) -> AdminMutator:
    """Dependency that exposes the admin entry points only while a session is held."""
    mutator = get_engine(request).admin
    if mutator is None:
        raise AdminRequiredError()
    return mutator
