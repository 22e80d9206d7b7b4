"""Global system status derived from the current service collection."""

from collections.abc import Iterable

from statusboard.services.telemetry.models import Service, Status


def aggregate_status(services: Iterable[Service]) -> Status:
    """OFFLINE beats DEGRADED beats OPERATIONAL. MAINTENANCE is neutral."""
    statuses = {svc.status for svc in services}
    if Status.OFFLINE in statuses:
        return Status.OFFLINE
    if Status.DEGRADED in statuses:
        return Status.DEGRADED
    return Status.OPERATIONAL
