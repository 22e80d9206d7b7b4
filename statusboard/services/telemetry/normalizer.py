"""Map upstream status vocabularies onto the canonical Status enum."""

from statusboard.services.telemetry.models import Status

# Checked in order; first match wins.
_STATUS_RULES: tuple[tuple[tuple[str, ...], Status], ...] = (
    (("degrad",), Status.DEGRADED),
    (("maint",), Status.MAINTENANCE),
    (("off", "down", "fail", "unhealthy"), Status.OFFLINE),
)


def normalize_status(token: object, empty_default: Status = Status.DEGRADED) -> Status:
    """Return the canonical status for an arbitrary upstream token.

    Matching is case-insensitive and substring based, so "Degraded-Perf",
    "scheduled_maintenance" and "FAILED" all land in the expected bucket.
    Anything non-empty that matches no rule (``healthy``, ``ok``, ``up``)
    is OPERATIONAL. ``None`` and blank tokens return ``empty_default``.
    """
    if token is None:
        return empty_default
    text = str(token).strip().lower()
    if not text:
        return empty_default
    for needles, status in _STATUS_RULES:
        if any(needle in text for needle in needles):
            return status
    return Status.OPERATIONAL


def parse_status_setting(value: str) -> Status:
    """Resolve the configured empty-token default, rejecting unknown names."""
    try:
        return Status(value.strip().upper())
    except ValueError:
        raise ValueError(
            f"Invalid empty status default {value!r}; expected one of {[s.value for s in Status]}"
        ) from None
