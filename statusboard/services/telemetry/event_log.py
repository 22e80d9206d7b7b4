"""Bounded, append-only event log shown on the dashboard."""

from collections import deque
from collections.abc import Iterator
from datetime import datetime

import structlog

from statusboard.services.telemetry.models import LocalizedMessage, LogEntry, Severity

logger = structlog.get_logger()

DEFAULT_CAPACITY = 20

_SEVERITY_TO_LEVEL = {
    Severity.INFO: "info",
    Severity.WARN: "warning",
    Severity.CRIT: "error",
}


def _capture_timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


class EventLog:
    """FIFO of LogEntry records; the oldest entry is evicted once at capacity."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("EventLog capacity must be at least 1")
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    @property
    def entries(self) -> tuple[LogEntry, ...]:
        return tuple(self._entries)

    @property
    def latest(self) -> LogEntry | None:
        return self._entries[-1] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries)

    def append(self, message: LocalizedMessage, severity: Severity = Severity.INFO) -> LogEntry:
        entry = LogEntry(timestamp=_capture_timestamp(), message=message, severity=severity)
        self._entries.append(entry)
        getattr(logger, _SEVERITY_TO_LEVEL[severity])(
            "event_log_append", message=message.en, severity=severity.value
        )
        return entry

    def append_failure(
        self, message: LocalizedMessage, severity: Severity = Severity.CRIT
    ) -> LogEntry | None:
        """Append unless the newest entry already carries the same message.

        Keeps a failure that repeats on every poll from flooding the log.
        """
        latest = self.latest
        if latest is not None and latest.message == message:
            return None
        return self.append(message, severity)
