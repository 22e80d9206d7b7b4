"""Telemetry synchronization and status-reconciliation engine."""

from statusboard.services.telemetry.aggregator import aggregate_status
from statusboard.services.telemetry.engine import DashboardEngine
from statusboard.services.telemetry.event_log import EventLog
from statusboard.services.telemetry.normalizer import normalize_status
from statusboard.services.telemetry.registry import ServiceRegistry
from statusboard.services.telemetry.scheduler import PollingScheduler

__all__ = [
    "aggregate_status",
    "DashboardEngine",
    "EventLog",
    "normalize_status",
    "ServiceRegistry",
    "PollingScheduler",
]
