from .logging_config import setup_logging, logger, log_rejection, log_error, log_event
from .prometheus_metrics import (
    PrometheusMiddleware,
    request_count,
    request_duration,
    ledger_event_count,
    ledger_error_count,
    update_registry_gauges,
)
from .health_check import HealthMonitor, HealthCheckResponse
from .sentry_config import setup_sentry, capture_exception

__all__ = [
    "setup_logging",
    "logger",
    "log_rejection",
    "log_error",
    "log_event",
    "PrometheusMiddleware",
    "request_count",
    "request_duration",
    "ledger_event_count",
    "ledger_error_count",
    "update_registry_gauges",
    "HealthMonitor",
    "HealthCheckResponse",
    "setup_sentry",
    "capture_exception",
]
