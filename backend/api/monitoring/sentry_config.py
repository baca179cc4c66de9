from typing import Optional, Dict, Any
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from api.config import settings


class SentryConfig:
    """Sentry configuration taken from the application settings"""

    def __init__(self):
        self.dsn = settings.sentry_dsn
        self.environment = settings.environment
        self.traces_sample_rate = settings.sentry_traces_sample_rate
        self.enabled = bool(self.dsn)


def _drop_ledger_rejections(event: Dict[str, Any], hint: Dict[str, Any]):
    """Rejected ledger operations are expected outcomes, not incidents"""
    from api.services.ledger.errors import LedgerError

    exc_info = hint.get("exc_info")
    if exc_info and isinstance(exc_info[1], LedgerError):
        return None
    return event


def setup_sentry():
    config = SentryConfig()

    if not config.enabled:
        return None

    sentry_sdk.init(
        dsn=config.dsn,
        environment=config.environment,
        traces_sample_rate=config.traces_sample_rate,
        integrations=[
            FastApiIntegration(),
            SqlalchemyIntegration(),
            LoggingIntegration(
                level=20,          # Capture info and above
                event_level=40     # Report errors and above
            ),
        ],
        before_send=_drop_ledger_rejections,
        release=f"{settings.app_name}@{settings.app_version}",
        send_default_pii=False,
    )
    sentry_sdk.set_tag("registry_owner", settings.registry_owner)

    return sentry_sdk


def capture_exception(exception: Exception, context: Optional[Dict[str, Any]] = None):
    """
    Capture unexpected exception to Sentry (no-op when Sentry is not configured)

    Args:
        exception: The exception to capture
        context: Additional context data, e.g. request path and caller
    """
    if not SentryConfig().enabled:
        return

    with sentry_sdk.new_scope() as scope:
        for key, value in (context or {}).items():
            scope.set_context(key, {"data": value})
        sentry_sdk.capture_exception(exception)
