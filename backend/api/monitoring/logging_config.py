import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from api.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that stamps every record with time, level and environment"""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super(CustomJsonFormatter, self).add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["environment"] = settings.environment
        log_record["module"] = record.module
        log_record["function"] = record.funcName


def setup_logging(
    app_name: str = "agritrace", log_level: str = "INFO"
) -> logging.Logger:
    """
    Setup structured JSON logging

    Child loggers (``agritrace.ledger`` and friends) propagate to the handler
    installed here.

    Args:
        app_name: Name of the root application logger
        log_level: Logging level (INFO, DEBUG, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger = logging.getLogger(app_name)
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(CustomJsonFormatter())
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    # Suppress noisy loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)
    logging.getLogger("fastapi").setLevel(logging.WARNING)
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return logger


logger = setup_logging(log_level=settings.log_level)
ledger_logger = logging.getLogger("agritrace.ledger")


def log_rejection(reason: str, kind: str, path: Optional[str] = None, caller: Optional[str] = None):
    """Log a ledger operation that was rejected by a guard clause"""
    ledger_logger.warning(
        reason,
        extra={"error_type": kind, "path": path, "caller": caller},
    )


def log_error(error: Exception, context: str = None, **extra):
    """Log unexpected error with traceback"""
    logger.error(
        f"Error: {str(error)}",
        extra={"error_type": type(error).__name__, "context": context, **extra},
        exc_info=True,
    )


def log_event(event_name: str, entity_key: str, actor: str, fields: Dict[str, Any]):
    """Log a committed ledger notification"""
    ledger_logger.info(
        f"Event: {event_name}",
        extra={"entity_key": entity_key, "actor": actor, "fields": fields},
    )
