from contextlib import contextmanager
from typing import Any, Iterator, List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session

from database.models.database import LedgerEvent
from api.monitoring.logging_config import log_event
from api.monitoring.prometheus_metrics import ledger_event_count, ledger_error_count
from api.services.ledger.errors import LedgerError

_PENDING_KEY = "ledger_pending_events"


def _to_json(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_to_json(v) for v in value]
    if hasattr(value, "value") and isinstance(value.value, int):
        return int(value.value)  # IntEnum
    return value


def record_event(
    db: Session, event_name: str, entity_key: str, actor: str, **fields: Any
) -> LedgerEvent:
    """Agregar una notificación al log append-only dentro de la transacción actual"""
    event = LedgerEvent(
        event_name=event_name,
        entity_key=entity_key,
        actor=actor,
        payload={k: _to_json(v) for k, v in fields.items()},
    )
    db.add(event)
    db.info.setdefault(_PENDING_KEY, []).append(event)
    return event


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    Unidad atómica de una operación del ledger.

    Confirma todo al salir sin errores; ante cualquier excepción hace rollback
    y descarta las notificaciones pendientes. Las notificaciones se registran
    en el log de la aplicación solo después del commit.
    """
    try:
        yield db
        db.commit()
    except LedgerError as exc:
        db.rollback()
        db.info.pop(_PENDING_KEY, None)
        ledger_error_count.labels(error_type=exc.kind).inc()
        raise
    except Exception:
        db.rollback()
        db.info.pop(_PENDING_KEY, None)
        raise

    for event in db.info.pop(_PENDING_KEY, []):
        ledger_event_count.labels(event_name=event.event_name).inc()
        log_event(
            event.event_name,
            entity_key=event.entity_key,
            actor=event.actor,
            fields=event.payload,
        )


def list_events(
    db: Session,
    event_name: Optional[str] = None,
    entity_key: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[LedgerEvent]:
    """Vista de solo lectura del log para consumidores externos"""
    query = select(LedgerEvent)

    if event_name:
        query = query.where(LedgerEvent.event_name == event_name)

    if entity_key:
        query = query.where(LedgerEvent.entity_key == entity_key)

    query = query.order_by(LedgerEvent.id).offset(skip).limit(limit)
    return list(db.scalars(query).all())
