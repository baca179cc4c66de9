from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Annotated, List, Optional
from database.connection import get_db
from api.models import (
    ContractInfoResponse,
    RegistryConstantsResponse,
    LedgerEventResponse,
)
from api.services.ledger import get_contract_info, list_events
from api.services.ledger import MAX_AREA, MIN_AREA, MAX_IMAGES, MAX_QUANTITY

router = APIRouter(tags=["Registry"])

DbSession = Annotated[Session, Depends(get_db)]


@router.get("/info", response_model=ContractInfoResponse)
def contract_info(db: DbSession):
    """Nombre, versión, totales y owner del registro"""
    return get_contract_info(db)._asdict()


@router.get("/constants", response_model=RegistryConstantsResponse)
def registry_constants():
    """Límites de área, imágenes y cantidad aplicados por el registro"""
    return {
        "max_area": MAX_AREA,
        "min_area": MIN_AREA,
        "max_images": MAX_IMAGES,
        "max_quantity": MAX_QUANTITY,
    }


@router.get("/events", response_model=List[LedgerEventResponse])
def ledger_events(
    db: DbSession,
    event_name: Optional[str] = None,
    entity_key: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
):
    """Listar notificaciones del log append-only"""
    return list_events(db, event_name, entity_key, skip, limit)
