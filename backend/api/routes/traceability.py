from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Annotated
from database.connection import get_db
from api.models import TraceabilityResponse
from api.services.ledger.traceability import get_complete_product_traceability

router = APIRouter(tags=["Traceability"])

DbSession = Annotated[Session, Depends(get_db)]


@router.get("/{product_code}", response_model=TraceabilityResponse)
def get_product_traceability(product_code: str, db: DbSession):
    """Cadena de custodia completa de un producto"""
    trace = get_complete_product_traceability(db, product_code)
    return trace._asdict()
