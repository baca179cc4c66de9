from fastapi import APIRouter, Depends
from typing import Annotated
from sqlalchemy.orm import Session
from database.connection import get_db
from api.monitoring.health_check import HealthMonitor, HealthCheckResponse

router = APIRouter()

DbSession = Annotated[Session, Depends(get_db)]


@router.get("/health", response_model=HealthCheckResponse)
def health_check(db: DbSession):
    """Verificación de salud del servicio"""
    return HealthMonitor.get_health_check(db)
