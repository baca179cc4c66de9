from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Annotated, Dict, Any
from database.connection import get_db
from api.auth.dependencies import get_caller
from api.models import FarmCreate, FarmUpdate, FarmImageCreate, FarmResponse
from api.services.ledger import farms

router = APIRouter(tags=["Farms"])

DbSession = Annotated[Session, Depends(get_db)]
Caller = Annotated[str, Depends(get_caller)]


@router.post("/", response_model=FarmResponse, status_code=status.HTTP_201_CREATED)
def register_farm(farm_data: FarmCreate, db: DbSession, caller: Caller):
    """Registrar nueva finca"""
    return farms.register_farm(db, caller, **farm_data.model_dump())


@router.get("/", response_model=List[FarmResponse])
def list_farms(db: DbSession):
    """Listar todas las fincas (activas e inactivas)"""
    return farms.get_all_farms(db)


@router.get("/total")
def get_total_farms(db: DbSession) -> Dict[str, int]:
    return {"total_farms": farms.get_total_farms(db)}


@router.get("/by-user/{user_id}", response_model=List[FarmResponse])
def list_farms_by_user(user_id: str, db: DbSession):
    """Fincas registradas bajo un user_id"""
    return farms.get_farms_by_user_id(db, user_id)


@router.get("/users/{user_id}/exists")
def user_exists(user_id: str, db: DbSession) -> Dict[str, Any]:
    return {"user_id": user_id, "exists": farms.user_exists(db, user_id)}


@router.get("/{farm_code}", response_model=FarmResponse)
def get_farm(farm_code: str, db: DbSession):
    """Obtener detalles de una finca"""
    return farms.get_farm(db, farm_code)


@router.put("/{farm_code}", response_model=FarmResponse)
def update_farm(farm_code: str, farm_update: FarmUpdate, db: DbSession, caller: Caller):
    """Actualizar información de una finca"""
    return farms.update_farm(db, caller, farm_code, **farm_update.model_dump())


@router.post("/{farm_code}/deactivate", response_model=FarmResponse)
def deactivate_farm(farm_code: str, db: DbSession, caller: Caller):
    """Desactivar una finca (sigue siendo consultable)"""
    return farms.deactivate_farm(db, caller, farm_code)


@router.get("/{farm_code}/images", response_model=List[str])
def get_farm_images(farm_code: str, db: DbSession):
    return farms.get_farm_images(db, farm_code)


@router.post(
    "/{farm_code}/images",
    response_model=FarmResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_farm_image(
    farm_code: str, image: FarmImageCreate, db: DbSession, caller: Caller
):
    """Agregar imagen al final de la lista"""
    return farms.add_farm_image(db, caller, farm_code, image.url)


@router.delete("/{farm_code}/images/{index}", response_model=FarmResponse)
def remove_farm_image(farm_code: str, index: int, db: DbSession, caller: Caller):
    """Eliminar imagen por posición"""
    return farms.remove_farm_image(db, caller, farm_code, index)
