"""
Registro de fincas.

Las fincas se identifican por ``farm_code`` (único e inmutable) y se indexan
por ``user_id`` del propietario, que puede repetirse entre fincas. La
desactivación es lógica: la finca sigue siendo consultable.
"""
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session

from database.models.database import Farm
from api.services.ledger.access_control import get_state, require_authorized
from api.services.ledger.constants import MAX_AREA, MAX_IMAGES, MIN_AREA
from api.services.ledger.errors import (
    ConflictError,
    LedgerValidationError,
    NotFoundError,
    OutOfRangeError,
)
from api.services.ledger.events import atomic, record_event


def _validate_area(area: int) -> None:
    if area is None or area < MIN_AREA or area > MAX_AREA:
        raise LedgerValidationError("Validation: Invalid area")


def _validate_images(images: List[str]) -> None:
    if len(images) > MAX_IMAGES:
        raise LedgerValidationError("Validation: Too many images")


def _find(db: Session, farm_code: str) -> Optional[Farm]:
    return db.scalars(select(Farm).where(Farm.farm_code == farm_code)).first()


def get_farm(db: Session, farm_code: str) -> Farm:
    farm = _find(db, farm_code)
    if farm is None:
        raise NotFoundError("FarmManagement: Farm not found")
    return farm


def farm_exists(db: Session, farm_code: str) -> bool:
    return _find(db, farm_code) is not None


def register_farm(
    db: Session,
    caller: str,
    farm_code: str,
    fullname: str,
    name_farm: str,
    user_id: str,
    email: str,
    phone: str,
    description: str,
    location: str,
    area: int,
    images: List[str],
) -> Farm:
    """Registrar una nueva finca activa"""
    images = list(images or [])
    with atomic(db):
        require_authorized(db, caller)
        if not farm_code or not farm_code.strip():
            raise LedgerValidationError("Validation: Empty farmCode")
        _validate_area(area)
        _validate_images(images)
        if _find(db, farm_code) is not None:
            raise ConflictError("Validation: Farm already exists")

        farm = Farm(
            farm_code=farm_code,
            fullname=fullname,
            name_farm=name_farm,
            user_id=user_id,
            email=email,
            phone=phone,
            description=description,
            location=location,
            area=area,
            images=images,
            is_active=True,
            created_by=caller,
        )
        db.add(farm)
        get_state(db).total_farms += 1
        record_event(
            db,
            "FarmRegistered",
            farm_code,
            caller,
            fullname=fullname,
            name_farm=name_farm,
            user_id=user_id,
            email=email,
            phone=phone,
            description=description,
            location=location,
            area=area,
            images=images,
            is_active=True,
        )
    return farm


def update_farm(
    db: Session,
    caller: str,
    farm_code: str,
    name_farm: str,
    description: str,
    location: str,
    area: int,
    images: List[str],
) -> Farm:
    """Actualizar nombre, descripción, ubicación, área e imágenes"""
    images = list(images or [])
    with atomic(db):
        require_authorized(db, caller)
        farm = get_farm(db, farm_code)
        _validate_area(area)
        _validate_images(images)

        farm.name_farm = name_farm
        farm.description = description
        farm.location = location
        farm.area = area
        farm.images = images
        record_event(
            db,
            "FarmUpdated",
            farm_code,
            caller,
            name_farm=name_farm,
            description=description,
            location=location,
            area=area,
            images=images,
        )
    return farm


def deactivate_farm(db: Session, caller: str, farm_code: str) -> Farm:
    """Desactivar una finca. Idempotente: repetir la llamada no emite notificación"""
    with atomic(db):
        require_authorized(db, caller)
        farm = get_farm(db, farm_code)
        if farm.is_active:
            farm.is_active = False
            record_event(db, "FarmDeactivated", farm_code, caller, is_active=False)
    return farm


def add_farm_image(db: Session, caller: str, farm_code: str, url: str) -> Farm:
    with atomic(db):
        require_authorized(db, caller)
        farm = get_farm(db, farm_code)
        if not url:
            raise LedgerValidationError("Validation: Empty image")
        if len(farm.images or []) >= MAX_IMAGES:
            raise LedgerValidationError("Validation: Too many images")

        # Reasignar la lista para que SQLAlchemy detecte el cambio en la columna JSON
        farm.images = [*(farm.images or []), url]
        record_event(
            db, "FarmImageAdded", farm_code, caller, url=url, index=len(farm.images) - 1
        )
    return farm


def remove_farm_image(db: Session, caller: str, farm_code: str, index: int) -> Farm:
    """Eliminar la imagen en ``index``; las restantes conservan su orden relativo"""
    with atomic(db):
        require_authorized(db, caller)
        farm = get_farm(db, farm_code)
        images = list(farm.images or [])
        if index < 0 or index >= len(images):
            raise OutOfRangeError("Validation: Image index out of range")

        removed = images.pop(index)
        farm.images = images
        record_event(
            db, "FarmImageRemoved", farm_code, caller, url=removed, index=index
        )
    return farm


def get_farm_images(db: Session, farm_code: str) -> List[str]:
    return list(get_farm(db, farm_code).images or [])


def get_farms_by_user_id(db: Session, user_id: str) -> List[Farm]:
    query = select(Farm).where(Farm.user_id == user_id).order_by(Farm.id)
    return list(db.scalars(query).all())


def get_all_farms(db: Session) -> List[Farm]:
    return list(db.scalars(select(Farm).order_by(Farm.id)).all())


def user_exists(db: Session, user_id: str) -> bool:
    query = select(Farm.id).where(Farm.user_id == user_id).limit(1)
    return db.scalars(query).first() is not None


def get_total_farms(db: Session) -> int:
    return get_state(db).total_farms
