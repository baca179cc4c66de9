from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Annotated, Dict
from database.connection import get_db
from api.auth.dependencies import get_caller
from api.models import (
    ProductCreate,
    ProductUpdate,
    ProductStatusUpdate,
    ProductResponse,
)
from api.services.ledger import products

router = APIRouter(tags=["Products"])

DbSession = Annotated[Session, Depends(get_db)]
Caller = Annotated[str, Depends(get_caller)]


@router.post("/", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def add_product(product_data: ProductCreate, db: DbSession, caller: Caller):
    """Alta de producto en una finca existente"""
    return products.add_product(db, caller, **product_data.model_dump())


@router.get("/total")
def get_total_products(db: DbSession) -> Dict[str, int]:
    return {"total_products": products.get_total_products(db)}


@router.get("/by-farm/{farm_code}", response_model=List[ProductResponse])
def list_products_by_farm(farm_code: str, db: DbSession):
    """Productos de una finca"""
    return products.get_products_by_farm(db, farm_code)


@router.get("/{product_code}", response_model=ProductResponse)
def get_product(product_code: str, db: DbSession):
    return products.get_product(db, product_code)


@router.put("/{product_code}", response_model=ProductResponse)
def update_product(
    product_code: str, product_update: ProductUpdate, db: DbSession, caller: Caller
):
    """Actualizar datos del producto"""
    return products.update_product(
        db, caller, product_code, **product_update.model_dump()
    )


@router.post("/{product_code}/deactivate", response_model=ProductResponse)
def deactivate_product(product_code: str, db: DbSession, caller: Caller):
    return products.deactivate_product(db, caller, product_code)


@router.put("/{product_code}/status", response_model=ProductResponse)
def set_product_status(
    product_code: str, body: ProductStatusUpdate, db: DbSession, caller: Caller
):
    """Cambiar estado del producto (solo verificadores)"""
    return products.set_product_status(db, caller, product_code, body.status)
