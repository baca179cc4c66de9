from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Annotated, Dict, Any
from database.connection import get_db
from api.auth.dependencies import get_caller
from api.models import CategoryCreate, CategoryResponse
from api.services.ledger import categories

router = APIRouter(tags=["Categories"])

DbSession = Annotated[Session, Depends(get_db)]
Caller = Annotated[str, Depends(get_caller)]


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def add_category(category_data: CategoryCreate, db: DbSession, caller: Caller):
    """Registrar categoría"""
    return categories.add_category(
        db, caller, category_data.name, category_data.user_id
    )


@router.get("/", response_model=List[CategoryResponse])
def list_categories(db: DbSession):
    return categories.get_all_categories(db)


@router.get("/by-user/{user_id}", response_model=List[CategoryResponse])
def list_categories_by_user(user_id: str, db: DbSession):
    """Categorías creadas por un usuario"""
    return categories.get_categories_by_user_id(db, user_id)


@router.get("/{name}/exists")
def category_exists(name: str, db: DbSession) -> Dict[str, Any]:
    return {"name": name, "exists": categories.category_exists(db, name)}
