from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session

from database.models.database import Category
from api.services.ledger.access_control import get_state
from api.services.ledger.errors import ConflictError, LedgerValidationError
from api.services.ledger.events import atomic, record_event


def add_category(db: Session, caller: str, name: str, user_id: str) -> Category:
    """Registrar una categoría; el nombre es único en todo el registro"""
    with atomic(db):
        get_state(db)
        if not name:
            raise LedgerValidationError("Validation: Empty category name")
        if category_exists(db, name):
            raise ConflictError("Validation: Category already exists")

        category = Category(name=name, user_id=user_id, created_by=caller)
        db.add(category)
        record_event(db, "CategoryAdded", name, caller, user_id=user_id)
    return category


def category_exists(db: Session, name: str) -> bool:
    query = select(Category.id).where(Category.name == name).limit(1)
    return db.scalars(query).first() is not None


def get_all_categories(db: Session) -> List[Category]:
    return list(db.scalars(select(Category).order_by(Category.id)).all())


def get_categories_by_user_id(db: Session, user_id: str) -> List[Category]:
    query = select(Category).where(Category.user_id == user_id).order_by(Category.id)
    return list(db.scalars(query).all())
