"""
Registro de productos.

Cada producto referencia una finca existente al momento del alta. El código
y el vínculo a la finca son inmutables; el estado cambia mediante
``deactivate_product`` o ``set_product_status``. Nunca se borra.
"""
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session

from database.models.database import Product
from api.models.registry_schemas import CertificationLevel, ProductStatus
from api.services.ledger.access_control import (
    get_state,
    require_authorized,
    require_product_verifier,
)
from api.services.ledger.errors import (
    ConflictError,
    LedgerValidationError,
    NotFoundError,
)
from api.services.ledger.events import atomic, record_event
from api.services.ledger.farms import farm_exists


def _find(db: Session, product_code: str) -> Optional[Product]:
    return db.scalars(
        select(Product).where(Product.product_code == product_code)
    ).first()


def get_product(db: Session, product_code: str) -> Product:
    product = _find(db, product_code)
    if product is None:
        raise NotFoundError("ProductManagement: Product not found")
    return product


def product_exists(db: Session, product_code: str) -> bool:
    return _find(db, product_code) is not None


def add_product(
    db: Session,
    caller: str,
    farm_code: str,
    product_code: str,
    category_name: str = "",
    name: str = "",
    quantity: str = "",
    price: str = "",
    description: str = "",
    image: str = "",
    batch_code: str = "",
    certification: str = "",
    certification_level: int = CertificationLevel.NONE,
) -> Product:
    """Alta de producto con estado ACTIVE"""
    with atomic(db):
        require_authorized(db, caller)
        if not farm_exists(db, farm_code):
            raise NotFoundError("Farm not found")
        if not product_code or not product_code.strip():
            raise LedgerValidationError("Validation: Empty productCode")
        try:
            level = CertificationLevel(certification_level)
        except ValueError:
            raise LedgerValidationError("Validation: Invalid certification level")
        if _find(db, product_code) is not None:
            raise ConflictError("Validation: Product already exists")

        product = Product(
            farm_code=farm_code,
            product_code=product_code,
            category_name=category_name,
            name=name,
            quantity=quantity,
            price=price,
            description=description,
            image=image,
            batch_code=batch_code,
            certification=certification,
            certification_level=int(level),
            status=int(ProductStatus.ACTIVE),
            created_by=caller,
        )
        db.add(product)
        get_state(db).total_products += 1
        record_event(
            db,
            "ProductAdded",
            product_code,
            caller,
            farm_code=farm_code,
            category_name=category_name,
            name=name,
            quantity=quantity,
            price=price,
            description=description,
            image=image,
            batch_code=batch_code,
            certification=certification,
            certification_level=level,
            status=ProductStatus.ACTIVE,
        )
    return product


def update_product(
    db: Session,
    caller: str,
    product_code: str,
    name: str,
    quantity: str,
    price: str,
    description: str,
    image: str,
    batch_code: str,
    certification: str,
) -> Product:
    with atomic(db):
        require_authorized(db, caller)
        product = get_product(db, product_code)

        product.name = name
        product.quantity = quantity
        product.price = price
        product.description = description
        product.image = image
        product.batch_code = batch_code
        product.certification = certification
        record_event(
            db,
            "ProductUpdated",
            product_code,
            caller,
            name=name,
            quantity=quantity,
            price=price,
            description=description,
            image=image,
            batch_code=batch_code,
            certification=certification,
        )
    return product


def _change_status(
    db: Session, caller: str, product: Product, new_status: ProductStatus
) -> None:
    old_status = ProductStatus(product.status)
    product.status = int(new_status)
    record_event(
        db,
        "ProductStatusChanged",
        product.product_code,
        caller,
        old_status=old_status,
        new_status=new_status,
    )


def deactivate_product(db: Session, caller: str, product_code: str) -> Product:
    """
    Pasar un producto ACTIVE a INACTIVE. Idempotente sobre un producto ya inactivo.

    Cualquier otro estado (RECALLED, PENDING_VERIFICATION) solo lo cambia un
    verificador mediante ``set_product_status``.
    """
    with atomic(db):
        require_authorized(db, caller)
        product = get_product(db, product_code)
        if product.status == ProductStatus.ACTIVE:
            _change_status(db, caller, product, ProductStatus.INACTIVE)
        elif product.status != ProductStatus.INACTIVE:
            raise LedgerValidationError("Validation: Product not active")
    return product


def set_product_status(
    db: Session, caller: str, product_code: str, status: int
) -> Product:
    """Cambio general de estado (p. ej. RECALLED), reservado a verificadores"""
    with atomic(db):
        require_product_verifier(db, caller)
        product = get_product(db, product_code)
        try:
            new_status = ProductStatus(status)
        except ValueError:
            raise LedgerValidationError("Validation: Invalid status")
        if product.status != new_status:
            _change_status(db, caller, product, new_status)
    return product


def get_products_by_farm(db: Session, farm_code: str) -> List[Product]:
    query = select(Product).where(Product.farm_code == farm_code).order_by(Product.id)
    return list(db.scalars(query).all())


def get_total_products(db: Session) -> int:
    return get_state(db).total_products
