from typing import Any, NamedTuple
from sqlalchemy.orm import Session

from database.models.database import Product
from api.services.ledger.processes import (
    distributions,
    farming_processes,
    fertilizers,
    harvests,
    medicines,
)
from api.services.ledger.products import get_product


class ProductTraceability(NamedTuple):
    """Tupla de trazabilidad de seis posiciones"""

    product: Product
    farming_process: Any
    medicine: Any
    fertilizer: Any
    harvest: Any
    distribution: Any


def get_complete_product_traceability(
    db: Session, product_code: str
) -> ProductTraceability:
    """
    Reunir el producto y sus cinco registros de proceso.

    Solo falla si el producto no existe; cada slot nunca poblado se devuelve
    como un registro vacío. No modifica el estado.
    """
    product = get_product(db, product_code)

    slots = []
    for store in (farming_processes, medicines, fertilizers, harvests, distributions):
        record = store.find(db, product_code)
        slots.append(record if record is not None else store.empty(product_code))

    return ProductTraceability(product, *slots)
