from typing import NamedTuple
from sqlalchemy.orm import Session

from database.models.database import RegistryState
from api.services.ledger import access_control
from api.services.ledger.constants import (
    REGISTRY_NAME,
    REGISTRY_STATE_ID,
    REGISTRY_VERSION,
)
from api.services.ledger.errors import LedgerValidationError
from api.services.ledger.events import atomic
from api.monitoring.logging_config import ledger_logger as logger


class ContractInfo(NamedTuple):
    name: str
    version: str
    total_farms: int
    total_products: int
    owner: str


def bootstrap_registry(db: Session, owner: str) -> RegistryState:
    """Crear el estado del registro una sola vez y otorgar al owner todas las capacidades"""
    state = db.get(RegistryState, REGISTRY_STATE_ID)
    if state is not None:
        return state

    if not owner or not owner.strip():
        raise LedgerValidationError("Validation: Empty owner")

    with atomic(db):
        state = RegistryState(
            id=REGISTRY_STATE_ID,
            name=REGISTRY_NAME,
            version=REGISTRY_VERSION,
            owner=owner,
            admin=owner,
            total_farms=0,
            total_products=0,
        )
        db.add(state)
        access_control.grant_all(db, owner)

    logger.info("Registry initialized", extra={"owner": owner})
    return state


def get_contract_info(db: Session) -> ContractInfo:
    state = access_control.get_state(db)
    return ContractInfo(
        name=state.name,
        version=state.version,
        total_farms=state.total_farms,
        total_products=state.total_products,
        owner=state.owner,
    )
