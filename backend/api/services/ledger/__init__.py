from .constants import MAX_AREA, MIN_AREA, MAX_IMAGES, MAX_QUANTITY
from .errors import (
    LedgerError,
    AccessControlError,
    LedgerValidationError,
    OutOfRangeError,
    ConflictError,
    NotFoundError,
)
from .events import atomic, record_event, list_events
from . import access_control, farms, products, categories, processes, traceability
from .registry import bootstrap_registry, get_contract_info, ContractInfo

__all__ = [
    "MAX_AREA",
    "MIN_AREA",
    "MAX_IMAGES",
    "MAX_QUANTITY",
    "LedgerError",
    "AccessControlError",
    "LedgerValidationError",
    "OutOfRangeError",
    "ConflictError",
    "NotFoundError",
    "atomic",
    "record_event",
    "list_events",
    "access_control",
    "farms",
    "products",
    "categories",
    "processes",
    "traceability",
    "bootstrap_registry",
    "get_contract_info",
    "ContractInfo",
]
