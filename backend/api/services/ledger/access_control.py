"""
Control de acceso del registro.

Roles: ``owner`` (autoridad última), ``admin`` (gestiona capacidades) y tres
conjuntos de capacidades booleanas por identidad: escritor autorizado,
propietario de finca y verificador de productos. Cada operación mutante del
registro consulta estas funciones como cláusula de guarda antes de tocar el
estado.
"""
from typing import Dict
from sqlalchemy.orm import Session

from database.models.database import RegistryState, RoleMember
from api.services.ledger.constants import REGISTRY_STATE_ID
from api.services.ledger.errors import (
    AccessControlError,
    LedgerValidationError,
    NotFoundError,
)
from api.services.ledger.events import atomic, record_event

CAPABILITIES = ("authorized", "farm_owner", "product_verifier")


def get_state(db: Session) -> RegistryState:
    state = db.get(RegistryState, REGISTRY_STATE_ID)
    if state is None:
        raise NotFoundError("Registry: not initialized")
    return state


def _member(db: Session, identity: str) -> RoleMember:
    member = db.get(RoleMember, identity)
    if member is None:
        member = RoleMember(
            identity=identity,
            authorized=False,
            farm_owner=False,
            product_verifier=False,
        )
        db.add(member)
    return member


def _has(db: Session, identity: str, capability: str) -> bool:
    member = db.get(RoleMember, identity)
    return bool(member is not None and getattr(member, capability))


def _require_identity(identity: str) -> str:
    if not identity or not identity.strip():
        raise LedgerValidationError("Validation: Empty identity")
    return identity.strip()


# Consultas de capacidad (sin efectos secundarios)


def get_owner(db: Session) -> str:
    return get_state(db).owner


def get_admin(db: Session) -> str:
    return get_state(db).admin


def is_authorized(db: Session, identity: str) -> bool:
    return _has(db, identity, "authorized")


def is_farm_owner(db: Session, identity: str) -> bool:
    return _has(db, identity, "farm_owner")


def is_product_verifier(db: Session, identity: str) -> bool:
    return _has(db, identity, "product_verifier")


def get_roles(db: Session, identity: str) -> Dict[str, object]:
    state = get_state(db)
    return {
        "identity": identity,
        "is_owner": identity == state.owner,
        "is_admin": identity == state.admin,
        "authorized": is_authorized(db, identity),
        "farm_owner": is_farm_owner(db, identity),
        "product_verifier": is_product_verifier(db, identity),
    }


# Cláusulas de guarda


def require_owner(db: Session, caller: str) -> None:
    if caller != get_state(db).owner:
        raise AccessControlError("AccessControl: Only owner allowed")


def require_admin(db: Session, caller: str) -> None:
    state = get_state(db)
    if caller not in (state.admin, state.owner):
        raise AccessControlError("AccessControl: Only admin allowed")


def require_authorized(db: Session, caller: str) -> None:
    get_state(db)
    if not is_authorized(db, caller):
        raise AccessControlError("AccessControl: Not authorized")


def require_product_verifier(db: Session, caller: str) -> None:
    get_state(db)
    if not is_product_verifier(db, caller):
        raise AccessControlError("AccessControl: Not a product verifier")


# Operaciones de administración


def grant_all(db: Session, identity: str) -> RoleMember:
    """Conceder las tres capacidades (usado al inicializar el registro)"""
    member = _member(db, identity)
    for capability in CAPABILITIES:
        setattr(member, capability, True)
    return member


def authorize_user(db: Session, caller: str, identity: str) -> None:
    with atomic(db):
        require_admin(db, caller)
        identity = _require_identity(identity)
        _member(db, identity).authorized = True
        record_event(db, "UserAuthorized", identity, caller)


def deauthorize_user(db: Session, caller: str, identity: str) -> None:
    with atomic(db):
        require_admin(db, caller)
        identity = _require_identity(identity)
        _member(db, identity).authorized = False
        record_event(db, "UserDeauthorized", identity, caller)


def set_farm_owner(db: Session, caller: str, identity: str, enabled: bool) -> None:
    with atomic(db):
        require_admin(db, caller)
        identity = _require_identity(identity)
        _member(db, identity).farm_owner = enabled
        record_event(db, "FarmOwnerSet", identity, caller, enabled=enabled)


def set_product_verifier(
    db: Session, caller: str, identity: str, enabled: bool
) -> None:
    with atomic(db):
        require_admin(db, caller)
        identity = _require_identity(identity)
        _member(db, identity).product_verifier = enabled
        record_event(db, "ProductVerifierSet", identity, caller, enabled=enabled)


def update_admin(db: Session, caller: str, new_admin: str) -> None:
    with atomic(db):
        require_owner(db, caller)
        new_admin = _require_identity(new_admin)
        state = get_state(db)
        previous = state.admin
        state.admin = new_admin
        record_event(
            db, "AdminUpdated", new_admin, caller, previous_admin=previous
        )


def transfer_ownership(db: Session, caller: str, new_owner: str) -> None:
    with atomic(db):
        require_owner(db, caller)
        new_owner = _require_identity(new_owner)
        state = get_state(db)
        previous = state.owner
        state.owner = new_owner
        record_event(
            db, "OwnershipTransferred", new_owner, caller, previous_owner=previous
        )
