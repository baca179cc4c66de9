from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Annotated
from database.connection import get_db
from api.auth.dependencies import get_caller
from api.models import IdentityRequest, CapabilityUpdate, RolesResponse
from api.services.ledger import access_control

router = APIRouter(tags=["Access"])

DbSession = Annotated[Session, Depends(get_db)]
Caller = Annotated[str, Depends(get_caller)]


@router.post("/authorize", response_model=RolesResponse)
def authorize_user(body: IdentityRequest, db: DbSession, caller: Caller):
    """Conceder la capacidad de escritor autorizado"""
    access_control.authorize_user(db, caller, body.identity)
    return access_control.get_roles(db, body.identity)


@router.post("/deauthorize", response_model=RolesResponse)
def deauthorize_user(body: IdentityRequest, db: DbSession, caller: Caller):
    """Revocar la capacidad de escritor autorizado"""
    access_control.deauthorize_user(db, caller, body.identity)
    return access_control.get_roles(db, body.identity)


@router.put("/farm-owners", response_model=RolesResponse)
def set_farm_owner(body: CapabilityUpdate, db: DbSession, caller: Caller):
    access_control.set_farm_owner(db, caller, body.identity, body.enabled)
    return access_control.get_roles(db, body.identity)


@router.put("/product-verifiers", response_model=RolesResponse)
def set_product_verifier(body: CapabilityUpdate, db: DbSession, caller: Caller):
    access_control.set_product_verifier(db, caller, body.identity, body.enabled)
    return access_control.get_roles(db, body.identity)


@router.put("/admin", response_model=RolesResponse)
def update_admin(body: IdentityRequest, db: DbSession, caller: Caller):
    """Reemplazar al administrador (solo owner)"""
    access_control.update_admin(db, caller, body.identity)
    return access_control.get_roles(db, body.identity)


@router.put("/owner", response_model=RolesResponse)
def transfer_ownership(body: IdentityRequest, db: DbSession, caller: Caller):
    """Transferir la propiedad del registro (solo owner)"""
    access_control.transfer_ownership(db, caller, body.identity)
    return access_control.get_roles(db, body.identity)


@router.get("/roles/{identity}", response_model=RolesResponse)
def get_roles(identity: str, db: DbSession):
    return access_control.get_roles(db, identity)
