from pydantic import BaseModel, ConfigDict
from typing import Optional, Dict, Any
from datetime import datetime

from api.models.registry_schemas import ProductResponse
from api.models.process_schemas import (
    FarmingProcessResponse,
    MedicineResponse,
    FertilizerResponse,
    HarvestResponse,
    DistributionResponse,
)


class IdentityRequest(BaseModel):
    identity: str


class CapabilityUpdate(BaseModel):
    identity: str
    enabled: bool


class RolesResponse(BaseModel):
    """Capacidades de una identidad"""
    identity: str
    is_owner: bool
    is_admin: bool
    authorized: bool
    farm_owner: bool
    product_verifier: bool


class ContractInfoResponse(BaseModel):
    name: str
    version: str
    total_farms: int
    total_products: int
    owner: str


class RegistryConstantsResponse(BaseModel):
    """Límites del registro expuestos a los clientes"""
    max_area: int
    min_area: int
    max_images: int
    max_quantity: int


class TraceabilityResponse(BaseModel):
    """Trazabilidad completa: producto y sus cinco registros de proceso"""
    product: ProductResponse
    farming_process: FarmingProcessResponse
    medicine: MedicineResponse
    fertilizer: FertilizerResponse
    harvest: HarvestResponse
    distribution: DistributionResponse


class LedgerEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_name: str
    entity_key: str
    actor: str
    payload: Dict[str, Any]
    created_at: Optional[datetime] = None
