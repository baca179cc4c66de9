from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class FarmingProcessCreate(BaseModel):
    """Proceso de cultivo"""
    name_process: str
    source: str = ""
    planting_date: str = ""
    sowing_date: str = ""


class MedicineCreate(BaseModel):
    """Aplicación de medicamento"""
    name_medicine: str
    quantity: str = ""
    application_date: str = ""
    medicine_type: str = ""
    application_method: str = ""


class FertilizerCreate(BaseModel):
    """Aplicación de fertilizante"""
    name_fertilizer: str
    quantity: str = ""
    application_date: str = ""
    fertilizer_type: str = ""
    application_method: str = ""
    effect: str = ""


class HarvestCreate(BaseModel):
    """Cosecha"""
    harvest_date: str
    estimated_quantity: str = ""
    actual_quantity: str = ""
    quality: str = ""
    harvest_method: str = ""


class DistributionCreate(BaseModel):
    """Distribución"""
    distributor_name: str
    distribution_partner: str = ""
    distribution_date: str = ""
    transport_method: str = ""
    storage_conditions: str = ""


# Las respuestas admiten registros vacíos (slots nunca poblados)


class FarmingProcessResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_code: str
    name_process: str = ""
    source: str = ""
    planting_date: str = ""
    sowing_date: str = ""
    recorded_by: Optional[str] = None
    updated_at: Optional[datetime] = None


class MedicineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_code: str
    name_medicine: str = ""
    quantity: str = ""
    application_date: str = ""
    medicine_type: str = ""
    application_method: str = ""
    recorded_by: Optional[str] = None
    updated_at: Optional[datetime] = None


class FertilizerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_code: str
    name_fertilizer: str = ""
    quantity: str = ""
    application_date: str = ""
    fertilizer_type: str = ""
    application_method: str = ""
    effect: str = ""
    recorded_by: Optional[str] = None
    updated_at: Optional[datetime] = None


class HarvestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_code: str
    harvest_date: str = ""
    estimated_quantity: str = ""
    actual_quantity: str = ""
    quality: str = ""
    harvest_method: str = ""
    recorded_by: Optional[str] = None
    updated_at: Optional[datetime] = None


class DistributionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_code: str
    distributor_name: str = ""
    distribution_partner: str = ""
    distribution_date: str = ""
    transport_method: str = ""
    storage_conditions: str = ""
    recorded_by: Optional[str] = None
    updated_at: Optional[datetime] = None
