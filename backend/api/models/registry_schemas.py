from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime
from enum import IntEnum


class ProductStatus(IntEnum):
    """Estado del ciclo de vida de un producto"""
    ACTIVE = 0
    INACTIVE = 1
    RECALLED = 2
    PENDING_VERIFICATION = 3


class CertificationLevel(IntEnum):
    """Nivel de certificación del producto"""
    NONE = 0
    BASIC = 1
    ORGANIC = 2
    PREMIUM = 3
    CERTIFIED = 4


class FarmCreate(BaseModel):
    """Registro de finca"""
    farm_code: str
    fullname: str = ""
    name_farm: str = ""
    user_id: str
    email: str = ""
    phone: str = ""
    description: str = ""
    location: str = ""
    area: int
    images: List[str] = []


class FarmUpdate(BaseModel):
    """Actualización de finca (código y propietario son inmutables)"""
    name_farm: str
    description: str
    location: str
    area: int
    images: List[str]


class FarmImageCreate(BaseModel):
    url: str


class FarmResponse(BaseModel):
    """Respuesta de finca"""
    model_config = ConfigDict(from_attributes=True)

    farm_code: str
    fullname: str
    name_farm: str
    user_id: str
    email: str
    phone: str
    description: str
    location: str
    area: int
    images: List[str]
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("images", mode="before")
    @classmethod
    def images_as_list(cls, value):
        return list(value or [])


class CategoryCreate(BaseModel):
    """Creación de categoría"""
    name: str
    user_id: str


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    user_id: str
    created_at: Optional[datetime] = None


class ProductCreate(BaseModel):
    """Alta de producto ligado a una finca"""
    farm_code: str
    product_code: str
    category_name: str = ""
    name: str = ""
    quantity: str = ""
    price: str = ""
    description: str = ""
    image: str = ""
    batch_code: str = ""
    certification: str = ""
    certification_level: CertificationLevel = CertificationLevel.NONE


class ProductUpdate(BaseModel):
    """Actualización de producto (código y finca son inmutables)"""
    name: str
    quantity: str
    price: str
    description: str
    image: str
    batch_code: str
    certification: str


class ProductStatusUpdate(BaseModel):
    status: ProductStatus


class ProductResponse(BaseModel):
    """Respuesta de producto"""
    model_config = ConfigDict(from_attributes=True)

    farm_code: str
    product_code: str
    category_name: str
    name: str
    quantity: str
    price: str
    description: str
    image: str
    batch_code: str
    certification: str
    certification_level: CertificationLevel
    status: ProductStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
