from .registry_schemas import (
    ProductStatus,
    CertificationLevel,
    FarmCreate,
    FarmUpdate,
    FarmImageCreate,
    FarmResponse,
    CategoryCreate,
    CategoryResponse,
    ProductCreate,
    ProductUpdate,
    ProductStatusUpdate,
    ProductResponse,
)
from .process_schemas import (
    FarmingProcessCreate,
    MedicineCreate,
    FertilizerCreate,
    HarvestCreate,
    DistributionCreate,
    FarmingProcessResponse,
    MedicineResponse,
    FertilizerResponse,
    HarvestResponse,
    DistributionResponse,
)
from .ledger_schemas import (
    IdentityRequest,
    CapabilityUpdate,
    RolesResponse,
    ContractInfoResponse,
    RegistryConstantsResponse,
    TraceabilityResponse,
    LedgerEventResponse,
)
