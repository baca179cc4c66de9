from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Annotated, Type
from pydantic import BaseModel
from database.connection import get_db
from api.auth.dependencies import get_caller
from api.models import (
    FarmingProcessCreate, FarmingProcessResponse,
    MedicineCreate, MedicineResponse,
    FertilizerCreate, FertilizerResponse,
    HarvestCreate, HarvestResponse,
    DistributionCreate, DistributionResponse,
)
from api.services.ledger.processes import PROCESS_STORES, ProcessStore

router = APIRouter(tags=["Processes"])

DbSession = Annotated[Session, Depends(get_db)]
Caller = Annotated[str, Depends(get_caller)]


def _register_process_routes(
    kind: str,
    store: ProcessStore,
    create_schema: Type[BaseModel],
    response_schema: Type[BaseModel],
) -> None:
    """Registrar add/update/get para un tipo de proceso"""
    path = f"/{kind}/{{product_code}}"

    @router.post(
        path,
        response_model=response_schema,
        status_code=status.HTTP_201_CREATED,
        name=f"add_{kind}",
    )
    def add_record(
        product_code: str, data: create_schema, db: DbSession, caller: Caller
    ):
        return store.add(db, caller, product_code, **data.model_dump())

    @router.put(path, response_model=response_schema, name=f"update_{kind}")
    def update_record(
        product_code: str, data: create_schema, db: DbSession, caller: Caller
    ):
        return store.update(db, caller, product_code, **data.model_dump())

    @router.get(path, response_model=response_schema, name=f"get_{kind}")
    def get_record(product_code: str, db: DbSession):
        return store.get(db, product_code)


_register_process_routes(
    "farming", PROCESS_STORES["farming"], FarmingProcessCreate, FarmingProcessResponse
)
_register_process_routes(
    "medicine", PROCESS_STORES["medicine"], MedicineCreate, MedicineResponse
)
_register_process_routes(
    "fertilizer", PROCESS_STORES["fertilizer"], FertilizerCreate, FertilizerResponse
)
_register_process_routes(
    "harvest", PROCESS_STORES["harvest"], HarvestCreate, HarvestResponse
)
_register_process_routes(
    "distribution",
    PROCESS_STORES["distribution"],
    DistributionCreate,
    DistributionResponse,
)
