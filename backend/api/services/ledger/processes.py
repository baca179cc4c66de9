"""
Registros de proceso por producto.

Cinco almacenes con la misma estructura (cultivo, medicamento, fertilizante,
cosecha y distribución). Cada uno guarda como máximo un registro vigente por
producto: ``add`` sobrescribe el registro existente (upsert) y ``update``
exige que ya exista.
"""
from typing import Any, Dict, Optional, Tuple, Type
from sqlalchemy.orm import Session

from database.models.database import (
    Base,
    Distribution,
    FarmingProcess,
    Fertilizer,
    Harvest,
    Medicine,
)
from api.services.ledger.access_control import require_authorized
from api.services.ledger.errors import NotFoundError
from api.services.ledger.events import atomic, record_event
from api.services.ledger.products import get_product


class ProcessStore:
    """Almacén de un único slot por producto para un tipo de proceso"""

    def __init__(self, model: Type[Base], label: str, fields: Tuple[str, ...]):
        self.model = model
        self.label = label
        self.fields = fields

    def find(self, db: Session, product_code: str) -> Optional[Any]:
        return db.get(self.model, product_code)

    def empty(self, product_code: str) -> Any:
        """Registro vacío (no persistido) para un slot nunca poblado"""
        return self.model(
            product_code=product_code, **{field: "" for field in self.fields}
        )

    def _values(self, values: Dict[str, Any]) -> Dict[str, str]:
        return {field: values.get(field) or "" for field in self.fields}

    def add(self, db: Session, caller: str, product_code: str, **values: Any) -> Any:
        data = self._values(values)
        with atomic(db):
            require_authorized(db, caller)
            get_product(db, product_code)

            record = self.find(db, product_code)
            if record is None:
                record = self.model(product_code=product_code)
                db.add(record)
            for field, value in data.items():
                setattr(record, field, value)
            record.recorded_by = caller
            record_event(db, f"{self.label}Added", product_code, caller, **data)
        return record

    def update(
        self, db: Session, caller: str, product_code: str, **values: Any
    ) -> Any:
        data = self._values(values)
        with atomic(db):
            require_authorized(db, caller)
            get_product(db, product_code)

            record = self.find(db, product_code)
            if record is None:
                raise NotFoundError(f"ProcessManagement: {self.label} not found")
            for field, value in data.items():
                setattr(record, field, value)
            record.recorded_by = caller
            record_event(db, f"{self.label}Updated", product_code, caller, **data)
        return record

    def get(self, db: Session, product_code: str) -> Any:
        record = self.find(db, product_code)
        if record is None:
            raise NotFoundError(f"ProcessManagement: {self.label} not found")
        return record


farming_processes = ProcessStore(
    FarmingProcess,
    "FarmingProcess",
    ("name_process", "source", "planting_date", "sowing_date"),
)
medicines = ProcessStore(
    Medicine,
    "Medicine",
    (
        "name_medicine",
        "quantity",
        "application_date",
        "medicine_type",
        "application_method",
    ),
)
fertilizers = ProcessStore(
    Fertilizer,
    "Fertilizer",
    (
        "name_fertilizer",
        "quantity",
        "application_date",
        "fertilizer_type",
        "application_method",
        "effect",
    ),
)
harvests = ProcessStore(
    Harvest,
    "Harvest",
    (
        "harvest_date",
        "estimated_quantity",
        "actual_quantity",
        "quality",
        "harvest_method",
    ),
)
distributions = ProcessStore(
    Distribution,
    "Distribution",
    (
        "distributor_name",
        "distribution_partner",
        "distribution_date",
        "transport_method",
        "storage_conditions",
    ),
)

# Clave de ruta -> almacén
PROCESS_STORES: Dict[str, ProcessStore] = {
    "farming": farming_processes,
    "medicine": medicines,
    "fertilizer": fertilizers,
    "harvest": harvests,
    "distribution": distributions,
}


# Cultivo


def add_farming_process(
    db: Session,
    caller: str,
    product_code: str,
    name_process: str,
    source: str,
    planting_date: str,
    sowing_date: str,
) -> FarmingProcess:
    return farming_processes.add(
        db,
        caller,
        product_code,
        name_process=name_process,
        source=source,
        planting_date=planting_date,
        sowing_date=sowing_date,
    )


def update_farming_process(
    db: Session,
    caller: str,
    product_code: str,
    name_process: str,
    source: str,
    planting_date: str,
    sowing_date: str,
) -> FarmingProcess:
    return farming_processes.update(
        db,
        caller,
        product_code,
        name_process=name_process,
        source=source,
        planting_date=planting_date,
        sowing_date=sowing_date,
    )


def get_farming_process(db: Session, product_code: str) -> FarmingProcess:
    return farming_processes.get(db, product_code)


# Medicamentos


def add_medicine(
    db: Session,
    caller: str,
    product_code: str,
    name_medicine: str,
    quantity: str,
    application_date: str,
    medicine_type: str,
    application_method: str,
) -> Medicine:
    return medicines.add(
        db,
        caller,
        product_code,
        name_medicine=name_medicine,
        quantity=quantity,
        application_date=application_date,
        medicine_type=medicine_type,
        application_method=application_method,
    )


def update_medicine(
    db: Session,
    caller: str,
    product_code: str,
    name_medicine: str,
    quantity: str,
    application_date: str,
    medicine_type: str,
    application_method: str,
) -> Medicine:
    return medicines.update(
        db,
        caller,
        product_code,
        name_medicine=name_medicine,
        quantity=quantity,
        application_date=application_date,
        medicine_type=medicine_type,
        application_method=application_method,
    )


def get_medicine(db: Session, product_code: str) -> Medicine:
    return medicines.get(db, product_code)


# Fertilizantes


def add_fertilizer(
    db: Session,
    caller: str,
    product_code: str,
    name_fertilizer: str,
    quantity: str,
    application_date: str,
    fertilizer_type: str,
    application_method: str,
    effect: str,
) -> Fertilizer:
    return fertilizers.add(
        db,
        caller,
        product_code,
        name_fertilizer=name_fertilizer,
        quantity=quantity,
        application_date=application_date,
        fertilizer_type=fertilizer_type,
        application_method=application_method,
        effect=effect,
    )


def update_fertilizer(
    db: Session,
    caller: str,
    product_code: str,
    name_fertilizer: str,
    quantity: str,
    application_date: str,
    fertilizer_type: str,
    application_method: str,
    effect: str,
) -> Fertilizer:
    return fertilizers.update(
        db,
        caller,
        product_code,
        name_fertilizer=name_fertilizer,
        quantity=quantity,
        application_date=application_date,
        fertilizer_type=fertilizer_type,
        application_method=application_method,
        effect=effect,
    )


def get_fertilizer(db: Session, product_code: str) -> Fertilizer:
    return fertilizers.get(db, product_code)


# Cosecha


def add_harvest(
    db: Session,
    caller: str,
    product_code: str,
    harvest_date: str,
    estimated_quantity: str,
    actual_quantity: str,
    quality: str,
    harvest_method: str,
) -> Harvest:
    return harvests.add(
        db,
        caller,
        product_code,
        harvest_date=harvest_date,
        estimated_quantity=estimated_quantity,
        actual_quantity=actual_quantity,
        quality=quality,
        harvest_method=harvest_method,
    )


def update_harvest(
    db: Session,
    caller: str,
    product_code: str,
    harvest_date: str,
    estimated_quantity: str,
    actual_quantity: str,
    quality: str,
    harvest_method: str,
) -> Harvest:
    return harvests.update(
        db,
        caller,
        product_code,
        harvest_date=harvest_date,
        estimated_quantity=estimated_quantity,
        actual_quantity=actual_quantity,
        quality=quality,
        harvest_method=harvest_method,
    )


def get_harvest(db: Session, product_code: str) -> Harvest:
    return harvests.get(db, product_code)


# Distribución


def add_distribution(
    db: Session,
    caller: str,
    product_code: str,
    distributor_name: str,
    distribution_partner: str,
    distribution_date: str,
    transport_method: str,
    storage_conditions: str,
) -> Distribution:
    return distributions.add(
        db,
        caller,
        product_code,
        distributor_name=distributor_name,
        distribution_partner=distribution_partner,
        distribution_date=distribution_date,
        transport_method=transport_method,
        storage_conditions=storage_conditions,
    )


def update_distribution(
    db: Session,
    caller: str,
    product_code: str,
    distributor_name: str,
    distribution_partner: str,
    distribution_date: str,
    transport_method: str,
    storage_conditions: str,
) -> Distribution:
    return distributions.update(
        db,
        caller,
        product_code,
        distributor_name=distributor_name,
        distribution_partner=distribution_partner,
        distribution_date=distribution_date,
        transport_method=transport_method,
        storage_conditions=storage_conditions,
    )


def get_distribution(db: Session, product_code: str) -> Distribution:
    return distributions.get(db, product_code)
