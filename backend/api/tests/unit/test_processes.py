import pytest
from sqlalchemy import select, func
from database.models.database import LedgerEvent
from api.services.ledger import processes, AccessControlError, NotFoundError


def test_add_farming_process(db_session, writer, registered_product):
    processes.add_farming_process(
        db_session, writer, "PROD001", "Organic farming", "F1 seeds from Japan", "2024-01-15", "2024-01-10"
    )
    record = processes.get_farming_process(db_session, "PROD001")
    assert record.name_process == "Organic farming"
    assert record.source == "F1 seeds from Japan"
    assert record.recorded_by == writer


def test_add_overwrites_single_slot(db_session, writer, registered_product):
    """A second add replaces the slot instead of appending."""
    processes.add_farming_process(db_session, writer, "PROD001", "A", "seed A", "d1", "d0")
    processes.add_farming_process(db_session, writer, "PROD001", "B", "seed B", "d2", "d1")

    record = processes.get_farming_process(db_session, "PROD001")
    assert (record.name_process, record.source, record.planting_date, record.sowing_date) == (
        "B", "seed B", "d2", "d1"
    )
    added = db_session.scalar(
        select(func.count(LedgerEvent.id)).where(LedgerEvent.event_name == "FarmingProcessAdded")
    )
    assert added == 2


def test_update_farming_process(db_session, writer, registered_product):
    processes.add_farming_process(db_session, writer, "PROD001", "A", "seed A", "d1", "d0")
    processes.update_farming_process(
        db_session, writer, "PROD001", "Advanced organic", "F1 seeds from Korea", "2024-01-16", "2024-01-11"
    )
    record = processes.get_farming_process(db_session, "PROD001")
    assert record.name_process == "Advanced organic"
    assert record.source == "F1 seeds from Korea"


def test_update_requires_existing_record(db_session, writer, registered_product):
    with pytest.raises(NotFoundError):
        processes.update_medicine(db_session, writer, "PROD001", "BT", "100ml", "d", "bio", "spray")


def test_add_requires_existing_product(db_session, writer):
    with pytest.raises(NotFoundError, match="Product not found"):
        processes.add_harvest(db_session, writer, "NOPE", "d", "500kg", "485kg", "Good", "manual")


def test_add_requires_authorization(db_session, outsider, registered_product):
    with pytest.raises(AccessControlError):
        processes.add_distribution(db_session, outsider, "PROD001", "ABC", "BigC", "d", "truck", "2-8C")
    with pytest.raises(NotFoundError):
        processes.get_distribution(db_session, "PROD001")


def test_get_missing_record(db_session, registered_product):
    with pytest.raises(NotFoundError, match="Fertilizer not found"):
        processes.get_fertilizer(db_session, "PROD001")


def test_each_kind_round_trip(db_session, writer, registered_product):
    processes.add_medicine(db_session, writer, "PROD001", "Bio BT", "100ml", "2024-02-01", "Biological", "Mist spray")
    processes.add_fertilizer(
        db_session, writer, "PROD001", "Microbial compost", "50kg", "2024-01-20", "Organic", "Even spread", "Better soil"
    )
    processes.add_harvest(db_session, writer, "PROD001", "2024-03-15", "500kg", "485kg", "Excellent", "Manual")
    processes.add_distribution(
        db_session, writer, "PROD001", "Clean Food ABC", "BigC", "2024-03-16", "Refrigerated truck", "2-8C"
    )

    assert processes.get_medicine(db_session, "PROD001").medicine_type == "Biological"
    assert processes.get_fertilizer(db_session, "PROD001").fertilizer_type == "Organic"
    harvest = processes.get_harvest(db_session, "PROD001")
    assert (harvest.estimated_quantity, harvest.actual_quantity, harvest.quality) == (
        "500kg", "485kg", "Excellent"
    )
    distribution = processes.get_distribution(db_session, "PROD001")
    assert distribution.distributor_name == "Clean Food ABC"
    assert distribution.transport_method == "Refrigerated truck"


def test_update_each_kind(db_session, writer, registered_product):
    processes.add_harvest(db_session, writer, "PROD001", "d", "500kg", "485kg", "Good", "Manual")
    processes.update_harvest(db_session, writer, "PROD001", "d", "500kg", "490kg", "Excellent", "Manual")
    assert processes.get_harvest(db_session, "PROD001").actual_quantity == "490kg"

    processes.add_fertilizer(db_session, writer, "PROD001", "N", "1kg", "d", "t", "m", "e")
    processes.update_fertilizer(db_session, writer, "PROD001", "NPK", "2kg", "d", "t", "m", "e")
    assert processes.get_fertilizer(db_session, "PROD001").name_fertilizer == "NPK"

    processes.add_distribution(db_session, writer, "PROD001", "A", "B", "d", "t", "s")
    processes.update_distribution(db_session, writer, "PROD001", "C", "B", "d", "t", "s")
    assert processes.get_distribution(db_session, "PROD001").distributor_name == "C"

    updated = db_session.scalars(
        select(LedgerEvent.event_name).where(LedgerEvent.event_name.like("%Updated"))
    ).all()
    assert set(updated) == {"HarvestUpdated", "FertilizerUpdated", "DistributionUpdated"}
