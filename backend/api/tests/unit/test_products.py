import pytest
from sqlalchemy import select
from database.models.database import LedgerEvent
from api.models import ProductStatus, CertificationLevel
from api.services.ledger import (
    products,
    AccessControlError,
    ConflictError,
    LedgerValidationError,
    NotFoundError,
)


def test_add_product(db_session, registered_product, product_data):
    product = products.get_product(db_session, "PROD001")
    assert product.farm_code == product_data["farm_code"]
    assert product.product_code == product_data["product_code"]
    assert product.name == product_data["name"]
    assert product.quantity == product_data["quantity"]
    assert product.status == ProductStatus.ACTIVE
    assert product.certification_level == CertificationLevel.ORGANIC
    assert products.get_total_products(db_session) == 1


def test_add_product_unknown_farm(db_session, writer, registered_farm, product_data):
    """Test referencing a missing farm fails and no counter moves."""
    with pytest.raises(NotFoundError, match="Farm not found"):
        products.add_product(db_session, writer, **{**product_data, "farm_code": "NONEXISTENT"})
    assert products.get_total_products(db_session) == 0
    assert products.product_exists(db_session, "PROD001") is False


def test_add_product_to_inactive_farm_is_allowed(db_session, writer, registered_farm, product_data):
    from api.services.ledger import farms

    farms.deactivate_farm(db_session, writer, "FARM001")
    products.add_product(db_session, writer, **product_data)
    assert products.get_total_products(db_session) == 1


def test_duplicate_product(db_session, writer, registered_product, product_data):
    with pytest.raises(ConflictError, match="Product already exists"):
        products.add_product(db_session, writer, **{**product_data, "name": "Other"})
    assert products.get_product(db_session, "PROD001").name == product_data["name"]
    assert products.get_total_products(db_session) == 1


@pytest.mark.parametrize("code", ["", "   "])
def test_empty_product_code(db_session, writer, registered_farm, product_data, code):
    with pytest.raises(LedgerValidationError, match="Empty productCode"):
        products.add_product(db_session, writer, **{**product_data, "product_code": code})
    assert products.get_total_products(db_session) == 0


def test_invalid_certification_level(db_session, writer, registered_farm, product_data):
    with pytest.raises(LedgerValidationError):
        products.add_product(db_session, writer, **{**product_data, "certification_level": 9})


def test_unauthorized_add_product(db_session, outsider, registered_farm, product_data):
    with pytest.raises(AccessControlError):
        products.add_product(db_session, outsider, **product_data)


def test_update_product(db_session, writer, registered_product, product_data):
    products.update_product(
        db_session,
        writer,
        "PROD001",
        "Premium Mustard Greens",
        product_data["quantity"],
        "55,000 VND/kg",
        product_data["description"],
        product_data["image"],
        product_data["batch_code"],
        product_data["certification"],
    )
    product = products.get_product(db_session, "PROD001")
    assert product.name == "Premium Mustard Greens"
    assert product.price == "55,000 VND/kg"
    assert product.farm_code == "FARM001"
    assert product.status == ProductStatus.ACTIVE


def test_update_missing_product(db_session, writer):
    with pytest.raises(NotFoundError, match="ProductManagement: Product not found"):
        products.update_product(db_session, writer, "NOPE", "", "", "", "", "", "", "")


def test_deactivate_product(db_session, writer, registered_product):
    products.deactivate_product(db_session, writer, "PROD001")
    assert products.get_product(db_session, "PROD001").status == ProductStatus.INACTIVE

    event = db_session.scalars(
        select(LedgerEvent).where(LedgerEvent.event_name == "ProductStatusChanged")
    ).one()
    assert event.entity_key == "PROD001"
    assert event.payload == {"old_status": 0, "new_status": 1}


def test_deactivate_product_is_idempotent(db_session, writer, registered_product):
    products.deactivate_product(db_session, writer, "PROD001")
    products.deactivate_product(db_session, writer, "PROD001")
    assert products.get_product(db_session, "PROD001").status == ProductStatus.INACTIVE
    events = db_session.scalars(
        select(LedgerEvent).where(LedgerEvent.event_name == "ProductStatusChanged")
    ).all()
    assert len(events) == 1


@pytest.mark.parametrize(
    "status", [ProductStatus.RECALLED, ProductStatus.PENDING_VERIFICATION]
)
def test_deactivate_product_only_from_active(db_session, writer, owner, registered_product, status):
    products.set_product_status(db_session, owner, "PROD001", status)

    with pytest.raises(LedgerValidationError, match="Product not active"):
        products.deactivate_product(db_session, writer, "PROD001")

    assert products.get_product(db_session, "PROD001").status == status
    events = db_session.scalars(
        select(LedgerEvent).where(LedgerEvent.event_name == "ProductStatusChanged")
    ).all()
    assert len(events) == 1


def test_set_product_status_requires_verifier(db_session, writer, owner, registered_product):
    with pytest.raises(AccessControlError):
        products.set_product_status(db_session, writer, "PROD001", ProductStatus.RECALLED)

    products.set_product_status(db_session, owner, "PROD001", ProductStatus.RECALLED)
    assert products.get_product(db_session, "PROD001").status == ProductStatus.RECALLED


def test_set_product_status_invalid(db_session, owner, registered_product):
    with pytest.raises(LedgerValidationError):
        products.set_product_status(db_session, owner, "PROD001", 7)


def test_products_by_farm(db_session, writer, registered_product, product_data):
    products.add_product(db_session, writer, **{**product_data, "product_code": "PROD002"})
    farm_products = products.get_products_by_farm(db_session, "FARM001")
    assert [p.product_code for p in farm_products] == ["PROD001", "PROD002"]
    assert products.get_products_by_farm(db_session, "OTHER") == []


def test_get_missing_product(db_session):
    with pytest.raises(NotFoundError):
        products.get_product(db_session, "NONEXISTENT")
