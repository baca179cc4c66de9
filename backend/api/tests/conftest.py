import os
import pytest
from fastapi.testclient import TestClient

# Ledger en memoria compartido por el engine global (StaticPool)
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-agritrace-registry"
os.environ["REGISTRY_OWNER"] = "0xOWNER"

OWNER = "0xOWNER"
WRITER = "0xWRITER"
OUTSIDER = "0xOUTSIDER"


@pytest.fixture
def db_session():
    from database.models.database import Base, SessionLocal, engine
    from api.services.ledger import bootstrap_registry

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    bootstrap_registry(session, OWNER)
    yield session
    session.close()


@pytest.fixture
def writer(db_session):
    """Identidad autorizada por el owner"""
    from api.services.ledger import access_control

    access_control.authorize_user(db_session, OWNER, WRITER)
    return WRITER


@pytest.fixture
def client(db_session):
    from api.main import app

    with TestClient(app) as c:
        yield c


def _headers(identity):
    from api.auth.jwt_service import jwt_service

    return {
        "Authorization": f"Bearer {jwt_service.create_access_token(identity)}",
        "Content-Type": "application/json",
    }


@pytest.fixture
def owner_headers():
    return _headers(OWNER)


@pytest.fixture
def writer_headers():
    return _headers(WRITER)


@pytest.fixture
def outsider_headers():
    return _headers(OUTSIDER)


@pytest.fixture
def farm_data():
    return {
        "farm_code": "FARM001",
        "fullname": "Nguyen Van A",
        "name_farm": "Green Farm",
        "user_id": "USER001",
        "email": "nguyenvana@example.com",
        "phone": "0123456789",
        "description": "Organic vegetable farm",
        "location": "Ha Noi, Viet Nam",
        "area": 1000,
        "images": ["https://example.com/farm1.jpg", "https://example.com/farm2.jpg"],
    }


@pytest.fixture
def product_data():
    return {
        "farm_code": "FARM001",
        "product_code": "PROD001",
        "category_name": "Leafy greens",
        "name": "Organic Mustard Greens",
        "quantity": "500kg",
        "price": "45,000 VND/kg",
        "description": "Mustard greens grown organically",
        "image": "https://example.com/mustard.jpg",
        "batch_code": "BATCH20241201",
        "certification": "VietGAP, Organic",
        "certification_level": 2,
    }


@pytest.fixture
def registered_farm(db_session, writer, farm_data):
    from api.services.ledger import farms

    return farms.register_farm(db_session, writer, **farm_data)


@pytest.fixture
def registered_product(db_session, writer, registered_farm, product_data):
    from api.services.ledger import products

    return products.add_product(db_session, writer, **product_data)


@pytest.fixture
def owner():
    return OWNER


@pytest.fixture
def outsider():
    return OUTSIDER
