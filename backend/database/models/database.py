from sqlalchemy import (
    create_engine,
    Column,
    Integer,
    String,
    Boolean,
    DateTime,
    Text,
    ForeignKey,
    JSON,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from sqlalchemy.sql import func
from api.config import settings


def _build_engine(url: str, echo: bool = False):
    """Crea el engine del ledger según el backend configurado"""
    if url.startswith("sqlite"):
        if url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(url, echo=echo, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        echo=echo,
        poolclass=NullPool,  # Necesario para psycopg2 con Transaction Pooler
    )


engine = _build_engine(settings.database_url, settings.database_echo)
SessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)

Base = declarative_base()


class RegistryState(Base):
    """Estado global del registro: roles principales y contadores"""

    __tablename__ = "registry_state"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    version = Column(String(20), nullable=False)
    owner = Column(String(128), nullable=False, index=True)
    admin = Column(String(128), nullable=False, index=True)
    total_farms = Column(Integer, nullable=False, default=0)
    total_products = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class RoleMember(Base):
    """Capacidades booleanas asignadas a una identidad"""

    __tablename__ = "role_members"

    identity = Column(String(128), primary_key=True)
    authorized = Column(Boolean, nullable=False, default=False, index=True)
    farm_owner = Column(Boolean, nullable=False, default=False, index=True)
    product_verifier = Column(Boolean, nullable=False, default=False, index=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Farm(Base):
    """Fincas registradas, identificadas por farm_code"""

    __tablename__ = "farms"

    id = Column(Integer, primary_key=True, index=True)
    farm_code = Column(String(100), unique=True, nullable=False, index=True)
    fullname = Column(String(255), nullable=False, default="")
    name_farm = Column(String(255), nullable=False, default="")
    user_id = Column(String(100), nullable=False, index=True)
    email = Column(String(255), nullable=False, default="")
    phone = Column(String(50), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    location = Column(String(500), nullable=False, default="")
    area = Column(Integer, nullable=False)
    images = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_by = Column(String(128), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Category(Base):
    """Categorías de producto (espacio de nombres global)"""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False, index=True)
    user_id = Column(String(100), nullable=False, index=True)
    created_by = Column(String(128), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Product(Base):
    """Productos asociados a una finca existente"""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    product_code = Column(String(100), unique=True, nullable=False, index=True)
    farm_code = Column(
        String(100), ForeignKey("farms.farm_code"), nullable=False, index=True
    )
    category_name = Column(String(255), nullable=False, default="", index=True)
    name = Column(String(255), nullable=False, default="")
    quantity = Column(String(100), nullable=False, default="")
    price = Column(String(100), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    image = Column(String(500), nullable=False, default="")
    batch_code = Column(String(100), nullable=False, default="")
    certification = Column(String(255), nullable=False, default="")
    certification_level = Column(Integer, nullable=False, default=0)
    status = Column(Integer, nullable=False, default=0, index=True)
    created_by = Column(String(128), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


# Registros de proceso: un único registro vigente por producto y tipo


class FarmingProcess(Base):
    """Proceso de cultivo del producto"""

    __tablename__ = "farming_processes"

    product_code = Column(
        String(100), ForeignKey("products.product_code"), primary_key=True
    )
    name_process = Column(String(255), nullable=False, default="")
    source = Column(Text, nullable=False, default="")
    planting_date = Column(String(50), nullable=False, default="")
    sowing_date = Column(String(50), nullable=False, default="")
    recorded_by = Column(String(128), nullable=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Medicine(Base):
    """Aplicación de medicamentos / fitosanitarios"""

    __tablename__ = "medicines"

    product_code = Column(
        String(100), ForeignKey("products.product_code"), primary_key=True
    )
    name_medicine = Column(String(255), nullable=False, default="")
    quantity = Column(String(100), nullable=False, default="")
    application_date = Column(String(50), nullable=False, default="")
    medicine_type = Column(String(100), nullable=False, default="")
    application_method = Column(String(255), nullable=False, default="")
    recorded_by = Column(String(128), nullable=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Fertilizer(Base):
    """Aplicación de fertilizantes"""

    __tablename__ = "fertilizers"

    product_code = Column(
        String(100), ForeignKey("products.product_code"), primary_key=True
    )
    name_fertilizer = Column(String(255), nullable=False, default="")
    quantity = Column(String(100), nullable=False, default="")
    application_date = Column(String(50), nullable=False, default="")
    fertilizer_type = Column(String(100), nullable=False, default="")
    application_method = Column(String(255), nullable=False, default="")
    effect = Column(Text, nullable=False, default="")
    recorded_by = Column(String(128), nullable=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Harvest(Base):
    """Cosecha del producto"""

    __tablename__ = "harvests"

    product_code = Column(
        String(100), ForeignKey("products.product_code"), primary_key=True
    )
    harvest_date = Column(String(50), nullable=False, default="")
    estimated_quantity = Column(String(100), nullable=False, default="")
    actual_quantity = Column(String(100), nullable=False, default="")
    quality = Column(String(255), nullable=False, default="")
    harvest_method = Column(String(255), nullable=False, default="")
    recorded_by = Column(String(128), nullable=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Distribution(Base):
    """Distribución del producto"""

    __tablename__ = "distributions"

    product_code = Column(
        String(100), ForeignKey("products.product_code"), primary_key=True
    )
    distributor_name = Column(String(255), nullable=False, default="")
    distribution_partner = Column(String(255), nullable=False, default="")
    distribution_date = Column(String(50), nullable=False, default="")
    transport_method = Column(String(255), nullable=False, default="")
    storage_conditions = Column(Text, nullable=False, default="")
    recorded_by = Column(String(128), nullable=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class LedgerEvent(Base):
    """Registro de auditoría append-only de las notificaciones del ledger"""

    __tablename__ = "ledger_events"

    id = Column(Integer, primary_key=True, index=True)
    event_name = Column(String(50), nullable=False, index=True)
    entity_key = Column(String(255), nullable=False, index=True)
    actor = Column(String(128), nullable=False, index=True)
    payload = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


def create_tables():
    """Crea todas las tablas definidas en los modelos"""
    Base.metadata.create_all(bind=engine)


def drop_all_tables():
    """Elimina todas las tablas existentes - USAR CON PRECAUCIÓN"""
    Base.metadata.drop_all(bind=engine)
