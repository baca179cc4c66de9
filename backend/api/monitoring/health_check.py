import sys
from datetime import datetime, timezone
from typing import Dict, Any, Optional, Tuple
import psutil
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.orm import Session

from api.config import settings


class RegistryInfo(BaseModel):
    name: str
    version: str
    owner: str
    total_farms: int
    total_products: int


class HealthCheckResponse(BaseModel):
    """Health check response model"""

    status: str
    timestamp: str
    version: str
    environment: str
    uptime_seconds: float
    system_info: Dict[str, Any]
    database_status: str
    registry_status: str
    registry: Optional[RegistryInfo] = None
    api_status: str


class MemoryInfo(BaseModel):
    total_mb: float
    used_mb: float
    available_mb: float
    percent: float


class SystemInfo(BaseModel):
    memory: MemoryInfo
    cpu_count: int
    disk_usage_percent: float
    python_version: str


class HealthMonitor:
    """Health monitoring class"""

    start_time: float = datetime.now(timezone.utc).timestamp()

    @staticmethod
    def get_uptime_seconds() -> float:
        return datetime.now(timezone.utc).timestamp() - HealthMonitor.start_time

    @staticmethod
    def get_memory_info() -> MemoryInfo:
        memory = psutil.virtual_memory()
        return MemoryInfo(
            total_mb=memory.total / 1024 / 1024,
            used_mb=memory.used / 1024 / 1024,
            available_mb=memory.available / 1024 / 1024,
            percent=memory.percent,
        )

    @staticmethod
    def get_disk_usage() -> float:
        try:
            return psutil.disk_usage("/").percent
        except OSError:
            return 0.0

    @staticmethod
    def get_system_info() -> SystemInfo:
        return SystemInfo(
            memory=HealthMonitor.get_memory_info(),
            cpu_count=psutil.cpu_count(logical=True) or 0,
            disk_usage_percent=HealthMonitor.get_disk_usage(),
            python_version=f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        )

    @staticmethod
    def check_database(db: Session = None) -> str:
        """Check ledger database connectivity"""
        if db is None:
            return "unknown"

        try:
            db.execute(text("SELECT 1"))
            return "healthy"
        except Exception as e:
            return f"unhealthy: {str(e)[:50]}"

    @staticmethod
    def check_registry(db: Session = None) -> Tuple[str, Optional[RegistryInfo]]:
        """Check that the registry state has been bootstrapped"""
        if db is None:
            return "unknown", None

        from api.services.ledger import LedgerError, get_contract_info

        try:
            info = get_contract_info(db)
        except LedgerError:
            return "not_initialized", None
        except Exception as e:
            return f"unhealthy: {str(e)[:50]}", None
        return "initialized", RegistryInfo(**info._asdict())

    @staticmethod
    def get_health_check(db: Session = None) -> HealthCheckResponse:
        """Get comprehensive health check; degraded unless the ledger is usable"""
        database_status = HealthMonitor.check_database(db)
        registry_status, registry = HealthMonitor.check_registry(db)
        healthy = database_status == "healthy" and registry_status == "initialized"

        return HealthCheckResponse(
            status="healthy" if healthy else "degraded",
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=settings.app_version,
            environment=settings.environment,
            uptime_seconds=HealthMonitor.get_uptime_seconds(),
            system_info=HealthMonitor.get_system_info().model_dump(),
            database_status=database_status,
            registry_status=registry_status,
            registry=registry,
            api_status="operational",
        )
