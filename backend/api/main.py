from fastapi import FastAPI, Request, Response, APIRouter, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time
from typing import Annotated
from contextlib import asynccontextmanager
from sqlalchemy.orm import Session
from prometheus_client import generate_latest

from api.config import settings
from api.monitoring import setup_logging, PrometheusMiddleware, setup_sentry
from api.monitoring import log_rejection, log_error, capture_exception
from api.monitoring import update_registry_gauges
from api.services.ledger import LedgerError, bootstrap_registry, get_contract_info
from database.models.database import SessionLocal, create_tables
from database.connection import get_db

# Importar los routers modulares
from api.routes import health
from api.routes.access import router as access_router
from api.routes.farms import router as farms_router
from api.routes.products import router as products_router
from api.routes.categories import router as categories_router
from api.routes.processes import router as processes_router
from api.routes.traceability import router as traceability_router
from api.routes.registry import router as registry_router

DbSession = Annotated[Session, Depends(get_db)]

# Configurar monitoreo
logger = setup_logging(log_level=settings.log_level)
setup_sentry()


def init_registry() -> None:
    """Crear tablas e inicializar el estado del registro si aún no existe"""
    create_tables()
    db = SessionLocal()
    try:
        bootstrap_registry(db, settings.registry_owner)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events"""
    init_registry()
    logger.info(f"{settings.app_name} v{settings.app_version} started successfully")
    yield


app = FastAPI(
    title=settings.app_name,
    description="Registro de trazabilidad agrícola: fincas, productos y procesos",
    version=settings.app_version,
    redirect_slashes=False,
    lifespan=lifespan,
)

app.add_middleware(PrometheusMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    """Traducir errores del ledger a respuestas HTTP"""
    log_rejection(exc.reason, exc.kind, path=request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.reason, "error": exc.kind},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    log_error(exc, context=request.url.path)
    capture_exception(exc, {"path": request.url.path})
    return JSONResponse(
        status_code=500,
        content={"detail": "Error interno del servidor", "error": "internal"},
    )


# Crear router
api_v1_router = APIRouter(prefix="/api/v1")

api_v1_router.include_router(access_router, prefix="/access", tags=["Access"])
api_v1_router.include_router(farms_router, prefix="/farms", tags=["Farms"])
api_v1_router.include_router(products_router, prefix="/products", tags=["Products"])
api_v1_router.include_router(
    categories_router, prefix="/categories", tags=["Categories"]
)
api_v1_router.include_router(
    processes_router, prefix="/processes", tags=["Processes"]
)
api_v1_router.include_router(
    traceability_router, prefix="/traceability", tags=["Traceability"]
)
api_v1_router.include_router(registry_router, prefix="/registry", tags=["Registry"])

app.include_router(api_v1_router)

# Health y métricas
app.include_router(health.router, tags=["Health"])


@app.get("/", tags=["Sistema"])
def root():
    """Endpoint raíz con información básica del API"""
    return {
        "message": f"{settings.app_name} - Registro de Trazabilidad Agrícola",
        "version": settings.app_version,
        "status": "running",
        "documentation": "/docs",
        "api_v1": "/api/v1",
        "health": "/health",
        "metrics": "/metrics",
        "timestamp": int(time.time()),
    }


@app.get("/metrics", tags=["Monitoreo"])
def metrics(db: DbSession):
    """Endpoint de Prometheus metrics para monitoreo"""
    info = get_contract_info(db)
    update_registry_gauges(info.total_farms, info.total_products)
    return Response(content=generate_latest(), media_type="text/plain; charset=utf-8")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="warning")
