from prometheus_client import Counter, Histogram, Gauge
import time
from typing import Callable
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware


# Request metrics
request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    buckets=(0.05, 0.1, 0.5, 1.0, 2.0)
)

active_connections = Gauge(
    'active_connections',
    'Number of active connections'
)

# Error metrics
error_count = Counter(
    'errors_total',
    'Total unhandled errors',
    ['error_type', 'endpoint']
)

# Ledger metrics
ledger_event_count = Counter(
    'ledger_events_total',
    'Committed ledger notifications',
    ['event_name']
)

ledger_error_count = Counter(
    'ledger_errors_total',
    'Rejected ledger operations',
    ['error_type']
)

registry_farms = Gauge(
    'registry_farms_total',
    'Farms registered in the ledger'
)

registry_products = Gauge(
    'registry_products_total',
    'Products registered in the ledger'
)


def update_registry_gauges(total_farms: int, total_products: int) -> None:
    """Refresh the registry counters exposed on /metrics"""
    registry_farms.set(total_farms)
    registry_products.set(total_products)


def _endpoint_label(request: Request) -> str:
    # Plantilla de la ruta para no crear una serie por cada código
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect Prometheus metrics per route template"""

    async def dispatch(self, request: Request, call_next: Callable) -> any:
        start_time = time.time()

        active_connections.inc()
        response = None
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            error_count.labels(
                error_type=type(exc).__name__,
                endpoint=_endpoint_label(request)
            ).inc()
            raise
        finally:
            duration = time.time() - start_time
            endpoint = _endpoint_label(request)

            # 500 si la respuesta nunca se asignó
            status_code = response.status_code if response else 500

            request_count.labels(
                method=request.method,
                endpoint=endpoint,
                status_code=status_code
            ).inc()

            request_duration.labels(
                method=request.method,
                endpoint=endpoint
            ).observe(duration)

            active_connections.dec()
