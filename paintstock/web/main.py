"""FastAPI application for the paint inventory dashboard backend."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from paintstock import __version__
from paintstock.core.config import get_settings
from paintstock.core.logging import get_logger, get_request_id, set_request_id, setup_logging
from paintstock.core.metrics import app_info
from paintstock.db.session import init_db
from paintstock.services.inventory_data import DataFetchError
from paintstock.web.middleware import PrometheusMiddleware
from paintstock.web.routers import dashboard, export, healthcheck, reorders, reports

log = get_logger("paintstock.web")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and the database before serving."""
    settings = get_settings()
    setup_logging(level=settings.log_level, to_stdout=settings.log_to_stdout)
    if settings.db_auto_create:
        init_db()
    log.info("app_started", extra={"version": __version__})
    yield


app = FastAPI(
    title="Paint Inventory API",
    version=__version__,
    description="Stock status, low-stock and dashboard reporting for a paint shop",
    lifespan=lifespan,
)

app.add_middleware(PrometheusMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app_info.info({"version": __version__})


@app.exception_handler(DataFetchError)
async def data_fetch_exception_handler(request: Request, exc: DataFetchError):
    """Database read failures surface as 503 with a generic message."""
    log.warning(
        "data_unavailable",
        extra={"path": str(request.url.path), "source": exc.source},
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": "data_unavailable", "request_id": get_request_id() or None},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions with proper logging and response."""
    request_id = get_request_id() or set_request_id()

    log.error(
        "unhandled_exception",
        extra={
            "path": str(request.url.path),
            "method": request.method,
            "error": str(exc),
            "error_type": type(exc).__name__,
        },
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_server_error",
            "request_id": request_id,
            "hint": "Contact support with this request_id",
        },
    )


# Include routers
app.include_router(healthcheck.router, tags=["Monitoring"])
app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["Dashboard"])
app.include_router(reports.router, prefix="/api/v1/reports", tags=["Reports"])
app.include_router(export.router, prefix="/api/v1/export", tags=["Export"])
app.include_router(reorders.router, prefix="/api/v1/reorders", tags=["Reorders"])


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
