"""Liveness and readiness endpoints."""

from __future__ import annotations

import os
import time
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import psutil
from fastapi import APIRouter, HTTPException
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from paintstock import __version__
from paintstock.core.config import get_settings
from paintstock.db.models import Product, ProductPrice
from paintstock.web.deps import DBSession

router = APIRouter()

RESOURCE_WARN_PERCENT = 90


def _check_database(db: Session) -> dict:
    """Catalogue row counts; failure makes the service unready."""
    started = time.perf_counter()
    try:
        products = db.execute(select(func.count()).select_from(Product)).scalar_one()
        prices = db.execute(select(func.count()).select_from(ProductPrice)).scalar_one()
    except SQLAlchemyError as e:
        db.rollback()
        return {"status": "error", "error": type(e).__name__}
    return {
        "status": "ok",
        "products": products,
        "price_rows": prices,
        "latency_ms": round((time.perf_counter() - started) * 1000, 2),
    }


def _check_timezone() -> dict:
    """Report day boundaries depend on a loadable shop timezone."""
    name = get_settings().app_timezone
    try:
        zone = ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return {"status": "error", "name": name, "error": "unknown timezone"}
    return {
        "status": "ok",
        "name": name,
        "local_time": datetime.now(zone).replace(tzinfo=None).isoformat(timespec="seconds"),
    }


def _check_resources() -> dict:
    disk = psutil.disk_usage("/")
    mem = psutil.virtual_memory()
    warn = max(disk.percent, mem.percent) > RESOURCE_WARN_PERCENT
    return {
        "status": "warning" if warn else "ok",
        "disk_used_percent": disk.percent,
        "disk_free_gb": round(disk.free / 1024**3, 2),
        "memory_used_percent": mem.percent,
        "memory_available_mb": round(mem.available / 1024**2, 2),
    }


def _uptime() -> dict:
    seconds = time.time() - psutil.Process(os.getpid()).create_time()
    return {"seconds": round(seconds, 2), "human": _format_uptime(seconds)}


@router.get("/health")
def health():
    """Liveness: the process answers."""
    return {"status": "healthy"}


@router.get("/healthz")
def healthz(db: DBSession):
    """Readiness: database reachable with its catalogue, timezone valid.

    Returns 503 with the same body when the database or timezone check
    fails; high disk or memory use only marks the status "degraded".
    """
    checks = {
        "database": _check_database(db),
        "timezone": _check_timezone(),
        "resources": _check_resources(),
    }

    healthy = all(check["status"] != "error" for check in checks.values())
    if not healthy:
        status = "unhealthy"
    elif checks["resources"]["status"] == "warning":
        status = "degraded"
    else:
        status = "healthy"

    body = {
        "status": status,
        "healthy": healthy,
        "version": __version__,
        "checks": checks,
        "uptime": _uptime(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if not healthy:
        raise HTTPException(status_code=503, detail=body)
    return body


def _format_uptime(seconds: float) -> str:
    """Format uptime like "1d 2h 30m"."""
    days, rest = divmod(int(seconds), 86400)
    hours, rest = divmod(rest, 3600)
    minutes = rest // 60

    parts = [f"{value}{unit}" for value, unit in ((days, "d"), (hours, "h")) if value]
    if minutes or not parts:
        parts.append(f"{minutes}m")
    return " ".join(parts)
