"""Tests for monitoring endpoints."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from paintstock.web.routers.healthcheck import _format_uptime


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_healthz_checks_database(client, shop_timezone):
    response = client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["healthy"] is True
    assert data["status"] in ("healthy", "degraded")
    assert data["checks"]["database"]["status"] == "ok"
    assert data["checks"]["database"]["products"] == 3
    assert data["checks"]["database"]["price_rows"] == 5
    assert data["checks"]["timezone"]["name"] == "Africa/Addis_Ababa"
    assert "human" in data["uptime"]


def test_healthz_unready_without_tables(client):
    from paintstock.web.deps import get_db
    from paintstock.web.main import app

    engine = create_engine("sqlite://", poolclass=StaticPool)

    def empty_db():
        session = Session(engine)
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = empty_db

    response = client.get("/healthz")

    assert response.status_code == 503
    detail = response.json()["detail"]
    assert detail["status"] == "unhealthy"
    assert detail["checks"]["database"]["status"] == "error"


def test_healthz_unready_with_unknown_timezone(client, shop_timezone):
    shop_timezone("Mars/Olympus_Mons")

    response = client.get("/healthz")

    assert response.status_code == 503
    assert response.json()["detail"]["checks"]["timezone"]["status"] == "error"


def test_metrics_endpoint(client):
    client.get("/api/v1/dashboard/low-stock")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in response.text
    assert "low_stock_items" in response.text


def test_request_id_header_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_format_uptime():
    assert _format_uptime(30) == "0m"
    assert _format_uptime(3 * 3600 + 120) == "3h 2m"
    assert _format_uptime(86400 + 60) == "1d 1m"
