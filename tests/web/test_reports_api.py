"""Tests for the report endpoints."""

from __future__ import annotations


def test_stock_status_endpoint(client):
    response = client.get("/api/v1/reports/stock-status", params={"date": "2025-03-10"})

    assert response.status_code == 200
    data = response.json()
    assert data["as_of"] == "2025-03-10"
    assert len(data["interior"]) == 2
    assert len(data["exterior"]) == 2

    row = data["interior"][0]
    assert row["product_name"] == "Fenzi Silk"
    assert row["beginning_balance"] == 23
    assert row["daily_receiving"] == 10
    assert row["daily_issuance"] == 3
    assert row["maximum_stock"] == 50


def test_stock_status_defaults_to_today(client):
    response = client.get("/api/v1/reports/stock-status")

    assert response.status_code == 200
    assert response.json()["as_of"]


def test_stock_status_bad_date(client):
    response = client.get("/api/v1/reports/stock-status", params={"date": "10/03/2025"})

    assert response.status_code == 422


def test_purchases_endpoint(client):
    response = client.get(
        "/api/v1/reports/purchases", params={"start": "2025-03-01", "end": "2025-03-10"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["type"] == "purchase"
    assert [(r["day"], r["quantity"]) for r in data["rows"]] == [("2025-03-10", 10)]
    assert data["total"] == 4500.0


def test_sales_analysis_endpoint(client):
    response = client.get(
        "/api/v1/reports/sales-analysis", params={"start": "2025-03-01", "end": "2025-03-31"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 6300.0
    assert data["monthly"][0]["month"] == "March 2025"


def test_inverted_range_is_422(client):
    response = client.get(
        "/api/v1/reports/purchases", params={"start": "2025-03-10", "end": "2025-03-01"}
    )

    assert response.status_code == 422
    assert "before start date" in response.json()["detail"]


def test_inventory_endpoint(client):
    response = client.get("/api/v1/reports/inventory")

    assert response.status_code == 200
    data = response.json()
    assert data["total_products"] == 3
    assert data["categories"][0]["category"] == "Interior Emulsion"
    assert data["categories"][1]["status"] == "low"


def test_sales_report_endpoint(client):
    response = client.get("/api/v1/reports/sales", params={"period": "year"})

    assert response.status_code == 200
    data = response.json()
    assert data["period"] == "year"
    assert data["summary"]["total_transactions"] == 2
    assert len(data["top_products"]) == 2


def test_sales_report_rejects_unknown_period(client):
    response = client.get("/api/v1/reports/sales", params={"period": "decade"})

    assert response.status_code == 422
