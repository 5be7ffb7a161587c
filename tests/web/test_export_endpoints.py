"""Tests for export endpoints."""

from __future__ import annotations

import io

from openpyxl import load_workbook

from paintstock.domain.reports.analysis import MONTHLY_HEADERS, PURCHASE_HEADERS
from paintstock.domain.stock.daily_status import STOCK_STATUS_HEADERS
from paintstock.web.utils.exporters import to_stock_status_xlsx


def test_interior_stock_status_xlsx(client):
    response = client.get(
        "/api/v1/export/stock-status-interior.xlsx", params={"date": "2025-03-10"}
    )

    assert response.status_code == 200
    assert "spreadsheetml" in response.headers["content-type"]
    assert "stock_status_interior_2025-03-10.xlsx" in response.headers["content-disposition"]

    ws = load_workbook(io.BytesIO(response.content)).active
    assert ws.title == "Sheet1"
    assert [c.value for c in ws[1]] == STOCK_STATUS_HEADERS
    assert [c.value for c in ws[2]][:5] == ["Fenzi Silk", "4L", "White", 23, 10]
    assert ws.max_row == 3


def test_exterior_stock_status_xlsx(client):
    response = client.get(
        "/api/v1/export/stock-status-exterior.xlsx", params={"date": "2025-03-10"}
    )

    assert response.status_code == 200
    ws = load_workbook(io.BytesIO(response.content)).active
    assert {row[0].value for row in ws.iter_rows(min_row=2)} == {"Jotashield"}


def test_unknown_bucket_is_404(client):
    response = client.get("/api/v1/export/stock-status-wood.xlsx")

    assert response.status_code == 404


def test_stock_status_xlsx_styling():
    rows = [
        {header: 0 for header in STOCK_STATUS_HEADERS}
        | {"Product name": "Fenzi Silk", "Variation (pcs)": -4},
        {header: 0 for header in STOCK_STATUS_HEADERS}
        | {"Product name": "Jotashield", "Variation (pcs)": 6},
    ]

    ws = load_workbook(io.BytesIO(to_stock_status_xlsx(rows, STOCK_STATUS_HEADERS))).active

    header = ws["A1"]
    assert header.font.bold
    assert header.font.color.rgb.endswith("FFFFFF")
    assert header.fill.fgColor.rgb.endswith("4B5EAA")

    assert ws["A2"].fill.fgColor.rgb.endswith("F5F7FA")
    assert ws["B2"].fill.fgColor.rgb.endswith("E8ECEF")

    # Variation is column I
    assert ws["I2"].font.color.rgb.endswith("FF0000")
    assert ws["I3"].font.color.rgb.endswith("000000")

    assert ws.column_dimensions["A"].width == 20
    assert ws.column_dimensions["B"].width == 10
    assert ws.column_dimensions["D"].width == 15


def test_low_stock_csv(client):
    response = client.get("/api/v1/export/low-stock.csv")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.strip().splitlines()
    assert lines[0].startswith("id,product_name,base_name")
    assert len(lines) == 4
    assert "critical" in lines[1]


def test_low_stock_xlsx(client):
    response = client.get("/api/v1/export/low-stock.xlsx")

    assert response.status_code == 200
    ws = load_workbook(io.BytesIO(response.content)).active
    assert ws.title == "Low Stock"
    assert ws.max_row == 4


def test_purchases_xlsx(client):
    response = client.get(
        "/api/v1/export/purchases.xlsx", params={"start": "2025-03-10", "end": "2025-03-10"}
    )

    assert response.status_code == 200
    assert "purchases_2025-03-10_to_2025-03-10.xlsx" in response.headers["content-disposition"]

    ws = load_workbook(io.BytesIO(response.content)).active
    assert ws.title == "Purchases"
    assert [c.value for c in ws[1]] == PURCHASE_HEADERS
    assert [c.value for c in ws[2]] == ["2025-03-10", "Fenzi Silk", "4L", "White", 10, 4500]
    assert [ws.cell(row=3, column=1).value, ws.cell(row=3, column=6).value] == ["Total", 4500]


def test_monthly_summary_xlsx(client):
    response = client.get(
        "/api/v1/export/monthly-summary.xlsx", params={"start": "2025-03-01", "end": "2025-03-31"}
    )

    assert response.status_code == 200
    ws = load_workbook(io.BytesIO(response.content)).active
    assert [c.value for c in ws[1]] == MONTHLY_HEADERS
    assert ws.cell(row=2, column=1).value == "March 2025"
    assert ws.cell(row=2, column=4).value == 1800


def test_sales_analysis_xlsx_rejects_inverted_range(client):
    response = client.get(
        "/api/v1/export/sales-analysis.xlsx", params={"start": "2025-03-10", "end": "2025-03-01"}
    )

    assert response.status_code == 422
