"""Export endpoints for CSV/XLSX downloads."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query, Response

from paintstock.core.config import get_settings
from paintstock.domain.reports.analysis import (
    MONTHLY_HEADERS,
    analysis_export_rows,
    monthly_export_rows,
)
from paintstock.domain.stock.daily_status import STOCK_STATUS_HEADERS, to_export_row
from paintstock.services import dashboard as dashboard_service
from paintstock.services.inventory_data import local_now
from paintstock.services.reports import (
    build_purchase_analysis,
    build_sales_analysis,
    build_stock_status_report,
)
from paintstock.web.deps import DBSession
from paintstock.web.routers.reports import resolve_range
from paintstock.web.utils import to_csv, to_stock_status_xlsx, to_xlsx

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

LOW_STOCK_COLUMNS = [
    "id",
    "product_name",
    "base_name",
    "size",
    "category",
    "supplier",
    "current_stock",
    "min_stock",
    "stock_percentage",
    "urgency",
]


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.get("/stock-status-{bucket}.xlsx")
def export_stock_status_xlsx(
    bucket: str,
    db: DBSession,
    report_date: date | None = Query(None, alias="date", description="Report day (YYYY-MM-DD)"),
) -> Response:
    """Export the interior or exterior stock status table as XLSX."""
    if bucket not in ("interior", "exterior"):
        return Response(status_code=404)

    report_date = report_date or local_now().date()
    report = build_stock_status_report(db, report_date)
    rows = report.interior if bucket == "interior" else report.exterior

    content = to_stock_status_xlsx([to_export_row(row) for row in rows], STOCK_STATUS_HEADERS)
    filename = f"stock_status_{bucket}_{report_date.isoformat()}.xlsx"

    return Response(content=content, media_type=XLSX_MEDIA_TYPE, headers=_attachment(filename))


@router.get("/low-stock.csv")
def export_low_stock_csv(
    db: DBSession,
    limit: int | None = Query(None, ge=1, le=100000),
) -> Response:
    """Export the ranked low-stock list as CSV (not capped to the panel size)."""
    items = dashboard_service.get_low_stock(db, limit or get_settings().export_max_rows)
    content = to_csv([item.model_dump() for item in items], LOW_STOCK_COLUMNS)
    return Response(content=content, media_type="text/csv", headers=_attachment("low_stock.csv"))


@router.get("/low-stock.xlsx")
def export_low_stock_xlsx(
    db: DBSession,
    limit: int | None = Query(None, ge=1, le=100000),
) -> Response:
    """Export the ranked low-stock list as XLSX."""
    items = dashboard_service.get_low_stock(db, limit or get_settings().export_max_rows)
    content = to_xlsx(
        [item.model_dump() for item in items], LOW_STOCK_COLUMNS, sheet_name="Low Stock"
    )
    return Response(
        content=content, media_type=XLSX_MEDIA_TYPE, headers=_attachment("low_stock.xlsx")
    )


@router.get("/purchases.xlsx")
def export_purchases_xlsx(
    db: DBSession,
    start: date | None = Query(None),
    end: date | None = Query(None),
) -> Response:
    """Export the purchase analysis as XLSX, total row last."""
    start, end = resolve_range(start, end)
    headers, rows = analysis_export_rows(build_purchase_analysis(db, start, end))
    content = to_xlsx(rows, headers, sheet_name="Purchases")
    filename = f"purchases_{start.isoformat()}_to_{end.isoformat()}.xlsx"
    return Response(content=content, media_type=XLSX_MEDIA_TYPE, headers=_attachment(filename))


@router.get("/sales-analysis.xlsx")
def export_sales_analysis_xlsx(
    db: DBSession,
    start: date | None = Query(None),
    end: date | None = Query(None),
) -> Response:
    """Export the sales analysis as XLSX, total row last."""
    start, end = resolve_range(start, end)
    headers, rows = analysis_export_rows(build_sales_analysis(db, start, end))
    content = to_xlsx(rows, headers, sheet_name="Sales")
    filename = f"sales_analysis_{start.isoformat()}_to_{end.isoformat()}.xlsx"
    return Response(content=content, media_type=XLSX_MEDIA_TYPE, headers=_attachment(filename))


@router.get("/monthly-summary.xlsx")
def export_monthly_summary_xlsx(
    db: DBSession,
    start: date | None = Query(None),
    end: date | None = Query(None),
) -> Response:
    """Export the monthly sales/cost summary of the range as XLSX."""
    start, end = resolve_range(start, end)
    report = build_sales_analysis(db, start, end)
    content = to_xlsx(monthly_export_rows(report.monthly), MONTHLY_HEADERS, sheet_name="Monthly")
    filename = f"monthly_sales_summary_{start.isoformat()}_to_{end.isoformat()}.xlsx"
    return Response(content=content, media_type=XLSX_MEDIA_TYPE, headers=_attachment(filename))
