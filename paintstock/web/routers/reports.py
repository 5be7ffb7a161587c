"""Report API endpoints."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, Query

from paintstock.domain.reports.analysis import AnalysisReport, SalesAnalysisReport
from paintstock.domain.reports.inventory import InventorySummary
from paintstock.domain.reports.sales import SalesReport
from paintstock.domain.stock.records import StockStatusReport
from paintstock.services import reports as report_service
from paintstock.services.inventory_data import local_now
from paintstock.web.deps import DBSession

router = APIRouter()

PERIOD_PATTERN = "^(day|week|month|quarter|year)$"


def resolve_range(start: date | None, end: date | None) -> tuple[date, date]:
    """Missing bounds default to today; an inverted range is a 422."""
    today = local_now().date()
    start, end = start or today, end or today
    if end < start:
        raise HTTPException(status_code=422, detail=f"end date {end} is before start date {start}")
    return start, end


@router.get("/stock-status", response_model=StockStatusReport)
def get_stock_status(
    db: DBSession,
    report_date: date | None = Query(None, alias="date", description="Report day (YYYY-MM-DD)"),
) -> StockStatusReport:
    """Get the daily stock status report, split into interior and exterior tables.

    Defaults to today (shop timezone).
    """
    return report_service.build_stock_status_report(db, report_date or local_now().date())


@router.get("/purchases", response_model=AnalysisReport)
def get_purchase_analysis(
    db: DBSession,
    start: date | None = Query(None, description="First day (YYYY-MM-DD), default today"),
    end: date | None = Query(None, description="Last day, included (YYYY-MM-DD), default today"),
) -> AnalysisReport:
    """Purchases received in the date range, with their total cost."""
    return report_service.build_purchase_analysis(db, *resolve_range(start, end))


@router.get("/sales-analysis", response_model=SalesAnalysisReport)
def get_sales_analysis(
    db: DBSession,
    start: date | None = Query(None, description="First day (YYYY-MM-DD), default today"),
    end: date | None = Query(None, description="Last day, included (YYYY-MM-DD), default today"),
) -> SalesAnalysisReport:
    """Sales in the date range, their total and the monthly summary."""
    return report_service.build_sales_analysis(db, *resolve_range(start, end))


@router.get("/inventory", response_model=InventorySummary)
def get_inventory_summary(db: DBSession) -> InventorySummary:
    """Stock per category with low and critical product counts."""
    return report_service.build_inventory_summary(db)


@router.get("/sales", response_model=SalesReport)
def get_sales_report(
    db: DBSession,
    period: str = Query("month", pattern=PERIOD_PATTERN),
) -> SalesReport:
    """Sales summary, top five product×base pairs and monthly series for the period."""
    return report_service.build_sales_report(db, period)
