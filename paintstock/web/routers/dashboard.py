"""Dashboard API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query

from paintstock.domain.dashboard.kpis import FrequentProduct, KpiCard, RecentTransaction
from paintstock.domain.stock.records import LowStockItem, OutOfStockItem
from paintstock.services import dashboard as dashboard_service
from paintstock.web.deps import DBSession

router = APIRouter()

FILTER_PATTERN = "^(today|yesterday|week|month|quarter|year|all)$"


@router.get("/kpis", response_model=list[KpiCard])
def get_kpis(
    db: DBSession,
    sales_filter: str = Query("today", pattern=FILTER_PATTERN, description="Sales period"),
) -> list[KpiCard]:
    """Get KPI cards: total stock, period sales, exterior/interior stock, low-stock count."""
    return dashboard_service.get_kpis(db, sales_filter)


@router.get("/low-stock", response_model=list[LowStockItem])
def get_low_stock(
    db: DBSession,
    limit: int | None = Query(None, ge=1, le=100, description="Max rows (default from settings)"),
) -> list[LowStockItem]:
    """Get product×base pairs at or below minimum stock, most urgent first.

    Empty pairs are excluded; see /out-of-stock.
    """
    return dashboard_service.get_low_stock(db, limit)


@router.get("/out-of-stock", response_model=list[OutOfStockItem])
def get_out_of_stock(db: DBSession) -> list[OutOfStockItem]:
    """Get product×base pairs with zero stock."""
    return dashboard_service.get_out_of_stock(db)


@router.get("/recent-transactions", response_model=list[RecentTransaction])
def get_recent_transactions(
    db: DBSession,
    filter: str = Query("today", pattern=FILTER_PATTERN, description="Period"),
) -> list[RecentTransaction]:
    """Get latest transactions created in the period."""
    return dashboard_service.get_recent_transactions(db, filter)


@router.get("/frequent-products", response_model=list[FrequentProduct])
def get_frequent_products(
    db: DBSession,
    filter: str = Query("today", pattern=FILTER_PATTERN, description="Period"),
    rank_by: str = Query("quantity", pattern="^(quantity|revenue)$", description="Ranking"),
) -> list[FrequentProduct]:
    """Get top-selling product×base pairs in the period."""
    return dashboard_service.get_frequent_products(db, filter, rank_by)
