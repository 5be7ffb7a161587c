"""Dashboard service: loads a fresh snapshot and runs the dashboard computations."""

from __future__ import annotations

import logging
from collections import Counter

from sqlalchemy.orm import Session

from paintstock.core.config import get_settings
from paintstock.core.metrics import low_stock_items
from paintstock.domain.dashboard.kpis import (
    FrequentProduct,
    KpiCard,
    RankBy,
    RecentTransaction,
    calculate_kpis,
    frequent_products,
    recent_transactions,
)
from paintstock.domain.stock.levels import out_of_stock_rows
from paintstock.domain.stock.low_stock import classify_low_stock
from paintstock.domain.stock.records import LowStockItem, OutOfStockItem, TransactionRecord
from paintstock.services.inventory_data import load_products, load_transactions, local_now

logger = logging.getLogger(__name__)


def _dashboard_transactions(db: Session) -> list[TransactionRecord]:
    settings = get_settings()
    return load_transactions(db, limit=settings.dashboard_transactions_fetch_limit)


def get_kpis(db: Session, sales_filter: str) -> list[KpiCard]:
    """KPI cards for the selected sales period."""
    settings = get_settings()
    products = load_products(db)
    transactions = _dashboard_transactions(db)
    return calculate_kpis(
        products, transactions, sales_filter, local_now(), currency=settings.currency
    )


def get_low_stock(db: Session, limit: int | None = None) -> list[LowStockItem]:
    """Ranked low-stock panel."""
    settings = get_settings()
    items = classify_low_stock(
        load_products(db),
        limit=limit or settings.low_stock_limit,
        default_supplier=settings.default_supplier,
    )

    counts = Counter(item.urgency for item in items)
    for urgency in ("critical", "warning", "low"):
        low_stock_items.labels(urgency=urgency).set(counts.get(urgency, 0))
    logger.info("low_stock_computed", extra={"items": len(items), **dict(counts)})

    return items


def get_out_of_stock(db: Session) -> list[OutOfStockItem]:
    """Pairs with zero stock."""
    return out_of_stock_rows(load_products(db))


def get_recent_transactions(db: Session, filter_name: str) -> list[RecentTransaction]:
    """Recent transactions panel."""
    settings = get_settings()
    return recent_transactions(
        _dashboard_transactions(db),
        filter_name,
        local_now(),
        limit=settings.recent_transactions_limit,
    )


def get_frequent_products(
    db: Session, filter_name: str, rank_by: RankBy = "quantity"
) -> list[FrequentProduct]:
    """Top-selling products panel."""
    settings = get_settings()
    return frequent_products(
        _dashboard_transactions(db),
        filter_name,
        local_now(),
        rank_by=rank_by,
        limit=settings.frequent_products_limit,
    )
