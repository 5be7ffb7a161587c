"""Report service facade: stock status, analyses, inventory and sales reports."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import Session

from paintstock.core.metrics import reports_generated_total, stock_status_rows_total
from paintstock.domain.reports.analysis import (
    AnalysisReport,
    SalesAnalysisReport,
    purchase_analysis,
    range_bounds,
    sales_analysis,
)
from paintstock.domain.reports.inventory import InventorySummary, summarize_inventory
from paintstock.domain.reports.sales import SalesReport, sales_report
from paintstock.domain.stock.daily_status import calculate_stock_status
from paintstock.domain.stock.records import StockStatusReport
from paintstock.services.inventory_data import (
    load_products,
    load_report_transactions,
    load_transactions,
    local_now,
)

logger = logging.getLogger(__name__)


def build_stock_status_report(db: Session, as_of: date) -> StockStatusReport:
    """Load current stock and the day's transactions, then compute the report.

    Args:
        db: Database session
        as_of: Report day

    Returns:
        StockStatusReport (empty tables when there is no data)

    """
    products = load_products(db)
    transactions = load_report_transactions(db, as_of)

    report = calculate_stock_status(as_of, products, transactions)

    stock_status_rows_total.labels(bucket="interior").inc(len(report.interior))
    stock_status_rows_total.labels(bucket="exterior").inc(len(report.exterior))
    logger.info(
        "stock_status_computed",
        extra={
            "as_of": as_of.isoformat(),
            "products": len(products),
            "transactions": len(transactions),
            "interior_rows": len(report.interior),
            "exterior_rows": len(report.exterior),
        },
    )
    return report


def build_purchase_analysis(db: Session, start: date, end: date) -> AnalysisReport:
    """Purchases dated within [start, end] (local days, end included)."""
    lo, _ = range_bounds(start, end)
    report = purchase_analysis(load_transactions(db, since=lo), start, end)

    reports_generated_total.labels(report="purchases").inc()
    logger.info(
        "purchase_analysis_computed",
        extra={"start": start.isoformat(), "end": end.isoformat(), "rows": len(report.rows)},
    )
    return report


def build_sales_analysis(db: Session, start: date, end: date) -> SalesAnalysisReport:
    """Sales dated within [start, end] plus the monthly sales/cost summary."""
    lo, _ = range_bounds(start, end)
    report = sales_analysis(load_transactions(db, since=lo), start, end)

    reports_generated_total.labels(report="sales_analysis").inc()
    logger.info(
        "sales_analysis_computed",
        extra={
            "start": start.isoformat(),
            "end": end.isoformat(),
            "rows": len(report.rows),
            "months": len(report.monthly),
        },
    )
    return report


def build_inventory_summary(db: Session) -> InventorySummary:
    """Current stock per category."""
    summary = summarize_inventory(load_products(db))

    reports_generated_total.labels(report="inventory").inc()
    logger.info(
        "inventory_summary_computed",
        extra={
            "products": summary.total_products,
            "low": summary.low_stock_count,
            "critical": summary.critical_count,
        },
    )
    return summary


def build_sales_report(db: Session, period: str) -> SalesReport:
    """Sales report for the current day, week, month, quarter or year.

    All transactions are loaded: the period and the 30-day figure both
    filter on creation time, which the query filter does not cover.
    """
    report = sales_report(load_transactions(db), period, local_now())

    reports_generated_total.labels(report="sales").inc()
    logger.info(
        "sales_report_computed",
        extra={
            "period": period,
            "transactions": report.summary.total_transactions,
            "total_sales": report.summary.total_sales,
        },
    )
    return report
