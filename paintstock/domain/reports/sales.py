"""Sales report for a calendar period: summary, top sellers and monthly series.

NO DATA ACCESS - pure functions only. Data access happens in services layer.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from pydantic import BaseModel

from paintstock.domain.dashboard.periods import period_range
from paintstock.domain.stock.records import TransactionRecord, TransactionType

TOP_PRODUCTS = 5
MONTHLY_POINTS = 6
RECENT_DAYS = 30

MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


class SalesSummary(BaseModel):
    total_sales: float
    total_units: int
    avg_order_value: float
    last_30_days_sales: float
    total_transactions: int


class TopProduct(BaseModel):
    """Product×base ranked by sales amount."""

    product_id: int
    base_id: int
    name: str
    base_name: str
    sales: float
    units: int
    percentage: int


class MonthlySales(BaseModel):
    month: str
    sales: float
    units: int


class SalesReport(BaseModel):
    period: str
    start: datetime
    end: datetime
    summary: SalesSummary
    top_products: list[TopProduct]
    monthly: list[MonthlySales]


def _sales(transactions: Iterable[TransactionRecord]) -> list[TransactionRecord]:
    return [
        t for t in transactions if t.type == TransactionType.SALE and t.created_at is not None
    ]


def sales_summary(
    sales: list[TransactionRecord], all_sales: list[TransactionRecord], now: datetime
) -> SalesSummary:
    """Totals over ``sales``; the 30-day figure looks back from ``now`` over ``all_sales``."""
    total = sum(t.total_amount for t in sales)
    cutoff = now - timedelta(days=RECENT_DAYS)
    return SalesSummary(
        total_sales=round(total, 2),
        total_units=sum(t.quantity for t in sales),
        avg_order_value=round(total / len(sales), 2) if sales else 0.0,
        last_30_days_sales=round(
            sum(t.total_amount for t in all_sales if t.created_at >= cutoff), 2
        ),
        total_transactions=len(sales),
    )


def top_products(sales: list[TransactionRecord], limit: int = TOP_PRODUCTS) -> list[TopProduct]:
    """Best product×base pairs by amount, with their share of the ranked total.

    Sales without a product name, base or base name are left out, also from
    the total the shares are computed against.
    """
    stats: dict[tuple[int, int], dict] = {}
    for t in sales:
        if not (t.product_name and t.base_id and t.base_name):
            continue
        entry = stats.setdefault(
            (t.product_id, t.base_id),
            {"name": t.product_name, "base_name": t.base_name, "sales": 0.0, "units": 0},
        )
        entry["sales"] += t.total_amount
        entry["units"] += t.quantity

    grand_total = sum(entry["sales"] for entry in stats.values())
    ranked = [
        TopProduct(
            product_id=product_id,
            base_id=base_id,
            name=entry["name"],
            base_name=entry["base_name"],
            sales=round(entry["sales"], 2),
            units=entry["units"],
            percentage=round(entry["sales"] / grand_total * 100) if grand_total > 0 else 0,
        )
        for (product_id, base_id), entry in stats.items()
    ]
    ranked.sort(key=lambda p: p.sales, reverse=True)
    return ranked[:limit]


def monthly_sales(
    sales: list[TransactionRecord], points: int = MONTHLY_POINTS
) -> list[MonthlySales]:
    """Sales amount and units per month, oldest first, last ``points`` months with sales."""
    months: dict[tuple[int, int], list] = {}
    for t in sales:
        bucket = months.setdefault((t.created_at.year, t.created_at.month), [0.0, 0])
        bucket[0] += t.total_amount
        bucket[1] += t.quantity

    series = [
        MonthlySales(month=f"{MONTH_ABBR[month - 1]} {year}", sales=round(amount, 2), units=units)
        for (year, month), (amount, units) in sorted(months.items())
    ]
    return series[-points:]


def sales_report(
    transactions: Iterable[TransactionRecord], period: str, now: datetime
) -> SalesReport:
    """Sales created within the period containing ``now``.

    Periods are day, week, month, quarter and year; anything else means the
    current month.
    """
    start, end = period_range(period, now)
    all_sales = _sales(transactions)
    in_period = [t for t in all_sales if start <= t.created_at < end]

    return SalesReport(
        period=period,
        start=start,
        end=end,
        summary=sales_summary(in_period, all_sales, now),
        top_products=top_products(in_period),
        monthly=monthly_sales(in_period),
    )
