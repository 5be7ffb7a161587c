"""Dashboard KPI cards and transaction panels.

NO DATA ACCESS - pure functions only. Data access happens in services layer.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from paintstock.domain.dashboard.periods import format_time_ago, period_start, sales_title
from paintstock.domain.stock.levels import count_low_stock
from paintstock.domain.stock.records import ProductRecord, TransactionRecord, TransactionType

RankBy = Literal["quantity", "revenue"]


class KpiCard(BaseModel):
    """One dashboard KPI card."""

    title: str
    value: float
    display: str
    unit: str = ""
    change_type: Literal["positive", "negative"] = "positive"


class RecentTransaction(BaseModel):
    """Row of the recent transactions panel."""

    id: int | None
    type: str
    product: str
    quantity: int
    amount: float
    timestamp: str
    user: str = "System"


class FrequentProduct(BaseModel):
    """Best-selling product×base for the period."""

    id: int
    name: str
    base_id: int
    base_name: str
    sold_quantity: int
    revenue: float
    unit: str = "pcs"
    trend: str = "up"


def format_number(value: float) -> str:
    """Thousands-separated number, up to three decimals.

    Examples:
        >>> format_number(12345)
        '12,345'
        >>> format_number(1234.5)
        '1,234.5'

    """
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def _created_since(transactions: Iterable[TransactionRecord], start: datetime):
    return [t for t in transactions if t.created_at is not None and t.created_at >= start]


def category_stock(products: Iterable[ProductRecord], word: str) -> int:
    """Total stock of products whose category mentions ``word``."""
    return sum(p.total_stock for p in products if p.category_contains(word))


def calculate_kpis(
    products: Sequence[ProductRecord],
    transactions: Sequence[TransactionRecord],
    sales_filter: str,
    now: datetime,
    currency: str = "ETB",
) -> list[KpiCard]:
    """Compute the five dashboard KPI cards.

    Args:
        products: Products with per-base stock rows
        transactions: Recent transactions (sales are filtered by created_at)
        sales_filter: Period for the sales card (today, week, month, ...)
        now: Current local time
        currency: Prefix for the sales value

    Returns:
        Cards: total stock, period sales, exterior stock, interior stock,
        low-stock count

    """
    total_stock = sum(p.total_stock for p in products)

    sales = sum(
        t.total_amount
        for t in _created_since(transactions, period_start(sales_filter, now))
        if t.type == TransactionType.SALE
    )

    exterior = category_stock(products, "exterior")
    interior = category_stock(products, "interior")
    low_stock_count = count_low_stock(products)

    return [
        KpiCard(
            title="Total Stock Quantity",
            value=total_stock,
            display=format_number(total_stock),
            unit="pcs",
        ),
        KpiCard(
            title=sales_title(sales_filter),
            value=sales,
            display=f"{currency}{format_number(sales)}",
        ),
        KpiCard(
            title="Exterior Paints",
            value=exterior,
            display=format_number(exterior),
            unit="pcs",
        ),
        KpiCard(
            title="Interior Paints",
            value=interior,
            display=format_number(interior),
            unit="pcs",
        ),
        KpiCard(
            title="Low Stock Items",
            value=low_stock_count,
            display=str(low_stock_count),
            unit="items",
            change_type="negative",
        ),
    ]


def recent_transactions(
    transactions: Sequence[TransactionRecord],
    filter_name: str,
    now: datetime,
    limit: int = 8,
) -> list[RecentTransaction]:
    """Latest transactions created within the filter period.

    ``transactions`` must already be ordered newest first.
    """
    selected = _created_since(transactions, period_start(filter_name, now))[:limit]
    return [
        RecentTransaction(
            id=t.id,
            type=t.type.value,
            product=t.product_name or "Unknown Product",
            quantity=t.quantity,
            amount=round(t.total_amount, 2),
            timestamp=format_time_ago(t.created_at, now),
        )
        for t in selected
    ]


def frequent_products(
    transactions: Sequence[TransactionRecord],
    filter_name: str,
    now: datetime,
    rank_by: RankBy = "quantity",
    limit: int = 4,
) -> list[FrequentProduct]:
    """Top-selling product×base pairs in the filter period.

    Sales without a product name, base or base name are ignored.
    """
    stats: dict[tuple[str, int], FrequentProduct] = {}

    for t in _created_since(transactions, period_start(filter_name, now)):
        if t.type != TransactionType.SALE:
            continue
        if not (t.product_name and t.base_id and t.base_name):
            continue

        key = (t.product_name, t.base_id)
        entry = stats.get(key)
        if entry is None:
            entry = stats[key] = FrequentProduct(
                id=t.product_id,
                name=t.product_name,
                base_id=t.base_id,
                base_name=t.base_name,
                sold_quantity=0,
                revenue=0.0,
            )
        entry.sold_quantity += t.quantity
        entry.revenue += t.total_amount

    if rank_by == "revenue":
        ranked = sorted(stats.values(), key=lambda e: e.revenue, reverse=True)
    else:
        ranked = sorted(stats.values(), key=lambda e: e.sold_quantity, reverse=True)

    return ranked[:limit]
