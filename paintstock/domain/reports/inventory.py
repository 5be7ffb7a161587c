"""Per-category inventory summary.

NO DATA ACCESS - pure functions only. Data access happens in services layer.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from pydantic import BaseModel

from paintstock.domain.stock.records import ProductRecord

CRITICAL_SHARE = 0.25

CategoryStatus = Literal["critical", "low", "good"]


def category_status(low: int, critical: int) -> CategoryStatus:
    """Worst state among the category's products."""
    if critical > 0:
        return "critical"
    if low > 0:
        return "low"
    return "good"


class CategoryStock(BaseModel):
    """Stock held in one category and how many of its products run short."""

    category: str
    stock: int
    low: int
    critical: int
    total: int
    status: CategoryStatus = "good"


class InventorySummary(BaseModel):
    """Category breakdown, largest stock first, with shop-wide counts."""

    categories: list[CategoryStock]
    total_stock: int
    total_products: int
    low_stock_count: int
    critical_count: int


def summarize_inventory(products: Iterable[ProductRecord]) -> InventorySummary:
    """Aggregate stock per category at product level.

    A product's stock and minimum are the sums over its bases (a base with no
    minimum counts 0). It is low when ``0 < stock <= min`` and critical when
    ``stock <= min * 0.25``; the two checks are independent, so an empty
    product with no minimum counts as critical.

    Examples:
        bases 2/10 and 1/10 -> stock 3, min 20: low and critical
        bases 30/10 and 0/5 -> stock 30, min 15: neither

    """
    categories: dict[str, dict[str, int]] = {}
    total_stock = low_count = critical_count = 0
    products = list(products)

    for product in products:
        name = product.category or "Uncategorized"
        stats = categories.setdefault(name, {"stock": 0, "low": 0, "critical": 0, "total": 0})

        stock = product.total_stock
        minimum = sum(price.min_stock_level or 0 for price in product.base_prices)

        stats["stock"] += stock
        stats["total"] += 1
        if 0 < stock <= minimum:
            stats["low"] += 1
            low_count += 1
        if stock <= minimum * CRITICAL_SHARE:
            stats["critical"] += 1
            critical_count += 1
        total_stock += stock

    rows = [
        CategoryStock(
            category=name, status=category_status(stats["low"], stats["critical"]), **stats
        )
        for name, stats in categories.items()
    ]
    rows.sort(key=lambda row: row.stock, reverse=True)

    return InventorySummary(
        categories=rows,
        total_stock=total_stock,
        total_products=len(products),
        low_stock_count=low_count,
        critical_count=critical_count,
    )
