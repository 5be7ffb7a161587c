"""Low-stock detection and urgency ranking for the dashboard panel.

NO DATA ACCESS - pure functions only. Data access happens in services layer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from paintstock.domain.stock.levels import stock_state
from paintstock.domain.stock.records import LowStockItem, ProductRecord, Urgency

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10

# Upper bounds (inclusive) of stock as a percentage of the minimum level
CRITICAL_MAX_PCT = 25
WARNING_MAX_PCT = 50

URGENCY_RANK: dict[str, int] = {"critical": 0, "warning": 1, "low": 2}


def stock_percentage(stock_level: int, min_stock_level: int) -> float:
    """Stock as a percentage of the minimum level (0 when no minimum)."""
    if min_stock_level > 0:
        return stock_level / min_stock_level * 100
    return 0.0


def urgency_for(percentage: float) -> Urgency:
    """Map a stock percentage to its urgency tier.

    Examples:
        >>> urgency_for(25.0)
        'critical'
        >>> urgency_for(50.0)
        'warning'
        >>> urgency_for(75.0)
        'low'

    """
    if percentage <= CRITICAL_MAX_PCT:
        return "critical"
    if percentage <= WARNING_MAX_PCT:
        return "warning"
    return "low"


def classify_low_stock(
    products: Iterable[ProductRecord],
    limit: int = DEFAULT_LIMIT,
    default_supplier: str | None = None,
) -> list[LowStockItem]:
    """Find under-stocked pairs and rank them by urgency.

    A pair qualifies when 0 < stock <= effective minimum. Pairs without a
    stock level or a minimum are not tracked; empty pairs belong to the
    out-of-stock bucket instead.

    Args:
        products: Products with their per-base stock rows
        limit: Maximum number of rows returned
        default_supplier: Supplier shown when the product has none

    Returns:
        Rows sorted critical -> warning -> low (stable), at most ``limit``

    """
    candidates: list[LowStockItem] = []

    for product in products:
        if not product.base_prices:
            logger.debug("low_stock_no_base_prices", extra={"product_id": product.id})
            continue

        for price in product.base_prices:
            min_stock = product.effective_min_stock(price)
            if not price.stock_level or not min_stock:
                logger.debug(
                    "low_stock_skip_untracked",
                    extra={
                        "product_id": product.id,
                        "base_id": price.base_id,
                        "stock_level": price.stock_level,
                        "min_stock_level": min_stock,
                    },
                )
                continue

            if stock_state(price.stock_level, min_stock) != "low_stock":
                continue

            pct = stock_percentage(price.stock_level, min_stock)
            candidates.append(
                LowStockItem(
                    id=f"{product.id}-{price.base_id}",
                    product_id=product.id,
                    base_id=price.base_id,
                    product_name=product.name,
                    base_name=price.base_name,
                    current_stock=price.stock_level,
                    min_stock=min_stock,
                    stock_percentage=pct,
                    urgency=urgency_for(pct),
                    unit=product.unit or "pcs",
                    size=product.size,
                    supplier=product.supplier or default_supplier,
                    category=product.category or "Uncategorized",
                    unit_price=price.unit_price,
                )
            )

    # sorted() is stable, so ties keep input order
    ranked = sorted(candidates, key=lambda item: URGENCY_RANK[item.urgency])
    return ranked[: max(limit, 0)]
