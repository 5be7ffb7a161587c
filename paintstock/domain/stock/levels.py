"""Stock state of a product×base pair relative to its minimum level."""

from __future__ import annotations

from collections.abc import Iterable

from paintstock.domain.stock.records import (
    OutOfStockItem,
    ProductRecord,
    StockPriceRecord,
    StockState,
)


def stock_state(stock_level: int | None, min_stock_level: int | None) -> StockState:
    """Classify a stock level.

    Examples:
        >>> stock_state(0, 10)
        'out_of_stock'
        >>> stock_state(10, 10)
        'low_stock'
        >>> stock_state(11, 10)
        'in_stock'

    """
    if not stock_level:
        return "out_of_stock"
    if stock_level <= (min_stock_level or 0):
        return "low_stock"
    return "in_stock"


def out_of_stock_items(
    products: Iterable[ProductRecord],
) -> list[tuple[ProductRecord, StockPriceRecord]]:
    """Pairs with nothing on hand, in product order."""
    return [
        (product, price)
        for product in products
        for price in product.base_prices
        if stock_state(price.stock_level, product.effective_min_stock(price)) == "out_of_stock"
    ]


def out_of_stock_rows(products: Iterable[ProductRecord]) -> list[OutOfStockItem]:
    """Empty pairs shaped for the out-of-stock panel."""
    return [
        OutOfStockItem(
            id=f"{product.id}-{price.base_id}",
            product_id=product.id,
            base_id=price.base_id,
            product_name=product.name,
            base_name=price.base_name,
            size=product.size,
            category=product.category or "Uncategorized",
            min_stock=product.effective_min_stock(price),
        )
        for product, price in out_of_stock_items(products)
    ]


def count_low_stock(products: Iterable[ProductRecord]) -> int:
    """Number of pairs at or below their minimum (excluding empty ones)."""
    return sum(
        1
        for product in products
        for price in product.base_prices
        if stock_state(price.stock_level, product.effective_min_stock(price)) == "low_stock"
    )
