"""Daily stock status and reorder quantities per product×base.

Reconstructs one report day's movement from the current stock snapshot and
the transaction log:
- Daily receiving / issuance from the day's transactions
- Beginning balance derived backward from the ending (current) balance
- Reorder point, EOQ heuristic, maximum stock and quantity to order

NO DATA ACCESS - pure functions only. Data access happens in services layer.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from paintstock.domain.stock.records import (
    ISSUANCE_TYPES,
    RECEIVING_TYPES,
    ProductRecord,
    StockPriceRecord,
    StockStatusReport,
    StockStatusRow,
    TransactionRecord,
    TransactionType,
)

RECENT_WINDOW_DAYS = 7

INTERIOR = "interior"
EXTERIOR = "exterior"

# Export header -> StockStatusRow field, in column order (spelling is part of the export format)
STOCK_STATUS_COLUMNS = [
    ("Product name", "product_name"),
    ("Size", "size"),
    ("Base", "base_name"),
    ("Begining balance", "beginning_balance"),
    ("Daily receiving(pcs)", "daily_receiving"),
    ("Daily issuance(pcs)", "daily_issuance"),
    ("Ending Balance(pcs)", "ending_balance"),
    ("Re-order Point (pcs)", "reorder_point"),
    ("Variation (pcs)", "variation"),
    ("Economic Order Quantity (pcs)", "economic_order_quantity"),
    ("Maximum Stock (pcs)", "maximum_stock"),
    ("Quantity to be ordered(pcs)", "quantity_to_order"),
]

STOCK_STATUS_HEADERS = [header for header, _ in STOCK_STATUS_COLUMNS]

PairKey = tuple[int, int | None]


def day_bounds(as_of: date) -> tuple[datetime, datetime]:
    """Return [start, end) of the calendar day."""
    day_start = datetime(as_of.year, as_of.month, as_of.day)
    return day_start, day_start + timedelta(days=1)


def transactions_between(
    transactions: Iterable[TransactionRecord], start: datetime, end: datetime
) -> list[TransactionRecord]:
    """Transactions whose business timestamp falls in [start, end)."""
    return [
        t for t in transactions if t.occurred_at is not None and start <= t.occurred_at < end
    ]


def sum_quantities(
    transactions: Iterable[TransactionRecord], types: frozenset[TransactionType]
) -> dict[PairKey, int]:
    """Sum quantities per (product_id, base_id) for the given types."""
    totals: dict[PairKey, int] = defaultdict(int)
    for t in transactions:
        if t.type in types:
            totals[(t.product_id, t.base_id)] += t.quantity
    return totals


def average_daily_sales(
    transactions: Iterable[TransactionRecord],
    as_of: date,
    window: int = RECENT_WINDOW_DAYS,
) -> dict[PairKey, float]:
    """Average daily sale quantity per pair over the days before ``as_of``.

    Window is [day_start - window days, day_start).

    Examples:
        14 units of pair (1, 2) sold during 2025-03-01..07
        -> average_daily_sales(txs, date(2025, 3, 8))[(1, 2)] == 2.0

    """
    day_start, _ = day_bounds(as_of)
    recent = transactions_between(transactions, day_start - timedelta(days=window), day_start)
    sold = sum_quantities(recent, frozenset({TransactionType.SALE}))
    return {key: qty / window for key, qty in sold.items()}


def report_buckets(product: ProductRecord) -> list[str]:
    """Report tables the product belongs to.

    Interior and exterior are checked independently: a category mentioning
    both lands in both tables, one mentioning neither in none.
    """
    buckets = []
    if product.category_contains(INTERIOR):
        buckets.append(INTERIOR)
    if product.category_contains(EXTERIOR):
        buckets.append(EXTERIOR)
    return buckets


def stock_status_row(
    product: ProductRecord,
    price: StockPriceRecord,
    receiving: int,
    issuance: int,
    avg_daily_sales: float = 0.0,
) -> StockStatusRow:
    """Build the status row of one pair from its day's movement.

    Args:
        product: Product the price row belongs to
        price: Current stock/threshold snapshot of the pair
        receiving: Units received today (stock_in + purchase)
        issuance: Units issued today (sale + stock_out)
        avg_daily_sales: Trailing sale rate, carried for reference only

    Returns:
        StockStatusRow

    Examples:
        min=10, max=50, stock=30 -> EOQ 40, maximum 50, order 20
        purchase 10, sale 3, stock=27 -> beginning 20

    """
    ending = price.stock_level
    beginning = max(0, ending - receiving + issuance)
    reorder_point = price.min_stock_level or 0
    max_level = price.max_stock_level

    # EOQ is a static max - min heuristic; the sale rate is not blended in
    eoq = max_level - reorder_point
    maximum_stock = max_level or reorder_point + eoq

    return StockStatusRow(
        product_id=product.id,
        base_id=price.base_id,
        product_name=product.name,
        size=product.size or "N/A",
        base_name=price.base_name,
        beginning_balance=beginning,
        daily_receiving=receiving,
        daily_issuance=issuance,
        ending_balance=ending,
        reorder_point=reorder_point,
        variation=ending - reorder_point,
        economic_order_quantity=eoq,
        maximum_stock=maximum_stock,
        quantity_to_order=max(0, maximum_stock - ending),
        avg_daily_sales=avg_daily_sales,
    )


def calculate_stock_status(
    as_of: date,
    products: Iterable[ProductRecord],
    transactions: Iterable[TransactionRecord],
) -> StockStatusReport:
    """Compute the daily stock status report.

    Current stock levels stand in for the day's ending balance, so the
    report is exact only when nothing has posted for a pair since ``as_of``.

    Args:
        as_of: Report day (time of day ignored)
        products: Products with their current price/stock rows
        transactions: Transaction history; filtered here by date

    Returns:
        StockStatusReport with interior and exterior rows, in product order

    """
    transactions = list(transactions)
    day_start, day_end = day_bounds(as_of)

    today = transactions_between(transactions, day_start, day_end)
    received = sum_quantities(today, RECEIVING_TYPES)
    issued = sum_quantities(today, ISSUANCE_TYPES)
    avg_sales = average_daily_sales(transactions, as_of)

    report = StockStatusReport(as_of=as_of)
    for product in products:
        buckets = report_buckets(product)
        if not buckets:
            continue

        for price in product.base_prices:
            key = (product.id, price.base_id)
            row = stock_status_row(
                product,
                price,
                receiving=received.get(key, 0),
                issuance=issued.get(key, 0),
                avg_daily_sales=avg_sales.get(key, 0.0),
            )
            if INTERIOR in buckets:
                report.interior.append(row)
            if EXTERIOR in buckets:
                report.exterior.append(row)

    return report


def to_export_row(row: StockStatusRow) -> dict[str, str | int]:
    """Map a status row onto the export column headers."""
    return {header: getattr(row, field) for header, field in STOCK_STATUS_COLUMNS}
