"""Stock status, low-stock ranking and reorder logic (pure functions)."""

from __future__ import annotations

from paintstock.domain.stock.daily_status import (
    STOCK_STATUS_COLUMNS,
    STOCK_STATUS_HEADERS,
    calculate_stock_status,
    to_export_row,
)
from paintstock.domain.stock.levels import (
    count_low_stock,
    out_of_stock_items,
    out_of_stock_rows,
    stock_state,
)
from paintstock.domain.stock.low_stock import classify_low_stock

__all__ = [
    "STOCK_STATUS_COLUMNS",
    "STOCK_STATUS_HEADERS",
    "calculate_stock_status",
    "classify_low_stock",
    "count_low_stock",
    "out_of_stock_items",
    "out_of_stock_rows",
    "stock_state",
    "to_export_row",
]
