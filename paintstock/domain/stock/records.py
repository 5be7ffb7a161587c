"""Typed records for inventory computations.

Input records are validated when rows leave the database layer; output rows
are what the dashboard and reports serialize. Missing numeric values are
coerced to 0 here so the computations never see None.

Timestamps are naive wall-clock datetimes in the shop's local timezone.
Timezone-aware values are converted to UTC and made naive; loaders that know
the local zone convert before building records.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Urgency = Literal["critical", "warning", "low"]
StockState = Literal["out_of_stock", "low_stock", "in_stock"]


class TransactionType(str, Enum):
    """Transaction kinds recorded against a product×base pair."""

    SALE = "sale"
    PURCHASE = "purchase"
    STOCK_IN = "stock_in"
    STOCK_OUT = "stock_out"
    RETURN = "return"


# Types counted as daily receiving / issuance in the stock status report
RECEIVING_TYPES = frozenset({TransactionType.STOCK_IN, TransactionType.PURCHASE})
ISSUANCE_TYPES = frozenset({TransactionType.SALE, TransactionType.STOCK_OUT})


class StockPriceRecord(BaseModel):
    """Current price and stock snapshot of one product×base pair."""

    product_id: int
    base_id: int
    base_name: str = "Unknown"
    unit_price: float = 0.0
    stock_level: int = 0
    min_stock_level: int | None = None  # None = not set for this base
    max_stock_level: int = 0

    @field_validator("unit_price", "stock_level", "max_stock_level", mode="before")
    @classmethod
    def zero_if_missing(cls, v):
        return 0 if v is None else v

    @field_validator("base_name", mode="before")
    @classmethod
    def default_base_name(cls, v):
        return v or "Unknown"


class ProductRecord(BaseModel):
    """Product with its per-base price rows."""

    id: int
    name: str
    size: str | None = None
    unit: str | None = None
    category: str | None = None
    supplier: str | None = None
    min_stock_level: int | None = None
    base_prices: list[StockPriceRecord] = Field(default_factory=list)

    @property
    def total_stock(self) -> int:
        """Total on-hand quantity across all bases."""
        return sum(price.stock_level for price in self.base_prices)

    def effective_min_stock(self, price: StockPriceRecord) -> int:
        """Per-base minimum, falling back to the product-level minimum."""
        if price.min_stock_level is not None:
            return price.min_stock_level
        return self.min_stock_level or 0

    def category_contains(self, word: str) -> bool:
        """Case-insensitive substring check on the category."""
        return word in (self.category or "").lower()


class TransactionRecord(BaseModel):
    """One posted transaction."""

    id: int | None = None
    product_id: int
    base_id: int | None = None
    type: TransactionType
    quantity: int = 0
    total_amount: float = 0.0
    transaction_date: datetime | None = None
    created_at: datetime | None = None
    product_name: str | None = None
    product_size: str | None = None
    base_name: str | None = None

    @field_validator("quantity", "total_amount", mode="before")
    @classmethod
    def zero_if_missing(cls, v):
        return 0 if v is None else v

    @field_validator("transaction_date", "created_at")
    @classmethod
    def naive_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @property
    def occurred_at(self) -> datetime | None:
        """Business timestamp: transaction date, else creation time."""
        return self.transaction_date or self.created_at


# =============================================================================
# Derived rows
# =============================================================================


class StockStatusRow(BaseModel):
    """Daily stock movement of one product×base pair."""

    model_config = ConfigDict(frozen=True)

    product_id: int
    base_id: int
    product_name: str
    size: str
    base_name: str
    beginning_balance: int
    daily_receiving: int
    daily_issuance: int
    ending_balance: int
    reorder_point: int
    variation: int
    economic_order_quantity: int
    maximum_stock: int
    quantity_to_order: int
    avg_daily_sales: float = 0.0  # trailing 7-day sale rate, informational


class StockStatusReport(BaseModel):
    """Stock status rows split into the Interior and Exterior report tables."""

    as_of: date
    interior: list[StockStatusRow] = Field(default_factory=list)
    exterior: list[StockStatusRow] = Field(default_factory=list)


class LowStockItem(BaseModel):
    """Under-stocked product×base pair with its urgency tier."""

    id: str
    product_id: int
    base_id: int
    product_name: str
    base_name: str
    current_stock: int
    min_stock: int
    stock_percentage: float
    urgency: Urgency
    unit: str = "pcs"
    size: str | None = None
    supplier: str | None = None
    category: str = "Uncategorized"
    unit_price: float = 0.0


class OutOfStockItem(BaseModel):
    """Product×base pair with nothing on hand."""

    id: str
    product_id: int
    base_id: int
    product_name: str
    base_name: str
    size: str | None = None
    category: str = "Uncategorized"
    min_stock: int = 0
