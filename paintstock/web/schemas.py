"""Pydantic schemas for API requests and responses.

Computed rows (KPI cards, low-stock and out-of-stock items, stock status rows) are served
with their domain models; this module holds the API-only shapes.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from paintstock.domain.stock.reorder import ReorderStatus


# Reorder schemas
class ReorderRequest(BaseModel):
    """Request to reorder a product×base.

    Omitted quantity defaults to twice the minimum stock; omitted unit price
    to the current price.
    """

    product_id: int
    base_id: int
    quantity: int | None = Field(None, description="Units to order")
    unit_price: float | None = Field(None, description="Price per unit")
    status: ReorderStatus = "pending"
    transaction_date: datetime | None = None
    reference: str | None = Field(None, max_length=100)


class TransactionDTO(BaseModel):
    """Created transaction."""

    id: int
    type: str
    product_id: int
    base_id: int | None = None
    size: str | None = None
    quantity: int
    unit_price: float | None = None
    total_amount: float
    status: str
    reference: str | None = None
    transaction_date: datetime | None = None

    class Config:
        from_attributes = True
