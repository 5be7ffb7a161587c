"""Reorder drafts for low-stock pairs.

A reorder is recorded as a ``stock_in`` transaction; stock levels change only
when the posting logic processes it.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from paintstock.domain.stock.records import TransactionType

ReorderStatus = Literal["pending", "completed", "cancelled"]


class ReorderError(ValueError):
    """Reorder request rejected by validation."""


class ReorderDraft(BaseModel):
    """Transaction fields for a reorder, ready to persist."""

    type: TransactionType = TransactionType.STOCK_IN
    product_id: int
    base_id: int
    size: str | None = None
    quantity: int
    unit_price: float
    total_amount: float
    status: ReorderStatus = "pending"
    transaction_date: datetime
    reference: str


def default_reorder_quantity(min_stock: int) -> int:
    """Suggested quantity: twice the minimum stock level."""
    return min_stock * 2


def default_reference(now: datetime | None = None) -> str:
    """Reference like REORDER-1717171717171 (epoch milliseconds)."""
    ts = now.timestamp() if now else time.time()
    return f"REORDER-{int(ts * 1000)}"


def build_reorder_transaction(
    *,
    product_id: int,
    base_id: int,
    quantity: int,
    unit_price: float,
    transaction_date: datetime,
    size: str | None = None,
    status: ReorderStatus = "pending",
    reference: str | None = None,
) -> ReorderDraft:
    """Validate a reorder and compute its total.

    Raises:
        ReorderError: If quantity or unit price is not positive

    """
    if quantity <= 0:
        raise ReorderError(f"Reorder quantity must be positive, got {quantity}")
    if unit_price <= 0:
        raise ReorderError(f"Reorder unit price must be positive, got {unit_price}")

    return ReorderDraft(
        product_id=product_id,
        base_id=base_id,
        size=size,
        quantity=quantity,
        unit_price=unit_price,
        total_amount=round(quantity * unit_price, 2),
        status=status,
        transaction_date=transaction_date,
        reference=reference or default_reference(),
    )
