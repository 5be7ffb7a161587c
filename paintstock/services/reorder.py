"""Reorder submission: records a stock_in transaction for a product×base."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from paintstock.core.metrics import reorders_submitted_total
from paintstock.db.models import Product, ProductPrice, Transaction, utc_now
from paintstock.domain.stock.reorder import (
    ReorderStatus,
    build_reorder_transaction,
    default_reorder_quantity,
)
from paintstock.services.inventory_data import to_storage

logger = logging.getLogger(__name__)


class UnknownPairError(LookupError):
    """No price row exists for the requested product×base."""


def submit_reorder(
    db: Session,
    *,
    product_id: int,
    base_id: int,
    quantity: int | None = None,
    unit_price: float | None = None,
    status: ReorderStatus = "pending",
    transaction_date: datetime | None = None,
    reference: str | None = None,
) -> Transaction:
    """Create the reorder transaction.

    Quantity defaults to twice the pair's minimum stock and unit price to its
    current price.

    Args:
        db: Database session
        product_id: Product to reorder
        base_id: Color base to reorder
        quantity: Units to order (optional)
        unit_price: Price per unit (optional)
        status: pending | completed | cancelled
        transaction_date: Reorder date; naive values are shop local time
            (default: now)
        reference: External reference (default: REORDER-<epoch ms>)

    Returns:
        Persisted Transaction

    Raises:
        UnknownPairError: If the product×base has no price row
        ReorderError: If quantity or unit price is not positive

    """
    row = db.execute(
        select(ProductPrice, Product)
        .join(Product, ProductPrice.product_id == Product.id)
        .where(ProductPrice.product_id == product_id, ProductPrice.base_id == base_id)
    ).first()
    if row is None:
        raise UnknownPairError(f"No price row for product {product_id} base {base_id}")

    price, product = row.ProductPrice, row.Product
    min_stock = (
        price.min_stock_level
        if price.min_stock_level is not None
        else product.min_stock_level or 0
    )

    draft = build_reorder_transaction(
        product_id=product_id,
        base_id=base_id,
        size=product.size,
        quantity=quantity if quantity is not None else default_reorder_quantity(min_stock),
        unit_price=unit_price if unit_price is not None else price.unit_price or 0,
        status=status,
        transaction_date=to_storage(transaction_date) if transaction_date else utc_now(),
        reference=reference,
    )

    tx = Transaction(**draft.model_dump(mode="python"))
    tx.type = draft.type.value
    db.add(tx)
    db.commit()
    db.refresh(tx)

    reorders_submitted_total.inc()
    logger.info(
        "reorder_submitted",
        extra={
            "transaction_id": tx.id,
            "product_id": product_id,
            "base_id": base_id,
            "quantity": draft.quantity,
            "total_amount": draft.total_amount,
            "reference": draft.reference,
        },
    )
    return tx
