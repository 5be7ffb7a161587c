"""Tests for reorder submission."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from sqlalchemy import select

from paintstock.db.models import ProductPrice, Transaction, utc_now
from paintstock.domain.stock.reorder import ReorderError
from paintstock.services.reorder import UnknownPairError, submit_reorder


def test_reorder_defaults(db, seeded):
    tx = submit_reorder(db, product_id=seeded["silk"], base_id=seeded["deep"])

    assert tx.id is not None
    assert tx.type == "stock_in"
    assert tx.status == "pending"
    assert tx.quantity == 20
    assert tx.unit_price == 520.0
    assert tx.total_amount == 10400.0
    assert tx.size == "4L"
    assert tx.reference.startswith("REORDER-")
    assert abs(tx.transaction_date - utc_now()) < timedelta(seconds=5)


def test_reorder_uses_product_minimum_fallback(db, seeded):
    tx = submit_reorder(db, product_id=seeded["shield"], base_id=seeded["white"])

    assert tx.quantity == 20


def test_reorder_explicit_values(db, seeded, shop_timezone):
    tx = submit_reorder(
        db,
        product_id=seeded["silk"],
        base_id=seeded["white"],
        quantity=12,
        unit_price=480.5,
        status="completed",
        transaction_date=datetime(2025, 3, 11, 8),
        reference="PO-2025-031",
    )

    assert tx.total_amount == 5766.0
    assert tx.status == "completed"
    assert tx.reference == "PO-2025-031"
    # local 08:00 in Addis Ababa is stored as 05:00 UTC
    assert tx.transaction_date == datetime(2025, 3, 11, 5)


def test_reorder_does_not_touch_stock(db, seeded):
    submit_reorder(db, product_id=seeded["silk"], base_id=seeded["deep"])

    price = db.execute(
        select(ProductPrice).where(
            ProductPrice.product_id == seeded["silk"], ProductPrice.base_id == seeded["deep"]
        )
    ).scalar_one()
    assert price.stock_level == 2


def test_unknown_pair(db, seeded):
    with pytest.raises(UnknownPairError):
        submit_reorder(db, product_id=seeded["varnish"], base_id=seeded["white"])


def test_invalid_quantity_not_persisted(db, seeded):
    with pytest.raises(ReorderError):
        submit_reorder(db, product_id=seeded["silk"], base_id=seeded["deep"], quantity=0)

    count = len(db.execute(select(Transaction)).scalars().all())
    assert count == 3
