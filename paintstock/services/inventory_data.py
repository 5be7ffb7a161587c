"""Load inventory rows from the database and shape them into typed records.

This is the only place report code touches the database: rows are read with
SQLAlchemy, validated into pydantic records and handed to the pure domain
functions. Rows that fail validation are skipped and logged.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from paintstock.core.config import get_settings
from paintstock.core.metrics import data_fetch_errors_total
from paintstock.db.models import ColorBase, Product, ProductPrice, Transaction, utc_now
from paintstock.domain.stock.daily_status import RECENT_WINDOW_DAYS
from paintstock.domain.stock.records import ProductRecord, StockPriceRecord, TransactionRecord

logger = logging.getLogger(__name__)


class DataFetchError(RuntimeError):
    """Inventory data could not be read from the database."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source} fetch error: {message}")
        self.source = source


def local_tz() -> ZoneInfo:
    """Configured shop timezone."""
    return ZoneInfo(get_settings().app_timezone)


def local_now() -> datetime:
    """Current local wall time (naive)."""
    return to_local(utc_now())


def to_local(ts: datetime | None) -> datetime | None:
    """Convert a stored timestamp to naive local wall time.

    Naive values are in the storage convention (UTC); aware values are
    converted from their own offset.

    Examples:
        Shop timezone Africa/Addis_Ababa (UTC+3):
        to_local(datetime(2025, 3, 9, 22, 30)) -> datetime(2025, 3, 10, 1, 30)

    """
    if ts is None:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(local_tz()).replace(tzinfo=None)


def to_storage(ts: datetime) -> datetime:
    """Convert a timestamp to the storage convention (naive UTC).

    Naive values are read as local wall time.
    """
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=local_tz())
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


def load_products(db: Session, product_ids: list[int] | None = None) -> list[ProductRecord]:
    """Products with their per-base price/stock rows, ordered by name.

    Args:
        db: Database session
        product_ids: Restrict to these products (optional)

    Returns:
        List of ProductRecord

    Raises:
        DataFetchError: If the query fails

    """
    product_stmt = select(Product).order_by(Product.name.asc(), Product.id.asc())
    price_stmt = (
        select(ProductPrice, ColorBase.name.label("base_name"))
        .outerjoin(ColorBase, ProductPrice.base_id == ColorBase.id)
        .order_by(ProductPrice.product_id, ProductPrice.id)
    )
    if product_ids is not None:
        product_stmt = product_stmt.where(Product.id.in_(product_ids))
        price_stmt = price_stmt.where(ProductPrice.product_id.in_(product_ids))

    try:
        products = db.execute(product_stmt).scalars().all()
        price_rows = db.execute(price_stmt).all()
    except SQLAlchemyError as e:
        data_fetch_errors_total.labels(source="products").inc()
        logger.error("products_fetch_failed", extra={"error": str(e)}, exc_info=True)
        raise DataFetchError("products", str(e)) from e

    prices_by_product: dict[int, list[StockPriceRecord]] = {}
    for row in price_rows:
        price = row.ProductPrice
        try:
            record = StockPriceRecord(
                product_id=price.product_id,
                base_id=price.base_id,
                base_name=row.base_name,
                unit_price=price.unit_price,
                stock_level=price.stock_level,
                min_stock_level=price.min_stock_level,
                max_stock_level=price.max_stock_level,
            )
        except ValidationError as e:
            logger.warning(
                "price_row_invalid",
                extra={"price_id": price.id, "errors": e.errors(include_url=False)},
            )
            continue
        prices_by_product.setdefault(price.product_id, []).append(record)

    records = []
    for product in products:
        try:
            records.append(
                ProductRecord(
                    id=product.id,
                    name=product.name,
                    size=product.size,
                    unit=product.unit,
                    category=product.category,
                    supplier=product.supplier,
                    min_stock_level=product.min_stock_level,
                    base_prices=prices_by_product.get(product.id, []),
                )
            )
        except ValidationError as e:
            logger.warning(
                "product_row_invalid",
                extra={"product_id": product.id, "errors": e.errors(include_url=False)},
            )

    logger.debug("products_loaded", extra={"products": len(records), "prices": len(price_rows)})
    return records


def load_transactions(
    db: Session,
    *,
    since: datetime | None = None,
    limit: int | None = None,
) -> list[TransactionRecord]:
    """Transactions with product and base names, newest first.

    Timestamps on the returned records are local wall time.

    Args:
        db: Database session
        since: Only rows whose business timestamp is at or after this local time
        limit: Maximum number of rows (latest by created_at)

    Returns:
        List of TransactionRecord

    Raises:
        DataFetchError: If the query fails

    """
    stmt = (
        select(
            Transaction,
            Product.name.label("product_name"),
            Product.size.label("product_size"),
            ColorBase.name.label("base_name"),
        )
        .outerjoin(Product, Transaction.product_id == Product.id)
        .outerjoin(ColorBase, Transaction.base_id == ColorBase.id)
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
    )
    if since is not None:
        stmt = stmt.where(
            func.coalesce(Transaction.transaction_date, Transaction.created_at)
            >= to_storage(since)
        )
    if limit is not None:
        stmt = stmt.limit(limit)

    try:
        rows = db.execute(stmt).all()
    except SQLAlchemyError as e:
        data_fetch_errors_total.labels(source="transactions").inc()
        logger.error("transactions_fetch_failed", extra={"error": str(e)}, exc_info=True)
        raise DataFetchError("transactions", str(e)) from e

    records = []
    for row in rows:
        tx = row.Transaction
        try:
            records.append(
                TransactionRecord(
                    id=tx.id,
                    product_id=tx.product_id,
                    base_id=tx.base_id,
                    type=tx.type,
                    quantity=tx.quantity,
                    total_amount=tx.total_amount,
                    transaction_date=to_local(tx.transaction_date),
                    created_at=to_local(tx.created_at),
                    product_name=row.product_name,
                    product_size=row.product_size,
                    base_name=row.base_name,
                )
            )
        except ValidationError as e:
            logger.warning(
                "transaction_row_invalid",
                extra={"transaction_id": tx.id, "errors": e.errors(include_url=False)},
            )

    return records


def load_report_transactions(db: Session, as_of: date) -> list[TransactionRecord]:
    """Transactions needed for one stock status day (trailing window included)."""
    window_start = datetime(as_of.year, as_of.month, as_of.day) - timedelta(
        days=RECENT_WINDOW_DAYS
    )
    return load_transactions(db, since=window_start)
