"""SQLAlchemy ORM models for the paint inventory database.

This module defines the persistence boundary the reports read from:
- Reference data (Products, color Bases)
- Per product×base pricing and stock levels (ProductPrice)
- Fact table (Transactions: sales, purchases, stock movements, returns)

Stock levels are maintained by the transaction posting logic; report code
only reads snapshots of these tables.

Timestamps are stored as naive UTC. Conversion to the shop timezone happens
when rows are loaded (paintstock.services.inventory_data).
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    """Current time in the storage convention (naive UTC)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


# =============================================================================
# Reference Tables
# =============================================================================


class Product(Base):
    """Paint product (one per name×size), stocked per color base."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), index=True)
    size: Mapped[str | None] = mapped_column(String(50), nullable=True)  # e.g. "4L", "20L"
    unit: Mapped[str | None] = mapped_column(String(20), nullable=True)  # "pcs"
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)  # "Interior Emulsion"
    supplier: Mapped[str | None] = mapped_column(String(200), nullable=True)
    min_stock_level: Mapped[int | None] = mapped_column(
        Integer, nullable=True
    )  # Fallback when the base row has none


class ColorBase(Base):
    """Color/tint base a product is sold in."""

    __tablename__ = "bases"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True)


class ProductPrice(Base):
    """Price and stock thresholds for a product×base pair."""

    __tablename__ = "product_prices"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), index=True
    )
    base_id: Mapped[int] = mapped_column(ForeignKey("bases.id", ondelete="RESTRICT"), index=True)
    unit_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    stock_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    min_stock_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_stock_level: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (UniqueConstraint("product_id", "base_id", name="uq_price_product_base"),)


# =============================================================================
# Fact Tables
# =============================================================================


class Transaction(Base):
    """Stock movement or commercial transaction.

    type: sale | purchase | stock_in | stock_out | return
    """

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(20), index=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="RESTRICT"), index=True
    )
    base_id: Mapped[int | None] = mapped_column(
        ForeignKey("bases.id", ondelete="RESTRICT"), index=True, nullable=True
    )
    size: Mapped[str | None] = mapped_column(String(50), nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, default=0)
    unit_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_amount: Mapped[float] = mapped_column(Float, default=0.0)
    status: Mapped[str] = mapped_column(String(20), default="pending")  # pending|completed|cancelled
    reference: Mapped[str | None] = mapped_column(String(100), nullable=True)
    transaction_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=False), index=True, nullable=True
    )  # Business date (UTC)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), default=utc_now, index=True
    )  # Row creation (UTC)
