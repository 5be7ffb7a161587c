"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os

# Settings are read at import time of paintstock.db.session
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_AUTO_CREATE", "false")
os.environ.setdefault("LOG_TO_STDOUT", "false")

from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from paintstock.db.models import Base, ColorBase, Product, ProductPrice, Transaction, utc_now
from paintstock.domain.stock.records import ProductRecord, StockPriceRecord, TransactionRecord

REPORT_DAY = date(2025, 3, 10)


def make_product(
    product_id: int = 1,
    name: str = "Fenzi Silk",
    category: str | None = "Interior Emulsion",
    prices: list[dict] | None = None,
    **kwargs,
) -> ProductRecord:
    """Build a ProductRecord with per-base price rows given as dicts."""
    base_prices = [
        StockPriceRecord(product_id=product_id, **price) for price in (prices or [])
    ]
    return ProductRecord(
        id=product_id, name=name, category=category, base_prices=base_prices, **kwargs
    )


def make_tx(
    type: str,
    quantity: int,
    when: datetime,
    product_id: int = 1,
    base_id: int | None = 1,
    **kwargs,
) -> TransactionRecord:
    """Build a TransactionRecord dated ``when``."""
    kwargs.setdefault("created_at", when)
    return TransactionRecord(
        product_id=product_id,
        base_id=base_id,
        type=type,
        quantity=quantity,
        transaction_date=when,
        **kwargs,
    )


def seed_inventory(session: Session, now: datetime) -> dict[str, int]:
    """Insert a small paint catalogue and its transactions.

    Timestamps are stored as naive UTC; ``now`` should come from ``utc_now()``.

    Layout (stock / min / max):
    - Fenzi Silk 4L (Interior): White 30/10/50, Deep 2/10/40
    - Jotashield 20L (Exterior): White 4/-/30 (product min 10), Deep 0/5/20
    - Wood Varnish 1L (Wood): Clear 3/4/-

    Transactions on REPORT_DAY for Fenzi Silk White: purchase 10, sale 3.
    """
    white = ColorBase(name="White")
    deep = ColorBase(name="Deep")
    clear = ColorBase(name="Clear")
    session.add_all([white, deep, clear])
    session.flush()

    silk = Product(name="Fenzi Silk", size="4L", unit="pcs", category="Interior Emulsion")
    shield = Product(
        name="Jotashield",
        size="20L",
        unit="pcs",
        category="Exterior Acrylic",
        supplier="Jotun Ethiopia",
        min_stock_level=10,
    )
    varnish = Product(name="Wood Varnish", size="1L", category="Wood")
    session.add_all([silk, shield, varnish])
    session.flush()

    session.add_all(
        [
            ProductPrice(
                product_id=silk.id,
                base_id=white.id,
                unit_price=500.0,
                stock_level=30,
                min_stock_level=10,
                max_stock_level=50,
            ),
            ProductPrice(
                product_id=silk.id,
                base_id=deep.id,
                unit_price=520.0,
                stock_level=2,
                min_stock_level=10,
                max_stock_level=40,
            ),
            ProductPrice(
                product_id=shield.id,
                base_id=white.id,
                unit_price=2400.0,
                stock_level=4,
                min_stock_level=None,
                max_stock_level=30,
            ),
            ProductPrice(
                product_id=shield.id,
                base_id=deep.id,
                unit_price=2450.0,
                stock_level=0,
                min_stock_level=5,
                max_stock_level=20,
            ),
            ProductPrice(
                product_id=varnish.id,
                base_id=clear.id,
                unit_price=300.0,
                stock_level=3,
                min_stock_level=4,
                max_stock_level=None,
            ),
        ]
    )

    report_noon = datetime(REPORT_DAY.year, REPORT_DAY.month, REPORT_DAY.day, 12)
    session.add_all(
        [
            Transaction(
                type="purchase",
                product_id=silk.id,
                base_id=white.id,
                quantity=10,
                unit_price=450.0,
                total_amount=4500.0,
                status="completed",
                transaction_date=report_noon,
                created_at=now - timedelta(minutes=30),
            ),
            Transaction(
                type="sale",
                product_id=silk.id,
                base_id=white.id,
                quantity=3,
                unit_price=500.0,
                total_amount=1500.0,
                status="completed",
                transaction_date=report_noon + timedelta(hours=2),
                created_at=now - timedelta(minutes=20),
            ),
            Transaction(
                type="sale",
                product_id=shield.id,
                base_id=white.id,
                quantity=2,
                unit_price=2400.0,
                total_amount=4800.0,
                status="completed",
                transaction_date=report_noon - timedelta(days=3),
                created_at=now - timedelta(minutes=10),
            ),
        ]
    )
    session.commit()

    return {
        "silk": silk.id,
        "shield": shield.id,
        "varnish": varnish.id,
        "white": white.id,
        "deep": deep.id,
        "clear": clear.id,
    }


@pytest.fixture
def db() -> Session:
    """Create in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    session = Session(engine)
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def seeded(db) -> dict[str, int]:
    """Seeded catalogue ids (see seed_inventory)."""
    return seed_inventory(db, utc_now())


@pytest.fixture
def client(db, seeded):
    """Test client bound to the seeded database."""
    from paintstock.web.deps import get_db
    from paintstock.web.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def shop_timezone(monkeypatch):
    """Pin the shop timezone for a test; returns a setter."""
    from paintstock.core.config import get_settings

    def set_zone(name: str = "Africa/Addis_Ababa") -> str:
        monkeypatch.setenv("APP_TIMEZONE", name)
        get_settings.cache_clear()
        return name

    set_zone()
    yield set_zone
    get_settings.cache_clear()
