"""
Pytest configuration and fixtures.

Every test gets a fresh in-memory SQLite database; the API dependency
``get_db`` is overridden to hand out sessions bound to it.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.db.base import Base
from app.main import app
from app.models.inventory import Item, Batch, Supplier


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def today():
    return date.today()


@pytest.fixture
def seeded(db_session, today):
    """
    Two items:
    - Composite (10.00, alert 30 days): batch A low (5 <= 5), batch B fine
    - Gloves (2.50, alert 7 days): batch C expires in 3 days, batch D no expiry
    """
    supplier = Supplier(company_name="Dentsply Supplies")
    db_session.add(supplier)
    db_session.flush()

    composite = Item(
        item_name="Composite Resin A2",
        unit_price=Decimal("10.00"),
        expiry_alert_days=30,
        supplier_id=supplier.supplier_id,
        batch_tracking=True,
    )
    gloves = Item(
        item_name="Nitrile Gloves M",
        unit_of_measurements="box",
        unit_price=Decimal("2.50"),
        expiry_alert_days=7,
    )
    db_session.add_all([composite, gloves])
    db_session.flush()

    batches = [
        Batch(item_id=composite.item_id, current_stock=5, minimum_stock=5,
              expiry_date=today + timedelta(days=90), stock_date=today),
        Batch(item_id=composite.item_id, current_stock=20, minimum_stock=5,
              expiry_date=today + timedelta(days=200), stock_date=today),
        Batch(item_id=gloves.item_id, current_stock=40, minimum_stock=10,
              expiry_date=today + timedelta(days=3), stock_date=today),
        Batch(item_id=gloves.item_id, current_stock=8, minimum_stock=10,
              expiry_date=None, stock_date=today),
    ]
    db_session.add_all(batches)
    db_session.commit()
    return {
        "supplier": supplier,
        "composite": composite,
        "gloves": gloves,
        "batches": batches,
    }
