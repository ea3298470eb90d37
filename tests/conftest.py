"""
Pytest fixtures for the stockledger test suite.

Every test gets a fresh in-memory SQLite database. StaticPool keeps a single
connection so the test session and the API's request sessions see the same data.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stockledger.database import Base, get_db
from stockledger.main import app
from stockledger.models.entry import Entry
from stockledger.models.stock import Stock
from stockledger.schemas.branch import BranchCreate
from stockledger.schemas.entry import EntryCreate
from stockledger.schemas.product import ProductCreate
from stockledger.schemas.supplier import SupplierCreate
from stockledger.services import branch_service, product_service, stock_ledger, supplier_service


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Reference data
# =============================================================================


@pytest.fixture
def product(db):
    return product_service.create_product(
        db,
        ProductCreate(
            product_code="NPK-151515",
            product_name="NPK 15-15-15 Compound",
            category="Compound",
            unit="bag",
            cost_price=18.0,
            sell_price=24.5,
        ),
    )


@pytest.fixture
def other_product(db):
    return product_service.create_product(
        db,
        ProductCreate(product_code="UREA-46", product_name="Urea 46% N", unit="", cost_price=15.0, sell_price=19.0),
    )


@pytest.fixture
def branch(db):
    return branch_service.create_branch(db, BranchCreate(branch_name="Main Warehouse", branch_code="MAIN"))


@pytest.fixture
def other_branch(db):
    return branch_service.create_branch(db, BranchCreate(branch_name="North Depot", branch_code="NORTH"))


@pytest.fixture
def supplier(db):
    return supplier_service.create_supplier(
        db, SupplierCreate(supplier_name="Agro Supply", company_name="Agro Supply Co.")
    )


@pytest.fixture
def add_entry(db, product, branch, supplier):
    """Create an entry through the ledger; defaults to the product/branch/supplier fixtures."""

    def _add(quantity, product_id=None, branch_id=None, **kwargs):
        data = EntryCreate(
            product_id=product_id or product.id,
            supplier_id=supplier.id,
            branch_id=branch_id or branch.id,
            quantity=quantity,
            entry_price=kwargs.pop("entry_price", 18.0),
            **kwargs,
        )
        return stock_ledger.create_entry(db, data)

    return _add


def _stock_quantity(db, product_id, branch_id):
    stock = db.query(Stock).filter(Stock.product_id == product_id, Stock.branch_id == branch_id).first()
    return None if stock is None else stock.quantity


@pytest.fixture
def stock_quantity(db):
    """Current stock quantity for a (product, branch) pair, None when no row exists."""
    return lambda product_id, branch_id: _stock_quantity(db, product_id, branch_id)


@pytest.fixture
def assert_consistent(db):
    """Assert every stock row equals the sum of its pair's entries."""

    def _check():
        sums = {
            (p, b): total
            for p, b, total in db.query(Entry.product_id, Entry.branch_id, func.sum(Entry.quantity))
            .group_by(Entry.product_id, Entry.branch_id)
            .all()
        }
        stocks = {(s.product_id, s.branch_id): s.quantity for s in db.query(Stock).all()}
        for pair, total in sums.items():
            assert stocks.get(pair) == total, f"stock for {pair} is {stocks.get(pair)}, entries sum to {total}"
        for pair, quantity in stocks.items():
            assert quantity >= 0
            if pair not in sums:
                assert quantity == 0, f"stock for {pair} is {quantity} with no entries"

    return _check
