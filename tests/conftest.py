"""
Pytest fixtures and configuration for Backoffice tests

Every test gets a fresh in-memory SQLite database with the full schema
and foreign keys enforced. Sample data is written through its own
session, so the session under test starts with nothing tracked.
"""
import os
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Never point tests at a real database
os.environ.setdefault("DATABASE_URL", "sqlite://")

from backoffice.core.database import build_engine, get_db, init_db  # noqa: E402
from backoffice.models import Category, Order, OrderItem, Payment, Product  # noqa: E402
from backoffice.repositories import (  # noqa: E402
    CategoryRepository, OrderRepository, ProductRepository, Repository,
)
from backoffice.services import DashboardService, OrderService, ProductService  # noqa: E402


@pytest.fixture
def engine():
    """
    In-memory database shared by every connection of the test

    Scope: function (new database per test)
    """
    db_engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    """
    Session for the test body

    Automatically closed after the test
    """
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def other_session(session_factory):
    """A second session, to check what actually reached the database"""
    session = session_factory()
    yield session
    session.close()


# ============================================================================
# Sample data
# ============================================================================

@pytest.fixture
def seed(session_factory):
    """
    Insert rows in a throwaway session and return them detached

    Attributes stay loaded (expire_on_commit=False) so tests can read ids.
    """
    def _seed(*rows):
        with session_factory(expire_on_commit=False) as session:
            session.add_all(rows)
            session.commit()
        return rows[0] if len(rows) == 1 else list(rows)

    return _seed


@pytest.fixture
def category(seed):
    return seed(Category(name="Coffee", description="Beans and ground coffee"))


@pytest.fixture
def other_category(seed):
    return seed(Category(name="Accessories"))


@pytest.fixture
def products(seed, category):
    """
    25 products, ids 1..25, in the Coffee category

    Price is 100 - n so catalog order is the reverse of price order;
    stock is n - 1, so products 1..6 have stock <= 5; every fifth one
    is featured.
    """
    return seed(*[
        Product(
            name=f"Product {n:02d}",
            price=Decimal(100 - n),
            stock=n - 1,
            is_featured=(n % 5 == 0),
            category_id=category.id,
        )
        for n in range(1, 26)
    ])


@pytest.fixture
def make_order(seed):
    """Insert an order, with optional payment and items"""
    def _make_order(total, order_date=None, status="Pending", payment_status=None, items=()):
        order = Order(
            total_amount=Decimal(total),
            order_date=order_date or datetime.now(timezone.utc),
            status=status,
            customer_name="Ada Lovelace",
            customer_email="ada@example.com",
        )
        for product_id, quantity, unit_price in items:
            order.items.append(
                OrderItem(product_id=product_id, quantity=quantity, unit_price=Decimal(unit_price))
            )
        if payment_status is not None:
            order.payment = Payment(amount=Decimal(total), payment_method="card", payment_status=payment_status)
        return seed(order)

    return _make_order


# ============================================================================
# Repositories and services
# ============================================================================

@pytest.fixture
def product_repo(db_session):
    return ProductRepository(db_session)


@pytest.fixture
def category_repo(db_session):
    return CategoryRepository(db_session)


@pytest.fixture
def order_repo(db_session):
    return OrderRepository(db_session)


@pytest.fixture
def product_service(product_repo, category_repo):
    return ProductService(product_repo, category_repo)


@pytest.fixture
def order_service(db_session, order_repo):
    return OrderService(order_repo, Repository(db_session, Payment))


@pytest.fixture
def fixed_now():
    return datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def dashboard_service(order_repo, product_repo, category_repo, fixed_now):
    return DashboardService(order_repo, product_repo, category_repo, clock=lambda: fixed_now)


# ============================================================================
# API
# ============================================================================

@pytest.fixture
def client(session_factory):
    """
    TestClient whose requests each get their own session on the test database
    """
    from fastapi.testclient import TestClient
    from backoffice.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
