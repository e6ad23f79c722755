"""Pytest fixtures: in-memory SQLite store, seed factories and API client."""
from datetime import timedelta
from decimal import Decimal
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import Base, build_engine, get_db
from app.main import app
from app.shared.database.models import Customer, Discount, Product, Promotion, User
from app.shared.enums import DiscountType, PromotionType
from app.shared.time import utc_now


@pytest.fixture
def engine():
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory) -> Iterator[TestClient]:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


# ==================== SEED ====================

@pytest.fixture
def user(db) -> User:
    seller = User(email="vendedor@operantis.test", first_name="Ana", last_name="Pérez", role="SELLER")
    db.add(seller)
    db.commit()
    db.refresh(seller)
    return seller


@pytest.fixture
def auth_headers(user):
    return {"X-User-Id": str(user.id)}


@pytest.fixture
def customer(db) -> Customer:
    buyer = Customer(name="Carlos Gómez", email="carlos@cliente.test", phone="555-0101")
    db.add(buyer)
    db.commit()
    db.refresh(buyer)
    return buyer


@pytest.fixture
def make_product(db):
    counter = {"n": 0}

    def _make(price="10.00", stock=100, name=None):
        counter["n"] += 1
        product = Product(
            name=name or f"Producto {counter['n']}",
            sku=f"SKU-{counter['n']:04d}",
            price=Decimal(price),
            stock=stock
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def make_discount(db):
    def _make(
        code="SAVE10",
        type=DiscountType.PERCENTAGE,
        value="10",
        min_purchase=None,
        max_uses=None,
        used_count=0,
        is_active=True,
        start_date=None,
        end_date=None
    ):
        now = utc_now()
        discount = Discount(
            code=code,
            type=type,
            value=Decimal(value),
            min_purchase=Decimal(min_purchase) if min_purchase is not None else None,
            start_date=start_date or now - timedelta(days=1),
            end_date=end_date or now + timedelta(days=30),
            max_uses=max_uses,
            used_count=used_count,
            is_active=is_active
        )
        db.add(discount)
        db.commit()
        db.refresh(discount)
        return discount

    return _make


@pytest.fixture
def make_promotion(db):
    def _make(
        type=PromotionType.FLAT_RATE,
        conditions=None,
        is_active=True,
        start_date=None,
        end_date=None,
        name="Promo"
    ):
        now = utc_now()
        promotion = Promotion(
            name=name,
            type=type,
            conditions=conditions if conditions is not None else {
                "minimum_amount": "100", "discount_amount": "15"
            },
            start_date=start_date or now - timedelta(days=1),
            end_date=end_date or now + timedelta(days=30),
            is_active=is_active
        )
        db.add(promotion)
        db.commit()
        db.refresh(promotion)
        return promotion

    return _make
