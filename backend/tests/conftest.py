# Gestor Test Suite - Shared Configuration and Fixtures
#
# This module provides:
# - An in-memory SQLite database per test (schema created from the models)
# - User fixtures and bearer-token headers
# - A FastAPI TestClient wired to the test database
# - Small factories for customers and products

import os
from datetime import date, timedelta
from decimal import Decimal

# Settings are read on import, so the environment goes first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-at-least-32-characters")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gestor.core.database import get_db, init_db
from gestor.core.security import create_access_token, get_password_hash
from gestor.main import app
from gestor.models import User, Customer, Product, ProductVariant


# =============================================================================
# DATABASE
# =============================================================================

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# USERS
# =============================================================================

def _make_user(session, email: str) -> User:
    user = User(email=email, hashed_password=get_password_hash("senha123"), full_name=email.split("@")[0])
    session.add(user)
    session.commit()
    return user


@pytest.fixture
def user(db_session) -> User:
    return _make_user(db_session, "ana@loja.com")


@pytest.fixture
def other_user(db_session) -> User:
    return _make_user(db_session, "bruno@loja.com")


def auth_headers_for(user: User) -> dict:
    token = create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(user) -> dict:
    return auth_headers_for(user)


@pytest.fixture
def other_auth_headers(other_user) -> dict:
    return auth_headers_for(other_user)


# =============================================================================
# API CLIENT
# =============================================================================

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
# DATA FACTORIES
# =============================================================================

@pytest.fixture
def customer(db_session, user) -> Customer:
    customer = Customer(name="Ana", email="ana.cliente@email.com", user_id=user.id)
    db_session.add(customer)
    db_session.commit()
    return customer


@pytest.fixture
def shirt(db_session, user) -> Product:
    """Camiseta at 50.00 with an Azul (+5.00) and a GG (+10.00) variant"""
    product = Product(name="Camiseta", base_price=Decimal("50.00"), user_id=user.id)
    product.variants.append(ProductVariant(name="Azul", price_modifier=Decimal("5.00")))
    product.variants.append(ProductVariant(name="GG", price_modifier=Decimal("10.00")))
    db_session.add(product)
    db_session.commit()
    return product


@pytest.fixture
def service_product(db_session, user) -> Product:
    product = Product(name="Instalação", base_price=Decimal("200.00"), is_service=True, user_id=user.id)
    db_session.add(product)
    db_session.commit()
    return product


def variant_named(product: Product, name: str) -> ProductVariant:
    return next(v for v in product.variants if v.name == name)


def in_days(days: int) -> date:
    return date.today() + timedelta(days=days)
