"""
Pytest fixtures for the inventory & sales API.

Settings are read at import time, so the environment is prepared before
anything from ``app`` is imported. Every test runs against a fresh
in-memory SQLite database shared by the app and the fixtures.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from decimal import Decimal

import pytest
from fastapi import BackgroundTasks
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, get_db
from app.core.audit import AuditDispatcher, get_audit_dispatcher
from app.core.hashing import hash_password
from app.core.jwt import create_access_token
from app.core.rate_limiter import limiter
from app.models import Client, Product, User


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

limiter.enabled = False


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory():
    return TestingSessionLocal


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    def override_audit(background_tasks: BackgroundTasks):
        return AuditDispatcher(background_tasks, session_factory=TestingSessionLocal)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_audit_dispatcher] = override_audit

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _create_user(name: str, email: str) -> User:
    with TestingSessionLocal() as db:
        user = User(name=name, email=email, password_hash=hash_password("Sup3rSecret!"))
        db.add(user)
        db.commit()
        db.refresh(user)
        db.expunge(user)
        return user


@pytest.fixture
def user_a():
    """Owner of the orders under test."""
    return _create_user("Ana", "ana@example.com")


@pytest.fixture
def user_b():
    """A second user who must never see user A's orders."""
    return _create_user("Bruno", "bruno@example.com")


def _auth_headers(user: User) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_a(user_a):
    return _auth_headers(user_a)


@pytest.fixture
def headers_b(user_b):
    return _auth_headers(user_b)


def _create_product(reference: str, name: str, price: str, quantity: int) -> Product:
    with TestingSessionLocal() as db:
        product = Product(
            reference=reference,
            category="General",
            name=name,
            price=Decimal(price),
            quantity=quantity,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        db.expunge(product)
        return product


@pytest.fixture
def product_1():
    return _create_product("REF-001", "Coffee 500g", "12.50", 10)


@pytest.fixture
def product_2():
    return _create_product("REF-002", "Tea 100g", "4.25", 3)


@pytest.fixture
def client_record():
    with TestingSessionLocal() as db:
        record = Client(
            client_type="Natural",
            name="Carla Gomez",
            document_type="CC",
            document_number="1020304050",
            email="carla@example.com",
            status="Activo",
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        db.expunge(record)
        return record


@pytest.fixture
def stock_of():
    """Read a product's stock straight from the database."""

    def read(product_id: int) -> int:
        with TestingSessionLocal() as db:
            return db.scalar(select(Product.quantity).where(Product.id == product_id))

    return read
