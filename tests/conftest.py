from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine, func, select

from app.core.auth import hash_password
from app.core.config import Settings
from app.database import create_db_and_tables, enable_sqlite_foreign_keys
from app.main import create_app
from app.models.product import Category, Product
from app.models.user import User

TEST_PASSWORD = "s3cret-pass"


@pytest.fixture()
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        SEED_SAMPLE_DATA=False,
        JWT_SECRET="test-secret",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def engine():
    """In-memory SQLite shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def catalog(engine):
    """
    Two categories and three products:
      widget  $10  (Gadgets)
      gizmo   $5   (Gadgets)
      novel   $20  (Books)
    """
    with Session(engine) as session:
        gadgets = Category(name="Gadgets")
        books = Category(name="Books")
        session.add_all([gadgets, books])
        session.commit()

        widget = Product(
            name="Widget",
            description="A very useful widget",
            price=10.0,
            image_url="https://img.example/widget.png",
            category_id=gadgets.id,
        )
        gizmo = Product(
            name="Gizmo",
            description="Pocket-sized helper",
            price=5.0,
            category_id=gadgets.id,
        )
        novel = Product(
            name="Novel",
            description="A story about widgets",
            price=20.0,
            category_id=books.id,
        )
        session.add_all([widget, gizmo, novel])
        session.commit()

        return SimpleNamespace(
            gadgets=gadgets.id,
            books=books.id,
            widget=widget.id,
            gizmo=gizmo.id,
            novel=novel.id,
        )


@pytest.fixture()
def user_id(engine):
    with Session(engine) as session:
        user = User(username="alice", password=hash_password(TEST_PASSWORD, 4))
        session.add(user)
        session.commit()
        session.refresh(user)
        return user.id


@pytest.fixture()
def client(settings, engine):
    app = create_app(settings, engine)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def login(client):
    """
    Register (if needed) and log in `username`; returns bearer headers.
    """

    def _login(username: str = "bob", password: str = TEST_PASSWORD) -> dict[str, str]:
        client.post("/api/register", json={"username": username, "password": password})
        response = client.post(
            "/api/login", json={"username": username, "password": password}
        )
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


@pytest.fixture()
def make_cart(client):
    """Create a cart over HTTP and add (product_id, quantity) lines."""

    def _make_cart(lines: list[tuple[int, int]]) -> int:
        response = client.post("/api/cart")
        assert response.status_code == 201
        cart_id = response.json()["id"]
        for product_id, quantity in lines:
            response = client.post(
                f"/api/cart/{cart_id}/items",
                json={"product_id": product_id, "quantity": quantity},
            )
            assert response.status_code == 201
        return cart_id

    return _make_cart


@pytest.fixture()
def count_rows(engine):
    """Row count of a table model, read through a fresh session."""

    def _count(model) -> int:
        with Session(engine) as session:
            return session.exec(select(func.count()).select_from(model)).one()

    return _count
