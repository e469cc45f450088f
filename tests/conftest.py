import os

# Must be set before the app (and its settings) are imported
os.environ["ENV"] = "testing"
os.environ["SEED_DEMO_DATA"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from typing import Generator

from main import app
from core.database import Base
from schemas.catalog_schemas import CategoryCreate, ProductCreate
from schemas.user_schemas import CreateUserRequest
from services.user_service import UserService
from storage import MemStorage, SqlStorage
from utils.deps import get_storage

# One in-memory SQLite database shared by every connection of the test engine
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

TEST_PASSWORD = "Password123"


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """
    Fresh, empty tables for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(params=["memory", "sql"])
def storage(request):
    """
    Every test using this fixture runs once per backend.
    """
    if request.param == "memory":
        return MemStorage()
    return SqlStorage(request.getfixturevalue("session"))


@pytest.fixture
async def client(storage):
    """
    HTTP client against the app, wired to the test's storage instance.
    """
    app.dependency_overrides[get_storage] = lambda: storage

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def category(storage):
    return storage.create_category(CategoryCreate(
        name="Abayas",
        slug="abayas",
        description="Elegant and modern abayas for every occasion"
    ))


@pytest.fixture
def product(storage, category):
    """List price 10.00, no sale, featured."""
    return storage.create_product(ProductCreate(
        name="Luxury Tea Set",
        slug="luxury-tea-set",
        price=10.0,
        stock=30,
        featured=True,
        category_id=category.id
    ))


@pytest.fixture
def sale_product(storage, category):
    """List price 10.00 on sale at 5.00, new arrival."""
    return storage.create_product(ProductCreate(
        name="Premium Silk Hijab",
        slug="premium-silk-hijab",
        price=10.0,
        sale_price=5.0,
        stock=100,
        new_arrival=True,
        category_id=category.id
    ))


@pytest.fixture
def user(storage):
    return UserService.create_user(storage, CreateUserRequest(
        username="aisha",
        password=TEST_PASSWORD,
        email="aisha@example.com",
        first_name="Aisha",
        last_name="Khan"
    ))
