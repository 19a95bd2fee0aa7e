import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from catalog.config import settings
from catalog.db import get_db, init_db
from catalog.main import app
from catalog.models.category import Category, Subcategory
from catalog.schemas.product_schema import ProductCreate
from catalog.services.product_service import ProductService


@pytest.fixture
def engine():
    # one shared in-memory database per test
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(reset=True, bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client(session_factory):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {settings.ADMIN_API_KEY}"}


@pytest.fixture
def category(db):
    c = Category(name="Clothing")
    db.add(c)
    db.commit()
    db.refresh(c)
    return c


@pytest.fixture
def subcategory(db, category):
    s = Subcategory(name="Shirts", category_id=category.id)
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


@pytest.fixture
def other_subcategory(db, category):
    s = Subcategory(name="Trousers", category_id=category.id)
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


@pytest.fixture
def make_product(db):
    """Create a product through the service; variations default to one M at 10.0."""

    def _make(subcategory_id, name="Product", variations=None, **fields):
        data = {
            "name": name,
            "subcategory": subcategory_id,
            "variations": variations or [{"size": "M", "price": 10.0, "stock": 1}],
        }
        data.update(fields)
        return ProductService(db).create(ProductCreate.model_validate(data))

    return _make
