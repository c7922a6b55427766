# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from storefront.database import get_session
from storefront.main import app
from storefront.models.cart import Cart
from storefront.models.category import Category
from storefront.models.product import Product


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """
    TestClient bound to the in-memory database.

    The lifespan is not run, so the configured DATABASE_URL is never touched.
    """

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def category(session: Session) -> Category:
    category = Category(name="Electronics")
    session.add(category)
    session.commit()
    session.refresh(category)
    return category


@pytest.fixture
def make_product(session: Session, category: Category):
    def _make_product(
        name: str = "Headphones",
        price: float = 100.0,
        inventory: int = 10,
        tax_rate: float = 0.07,
        category_id: int | None = None,
    ) -> Product:
        product = Product(
            name=name,
            price=price,
            inventory=inventory,
            tax_rate=tax_rate,
            category_id=category_id if category_id is not None else category.id,
        )
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    return _make_product


@pytest.fixture
def cart(session: Session) -> Cart:
    cart = Cart(user_id="user1")
    session.add(cart)
    session.commit()
    session.refresh(cart)
    return cart
