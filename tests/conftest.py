from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.database import Database
from app.models.customer import Customer
from app.models.menu_item import MenuItem
from app.models.order import OrderStatus
from app.repositories.order_repository import OrderRepository
from app.schemas.order import OrderItemCreate
from app.services.order_service import OrderService

MENU = [
    (1, "Classic Burger", "Burgers", "8.75"),
    (2, "Veggie Burger", "Burgers", "8.25"),
    (3, "Fries", "Sides", "3.10"),
    (4, "Lemonade", "Drinks", "2.50"),
    (5, "Margherita Pizza", "Pizza", "9.50"),
]


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'foodhub-test.db'}",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def database(settings):
    db = Database.from_settings(settings)
    db.create_all()

    with db.session_scope() as session:
        session.add(Customer(id=1, name="Sherlock Holmes", mobile="5550101", address="221B Baker St"))
        session.add(Customer(id=2, name="John Watson", mobile="5550102"))
        for item_id, name, category, price in MENU:
            session.add(MenuItem(id=item_id, name=name, category=category, price=Decimal(price)))

    yield db
    db.dispose()


@pytest.fixture
def repository(database):
    return OrderRepository(database)


@pytest.fixture
def order_service(repository, settings):
    return OrderService(repository, settings)


@pytest.fixture
def pizza_line():
    return OrderItemCreate(menu_item_id=5, quantity=2, unit_price=Decimal("9.50"), subtotal=Decimal("19.00"))


@pytest.fixture
def placed_order(order_service, pizza_line):
    return order_service.place_order(1, "221B Baker St", [pizza_line])


@pytest.fixture
def force_status(repository):
    """Put an order straight into a status, bypassing the state machine"""

    def _force(order_id: int, status: OrderStatus) -> None:
        assert repository.update_order_status(order_id, status)

    return _force


@pytest.fixture
def client(settings, database):
    from app.main import create_app

    with TestClient(create_app(settings)) as test_client:
        yield test_client
