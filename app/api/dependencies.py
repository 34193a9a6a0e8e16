from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import Database, get_database, get_db
from app.repositories.order_repository import OrderRepository
from app.services.customer_service import CustomerService
from app.services.menu_service import MenuService
from app.services.order_service import OrderService


def get_order_service(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
) -> OrderService:
    return OrderService(OrderRepository(database), settings)


def get_menu_service(db: Session = Depends(get_db)) -> MenuService:
    return MenuService(db)


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    return CustomerService(db)
