"""
Export all models
"""
from app.models.customer import Customer
from app.models.menu_item import MenuItem
from app.models.order import Order, OrderItem, OrderStatus

__all__ = [
    "Customer",
    "MenuItem",
    "Order",
    "OrderItem",
    "OrderStatus",
]
