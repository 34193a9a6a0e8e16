# app/schemas/order.py
from pydantic import BaseModel, validator
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from app.models.order import OrderStatus


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys; snake_case is accepted on input too."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# ============================================
# REQUESTS
# ============================================

class OrderItemCreate(CamelModel):
    menu_item_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class OrderCreate(CamelModel):
    customer_id: int
    delivery_address: str
    items: List[OrderItemCreate]
    total_amount: Optional[Decimal] = None

    @validator('delivery_address')
    def strip_address(cls, v):
        return v.strip() if v else v


class OrderStatusUpdate(CamelModel):
    order_id: int
    status: OrderStatus


# ============================================
# STORAGE DTOs
# ============================================

class NewOrderItem(CamelModel):
    menu_item_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class NewOrder(CamelModel):
    customer_id: int
    delivery_address: str
    order_date: datetime
    total_amount: Decimal
    status: OrderStatus = OrderStatus.PENDING


class OrderRecord(CamelModel):
    id: int
    customer_id: int
    order_date: datetime
    total_amount: Decimal
    status: OrderStatus
    delivery_address: str


class OrderItemRecord(CamelModel):
    id: int
    order_id: int
    menu_item_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


# ============================================
# RESPONSES
# ============================================

class OrderCreated(CamelModel):
    order_id: int


class OrderStatusUpdated(CamelModel):
    order_id: int
    status: OrderStatus
