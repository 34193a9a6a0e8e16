from enum import Enum

from sqlalchemy import Column, Integer, String, Numeric, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PREPARING = "PREPARING"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    order_date = Column(DateTime(timezone=True), nullable=False, index=True)
    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    delivery_address = Column(Text, nullable=False)

    # Items are always read through OrderRepository.get_order_items
    customer = relationship("Customer", back_populates="orders", lazy="raise")
    items = relationship("OrderItem", back_populates="order", lazy="raise", order_by="OrderItem.id")

    def __repr__(self):
        return f"<Order #{self.id} Customer:{self.customer_id} Status:{self.status}>"


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)  # snapshot at order time
    subtotal = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="items", lazy="raise")
    menu_item = relationship("MenuItem", lazy="raise")
