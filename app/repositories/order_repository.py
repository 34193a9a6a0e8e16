# app/repositories/order_repository.py
"""
Durable storage of order headers and their line items.

Every method opens its own session through Database.session_scope, so a
session never outlives the call that acquired it. Results leave as plain
DTOs (OrderRecord / OrderItemRecord); SQLAlchemy exceptions never do.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from sqlalchemy import update
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import Database
from app.core.exceptions import NotFoundError, StorageError, ValidationError
from app.models.order import Order, OrderItem, OrderStatus
from app.schemas.order import NewOrder, NewOrderItem, OrderItemRecord, OrderRecord

logger = logging.getLogger(__name__)


class OrderRepository:

    def __init__(self, db: Database):
        self.db = db

    # ============================================
    # WRITES
    # ============================================

    def save_order_with_items(self, header: NewOrder, items: Sequence[NewOrderItem]) -> int:
        """
        Insert the header and all items in one transaction.

        Returns the new order id. Either every row is committed or none is.
        """
        try:
            with self.db.session_scope() as session:
                order = self._insert_header(session, header)
                self._insert_items(session, order.id, items)
                order_id = order.id
        except IntegrityError as e:
            logger.warning(f"[OrderRepository] Rejected reference for customer {header.customer_id}: {e.orig}")
            raise NotFoundError("Customer or menu item referenced by the order does not exist") from e
        except DataError as e:
            logger.warning(f"[OrderRepository] Order values rejected by the store: {e.orig}")
            raise ValidationError("Order values do not fit the stored columns") from e
        except SQLAlchemyError as e:
            logger.error(f"[OrderRepository] Order write rolled back: {e}")
            raise StorageError("Could not save the order") from e

        logger.info(f"[OrderRepository] Order {order_id} saved with {len(items)} items")
        return order_id

    def _insert_header(self, session: Session, header: NewOrder) -> Order:
        order = Order(
            customer_id=header.customer_id,
            order_date=header.order_date,
            total_amount=header.total_amount,
            status=header.status.value,
            delivery_address=header.delivery_address,
        )
        session.add(order)
        session.flush()  # assigns order.id
        return order

    def _insert_items(self, session: Session, order_id: int, items: Sequence[NewOrderItem]) -> None:
        session.add_all([
            OrderItem(
                order_id=order_id,
                menu_item_id=item.menu_item_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
                subtotal=item.subtotal,
            )
            for item in items
        ])
        session.flush()

    def update_order_status(
        self,
        order_id: int,
        new_status: OrderStatus,
        expected_status: Optional[OrderStatus] = None,
    ) -> bool:
        """
        Single-row status update.

        With expected_status the row only changes if it still holds that
        status (compare-and-set). Returns False when no row matched.
        """
        stmt = update(Order).where(Order.id == order_id).values(status=new_status.value)
        if expected_status is not None:
            stmt = stmt.where(Order.status == expected_status.value)

        try:
            with self.db.session_scope() as session:
                result = session.execute(stmt.execution_options(synchronize_session=False))
                return result.rowcount == 1
        except SQLAlchemyError as e:
            logger.error(f"[OrderRepository] Status update failed for order {order_id}: {e}")
            raise StorageError("Could not update the order status") from e

    # ============================================
    # READS
    # ============================================

    def get_order_by_id(self, order_id: int) -> Optional[OrderRecord]:
        with self._reading(f"order {order_id}") as session:
            order = session.get(Order, order_id)
            return OrderRecord.model_validate(order) if order else None

    def get_orders_by_customer_id(self, customer_id: int) -> List[OrderRecord]:
        return self._list_orders(f"orders of customer {customer_id}", Order.customer_id == customer_id)

    def get_orders_by_status(self, status: OrderStatus) -> List[OrderRecord]:
        return self._list_orders(f"orders with status {status.value}", Order.status == status.value)

    def get_all_orders(self) -> List[OrderRecord]:
        return self._list_orders("all orders")

    def get_order_items(self, order_id: int) -> List[OrderItemRecord]:
        with self._reading(f"items of order {order_id}") as session:
            rows = (
                session.query(OrderItem)
                .filter(OrderItem.order_id == order_id)
                .order_by(OrderItem.id)
                .all()
            )
            return [OrderItemRecord.model_validate(row) for row in rows]

    def _list_orders(self, what: str, *criteria) -> List[OrderRecord]:
        with self._reading(what) as session:
            rows = (
                session.query(Order)
                .filter(*criteria)
                .order_by(Order.order_date.desc(), Order.id.desc())
                .all()
            )
            return [OrderRecord.model_validate(row) for row in rows]

    @contextmanager
    def _reading(self, what: str) -> Iterator[Session]:
        try:
            with self.db.session_scope() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(f"[OrderRepository] Reading {what} failed: {e}")
            raise StorageError(f"Could not read {what}") from e
