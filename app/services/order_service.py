# app/services/order_service.py
"""
Order placement and status changes.

place_order validates a request and hands header + items to the repository
as one atomic write. update_status walks the state machine in
app.services.order_status and applies the change with a compare-and-set
update, so two concurrent requests can never both win.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import List, Optional, Sequence, Union

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import ConflictError, InvalidTransitionError, NotFoundError, ValidationError
from app.models.order import OrderStatus
from app.repositories.order_repository import OrderRepository
from app.schemas.order import (
    NewOrder,
    NewOrderItem,
    OrderItemCreate,
    OrderItemRecord,
    OrderRecord,
)
from app.services.order_status import INITIAL_STATUS, check_transition, parse_status

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
# Largest value a Numeric(10, 2) column holds
MAX_AMOUNT = Decimal("99999999.99")


def to_decimal(value) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}")
    return amount


def to_money(value) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class OrderService:

    def __init__(self, repository: OrderRepository, settings: Optional[Settings] = None):
        self.repository = repository
        self.settings = settings or default_settings

    @property
    def tolerance(self) -> Decimal:
        return Decimal(str(self.settings.AMOUNT_TOLERANCE))

    # ============================================
    # PLACE ORDER
    # ============================================

    def place_order(
        self,
        customer_id: int,
        delivery_address: str,
        items: Sequence[OrderItemCreate],
        total_amount=None,
    ) -> int:
        """
        Validate the request and persist the order with all of its items.

        Returns the new order id. Raises ValidationError before any write when
        the request is inconsistent; NotFoundError or StorageError come from
        the repository and guarantee nothing was stored.
        """
        address = (delivery_address or "").strip()
        if not address:
            raise ValidationError("Delivery address is required")

        if not items:
            raise ValidationError("An order needs at least one item")

        lines = [self._validate_item(position, item) for position, item in enumerate(items, start=1)]
        computed_total = sum((line.subtotal for line in lines), Decimal("0.00"))
        if computed_total > MAX_AMOUNT:
            raise ValidationError(f"Order total {computed_total} exceeds {MAX_AMOUNT}")

        if total_amount is not None:
            supplied_total = to_money(total_amount)
            if abs(supplied_total - computed_total) > self.tolerance:
                raise ValidationError(
                    f"Order total {supplied_total} does not match the sum of item subtotals {computed_total}"
                )

        header = NewOrder(
            customer_id=customer_id,
            delivery_address=address,
            order_date=datetime.now(timezone.utc),
            total_amount=computed_total,
            status=INITIAL_STATUS,
        )

        order_id = self.repository.save_order_with_items(header, lines)
        logger.info(f"[Orders] Order {order_id} placed by customer {customer_id}: {len(lines)} items, total {computed_total}")
        return order_id

    def _validate_item(self, position: int, item: OrderItemCreate) -> NewOrderItem:
        if item.menu_item_id is None:
            raise ValidationError(f"Item {position}: menu item is required")

        if isinstance(item.quantity, bool) or not isinstance(item.quantity, int) or item.quantity < 1:
            raise ValidationError(f"Item {position}: quantity must be a whole number of at least 1")

        # Sign is checked before rounding: -0.004 must not pass as 0.00
        if to_decimal(item.unit_price) < 0:
            raise ValidationError(f"Item {position}: unit price must not be negative")

        # The subtotal is checked against the price that gets stored
        unit_price = to_money(item.unit_price)
        subtotal = to_money(item.subtotal)
        expected = unit_price * item.quantity
        if abs(subtotal - expected) > self.tolerance:
            raise ValidationError(
                f"Item {position}: subtotal {subtotal} does not match {item.quantity} x {unit_price}"
            )

        if subtotal > MAX_AMOUNT:
            raise ValidationError(f"Item {position}: subtotal {subtotal} exceeds {MAX_AMOUNT}")

        return NewOrderItem(
            menu_item_id=item.menu_item_id,
            quantity=item.quantity,
            unit_price=unit_price,
            subtotal=subtotal,
        )

    # ============================================
    # STATUS
    # ============================================

    def update_status(self, order_id: int, requested_status: Union[str, OrderStatus]) -> OrderStatus:
        """
        Move an order to `requested_status` if it directly follows the current one.

        The write only lands if the stored status is still the one that was
        checked; otherwise the order is re-read and re-checked.
        """
        requested = parse_status(requested_status)
        attempts = max(1, self.settings.STATUS_UPDATE_MAX_RETRIES)

        for attempt in range(1, attempts + 1):
            order = self.get_order(order_id)

            try:
                check_transition(order.status, requested)
            except InvalidTransitionError as e:
                logger.warning(f"[Orders] Order {order_id}: {e.message}")
                raise

            if self.repository.update_order_status(order_id, requested, expected_status=order.status):
                logger.info(f"[Orders] Order {order_id}: {order.status.value} -> {requested.value}")
                return requested

            logger.info(
                f"[Orders] Order {order_id} changed while moving to {requested.value} "
                f"(attempt {attempt}/{attempts}), re-reading"
            )

        logger.warning(f"[Orders] Order {order_id}: giving up on {requested.value} after {attempts} attempts")
        raise ConflictError(f"Order {order_id} was modified concurrently, fetch it again and retry")

    # ============================================
    # READS
    # ============================================

    def get_order(self, order_id: int) -> OrderRecord:
        order = self.repository.get_order_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")
        return order

    def get_orders(self, customer_id: Optional[int] = None, status=None) -> List[OrderRecord]:
        if customer_id is not None:
            orders = self.repository.get_orders_by_customer_id(customer_id)
            if status is not None:
                wanted = parse_status(status)
                orders = [o for o in orders if o.status == wanted]
            return orders

        if status is not None:
            return self.repository.get_orders_by_status(parse_status(status))

        return self.repository.get_all_orders()

    def get_order_items(self, order_id: int) -> List[OrderItemRecord]:
        # 404 for unknown orders rather than an empty list
        self.get_order(order_id)
        return self.repository.get_order_items(order_id)
