# app/services/order_status.py
"""
Order status state machine.

    PENDING -> CONFIRMED -> PREPARING -> OUT_FOR_DELIVERY -> DELIVERED
    PENDING | CONFIRMED -> CANCELLED

DELIVERED and CANCELLED are terminal.
"""
from typing import FrozenSet, Union

from app.core.exceptions import InvalidTransitionError, ValidationError
from app.models.order import OrderStatus

VALID_TRANSITIONS = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
    OrderStatus.PREPARING: frozenset({OrderStatus.OUT_FOR_DELIVERY}),
    OrderStatus.OUT_FOR_DELIVERY: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

INITIAL_STATUS = OrderStatus.PENDING


def parse_status(value: Union[str, OrderStatus]) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(str(value).strip().upper())
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Unknown order status '{value}'. Allowed: {allowed}")


def allowed_transitions(current: OrderStatus) -> FrozenSet[OrderStatus]:
    return VALID_TRANSITIONS[current]


def is_terminal(status: OrderStatus) -> bool:
    return not VALID_TRANSITIONS[status]


def check_transition(current: OrderStatus, requested: OrderStatus) -> None:
    """Raise InvalidTransitionError unless `requested` directly follows `current`."""
    if requested in VALID_TRANSITIONS[current]:
        return

    if is_terminal(current):
        reason = f"{current.value} is a final status"
    elif requested == current:
        reason = f"order is already {current.value}"
    else:
        options = ", ".join(sorted(s.value for s in VALID_TRANSITIONS[current]))
        reason = f"from {current.value} the order can only move to {options}"

    raise InvalidTransitionError(
        f"Cannot change status from {current.value} to {requested.value}: {reason}",
        current_status=current,
        requested_status=requested,
    )
