"""
Order endpoints: placement, status changes and pass-through reads
"""
from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from app.api.dependencies import get_order_service
from app.models.order import OrderStatus
from app.schemas.order import (
    OrderCreate,
    OrderCreated,
    OrderItemRecord,
    OrderRecord,
    OrderStatusUpdate,
    OrderStatusUpdated,
)
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders")


@router.post("", response_model=OrderCreated, status_code=201)
def place_order(
    payload: OrderCreate,
    service: OrderService = Depends(get_order_service),
):
    """Create an order together with its items"""
    order_id = service.place_order(
        customer_id=payload.customer_id,
        delivery_address=payload.delivery_address,
        items=payload.items,
        total_amount=payload.total_amount,
    )
    return OrderCreated(order_id=order_id)


@router.get("", response_model=List[OrderRecord])
def list_orders(
    customer_id: Optional[int] = Query(None, alias="customerId"),
    status: Optional[OrderStatus] = Query(None),
    service: OrderService = Depends(get_order_service),
):
    """All orders, newest first; optionally filtered by customer and/or status"""
    return service.get_orders(customer_id=customer_id, status=status)


# Declared before /{order_id} so "status" is never parsed as an id
@router.put("/status", response_model=OrderStatusUpdated)
def update_order_status(
    payload: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
):
    """Move an order to the next status"""
    new_status = service.update_status(payload.order_id, payload.status)
    return OrderStatusUpdated(order_id=payload.order_id, status=new_status)


@router.get("/{order_id}", response_model=OrderRecord)
def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service),
):
    return service.get_order(order_id)


@router.get("/{order_id}/items", response_model=List[OrderItemRecord])
def get_order_items(
    order_id: int,
    service: OrderService = Depends(get_order_service),
):
    return service.get_order_items(order_id)
