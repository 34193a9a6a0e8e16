from fastapi import APIRouter
from app.api.v1 import (
    orders,
    menu,
    customers,
)

api_router = APIRouter()

api_router.include_router(orders.router, tags=["orders"])
api_router.include_router(menu.router, tags=["menu"])
api_router.include_router(customers.router, tags=["customers"])
