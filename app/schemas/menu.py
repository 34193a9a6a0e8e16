# app/schemas/menu.py
from pydantic import validator
from typing import Optional
from decimal import Decimal

from app.schemas.order import CamelModel


class MenuItemBase(CamelModel):
    name: str
    description: Optional[str] = None
    category: str
    price: Decimal
    available: bool = True
    image_url: Optional[str] = None


class MenuItemCreate(MenuItemBase):

    @validator('price')
    def price_not_negative(cls, v):
        if v < 0:
            raise ValueError('Price must not be negative')
        return v


class MenuItemUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Decimal] = None
    available: Optional[bool] = None
    image_url: Optional[str] = None


class MenuItemResponse(MenuItemBase):
    id: int
