# app/schemas/customer.py
from pydantic import validator
from typing import Optional
from datetime import datetime

from app.schemas.order import CamelModel


def normalize_mobile(v: str) -> str:
    # Keep digits only
    digits = ''.join(filter(str.isdigit, v or ''))
    if len(digits) < 7:
        raise ValueError('Mobile number must have at least 7 digits')
    return digits


class CustomerBase(CamelModel):
    name: str
    mobile: str
    email: Optional[str] = None
    address: Optional[str] = None


class CustomerCreate(CustomerBase):

    @validator('name')
    def name_must_not_be_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Name must not be empty')
        return v.strip()

    @validator('mobile')
    def mobile_format(cls, v):
        return normalize_mobile(v)


class CustomerUpdate(CamelModel):
    name: Optional[str] = None
    mobile: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None

    @validator('mobile')
    def mobile_format(cls, v):
        return normalize_mobile(v) if v is not None else v


class CustomerResponse(CustomerBase):
    id: int
    created_date: datetime
