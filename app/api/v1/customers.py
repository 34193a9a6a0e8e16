"""
Customer endpoints
"""
from fastapi import APIRouter, Depends
from typing import List

from app.api.dependencies import get_customer_service
from app.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate
from app.services.customer_service import CustomerService

router = APIRouter(prefix="/customers")


@router.get("", response_model=List[CustomerResponse])
def list_customers(service: CustomerService = Depends(get_customer_service)):
    return service.get_all_customers()


@router.post("", response_model=CustomerResponse, status_code=201)
def register_customer(data: CustomerCreate, service: CustomerService = Depends(get_customer_service)):
    """Register a new customer"""
    return service.register_customer(data)


@router.get("/mobile/{mobile}", response_model=CustomerResponse)
def get_customer_by_mobile(mobile: str, service: CustomerService = Depends(get_customer_service)):
    return service.get_customer_by_mobile(mobile)


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    return service.get_customer_by_id(customer_id)


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(customer_id: int, data: CustomerUpdate, service: CustomerService = Depends(get_customer_service)):
    return service.update_customer(customer_id, data)
