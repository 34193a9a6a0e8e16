import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from app.core.exceptions import NotFoundError, ValidationError
from app.models.customer import Customer
from app.schemas.customer import CustomerCreate, CustomerUpdate
from typing import List

logger = logging.getLogger(__name__)


class CustomerService:
    def __init__(self, db: Session):
        self.db = db

    def get_all_customers(self) -> List[Customer]:
        return self.db.query(Customer).order_by(Customer.id).all()

    def get_customer_by_id(self, customer_id: int) -> Customer:
        customer = self.db.query(Customer).filter(Customer.id == customer_id).first()
        if not customer:
            raise NotFoundError(f"Customer {customer_id} not found")
        return customer

    def get_customer_by_mobile(self, mobile: str) -> Customer:
        digits = ''.join(filter(str.isdigit, mobile))
        customer = self.db.query(Customer).filter(Customer.mobile == digits).first()
        if not customer:
            raise NotFoundError(f"No customer registered with mobile {mobile}")
        return customer

    def register_customer(self, data: CustomerCreate) -> Customer:
        customer = Customer(**data.model_dump())
        self.db.add(customer)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationError(f"Mobile {data.mobile} is already registered")

        self.db.refresh(customer)
        logger.info(f"[Customers] Registered customer {customer.id}")
        return customer

    def update_customer(self, customer_id: int, data: CustomerUpdate) -> Customer:
        customer = self.get_customer_by_id(customer_id)

        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(customer, key, value)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationError(f"Mobile {data.mobile} is already registered")

        self.db.refresh(customer)
        return customer
