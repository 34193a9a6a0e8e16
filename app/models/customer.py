from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from app.core.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Customer(Base):
    __tablename__ = 'customers'

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(45), nullable=False)
    mobile = Column(String(45), nullable=False, unique=True, index=True)
    email = Column(String(45), nullable=True)
    address = Column(Text, nullable=True)

    created_date = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    orders = relationship("Order", back_populates="customer", lazy="raise")

    def __repr__(self):
        return f"<Customer {self.name}>"
