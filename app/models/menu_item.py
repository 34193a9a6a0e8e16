from sqlalchemy import Column, Integer, String, Numeric, Boolean, Text
from app.core.database import Base


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=True)
    category = Column(String(45), nullable=False, index=True)
    image_url = Column(String(255), nullable=True)

    price = Column(Numeric(10, 2), nullable=False)
    available = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<MenuItem {self.name} {self.price}>"
