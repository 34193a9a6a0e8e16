from sqlalchemy.orm import Session
from app.core.exceptions import NotFoundError
from app.models.menu_item import MenuItem
from app.schemas.menu import MenuItemCreate, MenuItemUpdate
from typing import List


class MenuService:
    def __init__(self, db: Session):
        self.db = db

    def get_available_items(self) -> List[MenuItem]:
        """Items currently offered, grouped by category"""
        return self.db.query(MenuItem).filter(
            MenuItem.available == True
        ).order_by(MenuItem.category, MenuItem.name).all()

    def get_items_by_category(self, category: str) -> List[MenuItem]:
        return self.db.query(MenuItem).filter(
            MenuItem.category == category
        ).order_by(MenuItem.name).all()

    def get_item_by_id(self, item_id: int) -> MenuItem:
        item = self.db.query(MenuItem).filter(MenuItem.id == item_id).first()
        if not item:
            raise NotFoundError(f"Menu item {item_id} not found")
        return item

    def create_item(self, data: MenuItemCreate) -> MenuItem:
        item = MenuItem(**data.model_dump())
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def update_item(self, item_id: int, data: MenuItemUpdate) -> MenuItem:
        item = self.get_item_by_id(item_id)

        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(item, key, value)

        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_item(self, item_id: int) -> bool:
        """Soft delete: the row stays because past order items reference it"""
        item = self.get_item_by_id(item_id)
        item.available = False
        self.db.commit()
        return True
