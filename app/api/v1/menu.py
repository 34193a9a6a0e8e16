"""
Menu endpoints
"""
from fastapi import APIRouter, Depends
from typing import List

from app.api.dependencies import get_menu_service
from app.schemas.menu import MenuItemCreate, MenuItemResponse, MenuItemUpdate
from app.services.menu_service import MenuService

router = APIRouter(prefix="/menu")


@router.get("", response_model=List[MenuItemResponse])
def get_menu(service: MenuService = Depends(get_menu_service)):
    """Available menu items"""
    return service.get_available_items()


@router.get("/category/{category}", response_model=List[MenuItemResponse])
def get_menu_by_category(category: str, service: MenuService = Depends(get_menu_service)):
    return service.get_items_by_category(category)


@router.get("/{item_id}", response_model=MenuItemResponse)
def get_menu_item(item_id: int, service: MenuService = Depends(get_menu_service)):
    return service.get_item_by_id(item_id)


@router.post("", response_model=MenuItemResponse, status_code=201)
def create_menu_item(data: MenuItemCreate, service: MenuService = Depends(get_menu_service)):
    return service.create_item(data)


@router.put("/{item_id}", response_model=MenuItemResponse)
def update_menu_item(item_id: int, data: MenuItemUpdate, service: MenuService = Depends(get_menu_service)):
    return service.update_item(item_id, data)


@router.delete("/{item_id}")
def delete_menu_item(item_id: int, service: MenuService = Depends(get_menu_service)):
    """Mark an item unavailable"""
    service.delete_item(item_id)
    return {"message": "Menu item removed", "id": item_id}
