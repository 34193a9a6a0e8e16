from .order import OrderCreate, OrderItemCreate, OrderRecord, OrderItemRecord, OrderStatusUpdate
from .customer import CustomerCreate, CustomerResponse
from .menu import MenuItemCreate, MenuItemResponse
