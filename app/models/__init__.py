# Models
from .product import Product
from .cart import Cart, CartItem
from .order import Order, OrderItem, OrderStatus, PaymentStatus
from .inventory_logs import InventoryLog, ChangeType

__all__ = [
    "Product",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentStatus",
    "InventoryLog",
    "ChangeType",
]
