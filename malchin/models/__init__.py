"""Database models package."""

from .user import User, Role
from .product import Product, ProductStatus, Category
from .order import Order, OrderStatus

__all__ = [
    'User',
    'Role',
    'Product',
    'ProductStatus',
    'Category',
    'Order',
    'OrderStatus',
]
