"""
Modelos de base de datos
"""
from .product import Category, Product
from .order import Order, OrderItem, Payment

__all__ = [
    "Category",
    "Product",
    "Order",
    "OrderItem",
    "Payment",
]
