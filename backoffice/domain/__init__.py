"""
Domain Layer - API Schemas

Pydantic models describing the entities as they cross the API boundary.
These models enforce type safety and validation across the application.
"""
from backoffice.domain.product import (
    CategoryRead, CategoryCreate, CategoryUpdate,
    ProductRead, ProductCreate, ProductUpdate, ProductPage,
)
from backoffice.domain.order import (
    OrderStatus, PaymentStatus,
    OrderRead, OrderItemRead, PaymentRead, OrderDetails,
    StatusUpdate, PaymentStatusUpdate,
)
from backoffice.domain.dashboard import DashboardSummary

__all__ = [
    'CategoryRead', 'CategoryCreate', 'CategoryUpdate',
    'ProductRead', 'ProductCreate', 'ProductUpdate', 'ProductPage',
    'OrderStatus', 'PaymentStatus',
    'OrderRead', 'OrderItemRead', 'PaymentRead', 'OrderDetails',
    'StatusUpdate', 'PaymentStatusUpdate',
    'DashboardSummary',
]
