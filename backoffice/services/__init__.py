"""
Service Layer - Business Logic

Services compose repositories, enforce the write rules and compute
the dashboard aggregates.
"""
from backoffice.services.product_service import ProductService
from backoffice.services.dashboard_service import DashboardService
from backoffice.services.order_service import OrderService

__all__ = [
    'ProductService',
    'DashboardService',
    'OrderService',
]
