"""
Repository Layer - Data Access

This layer handles all database queries and returns ORM rows.
Repositories keep SQLAlchemy query details out of the business logic.
"""
from backoffice.repositories.base import Repository
from backoffice.repositories.product_repository import ProductRepository
from backoffice.repositories.category_repository import CategoryRepository
from backoffice.repositories.order_repository import OrderRepository

__all__ = [
    'Repository',
    'ProductRepository',
    'CategoryRepository',
    'OrderRepository',
]
