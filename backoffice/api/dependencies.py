"""
FastAPI dependencies: one Session per request, repositories and services
built on top of it.
"""
from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from backoffice.core.database import get_db
from backoffice.core.exceptions import ConflictError, PersistenceError, ValidationError
from backoffice.models import Payment
from backoffice.repositories import (
    CategoryRepository, OrderRepository, ProductRepository, Repository,
)
from backoffice.services import DashboardService, OrderService, ProductService


def get_category_repository(db: Session = Depends(get_db)) -> CategoryRepository:
    return CategoryRepository(db)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(ProductRepository(db), CategoryRepository(db))


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(OrderRepository(db), ProductRepository(db), CategoryRepository(db))


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(OrderRepository(db), Repository(db, Payment))


def to_http_error(error: Exception) -> HTTPException:
    """Map a back office error to the HTTP response the admin UI expects"""
    if isinstance(error, ValidationError):
        return HTTPException(status_code=400, detail=error.to_dict())
    if isinstance(error, ConflictError):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, PersistenceError):
        return HTTPException(status_code=500, detail=str(error))
    return HTTPException(status_code=500, detail=f"Unexpected error: {str(error)}")
