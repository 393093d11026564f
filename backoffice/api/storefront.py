"""
Storefront API Endpoints
Read-only catalog for the public shop pages
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from backoffice.api.dependencies import get_product_service, to_http_error
from backoffice.core.config import settings
from backoffice.core.exceptions import BackofficeError
from backoffice.domain.product import CategoryRead, ProductRead
from backoffice.services import ProductService

router = APIRouter()


@router.get("/products")
def list_products(
    page: int = Query(1, ge=1, description="1-based page number"),
    page_size: int = Query(settings.STORE_PAGE_SIZE, ge=1, le=100),
    category_id: Optional[int] = Query(None, description="Only this category"),
    sort: Optional[str] = Query(None, description="price_asc or price_desc"),
    service: ProductService = Depends(get_product_service)
):
    """
    Paged catalog, optionally filtered by category and sorted by price
    """
    try:
        product_page = service.get_product_page(page, page_size, category_id=category_id, sort=sort)
    except BackofficeError as e:
        raise to_http_error(e)

    return {"status": "success", **product_page.to_dict()}


@router.get("/products/featured")
def list_featured_products(service: ProductService = Depends(get_product_service)):
    products = service.get_featured_products()
    return {
        "status": "success",
        "count": len(products),
        "data": [ProductRead.from_model(p).to_dict() for p in products]
    }


@router.get("/products/{product_id}")
def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    product = service.get_product_by_id(product_id)
    if not product:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")

    return {
        "status": "success",
        "data": ProductRead.from_model(product).to_dict()
    }


@router.get("/categories")
def list_categories(service: ProductService = Depends(get_product_service)):
    categories = service.get_all_categories()
    return {
        "status": "success",
        "count": len(categories),
        "data": [CategoryRead.model_validate(c).to_dict() for c in categories]
    }
