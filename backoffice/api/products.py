"""
Admin Products API Endpoints
Product catalog management for the admin panel
"""
from fastapi import APIRouter, Depends, HTTPException

from backoffice.api.dependencies import get_product_service, to_http_error
from backoffice.core.exceptions import BackofficeError
from backoffice.domain.product import ProductCreate, ProductRead, ProductUpdate
from backoffice.models import Product
from backoffice.services import ProductService

router = APIRouter()


@router.get("/")
def get_products(service: ProductService = Depends(get_product_service)):
    """
    Get all products with their category
    """
    try:
        products = service.get_all_products()
        products_data = [ProductRead.from_model(p).to_dict() for p in products]

        return {
            "status": "success",
            "count": len(products_data),
            "data": products_data
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching products: {str(e)}")


@router.get("/{product_id}")
def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    """
    Get a single product with its category
    """
    product = service.get_product_by_id(product_id)
    if not product:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")

    return {
        "status": "success",
        "data": ProductRead.from_model(product).to_dict()
    }


@router.post("/", status_code=201)
def create_product(payload: ProductCreate, service: ProductService = Depends(get_product_service)):
    """
    Create a product

    400 with {"field", "message"} when category, price or stock is invalid.
    """
    try:
        product = service.create_product(Product(**payload.model_dump()))
    except BackofficeError as e:
        raise to_http_error(e)

    return {
        "status": "success",
        "data": ProductRead.from_model(product).to_dict()
    }


@router.put("/{product_id}")
def update_product(
    product_id: int,
    payload: ProductUpdate,
    service: ProductService = Depends(get_product_service)
):
    """
    Replace every field of an existing product
    """
    if payload.id is not None and payload.id != product_id:
        raise HTTPException(status_code=400, detail="Product id in body does not match URL")

    if service.get_product_by_id(product_id) is None:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")

    fields = payload.model_dump(exclude={"id"})
    try:
        product = service.update_product(Product(id=product_id, **fields))
    except BackofficeError as e:
        raise to_http_error(e)

    return {
        "status": "success",
        "data": ProductRead.from_model(product).to_dict()
    }


@router.delete("/{product_id}")
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    """
    Delete a product

    The admin route answers 404 for an unknown id, while
    ProductService.delete_product itself treats it as a no-op.
    """
    if service.get_product_by_id(product_id) is None:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")

    try:
        service.delete_product(product_id)
    except BackofficeError as e:
        raise to_http_error(e)

    return {
        "status": "success",
        "message": f"Product {product_id} deleted"
    }
