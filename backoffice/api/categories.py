"""
Admin Categories API Endpoints
Plain CRUD straight over CategoryRepository
"""
from fastapi import APIRouter, Depends, HTTPException

from backoffice.api.dependencies import get_category_repository, to_http_error
from backoffice.core.exceptions import BackofficeError
from backoffice.domain.product import CategoryCreate, CategoryRead, CategoryUpdate
from backoffice.models import Category
from backoffice.repositories import CategoryRepository

router = APIRouter()


@router.get("/")
def get_categories(repo: CategoryRepository = Depends(get_category_repository)):
    """List all categories by name"""
    categories = repo.get_all()
    return {
        "status": "success",
        "count": len(categories),
        "data": [CategoryRead.model_validate(c).to_dict() for c in categories]
    }


@router.get("/{category_id}")
def get_category(category_id: int, repo: CategoryRepository = Depends(get_category_repository)):
    category = repo.get_by_id(category_id)
    if not category:
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")

    return {
        "status": "success",
        "data": CategoryRead.model_validate(category).to_dict()
    }


@router.post("/", status_code=201)
def create_category(payload: CategoryCreate, repo: CategoryRepository = Depends(get_category_repository)):
    category = Category(**payload.model_dump())
    try:
        repo.add(category)
        repo.save_changes()
    except BackofficeError as e:
        raise to_http_error(e)

    return {
        "status": "success",
        "data": CategoryRead.model_validate(category).to_dict()
    }


@router.put("/{category_id}")
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    repo: CategoryRepository = Depends(get_category_repository)
):
    if payload.id is not None and payload.id != category_id:
        raise HTTPException(status_code=400, detail="Category id in body does not match URL")

    if repo.get_by_id(category_id) is None:
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")

    try:
        category = repo.update(Category(id=category_id, **payload.model_dump(exclude={"id"})))
        repo.save_changes()
    except BackofficeError as e:
        raise to_http_error(e)

    return {
        "status": "success",
        "data": CategoryRead.model_validate(category).to_dict()
    }


@router.delete("/{category_id}")
def delete_category(category_id: int, repo: CategoryRepository = Depends(get_category_repository)):
    """
    Delete a category

    Not cascaded to products: while products still reference the category
    this answers 409 and nothing is deleted.
    """
    category = repo.get_by_id(category_id)
    if not category:
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")

    in_use = repo.count_products(category_id)
    if in_use:
        raise HTTPException(
            status_code=409,
            detail=f"Category {category_id} is still used by {in_use} product(s)"
        )

    try:
        repo.remove(category)
        repo.save_changes()
    except BackofficeError as e:
        raise to_http_error(e)

    return {
        "status": "success",
        "message": f"Category {category_id} deleted"
    }
