"""
Catalog Domain Models

Pydantic schemas for categories and products as the API reads and writes
them. ORM rows live in backoffice.models; these are the shapes that cross
the HTTP boundary.
"""
from pydantic import BaseModel, Field, ConfigDict
from sqlalchemy import inspect
from typing import Optional, List
from datetime import datetime
from decimal import Decimal


class CategoryRead(BaseModel):
    """Category as returned by the API"""

    id: int = Field(..., description="Category ID")
    name: str = Field(..., description="Category name")
    description: Optional[str] = Field(None, description="Category description")

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        return self.model_dump()


class CategoryCreate(BaseModel):
    """Schema for creating a new category"""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class CategoryUpdate(CategoryCreate):
    """Schema for a full category update"""
    id: Optional[int] = None


class ProductRead(BaseModel):
    """
    Product domain model - a product in the catalog

    Fields:
        id: Internal product ID (primary key)
        name: Product name
        description: Product description (optional)
        price: Selling price
        stock: Units in stock
        is_featured: Shown on the storefront front page
        image_url: Product image (optional)
        category_id: Owning category
        category: Owning category, only when it was fetched with the product
        created_at: When product was created
    """

    id: int = Field(..., description="Internal product ID")
    name: str = Field(..., description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: Decimal = Field(..., description="Sale price")
    stock: int = Field(0, description="Units in stock")
    is_featured: bool = Field(False, description="Featured on the storefront")
    image_url: Optional[str] = Field(None, description="Image URL")
    category_id: int = Field(..., description="Category ID")
    category: Optional[CategoryRead] = Field(None, description="Category, when loaded")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_model(cls, product) -> "ProductRead":
        """
        Build from an ORM Product

        The category is copied only if it was already loaded, so detached
        rows from read-only queries never trigger a lazy load.
        """
        category = None
        if "category" not in inspect(product).unloaded and product.category is not None:
            category = CategoryRead.model_validate(product.category)

        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            stock=product.stock,
            is_featured=product.is_featured,
            image_url=product.image_url,
            category_id=product.category_id,
            category=category,
            created_at=product.created_at,
        )

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock <= 0

    def to_dict(self) -> dict:
        """Convert to dictionary, Decimal as float for JSON"""
        data = self.model_dump()
        data['price'] = float(data['price'])
        data['is_out_of_stock'] = self.is_out_of_stock
        return data


class ProductCreate(BaseModel):
    """
    Schema for creating a new product

    Price, stock and category are checked by ProductService, which reports
    failures per field.
    """
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: Decimal = Decimal('0')
    stock: int = 0
    is_featured: bool = False
    image_url: Optional[str] = None
    category_id: int


class ProductUpdate(ProductCreate):
    """Schema for a full product update (every field is written)"""
    id: Optional[int] = None


class ProductPage(BaseModel):
    """One page of products"""
    items: List[ProductRead]
    page: int
    page_size: int
    total: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "page_size": self.page_size,
            "total": self.total,
            "total_pages": self.total_pages,
            "count": len(self.items),
            "data": [item.to_dict() for item in self.items],
        }
