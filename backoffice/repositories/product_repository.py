"""
Product Repository - Data Access Layer for Products

Adds the reads that need the owning category alongside the product.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from backoffice.models import Product
from backoffice.repositories.base import Repository


class ProductRepository(Repository[Product]):
    """
    Repository for Product data access

    Product queries that join Category are centralized here.
    """

    model = Product

    def __init__(self, session: Session):
        super().__init__(session)

    def _with_category(self):
        return (
            select(Product)
            .options(joinedload(Product.category))
            .order_by(Product.id)
        )

    def get_all_with_category(self) -> List[Product]:
        """All products with their category, read-only"""
        return self._read_only(self._with_category())

    def get_by_id_with_category(self, product_id: int) -> Optional[Product]:
        """
        Find product by ID with its category

        Args:
            product_id: Internal product ID

        Returns:
            Product or None if not found
        """
        statement = self._with_category().where(Product.id == product_id)
        return self.session.scalars(statement).unique().first()

    def get_by_category(self, category_id: int) -> List[Product]:
        """Products of one category, with the category loaded, read-only"""
        statement = self._with_category().where(Product.category_id == category_id)
        return self._read_only(statement)

    def count_low_stock(self, threshold: int) -> int:
        """Products whose stock is at or below the threshold"""
        return self.count(Product.stock <= threshold)
