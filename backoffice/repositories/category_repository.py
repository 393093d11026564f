"""
Category Repository - Data Access Layer for Categories
"""
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from backoffice.models import Category, Product
from backoffice.repositories.base import Repository


class CategoryRepository(Repository[Category]):
    """Repository for Category data access"""

    model = Category

    def __init__(self, session: Session):
        super().__init__(session)

    def get_all(self) -> List[Category]:
        """All categories by name, read-only"""
        return self._read_only(select(Category).order_by(Category.name, Category.id))

    def count_products(self, category_id: int) -> int:
        """
        Count the products that reference a category

        Used for storefront paging totals and to refuse deleting a
        category that is still in use.

        Args:
            category_id: Category ID

        Returns:
            Number of products with that category_id (0 for unknown ids)
        """
        return Repository(self.session, Product).count(Product.category_id == category_id)
