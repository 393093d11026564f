"""
Product Service
Catalog reads for the admin panel and the storefront, plus validated
product writes.

Rules checked before any write:
- the referenced category must exist
- price must be non-negative
- stock must be non-negative
A broken rule raises ValidationError tagged with the field; nothing is
staged in that case.
"""
import logging
from typing import List, Optional

from backoffice.core.exceptions import PersistenceError, ValidationError
from backoffice.domain.product import ProductPage, ProductRead
from backoffice.models import Category, Product
from backoffice.repositories.category_repository import CategoryRepository
from backoffice.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ProductService:
    """Business logic for products and their categories"""

    def __init__(self, products: ProductRepository, categories: CategoryRepository):
        self.products = products
        self.categories = categories

    # ========================================================================
    # Reads
    # ========================================================================

    def get_all_products(self) -> List[Product]:
        logger.info("Fetching all products with category")
        return self.products.get_all_with_category()

    def get_featured_products(self) -> List[Product]:
        logger.info("Fetching featured products")
        return self.products.find(Product.is_featured.is_(True))

    def get_products_by_category(self, category_id: int) -> List[Product]:
        logger.info(f"Fetching products for category {category_id}")
        return self.products.get_by_category(category_id)

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        logger.info(f"Fetching product with id {product_id}")
        return self.products.get_by_id_with_category(product_id)

    def get_all_categories(self) -> List[Category]:
        logger.info("Fetching all categories")
        return self.categories.get_all()

    def get_products_sorted_by_price(self, ascending: bool = True) -> List[Product]:
        """Products by price; ties keep catalog order"""
        logger.info(f"Fetching products sorted by price ascending: {ascending}")
        products = self.products.get_all_with_category()
        return sorted(products, key=lambda p: p.price, reverse=not ascending)

    def get_products_with_pagination(self, page_number: int, page_size: int) -> List[Product]:
        """
        One page of the catalog

        Args:
            page_number: 1-based page number
            page_size: Products per page

        Raises:
            ValidationError: page_number or page_size below 1
        """
        logger.info(f"Fetching products page {page_number} size {page_size}")
        self._check_page(page_number, page_size)
        products = self.products.get_all_with_category()
        return self._slice(products, page_number, page_size)

    def get_total_product_count(self) -> int:
        logger.info("Fetching total product count")
        return self.products.count()

    def get_products_by_category_with_pagination(
        self,
        category_id: int,
        page_number: int,
        page_size: int
    ) -> List[Product]:
        logger.info(f"Fetching products for category {category_id} page {page_number}")
        self._check_page(page_number, page_size)
        products = self.products.get_by_category(category_id)
        return self._slice(products, page_number, page_size)

    def get_product_count_by_category(self, category_id: int) -> int:
        logger.info(f"Fetching product count for category {category_id}")
        return self.categories.count_products(category_id)

    def get_product_page(
        self,
        page_number: int,
        page_size: int,
        category_id: Optional[int] = None,
        sort: Optional[str] = None
    ) -> ProductPage:
        """
        Storefront listing: optional category filter and price sort, then paging

        Args:
            sort: None (catalog order), "price_asc" or "price_desc"
        """
        if sort not in (None, "price_asc", "price_desc"):
            raise ValidationError("sort", "Sort must be price_asc or price_desc")

        if sort is None:
            if category_id is None:
                items = self.get_products_with_pagination(page_number, page_size)
                total = self.get_total_product_count()
            else:
                items = self.get_products_by_category_with_pagination(category_id, page_number, page_size)
                total = self.get_product_count_by_category(category_id)
        else:
            self._check_page(page_number, page_size)
            if category_id is None:
                products = self.get_products_sorted_by_price(ascending=sort == "price_asc")
            else:
                products = sorted(
                    self.get_products_by_category(category_id),
                    key=lambda p: p.price,
                    reverse=sort == "price_desc"
                )
            items = self._slice(products, page_number, page_size)
            total = len(products)

        return ProductPage(
            items=[ProductRead.from_model(p) for p in items],
            page=page_number,
            page_size=page_size,
            total=total,
        )

    # ========================================================================
    # Writes
    # ========================================================================

    def create_product(self, product: Product) -> Product:
        """
        Validate and persist a new product

        Returns:
            The saved product (id assigned)

        Raises:
            ValidationError: category_id, price or stock is invalid
            PersistenceError: the commit wrote nothing or failed
        """
        logger.info(f"Creating new product {product.name}")
        self._validate(product, action="create")

        self.products.add(product)
        affected = self.products.save_changes()

        if affected <= 0:
            logger.error(f"save_changes returned {affected} while creating product {product.name}")
            raise PersistenceError("Product could not be saved")

        logger.info(f"Product {product.name} created with id {product.id}")
        return product

    def update_product(self, product: Product) -> Product:
        """
        Validate and persist a full update of an existing product

        Raises:
            ValidationError: category_id, price or stock is invalid
            PersistenceError: the product does not exist, or the commit
                wrote nothing or failed
        """
        logger.info(f"Updating product {product.id}")
        self._validate(product, action="update")

        if product.id is None or self.products.get_by_id(product.id) is None:
            logger.error(f"Update requested for non-existing product {product.id}")
            raise PersistenceError("Product could not be updated")

        tracked = self.products.update(product)
        affected = self.products.save_changes()

        if affected <= 0:
            logger.error(f"save_changes returned {affected} while updating product {product.id}")
            raise PersistenceError("Product could not be updated")

        logger.info(f"Product {product.id} updated")
        return tracked

    def delete_product(self, product_id: int) -> None:
        """
        Delete a product by id

        A missing product is not an error: the call does nothing.

        Raises:
            PersistenceError: the commit wrote nothing or failed
        """
        logger.info(f"Deleting product {product_id}")

        product = self.products.get_by_id(product_id)
        if product is None:
            logger.warning(f"Delete requested for non-existing product {product_id}")
            return

        self.products.remove(product)
        affected = self.products.save_changes()

        if affected <= 0:
            logger.error(f"save_changes returned {affected} while deleting product {product_id}")
            raise PersistenceError("Product could not be deleted")

        logger.info(f"Product {product_id} deleted")

    # ========================================================================
    # Helpers
    # ========================================================================

    def _validate(self, product: Product, action: str) -> None:
        label = product.name if action == "create" else product.id

        if product.category_id is None or self.categories.get_by_id(product.category_id) is None:
            logger.warning(
                f"Failed to {action} product {label} because category {product.category_id} does not exist"
            )
            raise ValidationError("category_id", "Invalid category selected")

        if product.price is None or product.price < 0:
            logger.warning(f"Failed to {action} product {label} because price {product.price} is negative")
            raise ValidationError("price", "Price must be non-negative")

        if product.stock is None or product.stock < 0:
            logger.warning(f"Failed to {action} product {label} because stock {product.stock} is negative")
            raise ValidationError("stock", "Stock must be non-negative")

    @staticmethod
    def _check_page(page_number: int, page_size: int) -> None:
        if page_number < 1:
            raise ValidationError("page_number", "Page number must be 1 or greater")
        if page_size < 1:
            raise ValidationError("page_size", "Page size must be 1 or greater")

    @staticmethod
    def _slice(products: List[Product], page_number: int, page_size: int) -> List[Product]:
        offset = (page_number - 1) * page_size
        return products[offset:offset + page_size]
